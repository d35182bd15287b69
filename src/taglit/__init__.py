"""taglit: HTML structure checks for tagged template literals."""

__version__ = "0.3.0"
