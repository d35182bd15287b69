"""FastAPI REST surface over the taglit services."""
