"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taglit.html.collapse import DEFAULT_MAX_NESTING_DEPTH
from taglit.lexer.leaders import DEFAULT_LEADERS, normalize_leaders


class Settings(BaseSettings):
    """Configuration for the taglit engine and REST API server.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.  List values use JSON, e.g.
    ``LITERAL_LEADERS='["html", "svg"]'``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Engine
    literal_leaders: list[str] = Field(default_factory=lambda: list(DEFAULT_LEADERS))
    max_nesting_depth: int = Field(default=DEFAULT_MAX_NESTING_DEPTH, ge=1)

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # Cloud Run injects PORT; takes precedence over api_server_port

    # Sessions
    session_ttl_seconds: int = 1800
    session_cleanup_interval: int = 60
    disable_session_list: bool = False

    @field_validator("literal_leaders")
    @classmethod
    def _check_leaders(cls, value: list[str]) -> list[str]:
        return list(normalize_leaders(value))

    @property
    def effective_port(self) -> int:
        """Port to listen on (Cloud Run PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port
