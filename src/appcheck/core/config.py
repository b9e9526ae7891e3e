"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from appcheck.core.exceptions import ConfigError


class PageSignature(BaseModel):
    """A named set of literal markers identifying a placeholder page."""

    name: str = Field(..., description="Human readable name used in report notes")
    markers: list[str] = Field(
        ...,
        min_length=1,
        description="Literal substrings; any one of them identifies the page"
    )


class ProberSettings(BaseModel):
    """Prober module configuration."""

    scheme: Literal["http", "https"] = Field(
        default="http",
        description="URL scheme used to reach each target"
    )

    base_domain: str = Field(
        default="herokuapp.com",
        description="Domain appended to every target identifier"
    )

    timeout: float | None = Field(
        default=None,
        gt=0,
        description="HTTP request timeout in seconds (None waits forever)"
    )

    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects"
    )

    max_redirects: int = Field(
        default=10,
        ge=0,
        le=50,
        description="Maximum number of redirects to follow"
    )

    verify_ssl: bool = Field(
        default=True,
        description="Verify SSL certificates"
    )

    user_agent: str = Field(
        default="appcheck/1.0",
        description="User-Agent header for requests"
    )

    concurrency: int | None = Field(
        default=None,
        ge=1,
        description="Maximum in-flight requests (None launches every probe at once)"
    )

    preview_length: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Number of body bytes quoted for unrecognised content"
    )

    sentinel_status: int = Field(
        default=999,
        description="Status reported when no real HTTP status exists"
    )

    @field_validator("base_domain")
    @classmethod
    def strip_dots(cls, value: str) -> str:
        """Allow '.herokuapp.com' as well as 'herokuapp.com'."""
        value = value.strip().strip(".")
        if not value:
            raise ValueError("base_domain must not be empty")
        return value


class ClassifierSettings(BaseModel):
    """Classifier configuration."""

    extra_signatures: list[PageSignature] = Field(
        default_factory=list,
        description="Additional placeholder page signatures checked after the built-in ones"
    )


class OutputSettings(BaseModel):
    """Output configuration."""

    format: Literal["text", "json"] = Field(
        default="text",
        description="Report format"
    )

    path: Path | None = Field(
        default=None,
        description="Write the report here instead of stdout"
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level"
    )

    json_format: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output"
    )

    log_file: Path | None = Field(
        default=None,
        description="Also append log lines to this file"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value


class Settings(BaseSettings):
    """Main configuration container."""

    model_config = SettingsConfigDict(
        env_prefix="APPCHECK_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    prober: ProberSettings = Field(default_factory=ProberSettings)
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def target_url(self, target: str) -> str:
        """Build the fetch URL for a target identifier."""
        return f"{self.prober.scheme}://{target}.{self.prober.base_domain}"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML configuration file."""
        import yaml

        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    @classmethod
    def from_file_or_default(cls, path: Path | None = None) -> "Settings":
        """Load from file if exists, otherwise return defaults."""
        default_paths = [
            Path("appcheck.yaml"),
            Path("appcheck.yml"),
            Path(".appcheck.yaml"),
            Path.home() / ".config" / "appcheck" / "config.yaml",
        ]

        if path is not None:
            if not path.exists():
                raise ConfigError(f"Configuration file {path} does not exist")
            return cls.from_yaml(path)

        for default_path in default_paths:
            if default_path.exists():
                return cls.from_yaml(default_path)

        return cls()
