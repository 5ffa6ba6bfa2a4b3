"""Configuration management for nbenv."""

from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nbenv import ConfigurationError

DEFAULT_SAMPLES = {
    "numpy-basics": (
        "https://raw.githubusercontent.com/jakevdp/PythonDataScienceHandbook/"
        "master/notebooks/02.01-Understanding-Data-Types.ipynb"
    ),
    "pandas-intro": (
        "https://raw.githubusercontent.com/jakevdp/PythonDataScienceHandbook/"
        "master/notebooks/03.01-Introducing-Pandas-Objects.ipynb"
    ),
    "matplotlib-intro": (
        "https://raw.githubusercontent.com/jakevdp/PythonDataScienceHandbook/"
        "master/notebooks/04.00-Introduction-To-Matplotlib.ipynb"
    ),
}


class NbEnvConfig(BaseSettings):
    """Application configuration loaded from environment variables.

    Environment variables should be prefixed with NBENV_
    Example: NBENV_MANIFEST_PATH=py-env.txt

    Attributes:
        manifest_path: File mirroring the live manifest (unset keeps it in memory)
        manifest_format: Line format used for manifest entries
        output_format: Default format of the rendered document
        markdown_format: Markup produced for markdown cells
        markdown_width: Console width used when rendering markdown
        fetch_timeout: Seconds to wait when fetching a notebook URL
        strict_schema: Validate documents against the nbformat schema
        log_level: Logging level for the CLI
        samples: Named sample notebooks and their URLs
    """

    # Manifest Configuration
    manifest_path: Optional[str] = Field(
        default=None,
        description="File that receives the published manifest",
    )
    manifest_format: Literal["py-env", "requirements"] = Field(
        default="py-env",
        description="Manifest line format",
    )

    # Rendering Configuration
    output_format: Literal["html", "json", "text"] = Field(
        default="html",
        description="Default output format",
    )
    markdown_format: Literal["html", "text"] = Field(
        default="html",
        description="Markup produced for markdown cells",
    )
    markdown_width: int = Field(
        default=100,
        ge=20,
        le=400,
        description="Console width used when rendering markdown",
    )

    # Acquisition Configuration
    fetch_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for notebook fetches",
    )
    strict_schema: bool = Field(
        default=False,
        description="Validate documents against the nbformat JSON schema",
    )
    samples: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SAMPLES),
        description="Named sample notebooks",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NBENV_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Global config instance (lazy-loaded)
_config: NbEnvConfig | None = None


def get_config() -> NbEnvConfig:
    """Get or create the global configuration instance.

    Returns:
        NbEnvConfig: The configuration object

    Raises:
        ConfigurationError: If a setting fails validation
    """
    global _config
    if _config is None:
        try:
            _config = NbEnvConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
