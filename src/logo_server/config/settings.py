"""
Configuration management using Pydantic Settings.

Loads configuration from environment variables with LOGO_SERVER_ prefix.
The listen port also honours the conventional PORT variable.
"""
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.files import resolve_image_path

# Directorio de imágenes incluido en el paquete
DEFAULT_IMAGE_DIRECTORY = Path(__file__).resolve().parent.parent / "static"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LOGO_SERVER_",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("LOGO_SERVER_PORT", "PORT", "port")
    )

    # Image
    image_directory: Path = DEFAULT_IMAGE_DIRECTORY
    image_file_name: str = "logo.png"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_dir: Path | None = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range (0 lets the OS pick one)."""
        if not 0 <= v <= 65535:
            raise ValueError("Port must be between 0 and 65535")
        return v

    @field_validator("image_file_name")
    @classmethod
    def validate_image_file_name(cls, v: str) -> str:
        """Validate the image name is a bare file name inside image_directory."""
        if not v or v in (".", ".."):
            raise ValueError("Image file name must not be empty")
        if "/" in v or "\\" in v:
            raise ValueError("Image file name must not contain path separators")
        return v

    @property
    def image_path(self) -> Path:
        """Absolute path of the image served on /."""
        return resolve_image_path(self.image_directory, self.image_file_name)
