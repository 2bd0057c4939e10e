"""
Application settings using Pydantic BaseSettings.

Locations of the Maven settings files and logging options, read from
environment variables or a .env file.
"""

import os
import platform
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

M2_DIR = Path.home() / ".m2"


class Settings(BaseSettings):
    """Application configuration settings."""

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")
    log_file: Path | None = Field(default=None, description="Optional rotating log file")

    # Maven installation root; the global settings file lives in <m2_home>/conf
    m2_home: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("MVNSETTINGS_M2_HOME", "M2_HOME"),
        description="Maven installation directory",
    )

    # Per-user files
    user_settings_file: Path = Field(
        default=M2_DIR / "settings.xml", description="Path to the user settings.xml"
    )
    security_settings_file: Path = Field(
        default=M2_DIR / "settings-security.xml",
        description="Path to settings-security.xml",
    )

    # Extra properties available to ${...} interpolation
    system_properties: dict[str, str] = Field(
        default_factory=dict, description="Additional system properties"
    )

    model_config = {
        "env_prefix": "MVNSETTINGS_",
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def global_settings_file(self) -> Path | None:
        """Global settings file inside the Maven installation, if M2_HOME is set."""
        if self.m2_home is None:
            return None
        return self.m2_home / "conf" / "settings.xml"

    def effective_system_properties(self) -> dict[str, str]:
        """System properties used for interpolation, configured values win."""
        properties = {
            "user.home": str(Path.home()),
            "user.name": os.environ.get("USER") or os.environ.get("USERNAME", ""),
            "os.name": platform.system(),
            "file.separator": os.sep,
        }
        if self.m2_home is not None:
            properties["maven.home"] = str(self.m2_home)
        properties.update(self.system_properties)
        return properties


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
