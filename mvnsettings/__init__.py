"""
mvnsettings - Maven settings for Python tooling

Loads the global and user Maven settings.xml files and decrypts server
credentials with the master password from settings-security.xml.
"""

from . import cli, config, core, utils
from .core.loader import SettingsLoader, load_settings
from .core.models import MavenSettings, Server

__version__ = "0.1.0"
__all__ = [
    "MavenSettings",
    "Server",
    "SettingsLoader",
    "cli",
    "config",
    "core",
    "load_settings",
    "utils",
]
