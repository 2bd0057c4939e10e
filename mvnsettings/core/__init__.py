"""
Core functionality for mvnsettings.

Settings reading, validation, merging and interpolation, the Maven password
cipher and the credential-decrypting loader.
"""

from . import builder, cipher, loader, models, security
from .loader import SettingsLoader, load_settings
from .models import MavenSettings, Mirror, Profile, Proxy, Repository, Server

__all__ = [
    "MavenSettings",
    "Mirror",
    "Profile",
    "Proxy",
    "Repository",
    "Server",
    "SettingsLoader",
    "builder",
    "cipher",
    "load_settings",
    "loader",
    "models",
    "security",
]
