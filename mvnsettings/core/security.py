"""
settings-security.xml reader and master password decryption.
"""

from pathlib import Path
from xml.etree import ElementTree

from . import cipher
from .models import SettingsSecurity
from .reader import element_text, local_name
from ..utils.exceptions import SecurityFileError

MAX_RELOCATIONS = 10


def _parse_security_file(path: Path) -> SettingsSecurity:
    try:
        root = ElementTree.parse(path).getroot()
    except (ElementTree.ParseError, OSError) as e:
        raise SecurityFileError(f"Unable to read {path}: {e}", path=str(path)) from e

    if local_name(root.tag) != "settingsSecurity":
        raise SecurityFileError(
            f"Expected root element 'settingsSecurity' in {path} but found '{local_name(root.tag)}'",
            path=str(path),
        )

    values = {}
    for child in root:
        tag = local_name(child.tag)
        if tag in ("master", "relocation"):
            values[tag] = element_text(child) or None
    return SettingsSecurity(**values)


def read_security_file(path: Path) -> SettingsSecurity:
    """
    Read settings-security.xml, following ``<relocation>`` to another file.

    Raises:
        SecurityFileError: if a file cannot be parsed or relocations loop
    """
    visited = []
    current = Path(path)
    while True:
        security = _parse_security_file(current)
        if not security.relocation:
            return security

        visited.append(current)
        if len(visited) > MAX_RELOCATIONS:
            raise SecurityFileError(
                f"Too many relocations starting from {path}", path=str(path)
            )
        current = Path(security.relocation).expanduser()
        if not current.is_absolute():
            current = visited[-1].parent / current


def decrypt_master_password(path: Path) -> str:
    """
    Decrypt the master password stored in a security file.

    Raises:
        SecurityFileError: if the file is unreadable or has no master password
        CipherError: if the master password cannot be decrypted
    """
    security = read_security_file(path)
    if not security.master:
        raise SecurityFileError(f"No master password found in {path}", path=str(path))
    return cipher.decrypt_decorated(security.master, cipher.SETTINGS_SECURITY_PASSPHRASE)
