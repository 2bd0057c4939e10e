"""Shared pytest fixtures for mvnsettings tests."""

from pathlib import Path

import pytest
import structlog

from mvnsettings.config import Settings
from mvnsettings.core import cipher
from mvnsettings.utils import logging as mvn_logging

from tests.helpers import MASTER_PASSWORD, security_xml


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's Maven installation out of the tests."""
    monkeypatch.delenv("M2_HOME", raising=False)
    monkeypatch.delenv("MVNSETTINGS_M2_HOME", raising=False)
    for name in ("LOG_LEVEL", "LOG_FORMAT", "LOG_FILE"):
        monkeypatch.delenv(f"MVNSETTINGS_{name}", raising=False)
    yield
    structlog.reset_defaults()
    mvn_logging.correlation_id.set("")
    mvn_logging.operation_context.set(None)


@pytest.fixture
def m2_home(tmp_path: Path) -> Path:
    home = tmp_path / "maven"
    (home / "conf").mkdir(parents=True)
    return home


@pytest.fixture
def user_settings_file(tmp_path: Path) -> Path:
    return tmp_path / "m2" / "settings.xml"


@pytest.fixture
def security_file(tmp_path: Path) -> Path:
    return tmp_path / "m2" / "settings-security.xml"


@pytest.fixture
def app_settings(m2_home, user_settings_file, security_file) -> Settings:
    """Application settings pointing at files under tmp_path."""
    user_settings_file.parent.mkdir(parents=True, exist_ok=True)
    return Settings(
        m2_home=m2_home,
        user_settings_file=user_settings_file,
        security_settings_file=security_file,
    )


@pytest.fixture
def master_security_file(security_file: Path) -> Path:
    """A settings-security.xml holding MASTER_PASSWORD."""
    security_file.parent.mkdir(parents=True, exist_ok=True)
    encrypted_master = cipher.encrypt_and_decorate(
        MASTER_PASSWORD, cipher.SETTINGS_SECURITY_PASSPHRASE
    )
    security_file.write_text(security_xml(encrypted_master))
    return security_file
