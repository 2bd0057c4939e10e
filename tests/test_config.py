"""Tests for mvnsettings.config module."""

from pathlib import Path

from mvnsettings.config import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.m2_home is None
        assert settings.global_settings_file is None
        assert settings.user_settings_file == Path.home() / ".m2" / "settings.xml"
        assert settings.security_settings_file == Path.home() / ".m2" / "settings-security.xml"

    def test_m2_home_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("M2_HOME", str(tmp_path))

        settings = get_settings()

        assert settings.global_settings_file == tmp_path / "conf" / "settings.xml"

    def test_prefixed_environment_variables(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MVNSETTINGS_USER_SETTINGS_FILE", str(tmp_path / "user.xml"))
        monkeypatch.setenv("MVNSETTINGS_SYSTEM_PROPERTIES", '{"repo.root": "/srv"}')

        settings = Settings()

        assert settings.user_settings_file == tmp_path / "user.xml"
        assert settings.effective_system_properties()["repo.root"] == "/srv"

    def test_system_properties(self, tmp_path):
        settings = Settings(m2_home=tmp_path, system_properties={"user.home": "/override"})

        properties = settings.effective_system_properties()

        assert properties["user.home"] == "/override"
        assert properties["maven.home"] == str(tmp_path)
        assert "os.name" in properties
