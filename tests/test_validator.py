"""Tests for mvnsettings.core.validator module."""

from mvnsettings.core.models import (
    MavenSettings,
    Mirror,
    ProblemSeverity,
    Profile,
    Proxy,
    Repository,
    Server,
)
from mvnsettings.core.validator import validate_settings


def _validate(settings: MavenSettings):
    problems = []
    validate_settings(settings, "settings.xml", problems)
    return problems


class TestValidateSettings:
    def test_valid_settings_have_no_problems(self):
        settings = MavenSettings(
            servers=[Server(id="a"), Server(id="b")],
            mirrors=[Mirror(id="m", url="https://m", mirror_of="*")],
            proxies=[Proxy(id="p1", host="proxy.example"), Proxy(id="p2", host="proxy.example")],
            plugin_groups=["org.example"],
        )

        assert _validate(settings) == []

    def test_server_without_id_is_error(self):
        problems = _validate(MavenSettings(servers=[Server(username="x")]))

        assert [p.severity for p in problems] == [ProblemSeverity.ERROR]
        assert "servers.server[0].id" in problems[0].message

    def test_duplicate_server_is_warning(self):
        problems = _validate(MavenSettings(servers=[Server(id="a"), Server(id="a")]))

        assert [p.severity for p in problems] == [ProblemSeverity.WARNING]
        assert "duplicate server with id a" in problems[0].message

    def test_incomplete_mirror(self):
        problems = _validate(MavenSettings(mirrors=[Mirror(id="m")]))

        messages = [p.message for p in problems]
        assert all(p.severity is ProblemSeverity.ERROR for p in problems)
        assert any(".url' must not be empty" in m for m in messages)
        assert any(".mirrorOf' must not be empty" in m for m in messages)

    def test_local_mirror_id_is_reserved(self):
        problems = _validate(
            MavenSettings(mirrors=[Mirror(id="local", url="https://m", mirror_of="*")])
        )

        assert len(problems) == 1
        assert problems[0].severity is ProblemSeverity.WARNING
        assert "reserved" in problems[0].message

    def test_duplicate_proxy_is_warning(self):
        problems = _validate(
            MavenSettings(proxies=[Proxy(host="proxy.example"), Proxy(host="proxy.example")])
        )

        assert [p.severity for p in problems] == [ProblemSeverity.WARNING]
        assert "duplicate proxy with id default" in problems[0].message

    def test_proxy_without_host_is_error(self):
        problems = _validate(MavenSettings(proxies=[Proxy(id="p", host=" ")]))

        assert [p.severity for p in problems] == [ProblemSeverity.ERROR]
        assert "proxies.proxy[0].host" in problems[0].message

    def test_invalid_plugin_group(self):
        problems = _validate(MavenSettings(plugin_groups=["", "org example"]))

        assert len(problems) == 2
        assert "must not be empty" in problems[0].message
        assert "valid group id" in problems[1].message

    def test_profile_repository_without_url(self):
        profile = Profile(id="dev", repositories=[Repository(id="r")])

        problems = _validate(MavenSettings(profiles=[profile]))

        assert len(problems) == 1
        assert "profiles.profile[dev].repositories.repository[0].url" in problems[0].message

    def test_local_profile_repository_is_warning(self):
        profile = Profile(
            id="dev", plugin_repositories=[Repository(id="local", url="https://r")]
        )

        problems = _validate(MavenSettings(profiles=[profile]))

        assert [p.severity for p in problems] == [ProblemSeverity.WARNING]
        assert "pluginRepositories.pluginRepository[0].id" in problems[0].message

    def test_problems_carry_source(self):
        problems = _validate(MavenSettings(servers=[Server()]))

        assert problems[0].source == "settings.xml"
