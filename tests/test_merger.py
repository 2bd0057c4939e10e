"""Tests for mvnsettings.core.merger and mvnsettings.core.interpolation modules."""

from mvnsettings.core.interpolation import interpolate_settings, interpolate_string
from mvnsettings.core.merger import merge_settings
from mvnsettings.core.models import MavenSettings, Mirror, Profile, Server


class TestMergeSettings:
    """User (dominant) settings override global (recessive) settings."""

    def test_dominant_server_wins(self):
        user = MavenSettings(servers=[Server(id="shared", password="user")])
        global_ = MavenSettings(
            servers=[Server(id="shared", password="global"), Server(id="only-global")]
        )

        merged = merge_settings(user, global_)

        assert [(s.id, s.password) for s in merged.servers] == [
            ("shared", "user"),
            ("only-global", None),
        ]

    def test_recessive_fills_unset_scalars(self):
        user = MavenSettings()
        global_ = MavenSettings(local_repository="/global", interactive_mode=False, offline=True)

        merged = merge_settings(user, global_)

        assert merged.local_repository == "/global"
        assert merged.interactive_mode is False
        assert merged.offline is True

    def test_explicit_dominant_scalars_win(self):
        user = MavenSettings(local_repository="/user", interactive_mode=True)
        global_ = MavenSettings(local_repository="/global", interactive_mode=False)

        merged = merge_settings(user, global_)

        assert merged.local_repository == "/user"
        assert merged.interactive_mode is True

    def test_lists_merged_without_duplicates(self):
        user = MavenSettings(
            mirrors=[Mirror(id="m1")],
            profiles=[Profile(id="p")],
            active_profiles=["p"],
            plugin_groups=["a"],
        )
        global_ = MavenSettings(
            mirrors=[Mirror(id="m1", url="x"), Mirror(id="m2")],
            profiles=[Profile(id="p"), Profile(id="q")],
            active_profiles=["p", "q"],
            plugin_groups=["a", "b"],
        )

        merged = merge_settings(user, global_)

        assert [m.id for m in merged.mirrors] == ["m1", "m2"]
        assert merged.mirrors[0].url is None
        assert [p.id for p in merged.profiles] == ["p", "q"]
        assert merged.active_profiles == ["p", "q"]
        assert merged.plugin_groups == ["a", "b"]


class TestInterpolation:
    def test_system_property(self):
        assert interpolate_string("${user.home}/repo", {"user.home": "/home/me"}, {}) == "/home/me/repo"

    def test_env_variable(self):
        assert interpolate_string("${env.TOKEN}", {}, {"TOKEN": "abc"}) == "abc"

    def test_unresolved_left_verbatim(self):
        assert interpolate_string("${env.MISSING}-${nope}", {}, {}) == "${env.MISSING}-${nope}"

    def test_encrypted_token_untouched(self):
        assert interpolate_string("{abc=}", {}, {}) == "{abc=}"

    def test_interpolates_nested_models(self):
        settings = MavenSettings(
            local_repository="${user.home}/.m2/repository",
            servers=[Server(id="s", password="${env.PASS}", configuration={"h": "${env.PASS}"})],
            profiles=[Profile(id="p", properties={"dir": "${user.home}"})],
        )

        result = interpolate_settings(settings, {"user.home": "/u"}, {"PASS": "pw"})

        assert result.local_repository == "/u/.m2/repository"
        assert result.servers[0].password == "pw"
        assert result.servers[0].configuration == {"h": "pw"}
        assert result.profiles[0].properties == {"dir": "/u"}
        # the input is left alone
        assert settings.servers[0].password == "${env.PASS}"
