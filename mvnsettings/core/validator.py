"""
Validation of a single settings file.

Pure functions that append SettingsProblem entries; nothing is raised here.
"""

import re

from .models import MavenSettings, ProblemSeverity, Repository, SettingsProblem

ID_PATTERN = re.compile(r"[A-Za-z0-9_\-.]+")


def _add(
    problems: list[SettingsProblem], source: str, severity: ProblemSeverity, message: str
) -> None:
    problems.append(SettingsProblem(severity, message, source))


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_plugin_groups(
    settings: MavenSettings, source: str, problems: list[SettingsProblem]
) -> None:
    for index, group in enumerate(settings.plugin_groups):
        field = f"pluginGroups.pluginGroup[{index}]"
        if _is_blank(group):
            _add(problems, source, ProblemSeverity.ERROR, f"'{field}' must not be empty")
        elif not ID_PATTERN.fullmatch(group):
            _add(
                problems,
                source,
                ProblemSeverity.ERROR,
                f"'{field}' must denote a valid group id and match the pattern {ID_PATTERN.pattern}",
            )


def validate_servers(
    settings: MavenSettings, source: str, problems: list[SettingsProblem]
) -> None:
    seen: set[str] = set()
    for index, server in enumerate(settings.servers):
        if _is_blank(server.id):
            _add(
                problems,
                source,
                ProblemSeverity.ERROR,
                f"'servers.server[{index}].id' must not be empty",
            )
        elif server.id in seen:
            _add(
                problems,
                source,
                ProblemSeverity.WARNING,
                f"'servers.server.id' must be unique but found duplicate server with id {server.id}",
            )
        else:
            seen.add(server.id)


def validate_mirrors(
    settings: MavenSettings, source: str, problems: list[SettingsProblem]
) -> None:
    for index, mirror in enumerate(settings.mirrors):
        prefix = f"mirrors.mirror[{index}]"
        if _is_blank(mirror.id):
            _add(problems, source, ProblemSeverity.ERROR, f"'{prefix}.id' must not be empty")
        elif mirror.id == "local":
            _add(
                problems,
                source,
                ProblemSeverity.WARNING,
                f"'{prefix}.id' must not be 'local', this identifier is reserved for the local repository",
            )
        label = f"{prefix}.id = {mirror.id}" if mirror.id else prefix
        if _is_blank(mirror.url):
            _add(problems, source, ProblemSeverity.ERROR, f"'{label}.url' must not be empty")
        if _is_blank(mirror.mirror_of):
            _add(
                problems, source, ProblemSeverity.ERROR, f"'{label}.mirrorOf' must not be empty"
            )


def validate_proxies(
    settings: MavenSettings, source: str, problems: list[SettingsProblem]
) -> None:
    seen: set[str] = set()
    for index, proxy in enumerate(settings.proxies):
        if proxy.id in seen:
            _add(
                problems,
                source,
                ProblemSeverity.WARNING,
                f"'proxies.proxy.id' must be unique but found duplicate proxy with id {proxy.id}",
            )
        seen.add(proxy.id)
        if _is_blank(proxy.host):
            _add(
                problems,
                source,
                ProblemSeverity.ERROR,
                f"'proxies.proxy[{index}].host' must not be empty",
            )


def _validate_repositories(
    repositories: list[Repository],
    prefix: str,
    source: str,
    problems: list[SettingsProblem],
) -> None:
    for index, repository in enumerate(repositories):
        field = f"{prefix}[{index}]"
        if _is_blank(repository.id):
            _add(problems, source, ProblemSeverity.ERROR, f"'{field}.id' must not be empty")
        elif repository.id == "local":
            _add(
                problems,
                source,
                ProblemSeverity.WARNING,
                f"'{field}.id' must not be 'local', this identifier is reserved for the local repository",
            )
        if _is_blank(repository.url):
            _add(problems, source, ProblemSeverity.ERROR, f"'{field}.url' must not be empty")


def validate_profiles(
    settings: MavenSettings, source: str, problems: list[SettingsProblem]
) -> None:
    for profile in settings.profiles:
        _validate_repositories(
            profile.repositories, f"profiles.profile[{profile.id}].repositories.repository", source, problems
        )
        _validate_repositories(
            profile.plugin_repositories,
            f"profiles.profile[{profile.id}].pluginRepositories.pluginRepository",
            source,
            problems,
        )


def validate_settings(
    settings: MavenSettings, source: str, problems: list[SettingsProblem]
) -> None:
    """Validate one file's settings, appending problems tagged with ``source``."""
    validate_plugin_groups(settings, source, problems)
    validate_servers(settings, source, problems)
    validate_mirrors(settings, source, problems)
    validate_proxies(settings, source, problems)
    validate_profiles(settings, source, problems)
