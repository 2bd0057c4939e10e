"""
settings.xml reader.

Parses a Maven settings file into a MavenSettings model. Problems are collected
instead of raised so a single bad file degrades to empty settings.
"""

from pathlib import Path
from typing import Any
from xml.etree import ElementTree

from .models import (
    MavenSettings,
    Mirror,
    ProblemSeverity,
    Profile,
    Proxy,
    Repository,
    Server,
    SettingsProblem,
)

SERVER_FIELDS = {
    "id": "id",
    "username": "username",
    "password": "password",
    "privateKey": "private_key",
    "passphrase": "passphrase",
    "filePermissions": "file_permissions",
    "directoryPermissions": "directory_permissions",
}
MIRROR_FIELDS = {
    "id": "id",
    "name": "name",
    "url": "url",
    "mirrorOf": "mirror_of",
    "layout": "layout",
    "mirrorOfLayouts": "mirror_of_layouts",
}
PROXY_FIELDS = {
    "id": "id",
    "active": "active",
    "protocol": "protocol",
    "host": "host",
    "port": "port",
    "username": "username",
    "password": "password",
    "nonProxyHosts": "non_proxy_hosts",
}
REPOSITORY_FIELDS = {"id": "id", "name": "name", "url": "url", "layout": "layout"}

# Repository policy elements are accepted but not modelled
REPOSITORY_IGNORED = {"releases", "snapshots"}


def local_name(tag: str) -> str:
    """Strip the XML namespace from a tag."""
    return tag.rsplit("}", 1)[-1]


def element_text(element: ElementTree.Element) -> str:
    return (element.text or "").strip()


def element_to_dict(element: ElementTree.Element) -> dict[str, Any] | str:
    """Convert free-form XML (server configuration, profile activation) to dicts."""
    children = list(element)
    if not children:
        return element_text(element)

    result: dict[str, Any] = {}
    for child in children:
        key = local_name(child.tag)
        value = element_to_dict(child)
        if key in result:
            if not isinstance(result[key], list):
                result[key] = [result[key]]
            result[key].append(value)
        else:
            result[key] = value
    return result


class SettingsReader:
    """Reads one settings file, recording problems against its path."""

    def __init__(self, source: str, problems: list[SettingsProblem]):
        self.source = source
        self.problems = problems

    def add_problem(
        self,
        severity: ProblemSeverity,
        message: str,
        line: int = -1,
        column: int = -1,
        exception: Exception | None = None,
    ) -> None:
        self.problems.append(
            SettingsProblem(severity, message, self.source, line, column, exception)
        )

    def unrecognised(self, element: ElementTree.Element) -> None:
        self.add_problem(
            ProblemSeverity.WARNING, f"Unrecognised tag: '{local_name(element.tag)}'"
        )

    def read_fields(
        self, element: ElementTree.Element, fields: dict[str, str], ignored=()
    ) -> tuple[dict[str, Any], list[ElementTree.Element]]:
        """Collect simple text fields, returning the leftover child elements."""
        values: dict[str, Any] = {}
        rest = []
        for child in element:
            tag = local_name(child.tag)
            if tag in fields:
                values[fields[tag]] = element_text(child)
            elif tag not in ignored:
                rest.append(child)
        return values, rest

    def parse_boolean(self, value: str, name: str, default: bool) -> bool:
        if value == "true":
            return True
        if value == "false":
            return False
        self.add_problem(
            ProblemSeverity.WARNING,
            f"'{name}' must be 'true' or 'false' but is '{value}'",
        )
        return default

    def parse_int(self, value: str, name: str, default: int) -> int:
        try:
            return int(value)
        except ValueError:
            self.add_problem(
                ProblemSeverity.WARNING,
                f"Unable to parse element '{name}', must be an integer but is '{value}'",
            )
            return default

    def read_server(self, element: ElementTree.Element) -> Server:
        values, rest = self.read_fields(element, SERVER_FIELDS)
        for child in rest:
            if local_name(child.tag) == "configuration":
                configuration = element_to_dict(child)
                values["configuration"] = configuration if isinstance(configuration, dict) else {}
            else:
                self.unrecognised(child)
        return Server(**values)

    def read_mirror(self, element: ElementTree.Element) -> Mirror:
        values, rest = self.read_fields(element, MIRROR_FIELDS)
        for child in rest:
            self.unrecognised(child)
        return Mirror(**values)

    def read_proxy(self, element: ElementTree.Element) -> Proxy:
        values, rest = self.read_fields(element, PROXY_FIELDS)
        if "active" in values:
            values["active"] = self.parse_boolean(values["active"], "active", True)
        if "port" in values:
            values["port"] = self.parse_int(values["port"], "port", 8080)
        for child in rest:
            self.unrecognised(child)
        return Proxy(**values)

    def read_repository(self, element: ElementTree.Element) -> Repository:
        values, rest = self.read_fields(element, REPOSITORY_FIELDS, REPOSITORY_IGNORED)
        for child in rest:
            self.unrecognised(child)
        return Repository(**values)

    def read_profile(self, element: ElementTree.Element) -> Profile:
        values, rest = self.read_fields(element, {"id": "id"})
        for child in rest:
            tag = local_name(child.tag)
            if tag == "activation":
                activation = element_to_dict(child)
                values["activation"] = activation if isinstance(activation, dict) else {}
            elif tag == "properties":
                values["properties"] = {
                    local_name(prop.tag): element_text(prop) for prop in child
                }
            elif tag == "repositories":
                values["repositories"] = [
                    self.read_repository(item) for item in self.items(child, "repository")
                ]
            elif tag == "pluginRepositories":
                values["plugin_repositories"] = [
                    self.read_repository(item)
                    for item in self.items(child, "pluginRepository")
                ]
            else:
                self.unrecognised(child)
        return Profile(**values)

    def items(self, element: ElementTree.Element, item_tag: str) -> list[ElementTree.Element]:
        """Children of a list element, warning about anything but item_tag."""
        found = []
        for child in element:
            if local_name(child.tag) == item_tag:
                found.append(child)
            else:
                self.unrecognised(child)
        return found

    def read_root(self, root: ElementTree.Element) -> MavenSettings:
        if local_name(root.tag) != "settings":
            self.add_problem(
                ProblemSeverity.FATAL,
                f"Expected root element 'settings' but found '{local_name(root.tag)}'",
            )
            return MavenSettings()

        values: dict[str, Any] = {}
        for child in root:
            tag = local_name(child.tag)
            if tag == "localRepository":
                values["local_repository"] = element_text(child)
            elif tag == "interactiveMode":
                values["interactive_mode"] = self.parse_boolean(
                    element_text(child), tag, True
                )
            elif tag == "offline":
                values["offline"] = self.parse_boolean(element_text(child), tag, False)
            elif tag == "usePluginRegistry":
                # Deprecated since Maven 3, accepted and ignored
                continue
            elif tag == "servers":
                values["servers"] = [self.read_server(e) for e in self.items(child, "server")]
            elif tag == "mirrors":
                values["mirrors"] = [self.read_mirror(e) for e in self.items(child, "mirror")]
            elif tag == "proxies":
                values["proxies"] = [self.read_proxy(e) for e in self.items(child, "proxy")]
            elif tag == "profiles":
                values["profiles"] = [
                    self.read_profile(e) for e in self.items(child, "profile")
                ]
            elif tag == "activeProfiles":
                values["active_profiles"] = [
                    element_text(e) for e in self.items(child, "activeProfile")
                ]
            elif tag == "pluginGroups":
                values["plugin_groups"] = [
                    element_text(e) for e in self.items(child, "pluginGroup")
                ]
            else:
                self.unrecognised(child)
        return MavenSettings(**values)


def read_settings(path: Path | None, problems: list[SettingsProblem]) -> MavenSettings:
    """
    Read a settings file, appending any problems to ``problems``.

    A missing file yields empty settings without a problem. An unreadable or
    malformed file yields empty settings and a FATAL problem.
    """
    if path is None or not path.is_file():
        return MavenSettings()

    reader = SettingsReader(str(path), problems)
    try:
        root = ElementTree.parse(path).getroot()
    except ElementTree.ParseError as e:
        line, column = e.position
        reader.add_problem(
            ProblemSeverity.FATAL,
            f"Non-parseable settings {path}: {e}",
            line,
            column,
            exception=e,
        )
        return MavenSettings()
    except OSError as e:
        reader.add_problem(
            ProblemSeverity.FATAL, f"Non-readable settings {path}: {e}", exception=e
        )
        return MavenSettings()

    return reader.read_root(root)
