"""
Data models for Maven settings.

Pydantic models mirroring the settings.xml and settings-security.xml schemas,
plus the problem and request/result types used while building settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Server(BaseModel):
    """Credentials for one repository server."""

    id: str | None = None
    username: str | None = None
    password: str | None = None
    private_key: str | None = None
    passphrase: str | None = None
    file_permissions: str | None = None
    directory_permissions: str | None = None
    configuration: dict[str, Any] | None = None


class Mirror(BaseModel):
    id: str | None = None
    name: str | None = None
    url: str | None = None
    mirror_of: str | None = None
    layout: str | None = None
    mirror_of_layouts: str = "default,legacy"


class Proxy(BaseModel):
    id: str = "default"
    active: bool = True
    protocol: str = "http"
    host: str | None = None
    port: int = 8080
    username: str | None = None
    password: str | None = None
    non_proxy_hosts: str | None = None


class Repository(BaseModel):
    id: str | None = None
    name: str | None = None
    url: str | None = None
    layout: str = "default"


class Profile(BaseModel):
    id: str = "default"
    activation: dict[str, Any] | None = None
    properties: dict[str, str] = Field(default_factory=dict)
    repositories: list[Repository] = Field(default_factory=list)
    plugin_repositories: list[Repository] = Field(default_factory=list)


class MavenSettings(BaseModel):
    """Effective Maven settings; mirrors, proxies and profiles pass through untouched."""

    local_repository: str | None = None
    interactive_mode: bool = True
    offline: bool = False
    proxies: list[Proxy] = Field(default_factory=list)
    servers: list[Server] = Field(default_factory=list)
    mirrors: list[Mirror] = Field(default_factory=list)
    profiles: list[Profile] = Field(default_factory=list)
    active_profiles: list[str] = Field(default_factory=list)
    plugin_groups: list[str] = Field(default_factory=list)

    def get_server(self, server_id: str) -> Server | None:
        """Look up a server by id."""
        for server in self.servers:
            if server.id == server_id:
                return server
        return None


class SettingsSecurity(BaseModel):
    """Content of settings-security.xml."""

    master: str | None = None
    relocation: str | None = None


class ProblemSeverity(Enum):
    """Severity of a settings building problem, most severe first."""

    FATAL = "FATAL"
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass
class SettingsProblem:
    """A problem found while reading, validating or interpolating settings."""

    severity: ProblemSeverity
    message: str
    source: str = ""
    line: int = -1
    column: int = -1
    exception: Exception | None = None

    @property
    def location(self) -> str:
        parts = []
        if self.source:
            parts.append(self.source)
        if self.line > 0:
            parts.append(f"line {self.line}")
        if self.column > 0:
            parts.append(f"column {self.column}")
        return ", ".join(parts)

    def __str__(self) -> str:
        text = f"[{self.severity.value}] {self.message}"
        if self.location:
            text += f" @ {self.location}"
        return text


@dataclass
class SettingsBuildingRequest:
    """Inputs for building the effective settings."""

    global_settings_file: Path | None = None
    user_settings_file: Path | None = None
    system_properties: dict[str, str] = field(default_factory=dict)
    environment: dict[str, str] | None = None


@dataclass
class SettingsBuildingResult:
    effective_settings: MavenSettings
    problems: list[SettingsProblem] = field(default_factory=list)
