"""
Merging of global and user settings.

The user (dominant) settings win; recessive entries are only used to fill gaps.
"""

from collections.abc import Callable
from typing import TypeVar

from .models import MavenSettings

T = TypeVar("T")


def merge_by_id(
    dominant: list[T], recessive: list[T], key: Callable[[T], str | None]
) -> list[T]:
    """Keep all dominant entries, then append recessive entries with unseen ids."""
    ids = {key(item) for item in dominant}
    return [*dominant, *(item for item in recessive if key(item) not in ids)]


def merge_unique(dominant: list[str], recessive: list[str]) -> list[str]:
    return [*dominant, *(item for item in recessive if item not in dominant)]


def merge_settings(dominant: MavenSettings, recessive: MavenSettings) -> MavenSettings:
    """Return new settings with ``dominant`` overriding ``recessive``."""
    fields_set = dominant.model_fields_set

    return MavenSettings(
        local_repository=dominant.local_repository or recessive.local_repository,
        interactive_mode=(
            dominant.interactive_mode
            if "interactive_mode" in fields_set
            else recessive.interactive_mode
        ),
        offline=dominant.offline if "offline" in fields_set else recessive.offline,
        servers=merge_by_id(dominant.servers, recessive.servers, lambda s: s.id),
        mirrors=merge_by_id(dominant.mirrors, recessive.mirrors, lambda m: m.id),
        proxies=merge_by_id(dominant.proxies, recessive.proxies, lambda p: p.id),
        profiles=merge_by_id(dominant.profiles, recessive.profiles, lambda p: p.id),
        active_profiles=merge_unique(dominant.active_profiles, recessive.active_profiles),
        plugin_groups=merge_unique(dominant.plugin_groups, recessive.plugin_groups),
    )
