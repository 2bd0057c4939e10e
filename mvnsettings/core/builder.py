"""
Effective settings builder.

Reads the global and user settings files, validates each, merges them with
user precedence and interpolates ${...} expressions. This module holds no
state between calls.
"""

from .interpolation import interpolate_settings
from .merger import merge_settings
from .models import (
    ProblemSeverity,
    SettingsBuildingRequest,
    SettingsBuildingResult,
    SettingsProblem,
)
from .reader import read_settings
from .validator import validate_settings
from ..utils.exceptions import SettingsBuildingError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def has_errors(problems: list[SettingsProblem]) -> bool:
    return any(
        problem.severity in (ProblemSeverity.ERROR, ProblemSeverity.FATAL)
        for problem in problems
    )


def build_settings(request: SettingsBuildingRequest) -> SettingsBuildingResult:
    """
    Build the effective settings for a request.

    Raises:
        SettingsBuildingError: if any problem of severity ERROR or FATAL was found
    """
    problems: list[SettingsProblem] = []

    global_settings = read_settings(request.global_settings_file, problems)
    if request.global_settings_file is not None:
        validate_settings(global_settings, str(request.global_settings_file), problems)

    user_settings = read_settings(request.user_settings_file, problems)
    if request.user_settings_file is not None:
        validate_settings(user_settings, str(request.user_settings_file), problems)

    merged = merge_settings(user_settings, global_settings)
    effective = interpolate_settings(
        merged, request.system_properties, request.environment
    )

    logger.debug(
        "Built effective settings",
        servers=len(effective.servers),
        mirrors=len(effective.mirrors),
        proxies=len(effective.proxies),
        problems=len(problems),
    )

    if has_errors(problems):
        raise SettingsBuildingError(problems)

    return SettingsBuildingResult(effective, problems)
