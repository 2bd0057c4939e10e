"""
Interpolation of ${...} expressions in settings values.

``${env.NAME}`` resolves against the environment, any other expression against
system properties. Unresolved expressions are left verbatim.
"""

import os
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .models import MavenSettings

EXPRESSION = re.compile(r"\$\{([^}]+)\}")
ENV_PREFIX = "env."


def resolve_expression(
    name: str, properties: Mapping[str, str], environment: Mapping[str, str]
) -> str | None:
    if name.startswith(ENV_PREFIX):
        var = name[len(ENV_PREFIX):]
        if os.name == "nt":
            var = var.upper()
            environment = {key.upper(): value for key, value in environment.items()}
        return environment.get(var)
    return properties.get(name)


def interpolate_string(
    value: str, properties: Mapping[str, str], environment: Mapping[str, str]
) -> str:
    def replace(match: re.Match) -> str:
        resolved = resolve_expression(match.group(1), properties, environment)
        return match.group(0) if resolved is None else resolved

    return EXPRESSION.sub(replace, value)


def _interpolate_value(value: Any, properties, environment) -> Any:
    if isinstance(value, str):
        return interpolate_string(value, properties, environment)
    if isinstance(value, BaseModel):
        return _interpolate_model(value, properties, environment)
    if isinstance(value, list):
        return [_interpolate_value(item, properties, environment) for item in value]
    if isinstance(value, dict):
        return {
            key: _interpolate_value(item, properties, environment)
            for key, item in value.items()
        }
    return value


def _interpolate_model(model: BaseModel, properties, environment) -> BaseModel:
    updates = {
        name: _interpolate_value(getattr(model, name), properties, environment)
        for name in type(model).model_fields
    }
    return model.model_copy(update=updates)


def interpolate_settings(
    settings: MavenSettings,
    properties: Mapping[str, str],
    environment: Mapping[str, str] | None = None,
) -> MavenSettings:
    """Return a copy of ``settings`` with every string field interpolated."""
    if environment is None:
        environment = os.environ
    return _interpolate_model(settings, properties, environment)
