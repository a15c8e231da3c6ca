"""Config placeholder resolution.

Resolves ``${variableName}`` placeholders in config objects so runtime
context (e.g. the local region's state code) can be injected into
declarative configs before they reach a plugin.
"""

import copy
import re
from typing import Any, TypeVar

T = TypeVar("T")

PLACEHOLDER_PATTERN = re.compile(r"\$\{(\w+)\}")


def resolve_config_placeholders(config: T, variables: dict[str, str]) -> T:
    """Resolve ``${name}`` placeholders in every string of a config.

    Unknown placeholders are left as-is. The input is never mutated.

    Args:
        config: Config object (mappings, lists and scalars)
        variables: Placeholder values, e.g. ``{"stateCode": "CA"}``

    Returns:
        A resolved deep copy of ``config``
    """
    if not variables:
        return copy.deepcopy(config)
    return _resolve(config, variables)


def _resolve(value: Any, variables: dict[str, str]) -> Any:
    if isinstance(value, str):
        return PLACEHOLDER_PATTERN.sub(
            lambda match: variables.get(match.group(1), match.group(0)),
            value,
        )
    if isinstance(value, dict):
        return {key: _resolve(item, variables) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve(item, variables) for item in value]
    if isinstance(value, tuple):
        return tuple(_resolve(item, variables) for item in value)
    return copy.deepcopy(value)
