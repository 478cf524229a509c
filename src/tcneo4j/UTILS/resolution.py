"""
Utilities for resolving settings from explicit values, environment overrides and fallbacks.
"""
from typing import Mapping, Optional


def resolve_setting(explicit: Optional[str],
                    variable: str,
                    fallback: str,
                    lookup: Mapping[str, str]) -> str:
    """
    Resolves a single setting, like ${VAR:-default} with an explicit value on top.

    :param explicit: Value given by the caller; wins when not None.
    :param variable: Name of the override variable to look up.
    :param fallback: Fixed value used when neither of the above is set.
    :param lookup: Override source, usually the process environment.
    :return: The resolved value.
    """
    if explicit is not None:
        return explicit
    value = lookup.get(variable)
    if value is not None:
        return value
    return fallback
