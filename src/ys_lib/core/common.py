# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the ys library.

This module provides helpers for YAML I/O, key-value splitting,
user lookup, and panel sizing.
"""

import getpass
from functools import lru_cache

import yaml
from rich.console import Console

from .logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


@lru_cache(maxsize=1)
def load_yaml_loader() -> type[yaml.SafeLoader]:
    """Return the fastest available safe YAML loader (CSafeLoader if possible)."""
    try:
        from yaml import CSafeLoader as SafeLoader  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CLoader.")
    except ImportError:
        from yaml import SafeLoader

        logger.debug("Loaded default YAML loader.")

    return SafeLoader


def split_key_value(string: str) -> tuple[str, str] | None:
    """
    Split a `key=value` string at the first '='.

    Whitespace around the key and the value is stripped.

    Args:
        string (str): The string to split.

    Returns:
        tuple[str, str] | None: The key and the value, or None if the string
        contains no '=' or the key is empty.
    """
    key, sep, value = string.partition("=")
    key = key.strip()
    if not sep or not key:
        return None

    return key, value.strip()


def get_current_user() -> str:
    """Return the login name of the user running ys."""
    return getpass.getuser()


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int | None): The minimum allowable panel width. If None, no lower bound is applied.
        max_width (int | None): The maximum allowable panel width. If None, no upper bound is applied.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
