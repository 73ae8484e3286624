# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Immutable cluster configuration.

This module defines `Configuration`, an ordered mapping from configuration
keys to values. A `Configuration` is never modified after it has been created:
`set` and `merge` always return a new instance, so every source taking part in
a resolution pass keeps its own copy intact.
"""

import copy
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Self

import yaml

from ys_lib.core.common import load_yaml_loader
from ys_lib.core.error import YSError
from ys_lib.core.logger import get_logger

from .options import ConfigOption, get_option

logger = get_logger(__name__)

SafeLoader: type[yaml.SafeLoader] = load_yaml_loader()


class Configuration(Mapping[str, object]):
    """
    Ordered, immutable mapping of configuration keys to typed values.

    Values of known options (see `ys_lib.properties.options`) are stored
    converted to the type of the option; values of unknown keys are stored as given.
    """

    def __init__(self, data: Mapping[str, object] | None = None):
        """
        Initialize the configuration.

        Args:
            data (Mapping[str, object] | None): Initial keys and values.
                Values of known options are converted to the option's type.

        Raises:
            YSError: If a value of a known option cannot be converted.
        """
        self._data: dict[str, object] = {
            key: Configuration._convert(key, value)
            for key, value in (data or {}).items()
        }

    @classmethod
    def fromDict(cls, data: Mapping[str, object]) -> Self:
        """
        Create a configuration from a possibly nested dictionary.

        Nested dictionaries are flattened, joining keys with dots,
        so that `{"taskmanager": {"numberOfTaskSlots": 2}}` becomes
        `{"taskmanager.numberOfTaskSlots": 2}`.

        Args:
            data (Mapping[str, object]): The dictionary to convert.

        Returns:
            Configuration: The created configuration.
        """
        return cls(_flatten(data))

    @classmethod
    def fromFile(cls, file: Path) -> Self:
        """
        Load a configuration from a YAML file.

        Args:
            file (Path): Path to the YAML file. An empty file yields an empty configuration.

        Returns:
            Configuration: The loaded configuration.

        Raises:
            YSError: If the file cannot be read or parsed, or if it does not contain a mapping.
        """
        logger.debug(f"Loading configuration from '{file}'.")
        try:
            with file.open("r", encoding="utf-8") as input:
                data = yaml.load(input, Loader=SafeLoader)
        except yaml.YAMLError as e:
            raise YSError(f"Could not parse the configuration file '{file}': {e}.") from e
        except OSError as e:
            raise YSError(f"Could not read the configuration file '{file}': {e}.") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise YSError(f"Configuration file '{file}' does not contain a mapping.")

        return cls.fromDict(data)

    def __getitem__(self, key: str) -> object:
        return _detach(self._data[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Configuration({self._data!r})"

    def getValue(self, option: ConfigOption) -> object:
        """
        Get the value of an option, falling back to the option's default.

        Args:
            option (ConfigOption): The option to look up.

        Returns:
            object: The stored value, or the default of the option if the key is not set.
        """
        if option.key in self._data:
            return self[option.key]

        if option.default is None:
            return None
        # convert to avoid handing out the shared default
        return option.convert(option.default)

    def contains(self, option: ConfigOption) -> bool:
        """Return True if the option is explicitly set in this configuration."""
        return option.key in self._data

    def set(self, option: ConfigOption | str, value: object) -> "Configuration":
        """
        Return a new configuration with the option set to the value.

        Args:
            option (ConfigOption | str): The option or a raw key to set.
            value (object): The value to set. Values of known options are converted.

        Returns:
            Configuration: A new configuration; this one is left unchanged.
        """
        key = option.key if isinstance(option, ConfigOption) else option
        return Configuration({**self._data, key: value})

    def merge(self, other: Mapping[str, object]) -> "Configuration":
        """
        Return a new configuration with all keys of `other` applied on top of this one.

        Keys present in both take the value from `other`. Keys keep the position
        of their first occurrence.

        Args:
            other (Mapping[str, object]): The configuration with higher precedence.

        Returns:
            Configuration: The merged configuration. Neither operand is modified.
        """
        merged = dict(self._data)
        for key, value in other.items():
            if key in merged and merged[key] != value:
                logger.debug(f"Overriding '{key}': {merged[key]!r} -> {value!r}.")
            merged[key] = value

        return Configuration(merged)

    def toStrings(self) -> dict[str, str]:
        """
        Return all keys with their values converted to strings.

        Strings produced for known options can be parsed back by the options.
        """
        return {
            key: option.format(value) if (option := get_option(key)) else str(value)
            for key, value in self._data.items()
        }

    @staticmethod
    def _convert(key: str, value: object) -> object:
        if option := get_option(key):
            return option.convert(value)
        return _detach(value)


def _detach(value: object) -> object:
    """
    Return a copy of a mutable container so that a `Configuration` never shares it.
    """
    if isinstance(value, (list, dict, set)):
        return copy.deepcopy(value)
    return value


def _flatten(data: Mapping[str, object], prefix: str = "") -> dict[str, object]:
    """
    Flatten nested mappings into a single-level dictionary with dotted keys.
    """
    flat: dict[str, object] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat |= _flatten(value, f"{full_key}.")
        elif value is None:
            # `key:` with no value in YAML means the key is not set
            logger.debug(f"Ignoring key '{full_key}' without a value.")
        else:
            flat[full_key] = value

    return flat
