# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import re
from dataclasses import dataclass
from typing import Self

from ys_lib.core.config import CFG
from ys_lib.core.error import InvalidMemorySpecification


@dataclass(frozen=True, order=True)
class MemorySize:
    """
    Represents an amount of memory.

    The value is stored internally as an exact number of bytes. When converted
    to a string, it is displayed in the largest human-readable unit such that
    the relative rounding error does not exceed `CFG.size.max_rounding_error`.
    """

    value: int

    _unit_map = {
        "b": 1,
        "kb": 1024,
        "mb": 1024**2,
        "gb": 1024**3,
        "tb": 1024**4,
    }

    # alternative spellings of units
    _unit_aliases = {
        "bytes": "b",
        "k": "kb",
        "kibibytes": "kb",
        "m": "mb",
        "mebibytes": "mb",
        "g": "gb",
        "gibibytes": "gb",
        "t": "tb",
        "tebibytes": "tb",
    }

    @classmethod
    def fromString(cls, s: str) -> Self:
        """
        Create a MemorySize object from a string.

        The unit is optional and defaults to megabytes.

        Args:
            s (str): A string representation of the size, e.g., "1024", "2048m", "1 g", "512MB".

        Returns:
            MemorySize: A MemorySize instance holding the exact number of bytes.

        Raises:
            InvalidMemorySpecification: If the numeric part is missing or not positive,
                or if the unit is not recognized.
        """
        match = re.match(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$", s)
        if not match:
            raise InvalidMemorySpecification(f"Invalid memory size: '{s}'.")

        number, unit = match.groups()
        unit = unit.lower() or "mb"
        unit = cls._unit_aliases.get(unit, unit)
        if unit not in cls._unit_map:
            raise InvalidMemorySpecification(
                f"Unsupported unit '{match.group(2)}' in memory size '{s}'."
            )

        if (value := int(number)) <= 0:
            raise InvalidMemorySpecification(
                f"Memory size must be positive: '{s}'."
            )

        return cls(value * cls._unit_map[unit])

    @classmethod
    def ofMebiBytes(cls, mebibytes: int) -> Self:
        """Create a MemorySize object from a number of megabytes."""
        return cls(mebibytes * cls._unit_map["mb"])

    def getMebiBytes(self) -> int:
        """Return the size in whole megabytes, rounded down."""
        return self.value // self._unit_map["mb"]

    def toStrExact(self) -> str:
        """Convert the MemorySize to string while keeping it in bytes."""
        return f"{self.value}b"

    def __str__(self) -> str:
        for unit, factor in reversed(list(self._unit_map.items())):
            value = self.value / factor

            if value >= 1:
                rounded = round(value)
                # compute relative error from rounding
                error = abs(rounded * factor - self.value) / self.value
                if error <= CFG.size.max_rounding_error or unit == "b":
                    return f"{rounded}{unit}"
                # otherwise, try smaller unit

        return f"{self.value}b"
