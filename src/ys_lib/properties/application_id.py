# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Identifier of a YARN application.

An application ID has the form `application_<cluster timestamp>_<sequence>`,
where the sequence number is zero-padded to at least four digits.
"""

import re
from dataclasses import dataclass
from typing import Self

from ys_lib.core.error import YSError


@dataclass(frozen=True)
class ApplicationId:
    """
    Dataclass representing the identifier of a YARN application (a cluster).
    """

    # Start time of the resource manager that assigned the ID
    cluster_timestamp: int

    # Sequence number of the application
    sequence: int

    @classmethod
    def fromString(cls, s: str) -> Self:
        """
        Parse an application ID.

        Args:
            s (str): String of the form `application_<digits>_<digits>`.

        Returns:
            ApplicationId: The parsed identifier.

        Raises:
            YSError: If the string is not a valid application ID.
        """
        match = re.fullmatch(r"application_(\d+)_(\d+)", s.strip())
        if not match:
            raise YSError(f"Invalid application ID: '{s}'.")

        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"application_{self.cluster_timestamp}_{self.sequence:04d}"
