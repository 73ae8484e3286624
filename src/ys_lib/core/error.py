# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout ys.

Every failure of a resolution pass is reported as exactly one of the
exceptions defined here. All of them derive from `YSError` and carry the exit
code used by ys commands to report failures consistently.
"""

from .config import CFG


class YSError(Exception):
    """Common exception type for all recoverable ys errors."""

    exit_code = CFG.exit_codes.default


class InvalidMemorySpecification(YSError):
    """Raised when a memory quantity cannot be parsed."""

    pass


class InvalidSessionPropertiesFile(YSError):
    """Raised when a session properties file is malformed."""

    pass


class MalformedOption(YSError):
    """Raised when a command-line option has a structurally invalid value."""

    def __init__(self, flag: str, message: str):
        super().__init__(f"Invalid value for option '{flag}': {message}")
        self.flag = flag


class ShipFileNotFound(YSError):
    """Raised when a file requested to be shipped to the cluster does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Ship file '{path}' does not exist.")
        self.path = path
