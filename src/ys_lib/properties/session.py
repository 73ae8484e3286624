# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Session properties files.

When a YARN session cluster is started, a small properties file recording the
identity of the session is written into a well-known directory. A later
invocation reads this file to attach to the running session. This module
defines `SessionRecord`, the read-only view of that file.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Self

from ys_lib.core.common import split_key_value
from ys_lib.core.config import CFG
from ys_lib.core.error import InvalidSessionPropertiesFile, YSError
from ys_lib.core.logger import get_logger

from .application_id import ApplicationId
from .configuration import Configuration
from .options import APPLICATION_ID, JOB_MANAGER_ADDRESS, JOB_MANAGER_PORT

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionRecord:
    """
    Dataclass storing information about a previously started session cluster.
    """

    # Identifier of the session cluster
    cluster_id: ApplicationId

    # Host of the job manager
    manager_address: str | None = None

    # Port of the job manager
    manager_port: int | None = None

    # Configuration overrides the session was started with
    dynamic_properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # read-only view of a private copy
        object.__setattr__(
            self, "dynamic_properties", MappingProxyType(dict(self.dynamic_properties))
        )

    @classmethod
    def fromDirectory(cls, directory: Path, user: str) -> Self | None:
        """
        Load the session record of `user` from `directory`.

        Args:
            directory (Path): Directory containing the session properties file.
            user (str): Name of the user the session belongs to.

        Returns:
            SessionRecord | None: The loaded record or None if there is no properties file.

        Raises:
            InvalidSessionPropertiesFile: If the properties file exists but is malformed.
        """
        file = directory / CFG.file_names.propertiesFile(user)
        if not file.is_file():
            logger.debug(f"No session properties file found at '{file}'.")
            return None

        logger.debug(f"Loading session properties from '{file}'.")
        try:
            content = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidSessionPropertiesFile(
                f"Could not read the session properties file '{file}': {e}."
            ) from e

        return cls.fromString(content, file)

    @classmethod
    def fromString(cls, content: str, source: Path | str = "<string>") -> Self:
        """
        Parse the content of a session properties file.

        Args:
            content (str): Lines of `key=value` pairs.
            source (Path | str): Origin of the content, used in error messages.

        Returns:
            SessionRecord: The parsed record.

        Raises:
            InvalidSessionPropertiesFile: If the application ID is missing or invalid,
                or if the job manager address is not of the form `host:port`.
        """
        properties = _parse_properties(content)
        settings = CFG.session

        if (raw_id := properties.get(settings.application_id_key)) is None:
            raise InvalidSessionPropertiesFile(
                f"Session properties file '{source}' does not contain '{settings.application_id_key}'. "
                f"Content: '{content.strip()}'."
            )

        try:
            cluster_id = ApplicationId.fromString(raw_id)
        except YSError as e:
            raise InvalidSessionPropertiesFile(
                f"Session properties file '{source}' contains an invalid application ID: '{raw_id}'."
            ) from e

        address, port = None, None
        if (raw_address := properties.get(settings.job_manager_key)) is not None:
            address, port = _parse_address(raw_address, source)

        dynamic_properties = {}
        if raw_dynamic := properties.get(settings.dynamic_properties_key):
            for item in raw_dynamic.split(settings.dynamic_properties_separator):
                if not item.strip():
                    continue
                if not (pair := split_key_value(item)):
                    raise InvalidSessionPropertiesFile(
                        f"Session properties file '{source}' contains an invalid dynamic property: '{item}'."
                    )
                dynamic_properties[pair[0]] = pair[1]

        try:
            Configuration(dynamic_properties)
        except YSError as e:
            raise InvalidSessionPropertiesFile(
                f"Session properties file '{source}' contains an invalid dynamic property: {e}"
            ) from e

        record = cls(cluster_id, address, port, dynamic_properties)
        logger.debug(f"Loaded session record: {record}.")
        return record

    def toConfiguration(self) -> Configuration:
        """
        Convert the record into a configuration overlay.

        The overlay contains the application ID, the job manager address
        (if known), and the dynamic properties of the session.
        """
        config = Configuration(self.dynamic_properties).set(
            APPLICATION_ID, str(self.cluster_id)
        )
        if self.manager_address is not None:
            config = config.set(JOB_MANAGER_ADDRESS, self.manager_address)
        if self.manager_port is not None:
            config = config.set(JOB_MANAGER_PORT, self.manager_port)

        return config


def _parse_properties(content: str) -> dict[str, str]:
    """
    Parse `key=value` lines. Blank lines and comments (`#` or `!`) are skipped.
    A line without '=' defines a key with an empty value.
    """
    properties = {}
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "!")):
            continue

        if pair := split_key_value(stripped):
            properties[pair[0]] = pair[1]
        else:
            properties[stripped.rstrip("=").strip()] = ""

    return properties


def _parse_address(raw: str, source: Path | str) -> tuple[str, int]:
    """
    Parse a `host:port` address of the job manager.
    """
    host, sep, port = raw.strip().rpartition(":")
    if not sep or not host or not port.isdecimal():
        raise InvalidSessionPropertiesFile(
            f"Session properties file '{source}' contains an invalid job manager address: '{raw}'. Expected 'host:port'."
        )

    return host, int(port)
