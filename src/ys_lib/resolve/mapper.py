# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Translation of command-line options into a configuration overlay.

`OptionMapper` takes the option lookup produced by click and turns it into an
`OptionOverlay`: a set of tagged optional values recording only what the user
explicitly asked for. Nothing is defaulted here, so that the resolver can tell
"the user said so" apart from "fall back to the configuration".
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from ys_lib.core.common import split_key_value
from ys_lib.core.error import InvalidMemorySpecification, MalformedOption, YSError
from ys_lib.core.logger import get_logger
from ys_lib.properties.application_id import ApplicationId
from ys_lib.properties.configuration import Configuration
from ys_lib.properties.options import (
    APPLICATION_ID,
    ATTACHED,
    HA_CLUSTER_ID,
    JOB_MANAGER_TOTAL_PROCESS_MEMORY,
    NODE_LABEL,
    NUM_TASK_SLOTS,
    SHIP_FILES,
    TASK_MANAGER_TOTAL_PROCESS_MEMORY,
)
from ys_lib.properties.size import MemorySize

logger = get_logger(__name__)


class Mode(Enum):
    """
    Mode of the invocation.
    """

    # submit a job
    RUN = 1
    # query or attach to an existing session
    ATTACH = 2

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding Mode enum variant.

        Raises:
            YSError if the string corresponds to no Mode.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise YSError(f"Could not recognize a mode '{s}'.")


# command-line spelling of each option, used in error messages
FLAGS = {
    "jobmanager_memory": "--jobmanager-memory",
    "taskmanager_memory": "--taskmanager-memory",
    "slots": "--slots",
    "detached": "--detached",
    "zookeeper_namespace": "--zookeeper-namespace",
    "node_label": "--node-label",
    "application_id": "--application-id",
    "dynamic_properties": "-D",
    "ship": "--ship",
}


@dataclass(frozen=True)
class OptionOverlay:
    """
    Values explicitly provided on the command line.

    A field set to None (or empty) was not specified by the user.
    """

    # Mode of the invocation
    mode: Mode = Mode.RUN

    # Application ID of the cluster to attach to
    cluster_id: str | None = None

    # Total process memory of the job manager
    jobmanager_memory: MemorySize | None = None

    # Total process memory of each task manager
    taskmanager_memory: MemorySize | None = None

    # Number of slots per task manager
    slots: int | None = None

    # True if the client should detach after submission
    detached: bool | None = None

    # High-availability namespace
    ha_cluster_id: str | None = None

    # Node label for the application
    node_label: str | None = None

    # Paths requested to be shipped, in the order specified
    ship_files: tuple[str, ...] = ()

    # Raw `-D key=value` overrides
    dynamic_properties: Configuration = field(default_factory=Configuration)

    def toConfiguration(self) -> Configuration:
        """
        Return the structured options as a configuration overlay.

        Dynamic properties are not part of the returned overlay,
        they are applied separately (see `getDynamicProperties`).
        """
        config = Configuration()
        for option, value in (
            (APPLICATION_ID, self.cluster_id),
            (JOB_MANAGER_TOTAL_PROCESS_MEMORY, self.jobmanager_memory),
            (TASK_MANAGER_TOTAL_PROCESS_MEMORY, self.taskmanager_memory),
            (NUM_TASK_SLOTS, self.slots),
            (HA_CLUSTER_ID, self.ha_cluster_id),
            (NODE_LABEL, self.node_label),
        ):
            if value is not None:
                config = config.set(option, value)

        if self.detached is not None:
            config = config.set(ATTACHED, not self.detached)
        if self.ship_files:
            config = config.set(SHIP_FILES, list(self.ship_files))

        return config

    def getDynamicProperties(self) -> Configuration:
        """Return the `-D` overrides."""
        return self.dynamic_properties

    def setsClusterId(self) -> bool:
        """Return True if the command line specifies the application ID in any way."""
        return self.cluster_id is not None or self.dynamic_properties.contains(
            APPLICATION_ID
        )


class OptionMapper:
    """
    Converts parsed command-line options into an `OptionOverlay`.
    """

    def __init__(self, mode: Mode = Mode.RUN):
        """
        Initialize the mapper.

        Args:
            mode (Mode): Whether the invocation submits a job or attaches to a session.
        """
        self._mode = mode

    def map(self, options: Mapping[str, object]) -> OptionOverlay:
        """
        Map the option lookup into an overlay.

        Args:
            options (Mapping[str, object]): Option names (as produced by click)
                mapped to raw values. Missing options and None values are treated
                as not specified.

        Returns:
            OptionOverlay: Values explicitly provided by the user.

        Raises:
            MalformedOption: If a value is structurally invalid.
            InvalidMemorySpecification: If a memory value cannot be parsed.
        """
        overlay = OptionOverlay(
            mode=self._mode,
            cluster_id=self._getClusterId(options),
            jobmanager_memory=self._getMemory(options, "jobmanager_memory"),
            taskmanager_memory=self._getMemory(options, "taskmanager_memory"),
            slots=self._getSlots(options),
            detached=True if options.get("detached") else None,
            ha_cluster_id=self._getString(options, "zookeeper_namespace"),
            node_label=self._getString(options, "node_label"),
            ship_files=tuple(self._getList(options, "ship")),
            dynamic_properties=self._getDynamicProperties(options),
        )

        logger.debug(f"Command-line overlay: {overlay}.")
        return overlay

    @staticmethod
    def _getString(options: Mapping[str, object], name: str) -> str | None:
        if (value := options.get(name)) is None:
            return None
        if not isinstance(value, str) or not value.strip():
            raise MalformedOption(FLAGS[name], f"expected a non-empty string, got '{value}'.")
        return value.strip()

    @staticmethod
    def _getList(options: Mapping[str, object], name: str) -> list[str]:
        value = options.get(name)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, Iterable):
            return [str(x) for x in value]
        raise MalformedOption(FLAGS[name], f"expected a list of values, got '{value}'.")

    @staticmethod
    def _getMemory(options: Mapping[str, object], name: str) -> MemorySize | None:
        if (value := OptionMapper._getString(options, name)) is None:
            return None
        try:
            return MemorySize.fromString(value)
        except InvalidMemorySpecification as e:
            raise InvalidMemorySpecification(f"{e} (option '{FLAGS[name]}')") from e

    @staticmethod
    def _getSlots(options: Mapping[str, object]) -> int | None:
        if (value := options.get("slots")) is None:
            return None
        try:
            slots = int(str(value).strip())
        except ValueError as e:
            raise MalformedOption(
                FLAGS["slots"], f"expected an integer, got '{value}'."
            ) from e

        if slots < 1:
            raise MalformedOption(FLAGS["slots"], f"must be at least 1, got '{slots}'.")
        return slots

    @staticmethod
    def _getClusterId(options: Mapping[str, object]) -> str | None:
        if (value := OptionMapper._getString(options, "application_id")) is None:
            return None
        try:
            ApplicationId.fromString(value)
        except YSError as e:
            raise MalformedOption(FLAGS["application_id"], str(e)) from e
        return value

    @staticmethod
    def _getDynamicProperties(options: Mapping[str, object]) -> Configuration:
        config = Configuration()
        for item in OptionMapper._getList(options, "dynamic_properties"):
            if not (pair := split_key_value(item)):
                raise MalformedOption(
                    FLAGS["dynamic_properties"], f"expected 'key=value', got '{item}'."
                )

            key, value = pair
            try:
                # later occurrences of a key override earlier ones
                config = config.set(key, value)
                if key == APPLICATION_ID.key:
                    ApplicationId.fromString(value)
            except InvalidMemorySpecification:
                raise
            except YSError as e:
                raise MalformedOption(FLAGS["dynamic_properties"], str(e)) from e

        return config
