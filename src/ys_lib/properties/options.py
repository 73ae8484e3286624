# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Typed descriptors of cluster configuration options.

This module defines `ConfigOption`, which binds a configuration key to a value
type and a default, and declares all the options ys knows about. Values of
known options are converted to their type whenever they enter a
`Configuration`, no matter whether they come from a YAML file, a session
properties file, or a `-D key=value` command-line override.
"""

import tempfile
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from ys_lib.core.error import YSError

from .duration import format_duration, parse_duration
from .size import MemorySize


class OptionType(Enum):
    """
    Type of the value stored under a configuration option.
    """

    STRING = 1
    INTEGER = 2
    BOOLEAN = 3
    MEMORY = 4
    DURATION = 5
    LIST = 6

    def __str__(self):
        return self.name.lower()


# separator of list items when a list is given as a single string
LIST_SEPARATOR = ";"


@dataclass(frozen=True)
class ConfigOption:
    """
    Dataclass describing a single configuration option.
    """

    # Configuration key, e.g. `taskmanager.numberOfTaskSlots`
    key: str

    # Type of the value
    type: OptionType

    # Value used if the option is not set in a configuration
    default: object = None

    # Human-readable description of the option
    description: str = ""

    def convert(self, value: object) -> object:
        """
        Convert a raw value into the type of this option.

        Args:
            value (object): A raw value, typically a string or a YAML scalar.

        Returns:
            object: The converted value.

        Raises:
            InvalidMemorySpecification: If a memory value cannot be parsed.
            YSError: If the value is None or cannot be converted to the type of the option.
        """
        if value is None:
            raise YSError(f"Option '{self.key}' requires a value.")

        match self.type:
            case OptionType.STRING:
                return str(value)
            case OptionType.INTEGER:
                return self._toInt(value)
            case OptionType.BOOLEAN:
                return self._toBool(value)
            case OptionType.MEMORY:
                if isinstance(value, MemorySize):
                    return value
                return MemorySize.fromString(str(value))
            case OptionType.DURATION:
                if isinstance(value, timedelta):
                    return value
                return parse_duration(str(value))
            case OptionType.LIST:
                if isinstance(value, str):
                    return [x.strip() for x in value.split(LIST_SEPARATOR) if x.strip()]
                if isinstance(value, (list, tuple)):
                    return [str(x) for x in value]

        raise YSError(
            f"Cannot convert '{value}' to {self.type} for option '{self.key}'."
        )

    def format(self, value: object) -> str:
        """
        Convert a value of this option into its textual form.

        The result can be converted back using `convert`.
        """
        match self.type:
            case OptionType.BOOLEAN:
                return "true" if value else "false"
            case OptionType.MEMORY:
                assert isinstance(value, MemorySize)
                if value.value % MemorySize.ofMebiBytes(1).value == 0:
                    return f"{value.getMebiBytes()}m"
                return value.toStrExact()
            case OptionType.DURATION:
                assert isinstance(value, timedelta)
                return format_duration(value)
            case OptionType.LIST:
                assert isinstance(value, list)
                return LIST_SEPARATOR.join(value)
        return str(value)

    def _toInt(self, value: object) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except ValueError as e:
            raise YSError(
                f"Option '{self.key}' expects an integer, got '{value}'."
            ) from e

    def _toBool(self, value: object) -> bool:
        if isinstance(value, bool):
            return value
        match str(value).strip().lower():
            case "true":
                return True
            case "false":
                return False
        raise YSError(f"Option '{self.key}' expects 'true' or 'false', got '{value}'.")


JOB_MANAGER_TOTAL_PROCESS_MEMORY = ConfigOption(
    "jobmanager.memory.process.size",
    OptionType.MEMORY,
    MemorySize.ofMebiBytes(1600),
    "Total process memory of the job manager.",
)

TASK_MANAGER_TOTAL_PROCESS_MEMORY = ConfigOption(
    "taskmanager.memory.process.size",
    OptionType.MEMORY,
    MemorySize.ofMebiBytes(1728),
    "Total process memory of a task manager.",
)

NUM_TASK_SLOTS = ConfigOption(
    "taskmanager.numberOfTaskSlots",
    OptionType.INTEGER,
    1,
    "Number of slots offered by each task manager.",
)

ATTACHED = ConfigOption(
    "execution.attached",
    OptionType.BOOLEAN,
    True,
    "Whether the client stays attached to the submitted job.",
)

TARGET = ConfigOption(
    "execution.target",
    OptionType.STRING,
    None,
    "Deployment target, 'yarn-session' or 'yarn-per-job'.",
)

HA_CLUSTER_ID = ConfigOption(
    "high-availability.cluster-id",
    OptionType.STRING,
    None,
    "High-availability namespace of the cluster.",
)

APPLICATION_ID = ConfigOption(
    "yarn.application.id",
    OptionType.STRING,
    None,
    "ID of the YARN application (session cluster) to attach to.",
)

NODE_LABEL = ConfigOption(
    "yarn.application.node-label",
    OptionType.STRING,
    None,
    "Node label restricting where the application runs.",
)

SHIP_FILES = ConfigOption(
    "yarn.ship-files",
    OptionType.LIST,
    [],
    "Files and directories shipped to the cluster.",
)

PROPERTIES_FILE_LOCATION = ConfigOption(
    "yarn.properties-file.location",
    OptionType.STRING,
    tempfile.gettempdir(),
    "Directory containing the session properties file.",
)

JOB_MANAGER_ADDRESS = ConfigOption(
    "jobmanager.rpc.address",
    OptionType.STRING,
    None,
    "Host of the job manager.",
)

JOB_MANAGER_PORT = ConfigOption(
    "jobmanager.rpc.port",
    OptionType.INTEGER,
    6123,
    "Port of the job manager.",
)

ASK_TIMEOUT = ConfigOption(
    "pekko.ask.timeout",
    OptionType.DURATION,
    timedelta(seconds=10),
    "Timeout of RPC requests.",
)

JVM_OPTIONS = ConfigOption(
    "env.java.opts.all",
    OptionType.STRING,
    "",
    "Extra options passed to all JVMs of the cluster.",
)

# all known options indexed by key
KNOWN_OPTIONS: dict[str, ConfigOption] = {
    option.key: option
    for option in (
        JOB_MANAGER_TOTAL_PROCESS_MEMORY,
        TASK_MANAGER_TOTAL_PROCESS_MEMORY,
        NUM_TASK_SLOTS,
        ATTACHED,
        TARGET,
        HA_CLUSTER_ID,
        APPLICATION_ID,
        NODE_LABEL,
        SHIP_FILES,
        PROPERTIES_FILE_LOCATION,
        JOB_MANAGER_ADDRESS,
        JOB_MANAGER_PORT,
        ASK_TIMEOUT,
        JVM_OPTIONS,
    )
}


def get_option(key: str) -> ConfigOption | None:
    """Return the known option with the given key, or None."""
    return KNOWN_OPTIONS.get(key)
