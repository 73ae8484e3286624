# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path

from ys_lib.core.logger import get_logger
from ys_lib.properties.application_id import ApplicationId
from ys_lib.properties.configuration import Configuration
from ys_lib.properties.options import (
    APPLICATION_ID,
    HA_CLUSTER_ID,
    JOB_MANAGER_TOTAL_PROCESS_MEMORY,
    NODE_LABEL,
    NUM_TASK_SLOTS,
    SHIP_FILES,
    TASK_MANAGER_TOTAL_PROCESS_MEMORY,
)
from ys_lib.properties.size import MemorySize
from ys_lib.properties.specification import ClusterSpecification

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClusterDescriptor:
    """
    Everything needed to deploy or retrieve a cluster, as seen by the deployment backend.
    """

    # Final configuration of the cluster
    configuration: Configuration

    # Files and directories to ship to the cluster
    ship_files: tuple[Path, ...] = ()

    # Node label for the application
    node_label: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "ship_files", tuple(self.ship_files))


class ClusterFactory:
    """
    Derives the cluster specification, the cluster ID, and the cluster
    descriptor from a resolved configuration.
    """

    def getClusterSpecification(self, config: Configuration) -> ClusterSpecification:
        """
        Compute the resource shape of the cluster.

        Memory values are taken from the total process memory options
        (falling back to their defaults) and rounded down to whole megabytes.

        Args:
            config (Configuration): The resolved configuration.

        Returns:
            ClusterSpecification: Memory of the job manager and task managers
            and the number of slots per task manager.
        """
        master_memory = config.getValue(JOB_MANAGER_TOTAL_PROCESS_MEMORY)
        task_manager_memory = config.getValue(TASK_MANAGER_TOTAL_PROCESS_MEMORY)
        slots = config.getValue(NUM_TASK_SLOTS)
        assert isinstance(master_memory, MemorySize)
        assert isinstance(task_manager_memory, MemorySize)
        assert isinstance(slots, int)

        specification = ClusterSpecification(
            master_memory_mb=master_memory.getMebiBytes(),
            task_manager_memory_mb=task_manager_memory.getMebiBytes(),
            slots_per_task_manager=slots,
        )
        logger.debug(f"Cluster specification: {specification}.")
        return specification

    def getClusterId(self, config: Configuration) -> ApplicationId | None:
        """
        Return the ID of the cluster to attach to, or None if a new cluster is to be started.

        Raises:
            YSError: If the configured application ID is invalid.
        """
        if (raw := config.getValue(APPLICATION_ID)) is None:
            return None
        return ApplicationId.fromString(str(raw))

    def createClusterDescriptor(self, config: Configuration) -> ClusterDescriptor:
        """
        Create the descriptor of the cluster.

        When attaching to a cluster without an explicit high-availability namespace,
        the namespace is set to the application ID.

        Ship files given with `--ship` are already validated absolute paths.
        Ship files set through `yarn.ship-files` in the base configuration or via `-D`
        are made absolute against the current working directory but are not checked
        for existence.

        Args:
            config (Configuration): The resolved configuration.

        Returns:
            ClusterDescriptor: The descriptor carrying the final configuration.
        """
        if (cluster_id := self.getClusterId(config)) and not config.contains(
            HA_CLUSTER_ID
        ):
            logger.debug(f"Using '{cluster_id}' as the high-availability namespace.")
            config = config.set(HA_CLUSTER_ID, str(cluster_id))

        ship_files = config.getValue(SHIP_FILES)
        assert isinstance(ship_files, list)
        node_label = config.getValue(NODE_LABEL)

        return ClusterDescriptor(
            configuration=config,
            ship_files=tuple(Path(f).absolute() for f in ship_files),
            node_label=str(node_label) if node_label is not None else None,
        )
