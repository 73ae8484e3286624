# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass


@dataclass(frozen=True)
class ClusterSpecification:
    """
    Resource shape of a cluster: memory of each role and slots per worker.
    """

    # Total process memory of the job manager in megabytes
    master_memory_mb: int

    # Total process memory of each task manager in megabytes
    task_manager_memory_mb: int

    # Number of slots offered by each task manager
    slots_per_task_manager: int
