# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

import pytest

from ys_lib.core.error import YSError
from ys_lib.properties.application_id import ApplicationId
from ys_lib.properties.configuration import Configuration
from ys_lib.properties.options import HA_CLUSTER_ID
from ys_lib.properties.specification import ClusterSpecification
from ys_lib.resolve.factory import ClusterDescriptor, ClusterFactory

APP_ID = "application_1700000000000_0042"


def test_get_cluster_specification_defaults():
    spec = ClusterFactory().getClusterSpecification(Configuration())

    assert spec == ClusterSpecification(
        master_memory_mb=1600, task_manager_memory_mb=1728, slots_per_task_manager=1
    )


@pytest.mark.parametrize(
    "jm, tm, expected_jm, expected_tm",
    [
        ("1g", "2g", 1024, 2048),
        ("1024", "2048", 1024, 2048),
        ("1337m", "7331m", 1337, 7331),
        ("1024 mebibytes", "1 gibibytes", 1024, 1024),
    ],
)
def test_get_cluster_specification_memory(jm, tm, expected_jm, expected_tm):
    config = Configuration(
        {
            "jobmanager.memory.process.size": jm,
            "taskmanager.memory.process.size": tm,
        }
    )

    spec = ClusterFactory().getClusterSpecification(config)

    assert spec.master_memory_mb == expected_jm
    assert spec.task_manager_memory_mb == expected_tm


def test_get_cluster_specification_rounds_down_to_megabytes():
    config = Configuration(
        {
            "jobmanager.memory.process.size": f"{1024 * 1024 * 3 - 1}b",
            "taskmanager.memory.process.size": "1536k",
        }
    )

    spec = ClusterFactory().getClusterSpecification(config)

    assert spec.master_memory_mb == 2
    assert spec.task_manager_memory_mb == 1


def test_get_cluster_specification_slots():
    config = Configuration({"taskmanager.numberOfTaskSlots": 42})

    assert ClusterFactory().getClusterSpecification(config).slots_per_task_manager == 42


def test_get_cluster_id():
    config = Configuration({"yarn.application.id": APP_ID})

    assert ClusterFactory().getClusterId(config) == ApplicationId(1700000000000, 42)


def test_get_cluster_id_none():
    assert ClusterFactory().getClusterId(Configuration()) is None


def test_get_cluster_id_invalid():
    config = Configuration({"yarn.application.id": "invalid"})

    with pytest.raises(YSError, match="Invalid application ID"):
        ClusterFactory().getClusterId(config)


def test_create_cluster_descriptor_new_cluster():
    config = Configuration({"taskmanager.numberOfTaskSlots": 2})

    descriptor = ClusterFactory().createClusterDescriptor(config)

    assert isinstance(descriptor, ClusterDescriptor)
    assert descriptor.configuration == config
    assert descriptor.ship_files == ()
    assert descriptor.node_label is None
    assert not descriptor.configuration.contains(HA_CLUSTER_ID)


def test_create_cluster_descriptor_defaults_ha_namespace_to_application_id():
    config = Configuration({"yarn.application.id": APP_ID})

    descriptor = ClusterFactory().createClusterDescriptor(config)

    assert descriptor.configuration.getValue(HA_CLUSTER_ID) == APP_ID
    # the input configuration is left untouched
    assert not config.contains(HA_CLUSTER_ID)


def test_create_cluster_descriptor_keeps_explicit_ha_namespace():
    config = Configuration(
        {"yarn.application.id": APP_ID, "high-availability.cluster-id": "flink_test_namespace"}
    )

    descriptor = ClusterFactory().createClusterDescriptor(config)

    assert descriptor.configuration.getValue(HA_CLUSTER_ID) == "flink_test_namespace"


def test_create_cluster_descriptor_node_label_and_ship_files():
    config = Configuration(
        {
            "yarn.application.node-label": "flink_test_nodelabel",
            "yarn.ship-files": ["/opt/lib", "/opt/conf/app.conf"],
        }
    )

    descriptor = ClusterFactory().createClusterDescriptor(config)

    assert descriptor.node_label == "flink_test_nodelabel"
    assert descriptor.ship_files == (Path("/opt/lib"), Path("/opt/conf/app.conf"))


def test_create_cluster_descriptor_makes_configured_ship_files_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = Configuration({"yarn.ship-files": "lib;/opt/app.conf"})

    descriptor = ClusterFactory().createClusterDescriptor(config)

    assert descriptor.ship_files == (Path.cwd() / "lib", Path("/opt/app.conf"))
    assert all(p.is_absolute() for p in descriptor.ship_files)


def test_cluster_descriptor_ship_files_are_immutable():
    ship_files = [Path("/opt/lib")]
    descriptor = ClusterDescriptor(Configuration(), ship_files)
    ship_files.append(Path("/opt/other"))

    assert descriptor.ship_files == (Path("/opt/lib"),)
    assert isinstance(descriptor.ship_files, tuple)
