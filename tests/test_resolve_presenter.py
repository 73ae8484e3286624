# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import io
from pathlib import Path

import yaml
from rich.console import Console, Group

from ys_lib.properties.application_id import ApplicationId
from ys_lib.properties.configuration import Configuration
from ys_lib.properties.specification import ClusterSpecification
from ys_lib.resolve.factory import ClusterDescriptor
from ys_lib.resolve.presenter import Presenter

APP_ID = "application_1700000000000_0042"


def _presenter(cluster_id: ApplicationId | None = None, **descriptor_kwargs) -> Presenter:
    config = Configuration(
        {
            "execution.target": "yarn-session" if cluster_id else "yarn-per-job",
            "jobmanager.memory.process.size": "1g",
            "taskmanager.numberOfTaskSlots": 3,
        }
    )
    return Presenter(
        ClusterSpecification(1024, 1728, 3),
        ClusterDescriptor(
            configuration=config,
            ship_files=descriptor_kwargs.get("ship_files", []),
            node_label=descriptor_kwargs.get("node_label"),
        ),
        cluster_id,
    )


def _render(presenter: Presenter) -> str:
    buf = io.StringIO()
    console = Console(file=buf, width=120, force_terminal=False)
    console.print(presenter.createPlanPanel(console))
    return buf.getvalue()


def test_create_plan_panel_returns_group():
    console = Console(file=io.StringIO(), width=120)

    assert isinstance(_presenter().createPlanPanel(console), Group)


def test_create_plan_panel_new_cluster():
    output = _render(_presenter())

    assert "CLUSTER: new" in output
    assert "yarn-per-job" in output
    assert "1024 MB" in output
    assert "1728 MB" in output
    assert "none" in output
    assert "CONFIGURATION" in output
    assert "jobmanager.memory.process.size:" in output
    assert "1024m" in output
    assert "Node label:" not in output


def test_create_plan_panel_existing_cluster():
    output = _render(
        _presenter(
            ApplicationId.fromString(APP_ID),
            ship_files=[Path("/opt/lib")],
            node_label="gpu",
        )
    )

    assert f"CLUSTER: {APP_ID}" in output
    assert "yarn-session" in output
    assert "/opt/lib" in output
    assert "Node label:" in output
    assert "gpu" in output


def test_to_yaml_new_cluster():
    data = yaml.safe_load(_presenter().toYaml())

    assert data["cluster_id"] is None
    assert data["specification"] == {
        "master_memory_mb": 1024,
        "task_manager_memory_mb": 1728,
        "slots_per_task_manager": 3,
    }
    assert data["ship_files"] == []
    assert data["node_label"] is None
    assert data["configuration"] == {
        "execution.target": "yarn-per-job",
        "jobmanager.memory.process.size": "1024m",
        "taskmanager.numberOfTaskSlots": "3",
    }


def test_to_yaml_existing_cluster():
    data = yaml.safe_load(
        _presenter(
            ApplicationId.fromString(APP_ID),
            ship_files=[Path("/opt/lib")],
            node_label="gpu",
        ).toYaml()
    )

    assert data["cluster_id"] == APP_ID
    assert data["ship_files"] == ["/opt/lib"]
    assert data["node_label"] == "gpu"


def test_to_yaml_keeps_key_order():
    text = _presenter().toYaml()

    keys = [line.split(":")[0] for line in text.splitlines() if not line.startswith(" ")]
    assert keys == ["cluster_id", "specification", "ship_files", "node_label", "configuration"]
