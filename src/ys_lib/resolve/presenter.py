# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import yaml
from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from ys_lib.core.common import get_panel_width, load_yaml_dumper
from ys_lib.core.config import CFG
from ys_lib.properties.application_id import ApplicationId
from ys_lib.properties.options import TARGET
from ys_lib.properties.specification import ClusterSpecification

from .factory import ClusterDescriptor

Dumper: type[yaml.Dumper] = load_yaml_dumper()


class Presenter:
    """
    Presentation layer for a resolved cluster plan.
    """

    def __init__(
        self,
        specification: ClusterSpecification,
        descriptor: ClusterDescriptor,
        cluster_id: ApplicationId | None,
    ):
        self._specification = specification
        self._descriptor = descriptor
        self._cluster_id = cluster_id

    def createPlanPanel(self, console: Console | None = None) -> Group:
        """
        Create a panel with the cluster specification and the resolved configuration.

        Args:
            console (Console | None): Optional Rich console.
                If not provided, a new Console is created.

        Returns:
            Group: A Rich Group containing the panel.
        """
        console = console or Console()
        settings = CFG.plan_panel

        content = Group(
            Padding(self._createSpecificationTable(), (0, 2)),
            Text(""),
            Rule(
                title=Text("CONFIGURATION", style=settings.title_style),
                style=settings.rule_style,
            ),
            Text(""),
            Padding(self._createConfigurationTable(), (0, 2)),
        )

        panel = Panel(
            content,
            title=Text(
                f"CLUSTER: {self._cluster_id or 'new'}",
                style=settings.title_style,
                justify="center",
            ),
            border_style=settings.border_style,
            # no horizontal padding so Rule reaches borders
            padding=(1, 0),
            width=get_panel_width(console, 2, settings.min_width, settings.max_width),
        )

        return Group(Text(""), panel, Text(""))

    def toYaml(self) -> str:
        """Return the plan as a YAML document."""
        data = {
            "cluster_id": str(self._cluster_id) if self._cluster_id else None,
            "specification": {
                "master_memory_mb": self._specification.master_memory_mb,
                "task_manager_memory_mb": self._specification.task_manager_memory_mb,
                "slots_per_task_manager": self._specification.slots_per_task_manager,
            },
            "ship_files": [str(f) for f in self._descriptor.ship_files],
            "node_label": self._descriptor.node_label,
            "configuration": self._descriptor.configuration.toStrings(),
        }
        return yaml.dump(data, Dumper=Dumper, default_flow_style=False, sort_keys=False)

    def _createSpecificationTable(self) -> Table:
        table = self._createKeyValueTable()

        spec = self._specification
        table.add_row("Target:", self._value(self._descriptor.configuration.getValue(TARGET)))
        table.add_row("Job manager memory:", self._value(f"{spec.master_memory_mb} MB"))
        table.add_row("Task manager memory:", self._value(f"{spec.task_manager_memory_mb} MB"))
        table.add_row("Slots per task manager:", self._value(spec.slots_per_task_manager))
        if self._descriptor.node_label:
            table.add_row("Node label:", self._value(self._descriptor.node_label))

        if self._descriptor.ship_files:
            table.add_row(
                "Ship files:",
                self._value("\n".join(str(f) for f in self._descriptor.ship_files)),
            )
        else:
            table.add_row(
                "Ship files:", Text("none", style=CFG.plan_panel.notes_style)
            )

        return table

    def _createConfigurationTable(self) -> Table:
        table = self._createKeyValueTable()
        for key, value in self._descriptor.configuration.toStrings().items():
            table.add_row(f"{key}:", self._value(value))

        return table

    @staticmethod
    def _createKeyValueTable() -> Table:
        table = Table.grid(padding=(0, 3))
        table.add_column(justify="right", style=CFG.plan_panel.key_style, no_wrap=True)
        table.add_column(justify="left")
        return table

    @staticmethod
    def _value(value: object) -> Text:
        return Text(str(value), style=CFG.plan_panel.value_style)
