# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from click_option_group import optgroup
from rich.console import Console

from ys_lib.core.config import CFG
from ys_lib.core.error import YSError
from ys_lib.core.logger import get_logger
from ys_lib.resolve.factory import ClusterFactory
from ys_lib.resolve.frontend import SessionFrontend, load_base_configuration
from ys_lib.resolve.mapper import Mode
from ys_lib.resolve.presenter import Presenter

logger = get_logger(__name__)


@click.command(
    short_help="Resolve the configuration of a YARN cluster.",
    help=f"""
Resolve the effective configuration for submitting a job to, or attaching to, a YARN cluster
and print the resulting cluster specification.

The configuration is merged from the base configuration file, the session properties file
of the current user, and the options below. Options override the session, and `-D` overrides
are applied last.

The base configuration is read from `{CFG.file_names.base_config}` in the directory given by
`--conf-dir` or by the environment variable '{CFG.env_vars.conf_dir}'.
""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option(
    "--mode",
    type=click.Choice([str(m) for m in Mode], case_sensitive=False),
    default=str(Mode.RUN),
    show_default=True,
    help="Submit a job ('run') or attach to a session cluster ('attach').",
)
@click.option(
    "--conf-dir",
    type=str,
    default=None,
    help="Directory containing the base cluster configuration.",
)
@click.option(
    "--properties-dir",
    type=str,
    default=None,
    help="Directory containing the session properties file. Defaults to 'yarn.properties-file.location'.",
)
@click.option(
    "--yaml",
    "as_yaml",
    is_flag=True,
    help="Print the resolved plan as YAML instead of a panel.",
)
@optgroup.group(f"{click.style('Cluster resources', fg='yellow')}")
@optgroup.option(
    "-jm",
    "--jobmanager-memory",
    type=str,
    default=None,
    help="Total process memory of the job manager. Specify as 'N' (megabytes) or with a unit (e.g., 1024m, 2g).",
)
@optgroup.option(
    "-tm",
    "--taskmanager-memory",
    type=str,
    default=None,
    help="Total process memory of each task manager. Specify as 'N' (megabytes) or with a unit (e.g., 1024m, 2g).",
)
@optgroup.option(
    "-s",
    "--slots",
    type=str,
    default=None,
    help="Number of slots per task manager.",
)
@optgroup.group(f"{click.style('Session', fg='yellow')}")
@optgroup.option(
    "-id",
    "--application-id",
    type=str,
    default=None,
    help="ID of the YARN application to attach to. Overrides the session properties file.",
)
@optgroup.option(
    "-z",
    "--zookeeper-namespace",
    type=str,
    default=None,
    help="Namespace for high availability. Defaults to the application ID when attaching.",
)
@optgroup.option(
    "-nl",
    "--node-label",
    type=str,
    default=None,
    help="Node label for the YARN application.",
)
@optgroup.option(
    "-d",
    "--detached",
    is_flag=True,
    help="Do not stay attached to the job after submission.",
)
@optgroup.group(f"{click.style('Files and overrides', fg='yellow')}")
@optgroup.option(
    "-t",
    "--ship",
    type=str,
    multiple=True,
    help="File or directory to ship to the cluster. Can be repeated.",
)
@optgroup.option(
    "-D",
    "dynamic_properties",
    type=str,
    multiple=True,
    metavar="KEY=VALUE",
    help="Override a configuration option. Can be repeated. Applied after all other options.",
)
def resolve(
    mode: str,
    conf_dir: str | None,
    properties_dir: str | None,
    as_yaml: bool,
    **kwargs,
) -> NoReturn:
    """
    Resolve the configuration of a YARN cluster and print the cluster specification.
    """
    try:
        base = load_base_configuration(Path(conf_dir) if conf_dir else None)
        frontend = SessionFrontend(
            base, Path(properties_dir) if properties_dir else None
        )
        config = frontend.toConfiguration(kwargs, Mode.fromStr(mode))
        if frontend.session and frontend.usesSession(kwargs):
            logger.info(f"Found session '{frontend.session.cluster_id}'.")

        factory = ClusterFactory()
        presenter = Presenter(
            factory.getClusterSpecification(config),
            factory.createClusterDescriptor(config),
            factory.getClusterId(config),
        )

        if as_yaml:
            click.echo(presenter.toYaml(), nl=False)
        else:
            console = Console()
            console.print(presenter.createPlanPanel(console))
        sys.exit(0)
    except YSError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
