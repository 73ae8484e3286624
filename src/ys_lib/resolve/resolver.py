# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Precedence resolution of the cluster configuration.

Sources, from the lowest to the highest precedence:

1. the base configuration (defaults supplied by the caller),
2. the overlay recovered from a session record,
3. structured command-line options,
4. dynamic `-D key=value` overrides.

The session overlay is skipped entirely when the command line names the
cluster to use, so that an explicit application ID always wins over
a recovered one.
"""

from ys_lib.core.logger import get_logger
from ys_lib.properties.configuration import Configuration
from ys_lib.properties.options import APPLICATION_ID, TARGET
from ys_lib.properties.session import SessionRecord

from .mapper import Mode, OptionOverlay

logger = get_logger(__name__)

# deployment target used when attaching to (or starting) a session cluster
SESSION_TARGET = "yarn-session"
# deployment target used when submitting a job into its own cluster
PER_JOB_TARGET = "yarn-per-job"


class Resolver:
    """
    Merges configuration sources into the final configuration.

    Resolution is a pure function of its inputs: no files are read and none
    of the inputs is modified.
    """

    def resolve(
        self,
        base: Configuration,
        session: SessionRecord | None,
        overlay: OptionOverlay,
    ) -> Configuration:
        """
        Merge the sources into the final configuration.

        Args:
            base (Configuration): Baseline configuration.
            session (SessionRecord | None): Record of a previously started session, if any.
            overlay (OptionOverlay): Options provided on the command line.

        Returns:
            Configuration: The resolved configuration.
        """
        config = base

        if session is None:
            logger.debug("No session record to apply.")
        elif overlay.setsClusterId():
            logger.debug(
                f"Ignoring session record of '{session.cluster_id}': application ID specified on the command line."
            )
        else:
            logger.debug(f"Applying session record of '{session.cluster_id}'.")
            config = config.merge(session.toConfiguration())

        config = config.merge(overlay.toConfiguration())
        # dynamic properties are applied last and may override anything
        config = config.merge(overlay.getDynamicProperties())

        if not config.contains(TARGET):
            config = config.set(TARGET, Resolver._deriveTarget(config, overlay.mode))

        logger.debug(f"Resolved configuration: {config}.")
        return config

    @staticmethod
    def _deriveTarget(config: Configuration, mode: Mode) -> str:
        """
        Determine the deployment target.

        A known application ID or the attach mode means a session cluster,
        otherwise the job gets its own cluster.
        """
        if config.getValue(APPLICATION_ID) is not None or mode == Mode.ATTACH:
            return SESSION_TARGET
        return PER_JOB_TARGET
