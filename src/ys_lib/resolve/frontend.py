# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from ys_lib.core.common import get_current_user
from ys_lib.core.config import CFG
from ys_lib.core.logger import get_logger
from ys_lib.properties.configuration import Configuration
from ys_lib.properties.options import APPLICATION_ID, PROPERTIES_FILE_LOCATION
from ys_lib.properties.session import SessionRecord

from .mapper import Mode, OptionMapper, OptionOverlay
from .resolver import Resolver
from .validator import ShipFileValidator

logger = get_logger(__name__)


def load_base_configuration(conf_dir: Path | None = None) -> Configuration:
    """
    Load the base configuration from a configuration directory.

    Priority of the directory:
        1. `conf_dir`
        2. Environment variable
        3. None (empty configuration)

    Args:
        conf_dir (Path | None): Directory containing the base configuration file.

    Returns:
        Configuration: The loaded configuration, or an empty one
        if there is no directory or no configuration file.

    Raises:
        YSError: If the configuration file cannot be parsed.
    """
    if conf_dir is None and (env_dir := os.environ.get(CFG.env_vars.conf_dir)):
        conf_dir = Path(env_dir)

    if conf_dir is None:
        logger.debug("No configuration directory specified. Using an empty base configuration.")
        return Configuration()

    if not (file := conf_dir / CFG.file_names.base_config).is_file():
        logger.debug(f"Configuration file '{file}' not found. Using an empty base configuration.")
        return Configuration()

    return Configuration.fromFile(file)


class SessionFrontend:
    """
    Entry point of a single resolution pass.

    Combines the base configuration, the session record of the current user
    and the command-line options into the final cluster configuration.
    """

    def __init__(
        self,
        base: Configuration,
        properties_dir: Path | None = None,
        user: str | None = None,
    ):
        """
        Initialize the frontend and load the session record.

        Args:
            base (Configuration): Baseline configuration.
            properties_dir (Path | None): Directory with the session properties file.
                Defaults to the directory configured in `base`.
            user (str | None): Owner of the session. Defaults to the current user.

        Raises:
            InvalidSessionPropertiesFile: If a session properties file exists but is malformed.
        """
        self._base = base
        directory = properties_dir or Path(str(base.getValue(PROPERTIES_FILE_LOCATION)))
        self._session = SessionRecord.fromDirectory(directory, user or get_current_user())
        self._validator = ShipFileValidator()
        self._resolver = Resolver()

    @property
    def session(self) -> SessionRecord | None:
        """The loaded session record, if any."""
        return self._session

    def parseOptions(
        self, options: Mapping[str, object], mode: Mode = Mode.RUN
    ) -> OptionOverlay:
        """
        Map the command-line options and validate the requested ship files.

        Returns:
            OptionOverlay: The overlay with ship files replaced by their absolute paths.

        Raises:
            MalformedOption: If an option has an invalid value.
            InvalidMemorySpecification: If a memory option cannot be parsed.
            ShipFileNotFound: If a ship file does not exist.
        """
        overlay = OptionMapper(mode).map(options)
        if overlay.ship_files:
            ship_files = self._validator.validate(overlay.ship_files)
            overlay = replace(overlay, ship_files=tuple(str(f) for f in ship_files))

        return overlay

    def toConfiguration(
        self, options: Mapping[str, object], mode: Mode = Mode.RUN
    ) -> Configuration:
        """
        Resolve the final configuration for the given command-line options.

        Args:
            options (Mapping[str, object]): Options parsed by click.
            mode (Mode): Whether a job is submitted or a session is attached to.

        Returns:
            Configuration: The resolved configuration.
        """
        return self._resolver.resolve(
            self._base, self._session, self.parseOptions(options, mode)
        )

    def isActive(self, options: Mapping[str, object]) -> bool:
        """
        Return True if there is a session cluster to attach to.

        The cluster may be named on the command line (`--application-id` or
        `-D yarn.application.id=...`), in the base configuration,
        or in the session properties file.

        Raises:
            MalformedOption: If an option has an invalid value.
        """
        return (
            OptionMapper().map(options).setsClusterId()
            or self._base.contains(APPLICATION_ID)
            or self._session is not None
        )

    def usesSession(self, options: Mapping[str, object]) -> bool:
        """
        Return True if the loaded session record takes part in the resolution,
        i.e., it exists and the command line does not name another cluster.

        Raises:
            MalformedOption: If an option has an invalid value.
        """
        return (
            self._session is not None
            and not OptionMapper().map(options).setsClusterId()
        )
