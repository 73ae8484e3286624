# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Iterable
from pathlib import Path

from ys_lib.core.error import ShipFileNotFound
from ys_lib.core.logger import get_logger

logger = get_logger(__name__)


class ShipFileValidator:
    """
    Checks that files requested to be shipped to the cluster exist.
    """

    def __init__(self, base_dir: Path | None = None):
        """
        Initialize the validator.

        Args:
            base_dir (Path | None): Directory relative paths are resolved against.
                Defaults to the current working directory.
        """
        self._base_dir = base_dir

    def validate(self, paths: Iterable[str | Path]) -> list[Path]:
        """
        Resolve the paths and check that each of them exists.

        Paths are checked in the order provided and the check stops at the first
        missing path.

        Args:
            paths (Iterable[str | Path]): Files or directories to ship.

        Returns:
            list[Path]: Absolute paths in the same order.

        Raises:
            ShipFileNotFound: For the first path that does not exist.
        """
        base_dir = self._base_dir or Path.cwd()

        resolved = []
        for path in paths:
            # an empty string would otherwise resolve to the base directory itself
            if isinstance(path, str) and not path.strip():
                raise ShipFileNotFound(path)

            try:
                absolute = (base_dir / Path(path).expanduser()).resolve()
            except (RuntimeError, OSError) as e:
                # unknown user in '~user' or a path that cannot be resolved
                raise ShipFileNotFound(str(path)) from e

            if not absolute.exists():
                raise ShipFileNotFound(str(path))

            logger.debug(f"Ship file '{path}' resolved to '{absolute}'.")
            resolved.append(absolute)

        return resolved
