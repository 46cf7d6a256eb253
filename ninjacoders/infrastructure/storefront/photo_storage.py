"""
Adapter: Contest photo storage on the local filesystem.

Implements the PhotoStorage port. Files land at
``{root}/{year}/{month}/{filename}``; the root is served as
``/contest-uploads`` by the web app.
"""

import logging
import shutil
from pathlib import Path

from ninjacoders.domain.storefront.errors import StorageIOError
from ninjacoders.domain.storefront.ports import PhotoStorage

logger = logging.getLogger(__name__)


class LocalPhotoStorage(PhotoStorage):
    """Stores contest photos below a root directory.

    OS errors are re-raised as StorageIOError with the OS message.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def ensure_partition(self, year: int, month: int) -> Path:
        partition = self._root / str(year) / str(month)
        try:
            partition.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(str(exc)) from exc
        return partition

    def move_into(self, partition: Path, temp_path: Path, filename: str) -> Path:
        target = partition / filename
        try:
            shutil.move(str(temp_path), str(target))
        except OSError as exc:
            raise StorageIOError(str(exc)) from exc
        logger.debug("Moved %s to %s", temp_path, target)
        return target

    def discard(self, temp_path: Path) -> None:
        try:
            Path(temp_path).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageIOError(str(exc)) from exc
