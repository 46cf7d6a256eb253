"""
Use case: Store an uploaded contest photo in its year/month partition.

Input: StoreContestPhotoCommand (year, month, temp_path, original_filename)
Output: StoreContestPhotoResult (final path)
Side effects:
    - Creates the partition directory if missing.
    - Moves the temp file into it under its original name.
    - Removes any remaining temp copy.
Failure cases:
    - ValidationError for an unusable filename (nothing touched).
    - StorageIOError carrying the OS message. The first failing step
      stops the remaining ones.
"""

import logging

from ninjacoders.application.storefront.dtos import (
    StoreContestPhotoCommand,
    StoreContestPhotoResult,
)
from ninjacoders.domain.storefront.entities import ContestUpload
from ninjacoders.domain.storefront.errors import StorageIOError, ValidationError
from ninjacoders.domain.storefront.ports import PhotoStorage

logger = logging.getLogger(__name__)


class StoreContestPhotoUseCase:
    def __init__(self, storage: PhotoStorage) -> None:
        self._storage = storage

    def execute(self, command: StoreContestPhotoCommand) -> StoreContestPhotoResult:
        upload = ContestUpload(
            year=command.year,
            month=command.month,
            temp_path=command.temp_path,
            original_filename=command.original_filename,
        )
        if upload.filename in ("", ".", ".."):
            raise ValidationError("Uploaded file has no usable name.")

        try:
            partition = self._storage.ensure_partition(*upload.partition)
            target = self._storage.move_into(partition, upload.temp_path, upload.filename)
            self._storage.discard(upload.temp_path)
        except StorageIOError as exc:
            logger.error(
                "Contest upload to %d/%d failed: %s", upload.year, upload.month, exc.message
            )
            raise

        logger.info("Stored contest photo %s", target)
        return StoreContestPhotoResult(path=target)
