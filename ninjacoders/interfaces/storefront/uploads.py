"""Spooling of multipart uploads to a temporary file on disk."""

import shutil
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from ninjacoders.domain.storefront.errors import StorageIOError


def spool_upload(upload: UploadFile, tmp_dir: Optional[Path] = None) -> Path:
    """Copy an uploaded file to a named temp file and return its path.

    Raises:
        StorageIOError: If the temp file cannot be written.
    """
    try:
        if tmp_dir is not None:
            tmp_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            delete=False, dir=tmp_dir, prefix="contest-", suffix=".upload"
        ) as tmp:
            upload.file.seek(0)
            shutil.copyfileobj(upload.file, tmp)
    except OSError as exc:
        raise StorageIOError(str(exc)) from exc
    return Path(tmp.name)
