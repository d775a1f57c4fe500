"""
Upload gateway: stores incoming files under the upload directory.
"""
import logging
import os
import time
from dataclasses import dataclass
from typing import BinaryIO, Optional

from examdesk.exceptions import BadInput, PersistenceFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
PUBLIC_PREFIX = "/uploads"


@dataclass
class StoredUpload:
    filename: str
    originalname: str
    disk_path: str

    @property
    def path(self) -> str:
        return f"{PUBLIC_PREFIX}/{self.filename}"

    def read_bytes(self) -> bytes:
        with open(self.disk_path, "rb") as f:
            return f.read()


def save_upload(
    upload_dir: str,
    original_name: Optional[str],
    source: BinaryIO,
    max_bytes: Optional[int] = None,
) -> StoredUpload:
    """
    Copy ``source`` to ``<upload_dir>/<epoch-millis>-<name>``.

    Raises BadInput when the name is empty or the payload exceeds
    ``max_bytes``, and PersistenceFailure when the copy fails. A partial
    file is never left behind.
    """
    name = os.path.basename(original_name or "")
    if not name:
        raise BadInput("No file uploaded")

    os.makedirs(upload_dir, exist_ok=True)
    filename = f"{int(time.time() * 1000)}-{name}"
    disk_path = os.path.join(upload_dir, filename)

    written = 0
    stored = False
    try:
        with open(disk_path, "wb") as buffer:
            while True:
                chunk = source.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if max_bytes is not None and written > max_bytes:
                    raise BadInput("File too large")
                buffer.write(chunk)
        stored = True
    except OSError as e:
        logger.error("Failed to store upload %s: %s", filename, e)
        raise PersistenceFailure(disk_path, str(e)) from e
    finally:
        if not stored and os.path.exists(disk_path):
            os.remove(disk_path)

    logger.info("Stored upload %s (%d bytes)", filename, written)
    return StoredUpload(filename=filename, originalname=name, disk_path=disk_path)
