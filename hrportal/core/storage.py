# hrportal/core/storage.py
import logging
import os
import re
import time
from pathlib import Path

from hrportal.core.config import settings

logger = logging.getLogger(__name__)

SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


class StorageError(Exception):
    """Raised when an object cannot be stored or read"""


class LocalStorage:
    """Directory-backed bucket. Object keys look like ``{user_id}/{ms}-{filename}``."""

    def __init__(self, root: str, bucket: str):
        self.root = Path(root)
        self.bucket = bucket

    @property
    def bucket_path(self) -> Path:
        return self.root / self.bucket

    def build_key(self, owner_id: str, filename: str) -> str:
        name = SAFE_NAME.sub("_", os.path.basename(filename or "")).strip("._") or "file"
        return f"{owner_id}/{int(time.time() * 1000)}-{name}"

    def _resolve(self, key: str) -> Path:
        base = self.bucket_path.resolve()
        path = (base / key).resolve()
        if base not in path.parents:
            raise StorageError(f"Invalid object key: {key}")
        return path

    def upload(self, key: str, data: bytes) -> str:
        path = self._resolve(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to store {key}: {e}") from e
        logger.info(f"Stored object {self.bucket}/{key} ({len(data)} bytes)")
        return key

    def path_for(self, key: str) -> Path:
        path = self._resolve(key)
        if not path.is_file():
            raise StorageError(f"Object not found: {key}")
        return path

    def download(self, key: str) -> bytes:
        return self.path_for(key).read_bytes()

    def remove(self, key: str) -> bool:
        try:
            path = self._resolve(key)
        except StorageError:
            return False
        if not path.is_file():
            return False
        path.unlink()
        logger.info(f"Removed object {self.bucket}/{key}")
        return True


def get_storage() -> LocalStorage:
    return LocalStorage(settings.STORAGE_ROOT, settings.STORAGE_BUCKET)
