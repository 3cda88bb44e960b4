import logging
from pathlib import Path

from eventra.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """Invoice files on the local filesystem, rooted at ``base_dir``."""

    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        path = (self.base_dir / key).resolve()
        if not path.is_relative_to(self.base_dir.resolve()):
            raise ValueError(f"Storage key escapes base directory: {key}")
        return path

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("Saved %s (%d bytes) to %s", key, len(data), path)
        return str(path)

    def get(self, key: str) -> bytes:
        path = self._resolve(key)
        logger.debug("Reading %s from %s", key, path)
        return path.read_bytes()

    def get_url(self, key: str) -> str:
        return str(self._resolve(key))
