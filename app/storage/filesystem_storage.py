import logging
from pathlib import Path
from urllib.parse import quote

from app.errors import StorageError

from .photo_storage import PhotoStorage

logger = logging.getLogger(__name__)


class FileSystemStorage(PhotoStorage):
    """
    Photo storage using a local directory, served under base_url.
    """

    def __init__(self, base_path: str = ".", base_url: str = "/media") -> None:
        self.base_path = Path(base_path)
        self.base_url = base_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        name = Path(key).name
        if not name or name != key:
            error_message = f"Invalid object key: {key!r}"
            raise StorageError(error_message)
        return self.base_path / name

    def put_object(self, key: str, data: bytes, content_type: str | None) -> str:
        file_path = self._path_for(key)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as exc:
            logger.exception("Writing %s failed", file_path)
            error_message = "Error writing to file storage"
            raise StorageError(error_message) from exc
        return f"{self.base_url}/{quote(key)}"

    def delete_object(self, key: str) -> None:
        file_path = self._path_for(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.exception("Deleting %s failed", file_path)
            error_message = "File storage delete failed"
            raise StorageError(error_message) from exc
