"""
Upload, list and delete flows spanning the object store and the metadata store.

The two stores are not updated transactionally. A failed row insert after a
successful upload leaves an orphaned object, and a failed row delete after a
successful object delete leaves a row without its object. Both cases are
logged and reported to the caller as StorageError; nothing is compensated.
"""

import logging
import threading
import time
from collections.abc import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.dao import PhotoDAO
from app.errors import NotFoundError, StorageError, ValidationError
from app.models import Photo
from app.storage import PhotoStorage

logger = logging.getLogger(__name__)

UPLOAD_MESSAGE = "Uploaded Successfully"
DELETE_MESSAGE = "Photo deleted successfully"


class ObjectKeyFactory:
    """
    Builds "<millis>-<filename>" object keys with a strictly increasing prefix.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def _next_stamp(self) -> int:
        with self._lock:
            stamp = max(int(self._clock() * 1000), self._last + 1)
            self._last = stamp
            return stamp

    def __call__(self, filename: str) -> str:
        # keep only the last path component so the key is a single segment
        name = filename.replace("\\", "/").rsplit("/", 1)[-1]
        return f"{self._next_stamp()}-{name}"


class PhotoService:
    def __init__(
        self,
        db: Session,
        storage: PhotoStorage,
        make_key: Callable[[str], str] | None = None,
    ) -> None:
        self.dao = PhotoDAO(db)
        self.storage = storage
        self.make_key = make_key or ObjectKeyFactory()

    def upload(
        self, filename: str | None, data: bytes, content_type: str | None
    ) -> Photo:
        if not filename:
            error_message = "No file uploaded."
            raise ValidationError(error_message)
        key = self.make_key(filename)
        url = self.storage.put_object(key, data, content_type)
        try:
            photo = self.dao.create(filename=filename, url=url)
        except SQLAlchemyError as exc:
            logger.warning("Row insert failed; object %s left orphaned", key)
            error_message = "DB Error"
            raise StorageError(error_message) from exc
        logger.info("Uploaded photo %s as %s", photo.id, key)
        return photo

    def list(self) -> Sequence[Photo]:
        try:
            return self.dao.list()
        except SQLAlchemyError as exc:
            logger.exception("Listing photos failed")
            error_message = "DB Error"
            raise StorageError(error_message) from exc

    def get(self, photo_id: int) -> Photo:
        try:
            photo = self.dao.get(photo_id)
        except SQLAlchemyError as exc:
            logger.exception("Looking up photo %s failed", photo_id)
            error_message = "DB Error"
            raise StorageError(error_message) from exc
        if photo is None:
            error_message = "Not found"
            raise NotFoundError(error_message)
        return photo

    def delete(self, photo_id: int) -> None:
        photo = self.get(photo_id)
        key = self.storage.key_from_url(photo.url)
        self.storage.delete_object(key)
        try:
            removed = self.dao.delete(photo_id)
        except SQLAlchemyError as exc:
            logger.warning(
                "Row delete failed; photo %s remains without object %s",
                photo_id,
                key,
            )
            error_message = "DB delete failed"
            raise StorageError(error_message) from exc
        if not removed:
            logger.info("Photo %s was already removed by another request", photo_id)
        logger.info("Deleted photo %s (%s)", photo_id, key)
