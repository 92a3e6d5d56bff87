from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.models import Photo


class PhotoDAO:
    """Data Access Object for Photo."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, photo_id: int) -> Photo | None:
        return self.db.get(Photo, photo_id)

    def list(self) -> Sequence[Photo]:
        return (
            self.db.query(Photo)
            .order_by(Photo.created_at.desc(), Photo.id.desc())
            .all()
        )

    def create(self, filename: str, url: str) -> Photo:
        photo = Photo(filename=filename, url=url)
        self.db.add(photo)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(photo)
        return photo

    def delete(self, photo_id: int) -> bool:
        # one statement, so a row removed by a concurrent request counts as 0
        try:
            deleted = self.db.query(Photo).filter(Photo.id == photo_id).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted > 0
