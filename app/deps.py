from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.service import ObjectKeyFactory, PhotoService
from app.storage import PhotoStorage


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency that provides a database session and closes it when done.
    The session factory is built once at startup and kept on app.state.
    Yields:
        Session: SQLAlchemy database session
    """
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_storage(request: Request) -> PhotoStorage:
    """Dependency returning the object storage backend built at startup."""
    return request.app.state.storage


def get_key_factory(request: Request) -> ObjectKeyFactory:
    return request.app.state.key_factory


def get_photo_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[PhotoStorage, Depends(get_storage)],
    make_key: Annotated[ObjectKeyFactory, Depends(get_key_factory)],
) -> PhotoService:
    return PhotoService(db, storage, make_key)
