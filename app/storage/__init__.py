from app.config import Settings

from .filesystem_storage import FileSystemStorage
from .photo_storage import PhotoStorage
from .s3_storage import S3Storage

__all__ = ["FileSystemStorage", "PhotoStorage", "S3Storage", "get_storage_backend"]


def get_storage_backend(settings: Settings) -> PhotoStorage:
    """
    Factory for storage backend based on settings.storage_backend.

    Supported values (case-insensitive):
      - 's3' (default)
      - 'filesystem'
    """
    backend = settings.storage_backend.lower()
    if backend in ("s3", ""):
        return S3Storage(
            bucket=settings.aws_bucket_name,
            region=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
    if backend == "filesystem":
        return FileSystemStorage(
            base_path=settings.media_root,
            base_url=settings.media_base_url or "/media",
        )
    error_message = f"Unknown storage backend: {backend}"
    raise ValueError(error_message)
