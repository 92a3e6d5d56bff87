from abc import ABC, abstractmethod
from urllib.parse import unquote, urlparse


class PhotoStorage(ABC):
    """
    Interface for object storage backends holding the photo bytes.
    """

    @abstractmethod
    def put_object(self, key: str, data: bytes, content_type: str | None) -> str:
        """
        Store data under key and return the fully-qualified location URL.
        """
        error_message = "put_object not implemented"
        raise NotImplementedError(error_message)

    @abstractmethod
    def delete_object(self, key: str) -> None:
        """
        Remove the object stored under key.
        """
        error_message = "delete_object not implemented"
        raise NotImplementedError(error_message)

    def key_from_url(self, url: str) -> str:
        """
        Derive the object key from a stored location: its trailing path segment.
        """
        path = urlparse(url).path
        return unquote(path.rsplit("/", 1)[-1])
