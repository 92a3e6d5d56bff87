"""
Gallery client for the photo API.

Holds the transient gallery state (current photo list, selected file, loading
flag) and refreshes the list after every mutation.
"""

import mimetypes
from collections.abc import Callable
from pathlib import Path
from typing import Any

import requests

from app.errors import ValidationError


class GalleryClientError(Exception):
    """The photo API returned an error or could not be reached."""


class GalleryClient:
    _TIMEOUT = 30  # seconds

    def __init__(self, base_url: str, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.photos: list[dict[str, Any]] = []
        self.selected_file: Path | None = None
        self.loading = False

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self._TIMEOUT, **kwargs)
        except requests.RequestException as exc:
            error_message = f"Photo API request failed: {exc}"
            raise GalleryClientError(error_message) from exc
        if not resp.ok:
            error_message = f"Photo API error: {resp.status_code} {resp.text}"
            raise GalleryClientError(error_message)
        return resp.json()

    def refresh(self) -> list[dict[str, Any]]:
        self.photos = self._request("GET", "/photos")
        return self.photos

    def select_file(self, path: str | Path) -> None:
        self.selected_file = Path(path)

    def upload(self) -> str:
        """
        Upload the selected file and refresh the gallery. Returns the stored URL.
        """
        if self.selected_file is None:
            error_message = "Select a photo!"
            raise ValidationError(error_message)
        path = self.selected_file
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        self.loading = True
        try:
            with path.open("rb") as fh:
                result = self._request(
                    "POST", "/upload", files={"photo": (path.name, fh, content_type)}
                )
        finally:
            self.loading = False
        self.selected_file = None
        self.refresh()
        return result["url"]

    def delete(self, photo_id: int, confirm: Callable[[], bool]) -> bool:
        """
        Delete a photo once confirm() agrees. Returns whether it was deleted.
        """
        if not confirm():
            return False
        self._request("DELETE", f"/photos/{photo_id}")
        self.refresh()
        return True
