"""
Command-line gallery for the photo API.

Usage (installed as the photo-gallery entry point):
    photo-gallery list
    photo-gallery upload PATH
    photo-gallery delete ID [--yes]

The API location comes from --api-url, or API_URL / REACT_APP_API_URL in .env
or the environment, defaulting to http://localhost:3000.
"""

import argparse
import os
import sys

from dotenv import load_dotenv

from app.client import GalleryClient, GalleryClientError
from app.errors import ValidationError

load_dotenv()

DEFAULT_API_URL = "http://localhost:3000"


def print_photos(client: GalleryClient) -> None:
    if not client.photos:
        print("No photos yet.")  # noqa: T201
        return
    for photo in client.photos:
        print(f"{photo['id']:>6}  {photo['created_at']}  {photo['filename']}  {photo['url']}")  # noqa: T201, E501


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Photo gallery client")
    parser.add_argument(
        "--api-url",
        default=os.environ.get("API_URL")
        or os.environ.get("REACT_APP_API_URL")
        or DEFAULT_API_URL,
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List photos, newest first")
    upload = sub.add_parser("upload", help="Upload a photo")
    upload.add_argument("path")
    delete = sub.add_parser("delete", help="Delete a photo")
    delete.add_argument("photo_id", type=int)
    delete.add_argument("--yes", action="store_true", help="Skip confirmation")
    args = parser.parse_args(argv)

    client = GalleryClient(args.api_url)
    try:
        if args.command == "upload":
            client.select_file(args.path)
            print(f"Uploaded: {client.upload()}")  # noqa: T201
        elif args.command == "delete":
            def confirm() -> bool:
                return args.yes or input("Delete this photo? [y/N] ").lower() == "y"
            if client.delete(args.photo_id, confirm):
                print("Photo deleted.")  # noqa: T201
        else:
            client.refresh()
        print_photos(client)
    except (GalleryClientError, ValidationError, OSError) as exc:
        print(exc, file=sys.stderr)  # noqa: T201
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
