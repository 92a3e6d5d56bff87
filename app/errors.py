from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class PhotoShareError(Exception):
    """Base class for errors reported to API callers."""

    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(PhotoShareError):
    """Required input is missing or malformed."""

    status_code = HTTP_400_BAD_REQUEST


class NotFoundError(PhotoShareError):
    """No photo record exists for the given identifier."""

    status_code = HTTP_404_NOT_FOUND


class StorageError(PhotoShareError):
    """The object store or the metadata store failed."""

    status_code = HTTP_500_INTERNAL_SERVER_ERROR


async def photo_share_error_handler(
    _request: Request, exc: Exception
) -> PlainTextResponse:
    status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
    return PlainTextResponse(str(exc), status_code=status_code)


async def request_validation_error_handler(
    _request: Request, exc: Exception
) -> PlainTextResponse:
    """
    Report malformed requests in plain text: an unparseable path id is an
    unknown photo, a 'photo' part that is not a file means no file was uploaded.
    """
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    locations = [tuple(error.get("loc", ())) for error in errors]
    if any(loc[:1] == ("path",) for loc in locations):
        return PlainTextResponse("Not found", status_code=HTTP_404_NOT_FOUND)
    if any(loc[:2] == ("body", "photo") for loc in locations):
        return PlainTextResponse("No file uploaded.", status_code=HTTP_400_BAD_REQUEST)
    return PlainTextResponse("Bad request", status_code=HTTP_400_BAD_REQUEST)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PhotoShareError, photo_share_error_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler
    )
