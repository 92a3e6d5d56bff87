from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from app.deps import get_photo_service
from app.errors import ValidationError
from app.schemas import MessageResponse, PhotoResponse, UploadResponse
from app.service import DELETE_MESSAGE, UPLOAD_MESSAGE, PhotoService

router = APIRouter()

Service = Annotated[PhotoService, Depends(get_photo_service)]


@router.post("/upload", response_model=UploadResponse)
def upload_photo(
    service: Service,
    photo: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """
    Store one uploaded image and record its location.
    """
    if photo is None or not photo.filename:
        error_message = "No file uploaded."
        raise ValidationError(error_message)
    data = photo.file.read()
    record = service.upload(photo.filename, data, photo.content_type)
    return UploadResponse(message=UPLOAD_MESSAGE, url=record.url)


@router.get("/photos", response_model=list[PhotoResponse])
def get_photos(service: Service) -> list[PhotoResponse]:
    return [PhotoResponse.model_validate(p) for p in service.list()]


@router.get("/photos/{photo_id}", response_model=PhotoResponse)
def get_photo(photo_id: int, service: Service) -> PhotoResponse:
    return PhotoResponse.model_validate(service.get(photo_id))


@router.delete("/photos/{photo_id}", response_model=MessageResponse)
def delete_photo(photo_id: int, service: Service) -> MessageResponse:
    """
    Remove the stored object first, then its row.
    """
    service.delete(photo_id)
    return MessageResponse(message=DELETE_MESSAGE)
