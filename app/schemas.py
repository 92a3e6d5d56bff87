from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    url: str
    created_at: datetime


class UploadResponse(BaseModel):
    message: str
    url: str


class MessageResponse(BaseModel):
    message: str
