"""
School Records - Photo Upload Route
Forwards student photos to the image host and returns the hosted URL
"""
from fastapi import APIRouter, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from school_records.api.deps import CurrentSession
from school_records.services.photos import ImageHostClient, PhotoUploadError

router = APIRouter(prefix="/photos", tags=["Photos"])


class PhotoUploadResponse(BaseModel):
    url: str


@router.post(
    "",
    response_model=PhotoUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a student photo",
    description="JPEG, PNG or WebP up to 1 MB.",
)
async def upload_photo(
    session: CurrentSession,
    file: UploadFile = File(...),
) -> PhotoUploadResponse:
    content = await file.read()
    client = ImageHostClient()

    try:
        url = await client.upload(content, file.filename or "photo", file.content_type or "")
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except PhotoUploadError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )

    return PhotoUploadResponse(url=url)
