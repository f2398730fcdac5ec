"""
FastAPI dependencies wiring the editors to the request's database session
and the storage client. Tests override get_db and get_storage.
"""
from typing import List, Optional

from fastapi import Depends, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.content_editor import SiteContentEditor
from app.services.gallery_editor import GalleryEditor
from app.services.past_works_editor import PastWorksEditor
from app.services.section_editor import AboutSectionEditor, CommissionSectionEditor
from app.services.storage import ImageUpload, MediaStorage, get_storage


def get_gallery_editor(
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
) -> GalleryEditor:
    return GalleryEditor(db, storage)


def get_site_content_editor(db: AsyncSession = Depends(get_db)) -> SiteContentEditor:
    return SiteContentEditor(db)


def get_commission_editor(db: AsyncSession = Depends(get_db)) -> CommissionSectionEditor:
    return CommissionSectionEditor(db)


def get_about_editor(db: AsyncSession = Depends(get_db)) -> AboutSectionEditor:
    return AboutSectionEditor(db)


def get_past_works_editor(
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
) -> PastWorksEditor:
    return PastWorksEditor(db, storage)


async def read_image(file: Optional[UploadFile]) -> Optional[ImageUpload]:
    """
    Read an uploaded form file into memory.

    Returns None when no file was chosen.

    Raises:
        HTTPException: 400 if the file is not an image
    """
    if file is None or not file.filename:
        return None

    if not file.content_type or not file.content_type.startswith('image/'):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid file type", "detail": f"File '{file.filename}' is not a valid image file"}
        )

    content = await file.read()
    return ImageUpload(filename=file.filename, content=content, content_type=file.content_type)


async def read_images(files: Optional[List[UploadFile]]) -> List[ImageUpload]:
    images = []
    for file in files or []:
        image = await read_image(file)
        if image is not None:
            images.append(image)
    return images
