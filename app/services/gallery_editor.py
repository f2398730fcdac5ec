"""
Gallery editor: home page gallery items and their images.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DraftValidationError
from app.models import GalleryItem, GALLERY_SIZES, GALLERY_COLUMNS
from app.services.ordering import OrderedEditor, next_display_order
from app.services.storage import ImageUpload, MediaStorage, remove_quietly

logger = logging.getLogger(__name__)

UPLOAD_FOLDER = "gallery"


def _clean(text: Optional[str]) -> Optional[str]:
    return text.strip() if text and text.strip() else None


def validate_layout(size: str, column_index: int):
    if size not in GALLERY_SIZES:
        raise DraftValidationError(f"Size must be one of: {', '.join(GALLERY_SIZES)}")
    if not 0 <= column_index < GALLERY_COLUMNS:
        raise DraftValidationError(f"Column must be between 0 and {GALLERY_COLUMNS - 1}")


class GalleryEditor(OrderedEditor):
    model = GalleryItem

    def __init__(self, db: AsyncSession, storage: MediaStorage):
        super().__init__(db)
        self.storage = storage

    async def create(
        self,
        image: Optional[ImageUpload],
        title: Optional[str] = None,
        description: Optional[str] = None,
        size: str = "medium",
        column_index: int = 0,
    ) -> GalleryItem:
        """
        Upload the image and append a new item at the end of the gallery.

        Raises:
            DraftValidationError: no image selected or layout values out of range
        """
        if image is None:
            raise DraftValidationError("Please select an image")
        validate_layout(size, column_index)

        display_order = await next_display_order(self.db, GalleryItem)
        image_url = await self.storage.upload(image.content, UPLOAD_FOLDER, image.filename)

        item = GalleryItem(
            title=_clean(title),
            description=_clean(description),
            image_url=image_url,
            size=size,
            column_index=column_index,
            display_order=display_order,
        )
        self.db.add(item)
        try:
            await self._commit(item)
        except Exception:
            await remove_quietly(self.storage, image_url)
            raise

        logger.info(f"Added gallery item {item.id} at display_order={display_order}")
        return item

    async def update(
        self,
        item_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        size: Optional[str] = None,
        column_index: Optional[int] = None,
        image: Optional[ImageUpload] = None,
        display_order: Optional[int] = None,
    ) -> GalleryItem:
        """
        Save the edited fields. size, column_index and display_order keep their
        stored values when omitted. Without a new image the stored image_url is
        kept and nothing is uploaded. A replacement is uploaded first; the old
        file is deleted only after the row points at the new one.
        """
        item = await self.get(item_id)
        size = item.size if size is None else size
        column_index = item.column_index if column_index is None else column_index
        validate_layout(size, column_index)
        if display_order is not None and display_order < 0:
            raise DraftValidationError("Display order must be 0 or greater")

        old_url = None
        new_url = None
        if image is not None:
            new_url = await self.storage.upload(image.content, UPLOAD_FOLDER, image.filename)
            old_url = item.image_url
            item.image_url = new_url

        item.title = _clean(title)
        item.description = _clean(description)
        item.size = size
        item.column_index = column_index
        if display_order is not None:
            item.display_order = display_order

        try:
            await self._commit(item)
        except Exception:
            await remove_quietly(self.storage, new_url)
            raise

        if old_url and old_url != new_url:
            await remove_quietly(self.storage, old_url)

        logger.info(f"Updated gallery item {item_id}")
        return item

    async def delete(self, item_id: int):
        """Delete the item's image from storage, then the row."""
        item = await self.get(item_id)
        await remove_quietly(self.storage, item.image_url)

        await self.db.delete(item)
        await self._commit()
        logger.info(f"Deleted gallery item {item_id}")
