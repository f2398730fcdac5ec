"""
Site content editor: key/value copy slots shown on the public pages.
"""
import logging
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DraftValidationError, NotFoundError
from app.models import SiteContent

logger = logging.getLogger(__name__)

CONTENT_LABELS = {
    "hero_meta": {"label": "Hero Meta Label", "hint": 'Small text above the title (e.g. "Keyboards")'},
    "hero_title": {"label": "Hero Title", "hint": "Main hero heading"},
    "gallery_label": {"label": "Gallery Section Label", "hint": "Label above the gallery grid"},
    "commission_meta": {"label": "Commission Meta Label", "hint": "Small text on commission page"},
    "commission_title": {"label": "Commission Title", "hint": "Commission page heading"},
    "commission_description": {
        "label": "Commission Description",
        "hint": "Commission page description text",
        "multiline": True,
    },
}


class SiteContentEditor:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[SiteContent]:
        result = await self.db.execute(
            select(SiteContent)
            .order_by(SiteContent.key.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def as_mapping(self) -> Dict[str, str]:
        """All copy slots as {key: value}, for page payloads."""
        return {row.key: row.value for row in await self.list()}

    async def get(self, content_id: int) -> SiteContent:
        result = await self.db.execute(select(SiteContent).where(SiteContent.id == content_id))
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError(f"Content ID {content_id} does not exist")
        return row

    async def create(self, key: str, value: str) -> SiteContent:
        key = key.strip()
        if not key:
            raise DraftValidationError("Key is required")

        existing = await self.db.execute(select(SiteContent.id).where(SiteContent.key == key))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(f"Content key '{key}' already exists")

        row = SiteContent(key=key, value=value)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        logger.info(f"Added site content '{key}'")
        return row

    async def update(self, content_id: int, value: str) -> SiteContent:
        """Save a new value. An unchanged value is not written."""
        row = await self.get(content_id)
        if row.value == value:
            return row

        row.value = value
        await self.db.commit()
        await self.db.refresh(row)
        logger.info(f"Updated site content '{row.key}'")
        return row

    async def delete(self, content_id: int):
        row = await self.get(content_id)
        await self.db.delete(row)
        await self.db.commit()
        logger.info(f"Deleted site content '{row.key}'")
