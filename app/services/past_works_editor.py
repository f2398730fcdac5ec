"""
Past works editor: completed keyboard builds with a cover image, a gallery
of additional images, specs and tags.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DraftValidationError
from app.models import PastWork
from app.section_content import parse_json_object
from app.services.ordering import OrderedEditor, next_display_order
from app.services.storage import ImageUpload, MediaStorage, remove_quietly
from app.utils.helpers import parse_tags, slugify

logger = logging.getLogger(__name__)

COVER_FOLDER = "past-works/covers"
GALLERY_FOLDER = "past-works/gallery"

SPECS_TEMPLATE = '{\n  "keyboard": "",\n  "switches": "",\n  "keycaps": "",\n  "plate": "",\n  "mods": ""\n}'


@dataclass
class PastWorkDraft:
    """Form values of the build editor, before validation."""
    title: str
    slug: str = ""
    description: str = ""
    specs_json: str = "{}"
    tags: str = ""
    visible: bool = True
    completed_at: Optional[date] = None
    # Existing gallery URLs to keep, in order. None keeps all of them.
    kept_images: Optional[List[str]] = None
    cover: Optional[ImageUpload] = None
    new_images: List[ImageUpload] = field(default_factory=list)


class PastWorksEditor(OrderedEditor):
    model = PastWork

    def __init__(self, db: AsyncSession, storage: MediaStorage):
        super().__init__(db)
        self.storage = storage

    async def get_visible_by_slug(self, slug: str) -> Optional[PastWork]:
        result = await self.db.execute(
            select(PastWork).where(PastWork.slug == slug, PastWork.visible.is_(True))
        )
        return result.scalar_one_or_none()

    async def _check_slug(self, slug: str, exclude_id: Optional[int] = None):
        query = select(PastWork.id).where(PastWork.slug == slug)
        if exclude_id is not None:
            query = query.where(PastWork.id != exclude_id)
        if (await self.db.execute(query)).first() is not None:
            raise ConflictError(f"Slug '{slug}' is already used by another build")

    def _validate(self, draft: PastWorkDraft) -> dict:
        """Client-side checks; nothing has touched storage or the database yet."""
        title = (draft.title or "").strip()
        if not title:
            raise DraftValidationError("Title is required")

        specs = parse_json_object(draft.specs_json or "{}", "Invalid specs JSON")
        slug = (draft.slug or "").strip() or slugify(title)
        if not slug:
            raise DraftValidationError("Slug could not be derived from the title")

        return {
            "title": title,
            "slug": slug,
            "description": (draft.description or "").strip(),
            "specs": {str(k): v if isinstance(v, str) else str(v) for k, v in specs.items()},
            "tags": parse_tags(draft.tags),
            "visible": draft.visible,
            "completed_at": draft.completed_at,
        }

    async def _upload_all(self, draft: PastWorkDraft, uploaded: List[str]):
        """Upload the new cover and gallery files, recording every URL in uploaded."""
        cover_url = None
        if draft.cover is not None:
            cover_url = await self.storage.upload(draft.cover.content, COVER_FOLDER, draft.cover.filename)
            uploaded.append(cover_url)

        gallery_urls = []
        for image in draft.new_images:
            url = await self.storage.upload(image.content, GALLERY_FOLDER, image.filename)
            uploaded.append(url)
            gallery_urls.append(url)
        return cover_url, gallery_urls

    async def _discard(self, urls: List[str]):
        for url in urls:
            await remove_quietly(self.storage, url)

    async def create(self, draft: PastWorkDraft) -> PastWork:
        values = self._validate(draft)
        await self._check_slug(values["slug"])

        uploaded: List[str] = []
        try:
            cover_url, gallery_urls = await self._upload_all(draft, uploaded)
            work = PastWork(
                **values,
                cover_image=cover_url or "",
                images=gallery_urls,
                display_order=await next_display_order(self.db, PastWork),
            )
            self.db.add(work)
            await self._commit(work)
        except Exception:
            await self._discard(uploaded)
            raise

        logger.info(f"Added past work {work.id} '{work.slug}' at display_order={work.display_order}")
        return work

    async def update(self, work_id: int, draft: PastWorkDraft) -> PastWork:
        """
        Save an edited build. New files are uploaded and the row updated first;
        a replaced cover and gallery images dropped from the kept list are
        deleted from storage afterwards.
        """
        values = self._validate(draft)
        work = await self.get(work_id)
        await self._check_slug(values["slug"], exclude_id=work.id)

        current_images = list(work.images or [])
        if draft.kept_images is None:
            kept = current_images
        else:
            unknown = [url for url in draft.kept_images if url not in current_images]
            if unknown:
                raise DraftValidationError(f"Image does not belong to this build: {unknown[0]}")
            kept = list(draft.kept_images)
        removed = [url for url in current_images if url not in kept]

        uploaded: List[str] = []
        old_cover = None
        try:
            cover_url, gallery_urls = await self._upload_all(draft, uploaded)
            if cover_url:
                old_cover = work.cover_image
                work.cover_image = cover_url

            for name, value in values.items():
                setattr(work, name, value)
            work.images = kept + gallery_urls
            await self._commit(work)
        except Exception:
            await self._discard(uploaded)
            raise

        await self._discard(([old_cover] if old_cover else []) + removed)
        logger.info(f"Updated past work {work_id} '{work.slug}'")
        return work

    async def delete(self, work_id: int):
        """Delete the cover and every gallery image from storage, then the row."""
        work = await self.get(work_id)

        referenced = ([work.cover_image] if work.cover_image else []) + list(work.images or [])
        await self._discard(referenced)

        await self.db.delete(work)
        await self._commit()
        logger.info(f"Deleted past work {work_id} and {len(referenced)} stored image(s)")
