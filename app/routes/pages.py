"""
Public storefront pages.
Each path returns the page's view model; only visible rows are included.
"""
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from app.dependencies import (
    get_about_editor,
    get_commission_editor,
    get_gallery_editor,
    get_past_works_editor,
    get_site_content_editor,
)
from app.models import GALLERY_COLUMNS
from app.schemas import GalleryItemPublicResponse, PastWorkPublicResponse, SectionPublicResponse
from app.services.content_editor import SiteContentEditor
from app.services.gallery_editor import GalleryEditor
from app.services.past_works_editor import PastWorksEditor
from app.services.section_editor import AboutSectionEditor, CommissionSectionEditor
from app.site import COMMISSION_COPY_KEYS, HOME_COPY_KEYS, page
from app.utils.helpers import clamp

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _load_failed(what: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to load {what}: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": f"Failed to load {what}", "detail": str(e)}
    )


def gallery_columns(items) -> list:
    """Split gallery items into the home page's columns, keeping display order."""
    columns = [[] for _ in range(GALLERY_COLUMNS)]
    for item in items:
        column = clamp(item.column_index, 0, GALLERY_COLUMNS - 1)
        columns[column].append(GalleryItemPublicResponse.model_validate(item).model_dump())
    return columns


def _copy(content: dict, keys) -> dict:
    return {key: content.get(key, "") for key in keys}


@router.get("/")
async def home_page(
    gallery: GalleryEditor = Depends(get_gallery_editor),
    site_content: SiteContentEditor = Depends(get_site_content_editor),
):
    try:
        content = await site_content.as_mapping()
        items = await gallery.list()
    except Exception as e:
        raise _load_failed("home page", e)

    return page(
        "home",
        content=_copy(content, HOME_COPY_KEYS),
        gallery={"columns": gallery_columns(items)},
    )


@router.get("/about")
async def about_page(editor: AboutSectionEditor = Depends(get_about_editor)):
    try:
        sections = await editor.list(visible_only=True)
    except Exception as e:
        raise _load_failed("about page", e)

    return page(
        "about",
        sections=[SectionPublicResponse.model_validate(s).model_dump() for s in sections],
    )


@router.get("/commission")
async def commission_page(
    editor: CommissionSectionEditor = Depends(get_commission_editor),
    site_content: SiteContentEditor = Depends(get_site_content_editor),
):
    try:
        content = await site_content.as_mapping()
        sections = await editor.list(visible_only=True)
    except Exception as e:
        raise _load_failed("commission page", e)

    return page(
        "commission",
        content=_copy(content, COMMISSION_COPY_KEYS),
        sections=[SectionPublicResponse.model_validate(s).model_dump() for s in sections],
    )


@router.get("/past-works")
async def past_works_page(editor: PastWorksEditor = Depends(get_past_works_editor)):
    try:
        works = await editor.list(visible_only=True)
    except Exception as e:
        raise _load_failed("past works", e)

    return page(
        "past-works",
        works=[PastWorkPublicResponse.model_validate(w).model_dump(mode="json") for w in works],
    )


@router.get("/past-works/{slug}")
async def past_work_detail(slug: str, editor: PastWorksEditor = Depends(get_past_works_editor)):
    """One visible build; the cover image is listed first in all_images."""
    try:
        work = await editor.get_visible_by_slug(slug)
    except Exception as e:
        raise _load_failed("past work", e)

    if work is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "detail": f"No build with slug '{slug}'"}
        )

    detail = PastWorkPublicResponse.model_validate(work).model_dump(mode="json")
    detail["all_images"] = ([work.cover_image] if work.cover_image else []) + list(work.images or [])
    return page("past-work", work=detail)


@router.get("/products")
async def products_page():
    return page("products", heading="Products", body="Collection coming soon.")


@router.get("/contact")
async def contact_page():
    return page("contact", heading="Contact", body="Get in touch through the commission form or Discord.")
