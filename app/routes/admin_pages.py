"""
Admin panel pages.
Every page except the login page needs a session; without one the request
is redirected to the login page.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
import logging

from app.dependencies import (
    get_about_editor,
    get_commission_editor,
    get_gallery_editor,
    get_past_works_editor,
    get_site_content_editor,
)
from app.models import GALLERY_COLUMNS, GALLERY_SIZES
from app.schemas import GalleryItemResponse, PastWorkResponse, SectionResponse, SiteContentResponse
from app.services.content_editor import CONTENT_LABELS, SiteContentEditor
from app.services.gallery_editor import GalleryEditor
from app.services.past_works_editor import PastWorksEditor, SPECS_TEMPLATE
from app.services.section_editor import SectionEditor
from app.site import ADMIN_HOME_PATH, LOGIN_PATH, admin_page
from app.utils.jwt_auth import current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin pages"])


class LoginRequired(Exception):
    """Raised by require_session; rendered as a redirect to the login page."""


def require_session(request: Request) -> dict:
    user = current_user(request)
    if user is None:
        logger.info(f"No admin session for {request.url.path}, redirecting to login")
        raise LoginRequired()
    return user


def login_redirect(request: Request, exc: LoginRequired) -> RedirectResponse:
    return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)


def _load_failed(what: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to load {what}: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": f"Failed to load {what}", "detail": str(e)}
    )


def _with_badge(row: dict) -> dict:
    row["hidden"] = not row.get("visible", True)
    return row


@router.get("/login")
async def login_page(request: Request):
    """Login form; an existing session goes straight to the dashboard."""
    if current_user(request) is not None:
        return RedirectResponse(ADMIN_HOME_PATH, status_code=status.HTTP_303_SEE_OTHER)
    return {"page": "admin-login", "action": "/api/auth/login", "fields": ["email", "password"]}


@router.get("")
async def gallery_manager(
    user: dict = Depends(require_session),
    editor: GalleryEditor = Depends(get_gallery_editor),
):
    try:
        items = await editor.list()
    except Exception as e:
        raise _load_failed("gallery items", e)

    return admin_page(
        "admin-gallery",
        user,
        items=[GalleryItemResponse.model_validate(i).model_dump(mode="json") for i in items],
        sizes=list(GALLERY_SIZES),
        columns=list(range(GALLERY_COLUMNS)),
        next_display_order=len(items),
    )


@router.get("/content")
async def content_editor(
    user: dict = Depends(require_session),
    editor: SiteContentEditor = Depends(get_site_content_editor),
):
    try:
        rows = await editor.list()
    except Exception as e:
        raise _load_failed("content", e)

    items = []
    for row in rows:
        item = SiteContentResponse.model_validate(row).model_dump(mode="json")
        meta = CONTENT_LABELS.get(row.key, {})
        item["label"] = meta.get("label", row.key)
        item["hint"] = meta.get("hint")
        item["multiline"] = meta.get("multiline", False)
        items.append(item)
    return admin_page("admin-content", user, items=items)


async def _sections_page(name: str, user: dict, editor: SectionEditor) -> dict:
    try:
        sections = await editor.list()
    except Exception as e:
        raise _load_failed("sections", e)

    items = []
    for section in sections:
        item = _with_badge(SectionResponse.model_validate(section).model_dump(mode="json"))
        item["label"] = editor.label(section.section_type)
        item["content_hint"] = editor.content_hints.get(section.section_type, "JSON object")
        items.append(item)
    return admin_page(name, user, sections=items, section_types=editor.type_labels)


@router.get("/commissions")
async def commission_editor(
    user: dict = Depends(require_session),
    editor: SectionEditor = Depends(get_commission_editor),
):
    return await _sections_page("admin-commissions", user, editor)


@router.get("/about")
async def about_editor(
    user: dict = Depends(require_session),
    editor: SectionEditor = Depends(get_about_editor),
):
    return await _sections_page("admin-about", user, editor)


@router.get("/past-works")
async def past_works_editor(
    user: dict = Depends(require_session),
    editor: PastWorksEditor = Depends(get_past_works_editor),
):
    try:
        works = await editor.list()
    except Exception as e:
        raise _load_failed("past works", e)

    return admin_page(
        "admin-past-works",
        user,
        works=[_with_badge(PastWorkResponse.model_validate(w).model_dump(mode="json")) for w in works],
        specs_template=SPECS_TEMPLATE,
        next_display_order=len(works),
    )
