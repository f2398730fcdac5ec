"""
CMS API routes for past works (completed builds).
All endpoints require an admin session.
"""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from typing import List, Optional
import json
import logging

from app.dependencies import get_past_works_editor, read_image, read_images
from app.exceptions import CMSError, DraftValidationError, raise_http_error
from app.schemas import MoveRequest, PastWorkResponse
from app.services.past_works_editor import PastWorkDraft, PastWorksEditor
from app.utils.jwt_auth import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cms/past-works", tags=["past works"], dependencies=[Depends(get_current_admin)])


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"{action} failed: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": action, "detail": str(e)}
    )


def _parse_kept_images(raw: Optional[str]) -> Optional[List[str]]:
    """kept_images is a JSON array of URLs; absent means keep every existing image."""
    if raw is None:
        return None
    try:
        kept = json.loads(raw)
    except ValueError:
        raise DraftValidationError("kept_images must be a JSON array of URLs")
    if not isinstance(kept, list) or not all(isinstance(url, str) for url in kept):
        raise DraftValidationError("kept_images must be a JSON array of URLs")
    return kept


async def _build_draft(
    title: str,
    slug: str,
    description: str,
    specs_json: str,
    tags: str,
    visible: bool,
    completed_at: Optional[date],
    kept_images: Optional[str],
    cover: Optional[UploadFile],
    images: Optional[List[UploadFile]],
) -> PastWorkDraft:
    return PastWorkDraft(
        title=title,
        slug=slug,
        description=description,
        specs_json=specs_json,
        tags=tags,
        visible=visible,
        completed_at=completed_at,
        kept_images=_parse_kept_images(kept_images),
        cover=await read_image(cover),
        new_images=await read_images(images),
    )


@router.get("", response_model=List[PastWorkResponse])
async def list_past_works(editor: PastWorksEditor = Depends(get_past_works_editor)):
    """All builds, hidden ones included, in display order."""
    try:
        return [PastWorkResponse.model_validate(w) for w in await editor.list()]
    except Exception as e:
        raise _server_error("Failed to load past works", e)


@router.post("", response_model=PastWorkResponse, status_code=status.HTTP_201_CREATED)
async def create_past_work(
    title: str = Form(""),
    slug: str = Form(""),
    description: str = Form(""),
    specs_json: str = Form("{}"),
    tags: str = Form(""),
    visible: bool = Form(True),
    completed_at: Optional[date] = Form(None),
    kept_images: Optional[str] = Form(None),
    cover: Optional[UploadFile] = File(None),
    images: Optional[List[UploadFile]] = File(None),
    editor: PastWorksEditor = Depends(get_past_works_editor),
):
    """Add a build; cover and gallery files are uploaded before the row is inserted."""
    try:
        draft = await _build_draft(
            title, slug, description, specs_json, tags, visible,
            completed_at, kept_images, cover, images,
        )
        work = await editor.create(draft)
        return PastWorkResponse.model_validate(work)
    except CMSError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise _server_error("Failed to save past work", e)


@router.put("/{work_id}", response_model=PastWorkResponse)
async def update_past_work(
    work_id: int,
    title: str = Form(""),
    slug: str = Form(""),
    description: str = Form(""),
    specs_json: str = Form("{}"),
    tags: str = Form(""),
    visible: bool = Form(True),
    completed_at: Optional[date] = Form(None),
    kept_images: Optional[str] = Form(None),
    cover: Optional[UploadFile] = File(None),
    images: Optional[List[UploadFile]] = File(None),
    editor: PastWorksEditor = Depends(get_past_works_editor),
):
    """
    Save an edited build.
    Without a cover file the current cover is kept; kept_images lists the
    existing gallery URLs to keep, in order.
    """
    try:
        draft = await _build_draft(
            title, slug, description, specs_json, tags, visible,
            completed_at, kept_images, cover, images,
        )
        work = await editor.update(work_id, draft)
        return PastWorkResponse.model_validate(work)
    except CMSError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise _server_error("Failed to save past work", e)


@router.post("/{work_id}/move", response_model=List[PastWorkResponse])
async def move_past_work(
    work_id: int,
    move: MoveRequest,
    editor: PastWorksEditor = Depends(get_past_works_editor),
):
    try:
        works = await editor.move(work_id, move.direction)
        return [PastWorkResponse.model_validate(w) for w in works]
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to reorder past works", e)


@router.delete("/{work_id}")
async def delete_past_work(work_id: int, editor: PastWorksEditor = Depends(get_past_works_editor)):
    """Delete a build together with its cover and gallery images."""
    try:
        await editor.delete(work_id)
        return {"message": "Work deleted", "id": work_id}
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to delete past work", e)
