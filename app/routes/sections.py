"""
CMS API routes for the commission and about page sections.
Both section tables share the same endpoints; build_router wires one editor.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import Callable, List
import logging

from app.dependencies import get_about_editor, get_commission_editor
from app.exceptions import CMSError, raise_http_error
from app.schemas import MoveRequest, SectionCreate, SectionResponse, SectionUpdate
from app.services.section_editor import SectionEditor
from app.utils.jwt_auth import get_current_admin

logger = logging.getLogger(__name__)


def build_router(path: str, get_editor: Callable[..., SectionEditor], tag: str) -> APIRouter:
    router = APIRouter(prefix=f"/cms/{path}", tags=[tag], dependencies=[Depends(get_current_admin)])

    def server_error(action: str, e: Exception) -> HTTPException:
        logger.error(f"{path}: {action} failed: {str(e)}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": action, "detail": str(e)}
        )

    @router.get("", response_model=List[SectionResponse])
    async def list_sections(editor: SectionEditor = Depends(get_editor)):
        """All sections, hidden ones included, in display order."""
        try:
            return [SectionResponse.model_validate(s) for s in await editor.list()]
        except Exception as e:
            raise server_error("Failed to load sections", e)

    @router.post("", response_model=SectionResponse, status_code=status.HTTP_201_CREATED)
    async def create_section(payload: SectionCreate, editor: SectionEditor = Depends(get_editor)):
        """Append a new section; content_json must match the section type."""
        try:
            section = await editor.create(
                payload.section_type,
                payload.title,
                payload.content_json,
                payload.visible,
            )
            return SectionResponse.model_validate(section)
        except CMSError as e:
            raise_http_error(e)
        except Exception as e:
            raise server_error("Failed to save", e)

    @router.put("/{section_id}", response_model=SectionResponse)
    async def update_section(
        section_id: int,
        payload: SectionUpdate,
        editor: SectionEditor = Depends(get_editor),
    ):
        """
        Save a section draft.
        Malformed JSON is rejected with "Invalid JSON" and nothing is written.
        """
        try:
            section = await editor.update(section_id, payload.title, payload.content_json, payload.visible)
            return SectionResponse.model_validate(section)
        except CMSError as e:
            raise_http_error(e)
        except Exception as e:
            raise server_error("Failed to save", e)

    @router.post("/{section_id}/move", response_model=List[SectionResponse])
    async def move_section(
        section_id: int,
        move: MoveRequest,
        editor: SectionEditor = Depends(get_editor),
    ):
        try:
            sections = await editor.move(section_id, move.direction)
            return [SectionResponse.model_validate(s) for s in sections]
        except CMSError as e:
            raise_http_error(e)
        except Exception as e:
            raise server_error("Failed to reorder sections", e)

    @router.delete("/{section_id}")
    async def delete_section(section_id: int, editor: SectionEditor = Depends(get_editor)):
        try:
            await editor.delete(section_id)
            return {"message": "Section deleted", "id": section_id}
        except CMSError as e:
            raise_http_error(e)
        except Exception as e:
            raise server_error("Failed to delete section", e)

    return router


commission_router = build_router("commission-sections", get_commission_editor, "commission")
about_router = build_router("about-sections", get_about_editor, "about")
