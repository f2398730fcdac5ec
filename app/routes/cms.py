"""
CMS API routes for gallery items and site content.
All endpoints require an admin session.
"""
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from typing import List, Optional
import logging

from app.dependencies import get_gallery_editor, get_site_content_editor, read_image
from app.exceptions import CMSError, raise_http_error
from app.schemas import (
    GalleryItemResponse,
    MoveRequest,
    SiteContentCreate,
    SiteContentResponse,
    SiteContentUpdate,
)
from app.services.content_editor import SiteContentEditor
from app.services.gallery_editor import GalleryEditor
from app.utils.jwt_auth import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cms", tags=["CMS"], dependencies=[Depends(get_current_admin)])


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"{action} failed: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": action, "detail": str(e)}
    )


# Gallery items

@router.get("/gallery-items", response_model=List[GalleryItemResponse])
async def list_gallery_items(editor: GalleryEditor = Depends(get_gallery_editor)):
    """All gallery items in display order."""
    try:
        items = await editor.list()
        logger.info(f"Retrieved {len(items)} gallery items for CMS")
        return [GalleryItemResponse.model_validate(item) for item in items]
    except Exception as e:
        raise _server_error("Failed to load gallery items", e)


@router.post("/gallery-items", response_model=GalleryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_gallery_item(
    image: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: str = Form("medium"),
    column_index: int = Form(0),
    editor: GalleryEditor = Depends(get_gallery_editor),
):
    """
    Upload an image and append it to the end of the gallery.

    Raises:
        HTTPException: 400 if no image was selected or the layout is invalid
    """
    upload = await read_image(image)
    try:
        item = await editor.create(
            upload,
            title=title,
            description=description,
            size=size,
            column_index=column_index,
        )
        return GalleryItemResponse.model_validate(item)
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to save gallery item", e)


@router.put("/gallery-items/{item_id}", response_model=GalleryItemResponse)
async def update_gallery_item(
    item_id: int,
    image: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    column_index: Optional[int] = Form(None),
    display_order: Optional[int] = Form(None),
    editor: GalleryEditor = Depends(get_gallery_editor),
):
    """
    Update an item's text and layout; a new image replaces the stored one.
    Omitted size, column_index and display_order keep their stored values.
    """
    upload = await read_image(image)
    try:
        item = await editor.update(
            item_id,
            title=title,
            description=description,
            size=size,
            column_index=column_index,
            image=upload,
            display_order=display_order,
        )
        return GalleryItemResponse.model_validate(item)
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to save gallery item", e)


@router.post("/gallery-items/{item_id}/move", response_model=List[GalleryItemResponse])
async def move_gallery_item(
    item_id: int,
    move: MoveRequest,
    editor: GalleryEditor = Depends(get_gallery_editor),
):
    """Swap an item with its neighbour; returns the gallery in its new order."""
    try:
        items = await editor.move(item_id, move.direction)
        return [GalleryItemResponse.model_validate(item) for item in items]
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to reorder gallery items", e)


@router.delete("/gallery-items/{item_id}")
async def delete_gallery_item(item_id: int, editor: GalleryEditor = Depends(get_gallery_editor)):
    """Delete a gallery item and its stored image."""
    try:
        await editor.delete(item_id)
        return {"message": "Item deleted", "id": item_id}
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to delete gallery item", e)


# Site content

@router.get("/site-content", response_model=List[SiteContentResponse])
async def list_site_content(editor: SiteContentEditor = Depends(get_site_content_editor)):
    try:
        return [SiteContentResponse.model_validate(row) for row in await editor.list()]
    except Exception as e:
        raise _server_error("Failed to load content", e)


@router.post("/site-content", response_model=SiteContentResponse, status_code=status.HTTP_201_CREATED)
async def create_site_content(
    payload: SiteContentCreate,
    editor: SiteContentEditor = Depends(get_site_content_editor),
):
    try:
        row = await editor.create(payload.key, payload.value)
        return SiteContentResponse.model_validate(row)
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to save content", e)


@router.put("/site-content/{content_id}", response_model=SiteContentResponse)
async def update_site_content(
    content_id: int,
    payload: SiteContentUpdate,
    editor: SiteContentEditor = Depends(get_site_content_editor),
):
    try:
        row = await editor.update(content_id, payload.value)
        return SiteContentResponse.model_validate(row)
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to save content", e)


@router.delete("/site-content/{content_id}")
async def delete_site_content(
    content_id: int,
    editor: SiteContentEditor = Depends(get_site_content_editor),
):
    try:
        await editor.delete(content_id)
        return {"message": "Content deleted", "id": content_id}
    except CMSError as e:
        raise_http_error(e)
    except Exception as e:
        raise _server_error("Failed to delete content", e)
