"""
Public gallery feed.
Cursor-paginated gallery items for the storefront's home page grid.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import and_, or_, select, func
from typing import Optional, Tuple
import logging

from app.database import get_db
from app.models import GalleryItem
from app.schemas import GalleryItemsPageResponse, GalleryItemPublicResponse, PaginationMetadata

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_cursor(cursor: str) -> Tuple[int, int]:
    """
    Split a "<display_order>:<id>" cursor.

    display_order values may repeat, so the id is needed to resume inside a tie.

    Raises:
        HTTPException: 400 if the cursor is malformed
    """
    try:
        order, item_id = cursor.split(":")
        return int(order), int(item_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid cursor", "detail": "Cursor must look like '<display_order>:<id>'"}
        )


def make_cursor(item: GalleryItem) -> str:
    return f"{item.display_order}:{item.id}"


@router.get("/gallery-items", response_model=GalleryItemsPageResponse)
async def get_gallery_items(
    limit: int = 24,
    cursor: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    Get paginated gallery items ordered by display_order, then id.

    Args:
        limit: Number of items to return (1-100)
        cursor: next_cursor from the previous page

    Raises:
        HTTPException: 400 if invalid parameters, 500 if database query fails
    """
    if limit < 1 or limit > 100:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid limit", "detail": "Limit must be between 1 and 100"}
        )

    after = parse_cursor(cursor) if cursor is not None else None

    try:
        query = select(GalleryItem).order_by(GalleryItem.display_order.asc(), GalleryItem.id.asc())
        if after is not None:
            after_order, after_id = after
            query = query.where(or_(
                GalleryItem.display_order > after_order,
                and_(GalleryItem.display_order == after_order, GalleryItem.id > after_id),
            ))

        # Fetch limit + 1 to determine if there are more results
        result = await db.execute(query.limit(limit + 1))
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = make_cursor(items[-1]) if items and has_more else None

        count_result = await db.execute(select(func.count(GalleryItem.id)))
        total_count = count_result.scalar()

        logger.info(
            f"Retrieved {len(items)} gallery items "
            f"(cursor: {cursor}, next: {next_cursor}, has_more: {has_more})"
        )

        return GalleryItemsPageResponse(
            items=[GalleryItemPublicResponse.model_validate(item) for item in items],
            pagination=PaginationMetadata(
                next_cursor=next_cursor,
                has_more=has_more,
                total_count=total_count
            )
        )

    except Exception as e:
        logger.error(f"Failed to retrieve gallery items: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to load gallery", "detail": str(e)}
        )
