"""
Manual ordering for content tables that carry a display_order column.

Lists are always read ascending by display_order. New rows are appended at
the end and a move swaps the display_order values of two neighbouring rows;
values are never renumbered or compacted.
"""
import logging
from typing import List, Sequence

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DraftValidationError, NotFoundError

logger = logging.getLogger(__name__)

UP = -1
DOWN = 1


async def list_ordered(db: AsyncSession, model, visible_only: bool = False) -> List:
    """
    Fetch every row of a table sorted by display_order.

    Args:
        db: Database session
        model: Mapped class with a display_order column
        visible_only: Only return rows with visible = true (public pages)

    Returns:
        list: Rows in display order; ties are broken by id
    """
    query = (
        select(model)
        .order_by(model.display_order.asc(), model.id.asc())
        .execution_options(populate_existing=True)
    )
    if visible_only:
        query = query.where(model.visible.is_(True))

    result = await db.execute(query)
    return list(result.scalars().all())


async def next_display_order(db: AsyncSession, model) -> int:
    """display_order for a newly created row: the current number of rows."""
    result = await db.execute(select(func.count(model.id)))
    return result.scalar() or 0


def find_swap_target(rows: Sequence, item_id: int, direction: int):
    """
    Locate the row to move and its neighbour in the given direction.

    Returns:
        tuple: (item, other), or (item, None) when the move would leave the list

    Raises:
        NotFoundError: item_id is not in rows
    """
    idx = next((i for i, row in enumerate(rows) if row.id == item_id), None)
    if idx is None:
        raise NotFoundError(f"Item ID {item_id} does not exist")

    swap_idx = idx + direction
    if swap_idx < 0 or swap_idx >= len(rows):
        return rows[idx], None
    return rows[idx], rows[swap_idx]


async def move(db: AsyncSession, model, item_id: int, direction: int) -> List:
    """
    Move one row up or down by exactly one position.

    Moving the first row up or the last row down is a no-op. Both
    display_order updates are committed together in one transaction.

    Returns:
        list: The table re-read in display order after the move
    """
    if direction not in (UP, DOWN):
        raise DraftValidationError("Direction must be -1 (up) or 1 (down)")

    rows = await list_ordered(db, model)
    item, other = find_swap_target(rows, item_id, direction)

    if other is None:
        logger.debug(f"{model.__tablename__}: move of {item_id} by {direction} is out of range, ignoring")
        return rows

    item_order, other_order = item.display_order, other.display_order

    try:
        await db.execute(
            update(model).where(model.id == item.id).values(display_order=other_order)
        )
        await db.execute(
            update(model).where(model.id == other.id).values(display_order=item_order)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"{model.__tablename__}: swapped display_order of {item.id} ({item_order}) "
        f"and {other.id} ({other_order})"
    )

    # Re-read instead of patching the loaded rows
    return await list_ordered(db, model)


class OrderedEditor:
    """
    Shared list/get/move behaviour for editors of display-ordered tables.
    Subclasses set `model` and add their own create/update/delete.
    """

    model = None

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def table(self) -> str:
        return self.model.__tablename__

    async def list(self, visible_only: bool = False) -> List:
        return await list_ordered(self.db, self.model, visible_only=visible_only)

    async def get(self, item_id: int):
        result = await self.db.execute(select(self.model).where(self.model.id == item_id))
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError(f"Item ID {item_id} does not exist")
        return row

    async def move(self, item_id: int, direction: int) -> List:
        return await move(self.db, self.model, item_id, direction)

    async def _commit(self, row=None):
        """Commit the pending change; refresh row so server-side timestamps are loaded."""
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        if row is not None:
            await self.db.refresh(row)
        return row
