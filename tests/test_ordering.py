import pytest

from app.exceptions import DraftValidationError, NotFoundError
from app.models import CommissionSection, GalleryItem
from app.services import ordering
from tests.conftest import run, seed


def _gallery(count):
    return seed(*[
        GalleryItem(image_url=f"https://img/{i}.webp", title=f"item {i}", display_order=i)
        for i in range(count)
    ])


def _titles(rows):
    return [row.title for row in rows]


def test_list_ordered_sorts_by_display_order():
    seed(
        GalleryItem(image_url="u", title="c", display_order=7),
        GalleryItem(image_url="u", title="a", display_order=1),
        GalleryItem(image_url="u", title="b", display_order=3),
    )
    rows = run(lambda db: ordering.list_ordered(db, GalleryItem))
    assert _titles(rows) == ["a", "b", "c"]


def test_list_ordered_visible_only_filters_hidden_rows():
    seed(
        CommissionSection(section_type="faq", title="shown", content={}, display_order=0, visible=True),
        CommissionSection(section_type="faq", title="hidden", content={}, display_order=1, visible=False),
    )
    public = run(lambda db: ordering.list_ordered(db, CommissionSection, visible_only=True))
    admin = run(lambda db: ordering.list_ordered(db, CommissionSection))
    assert _titles(public) == ["shown"]
    assert _titles(admin) == ["shown", "hidden"]


def test_next_display_order_is_row_count():
    assert run(lambda db: ordering.next_display_order(db, GalleryItem)) == 0
    _gallery(5)
    assert run(lambda db: ordering.next_display_order(db, GalleryItem)) == 5


def test_move_first_item_up_is_noop():
    ids = _gallery(3)
    rows = run(lambda db: ordering.move(db, GalleryItem, ids[0], ordering.UP))
    assert [r.id for r in rows] == ids
    assert [r.display_order for r in rows] == [0, 1, 2]


def test_move_last_item_down_is_noop():
    ids = _gallery(3)
    rows = run(lambda db: ordering.move(db, GalleryItem, ids[-1], ordering.DOWN))
    assert [r.id for r in rows] == ids


def test_move_down_swaps_with_next_neighbour_only():
    ids = _gallery(4)
    rows = run(lambda db: ordering.move(db, GalleryItem, ids[1], ordering.DOWN))
    assert [r.id for r in rows] == [ids[0], ids[2], ids[1], ids[3]]
    assert [r.display_order for r in rows] == [0, 1, 2, 3]

    # The refetch reflects what is stored
    stored = run(lambda db: ordering.list_ordered(db, GalleryItem))
    assert [r.id for r in stored] == [ids[0], ids[2], ids[1], ids[3]]


def test_move_swaps_values_without_compacting():
    ids = seed(
        GalleryItem(image_url="u", title="a", display_order=10),
        GalleryItem(image_url="u", title="b", display_order=40),
        GalleryItem(image_url="u", title="c", display_order=90),
    )
    rows = run(lambda db: ordering.move(db, GalleryItem, ids[2], ordering.UP))
    assert _titles(rows) == ["a", "c", "b"]
    assert [r.display_order for r in rows] == [10, 40, 90]


def test_move_unknown_item_raises_not_found():
    _gallery(2)
    with pytest.raises(NotFoundError):
        run(lambda db: ordering.move(db, GalleryItem, 999, ordering.DOWN))


def test_move_rejects_other_directions():
    ids = _gallery(3)
    with pytest.raises(DraftValidationError):
        run(lambda db: ordering.move(db, GalleryItem, ids[0], 2))


def test_find_swap_target_at_boundaries():
    class Row:
        def __init__(self, id):
            self.id = id

    rows = [Row(1), Row(2), Row(3)]
    assert ordering.find_swap_target(rows, 1, ordering.UP) == (rows[0], None)
    assert ordering.find_swap_target(rows, 3, ordering.DOWN) == (rows[2], None)
    assert ordering.find_swap_target(rows, 2, ordering.UP) == (rows[1], rows[0])
