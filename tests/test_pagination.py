import pytest

from utils.pagination import paginate

ITEMS = list(range(45))


def test_full_and_partial_pages():
    first = paginate(ITEMS, 1, 20)
    last = paginate(ITEMS, 3, 20)

    assert first.items == tuple(range(20))
    assert last.items == (40, 41, 42, 43, 44)
    assert first.total_items == 45
    assert first.total_pages == 3


def test_page_past_the_end_is_empty():
    page = paginate(ITEMS, 4, 20)

    assert page.items == ()
    assert page.total_pages == 3


def test_empty_sequence_has_one_page():
    page = paginate([], 1, 20)

    assert page.items == ()
    assert page.total_items == 0
    assert page.total_pages == 1


def test_page_below_one_is_treated_as_first_page():
    page = paginate(ITEMS, 0, 20)

    assert page.page == 1
    assert page.items == tuple(range(20))


def test_page_size_is_per_call():
    assert paginate(ITEMS, 1, 10).total_pages == 5


def test_invalid_page_size():
    with pytest.raises(ValueError):
        paginate(ITEMS, 1, 0)
