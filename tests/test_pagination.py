import pytest

from league_client.pagination import PaginationWindow


def test_reveal_grows_to_total_and_stops() -> None:
    window = PaginationWindow(10, total=25)
    assert window.visible_count == 10
    assert window.has_more
    assert window.reveal() == 20
    assert window.reveal() == 25
    assert not window.has_more
    assert window.reveal() == 25


def test_short_list_starts_exhausted() -> None:
    window = PaginationWindow(9, total=4)
    assert window.visible_count == 4
    assert not window.has_more
    assert window.visible(list("abcd")) == list("abcd")


def test_never_exceeds_total_and_never_shrinks() -> None:
    for total in range(0, 40):
        window = PaginationWindow(9, total=total)
        seen = [window.visible_count]
        for _ in range(10):
            seen.append(window.reveal())
        assert max(seen) <= total
        assert seen == sorted(seen)
        assert window.visible_count == total


def test_reset_returns_to_first_page() -> None:
    window = PaginationWindow(9, total=30)
    window.reveal()
    window.reset(30)
    assert window.visible_count == 9
    window.reset(0)
    assert window.visible_count == 0
    assert window.visible([1, 2]) == []


def test_visible_slices_in_order() -> None:
    window = PaginationWindow(2, total=5)
    window.reveal()
    assert window.visible([1, 2, 3, 4, 5]) == [1, 2, 3, 4]


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        PaginationWindow(0)
