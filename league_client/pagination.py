from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


class PaginationWindow:
    """How much of an ordered list is revealed ("show more")."""

    def __init__(self, page_size: int, total: int = 0) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.total = 0
        self.visible_count = 0
        self.reset(total)

    def reset(self, total: int) -> None:
        self.total = max(total, 0)
        self.visible_count = min(self.page_size, self.total)

    @property
    def has_more(self) -> bool:
        return self.visible_count < self.total

    def reveal(self) -> int:
        if self.has_more:
            self.visible_count = min(self.visible_count + self.page_size, self.total)
        return self.visible_count

    def visible(self, items: Sequence[T]) -> List[T]:
        return list(items[: self.visible_count])

    def __repr__(self) -> str:
        return f"PaginationWindow(page_size={self.page_size}, visible={self.visible_count}, total={self.total})"
