"""
Client-side search over an already loaded list
"""
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

SEARCH_HINT = "Try adjusting your search"


@dataclass
class EmptyState:
    title: str
    hint: str


class SearchableList(Generic[T]):
    """
    Rows as loaded from the store plus a case-insensitive substring filter
    over a fixed set of text fields. Filtering never issues a query.
    """

    def __init__(self, fields: Sequence[str], empty_title: str, create_hint: str):
        self.fields = tuple(fields)
        self.empty_title = empty_title
        self.create_hint = create_hint
        self.rows: List[T] = []
        self.search = ""

    def set_rows(self, rows: List[T]):
        self.rows = list(rows)

    def matches(self, row: T, needle: str) -> bool:
        for name in self.fields:
            value = getattr(row, name, None)
            if value and needle in str(value).casefold():
                return True
        return False

    def filtered(self) -> List[T]:
        if not self.search:
            return list(self.rows)
        needle = self.search.casefold()
        return [row for row in self.rows if self.matches(row, needle)]

    def empty_state(self) -> Optional[EmptyState]:
        if self.filtered():
            return None
        return EmptyState(
            title=self.empty_title,
            hint=SEARCH_HINT if self.search else self.create_hint,
        )
