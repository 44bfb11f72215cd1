"""Sort token resolution."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SortDirective:
    field: str
    descending: bool


DEFAULT_SORT = "date-newest"

SORT_OPTIONS = {
    "date-newest": SortDirective("date", descending=True),
    "date-oldest": SortDirective("date", descending=False),
    "quantity-high": SortDirective("quantity", descending=True),
    "quantity-low": SortDirective("quantity", descending=False),
    "name-asc": SortDirective("customer_name", descending=False),
    "name-desc": SortDirective("customer_name", descending=True),
}


def resolve_sort(token: Optional[str]) -> SortDirective:
    """Map a sort token to a single-field directive.

    Absent or unknown tokens fall back to newest first. Ties are left to
    the store.
    """
    return SORT_OPTIONS.get(token or DEFAULT_SORT, SORT_OPTIONS[DEFAULT_SORT])
