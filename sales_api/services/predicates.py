"""Predicate tree module.

Filters compile into a small tree of tagged nodes that says *what* to match
without saying *how* a given store evaluates it. ``sql_filters`` turns the
tree into a SQLAlchemy expression; other backends only need their own
translator.

Field names in the tree are ``Sale`` attribute names.
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional, Union

from sales_api.schemas.query import FilterSet

END_OF_DAY = time(23, 59, 59, 999000)

SEARCH_FIELDS = ("customer_name", "phone_number")


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match."""

    field: str
    value: str


@dataclass(frozen=True)
class In:
    """Field value is one of ``values``."""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Overlaps:
    """Multi-valued field shares at least one element with ``values``."""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Range:
    """Inclusive range. A ``None`` bound is open."""

    field: str
    gte: Any = None
    lte: Any = None


@dataclass(frozen=True)
class And:
    conditions: tuple["Predicate", ...] = ()


@dataclass(frozen=True)
class Or:
    conditions: tuple["Predicate", ...] = ()


Predicate = Union[Contains, In, Overlaps, Range, And, Or]

MATCH_ALL = And()


def _range(field: str, low, high) -> Optional[Range]:
    if low is None and high is None:
        return None
    return Range(field, gte=low, lte=high)


def _day_bounds(date_from: Optional[date], date_to: Optional[date]) -> Optional[Range]:
    """Widen calendar dates to [start of ``date_from``, end of ``date_to``]."""
    low = datetime.combine(date_from, time.min) if date_from else None
    high = datetime.combine(date_to, END_OF_DAY) if date_to else None
    return _range("date", low, high)


def compile_filters(search: Optional[str], filters: Optional[FilterSet] = None) -> And:
    """Compile a search term and a filter set into one conjunction.

    Absent filters contribute nothing; with nothing supplied the result is
    ``MATCH_ALL``.
    """
    filters = filters or FilterSet()
    conditions: list[Predicate] = []

    if search and search.strip():
        term = search.strip()
        conditions.append(Or(tuple(Contains(field, term) for field in SEARCH_FIELDS)))

    def member(field: str, values: Optional[list[str]]) -> None:
        if values:
            conditions.append(In(field, tuple(values)))

    member("customer_region", filters.customer_region)
    member("gender", filters.gender)

    age = _range("age", filters.age_min, filters.age_max)
    if age:
        conditions.append(age)

    member("product_category", filters.product_category)

    if filters.tags:
        conditions.append(Overlaps("tags", tuple(filters.tags)))

    member("payment_method", filters.payment_method)
    member("order_status", filters.order_status)
    member("delivery_type", filters.delivery_type)
    member("brand", filters.brand)

    window = _day_bounds(filters.date_from, filters.date_to)
    if window:
        conditions.append(window)

    price = _range("final_amount", filters.price_min, filters.price_max)
    if price:
        conditions.append(price)

    return And(tuple(conditions))
