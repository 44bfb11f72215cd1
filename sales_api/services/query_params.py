"""Query parameter validation module.

Turns raw HTTP query parameters into a ``QueryRequest``. Every malformed or
out-of-range value degrades to its default or is dropped, so this stage
never raises and never rejects a request.

Numeric parsing is lenient the way browser clients expect: a leading
number is read and trailing junk ignored ("12abc" -> 12).
"""
import math
import re
from datetime import date, datetime
from typing import Mapping, Optional, Union

from sales_api.schemas.query import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    FilterSet,
    QueryRequest,
)

RawValue = Union[str, list[str], None]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Largest value a 32-bit INTEGER column or bind parameter accepts
MAX_INT = 2**31 - 1

# query key -> FilterSet field
MULTI_SELECT_PARAMS = {
    "customerRegion": "customer_region",
    "gender": "gender",
    "productCategory": "product_category",
    "tags": "tags",
    "paymentMethod": "payment_method",
    "orderStatus": "order_status",
    "deliveryType": "delivery_type",
    "brand": "brand",
}


def _first(value: RawValue) -> Optional[str]:
    """Scalar view of a raw value; repeated keys use their first occurrence."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value if isinstance(value, str) else None


def parse_int(value: RawValue) -> Optional[int]:
    """Leading integer of the value; out of 32-bit range counts as unparseable."""
    text = _first(value)
    if not text:
        return None
    match = _INT_PREFIX.match(text)
    if not match:
        return None
    number = int(match.group(1))
    return number if -MAX_INT <= number <= MAX_INT else None


def parse_float(value: RawValue) -> Optional[float]:
    text = _first(value)
    if not text:
        return None
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_date(value: RawValue) -> Optional[date]:
    """Parse an ISO calendar date, or the date part of an ISO datetime."""
    text = _first(value)
    if not text:
        return None
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_list(value: RawValue) -> Optional[list[str]]:
    """Split comma separated values, trimming and dropping empty tokens.

    Order and duplicates are kept. Returns ``None`` when nothing is left.
    """
    if value is None:
        return None
    chunks = value if isinstance(value, (list, tuple)) else [value]
    tokens = [
        token.strip()
        for chunk in chunks
        if isinstance(chunk, str)
        for token in chunk.split(",")
    ]
    tokens = [token for token in tokens if token]
    return tokens or None


def _non_negative(number):
    return number if number is not None and number >= 0 else None


def parse_filters(query: Mapping[str, RawValue]) -> FilterSet:
    values = {}
    for key, field in MULTI_SELECT_PARAMS.items():
        selected = parse_list(query.get(key))
        if selected is not None:
            values[field] = selected

    values["age_min"] = _non_negative(parse_int(query.get("ageMin")))
    values["age_max"] = _non_negative(parse_int(query.get("ageMax")))
    values["date_from"] = parse_date(query.get("dateFrom"))
    values["date_to"] = parse_date(query.get("dateTo"))
    values["price_min"] = _non_negative(parse_float(query.get("priceMin")))
    values["price_max"] = _non_negative(parse_float(query.get("priceMax")))

    return FilterSet(**values)


def parse_query_params(query: Mapping[str, RawValue]) -> QueryRequest:
    """Build a ``QueryRequest`` from raw query parameters."""
    page = parse_int(query.get("page"))
    if page is None or page <= 0:
        page = DEFAULT_PAGE

    page_size = parse_int(query.get("pageSize"))
    if page_size is None or page_size <= 0 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE

    search = _first(query.get("search"))
    search = search.strip() if search else None

    return QueryRequest(
        page=page,
        page_size=page_size,
        search=search or None,
        sort=_first(query.get("sort")) or None,
        filters=parse_filters(query),
    )
