"""Sales listing endpoints module.

The list endpoint reads the raw query string itself instead of declaring
typed FastAPI query parameters: malformed values must degrade to defaults
rather than produce a 422.
"""
from fastapi import APIRouter, Depends, Request

from sales_api.database.database import SalesStore, get_store
from sales_api.schemas.sales import (
    FilterOptionsResponse,
    SalesListResponse,
    StatisticsResponse,
)
from sales_api.services.filter_catalog import build_filter_catalog
from sales_api.services.query_params import RawValue, parse_query_params
from sales_api.services.sales_service import get_statistics, list_sales

router = APIRouter(prefix="/api/sales", tags=["sales"])


def _raw_query(request: Request) -> dict[str, RawValue]:
    """Query parameters as a plain mapping; repeated keys become lists."""
    raw: dict[str, RawValue] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        raw[key] = values[0] if len(values) == 1 else values
    return raw


@router.get("", response_model=SalesListResponse, response_model_exclude_none=True)
async def get_sales(
    request: Request,
    store: SalesStore = Depends(get_store),
) -> SalesListResponse:
    """
    List sales with search, filters, sorting and pagination.

    Query parameters:
    - **search**: substring of customer name or phone number
    - **customerRegion, gender, productCategory, tags, paymentMethod,
      orderStatus, deliveryType, brand**: comma separated values
    - **ageMin, ageMax, dateFrom, dateTo, priceMin, priceMax**: inclusive ranges
    - **sort**: date-newest, date-oldest, quantity-high, quantity-low,
      name-asc, name-desc
    - **page**, **pageSize** (max 100)
    """
    query = parse_query_params(_raw_query(request))
    return await list_sales(store, query)


@router.get("/filters", response_model=FilterOptionsResponse)
async def get_filter_options(
    store: SalesStore = Depends(get_store),
) -> FilterOptionsResponse:
    """Distinct values available for every multi-select filter."""
    return FilterOptionsResponse(data=await build_filter_catalog(store))


@router.get("/statistics", response_model=StatisticsResponse)
async def get_sales_statistics(
    store: SalesStore = Depends(get_store),
) -> StatisticsResponse:
    """Corpus-wide sale count, revenue and average order value."""
    return StatisticsResponse(data=await get_statistics(store))
