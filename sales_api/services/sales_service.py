"""Sales query service module.

Runs a validated ``QueryRequest`` against the store:

- Filters compile into a predicate tree, then into one ``WHERE`` clause
- The page query and the count query share that clause and run
  concurrently on separate sessions
- Results are reshaped by the response assembler

Storage failures are logged and re-raised as ``StorageError``; nothing is
retried and no partial result is returned.
"""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from sales_api.database.database import SalesStore
from sales_api.exceptions.api_exception import StorageError
from sales_api.models.sale import Sale
from sales_api.schemas.query import QueryRequest
from sales_api.schemas.sales import SalesListResponse, SalesStatistics
from sales_api.services.cache import cached
from sales_api.services.predicates import Predicate, compile_filters
from sales_api.services.response_assembler import build_list_response
from sales_api.services.sorting import SortDirective, resolve_sort
from sales_api.services.sql_filters import order_by_clause, to_sql
from sales_api.settings import settings

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (SQLAlchemyError, OSError)


async def fetch_page(
    store: SalesStore,
    predicate: Predicate,
    directive: SortDirective,
    offset: int,
    limit: int,
) -> tuple[list[Sale], int]:
    """Return one page of matching sales and the total match count.

    An offset past the last match yields an empty page, not an error.
    """
    where = to_sql(predicate)

    async def _page() -> list[Sale]:
        async with store.session() as session:
            query = (
                select(Sale)
                .where(where)
                .order_by(order_by_clause(directive))
                .offset(offset)
                .limit(limit)
            )
            result = await session.execute(query)
            return list(result.scalars().all())

    async def _count() -> int:
        async with store.session() as session:
            result = await session.execute(
                select(func.count()).select_from(Sale).where(where)
            )
            return result.scalar() or 0

    # Both reads finish before either error propagates
    records, total = await asyncio.gather(_page(), _count(), return_exceptions=True)
    for outcome in (records, total):
        if isinstance(outcome, BaseException):
            raise outcome
    return records, total


async def list_sales(store: SalesStore, request: QueryRequest) -> SalesListResponse:
    predicate = compile_filters(request.search, request.filters)
    directive = resolve_sort(request.sort)

    try:
        records, total = await fetch_page(
            store, predicate, directive, request.offset, request.page_size
        )
    except STORAGE_ERRORS as e:
        logger.exception("Error fetching sales page")
        raise StorageError("Failed to fetch sales data", diagnostic=str(e)) from e

    return build_list_response(request, records, total)


@cached("sales_statistics", ttl_seconds=lambda: settings.FILTER_CATALOG_TTL_SECONDS)
async def get_statistics(store: SalesStore) -> SalesStatistics:
    """Count, revenue and average order value over the whole corpus."""
    query = select(
        func.count(Sale.id).label("total_sales"),
        func.sum(Sale.final_amount).label("total_revenue"),
        func.avg(Sale.final_amount).label("avg_order_value"),
    )
    try:
        async with store.session() as session:
            row = (await session.execute(query)).one()
    except STORAGE_ERRORS as e:
        logger.exception("Error computing sales statistics")
        raise StorageError("Failed to fetch statistics", diagnostic=str(e)) from e

    return SalesStatistics(
        total_sales=row.total_sales or 0,
        total_revenue=round(float(row.total_revenue or 0), 2),
        avg_order_value=round(float(row.avg_order_value or 0), 2),
    )
