"""Filter catalog module.

Collects the distinct values of every set-membership field across the
whole corpus, ignoring any active request filters.
"""
import logging

from sqlalchemy import select

from sales_api.database.database import SalesStore
from sales_api.exceptions.api_exception import StorageError
from sales_api.models.sale import Sale, SaleTag
from sales_api.schemas.sales import FilterOptions
from sales_api.services.cache import cached
from sales_api.services.sales_service import STORAGE_ERRORS
from sales_api.settings import settings

logger = logging.getLogger(__name__)

# FilterOptions field -> column holding the values
CATALOG_COLUMNS = {
    "customer_regions": Sale.customer_region,
    "genders": Sale.gender,
    "product_categories": Sale.product_category,
    "payment_methods": Sale.payment_method,
    "order_statuses": Sale.order_status,
    "delivery_types": Sale.delivery_type,
    "brands": Sale.brand,
    "tags": SaleTag.tag,
}


async def _distinct_values(session, column) -> list[str]:
    query = select(column).where(column.isnot(None), column != "").distinct()
    result = await session.execute(query)
    return sorted(result.scalars().all())


@cached("filter_catalog", ttl_seconds=lambda: settings.FILTER_CATALOG_TTL_SECONDS)
async def build_filter_catalog(store: SalesStore) -> FilterOptions:
    """Distinct, alphabetically sorted values per filterable field.

    Tags are stored one row per tag, so selecting distinct tags flattens
    every sale's tag list.
    """
    values = {}
    try:
        async with store.session() as session:
            for field, column in CATALOG_COLUMNS.items():
                values[field] = await _distinct_values(session, column)
    except STORAGE_ERRORS as e:
        logger.exception("Error building filter catalog")
        raise StorageError("Failed to fetch filter options", diagnostic=str(e)) from e

    return FilterOptions(**values)
