"""Sales schemas module.

Response envelopes for the list, filter-options and statistics endpoints.
Every envelope carries a ``success`` flag so the client can treat success
and failure bodies uniformly.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from sales_api.schemas.query import FilterSet


class Pagination(BaseModel):
    """Pagination block of the list response."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., alias="pageSize", description="Page size used")
    total_pages: int = Field(..., alias="totalPages", description="ceil(totalRecords / pageSize)")
    total_records: int = Field(..., alias="totalRecords", description="Records matching the filters")


class PageSummary(BaseModel):
    """Aggregates over the records of the current page only."""

    model_config = ConfigDict(populate_by_name=True)

    total_quantity: int = Field(0, alias="totalQuantity")
    total_amount: float = Field(0.0, alias="totalAmount", description="Sum of pre-discount amounts")
    total_discount: float = Field(0.0, alias="totalDiscount", description="Sum of (total - final)")


class SalesListResponse(BaseModel):
    """Paginated list of sales under the display-name contract."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: list[dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination
    page_summary: PageSummary = Field(default_factory=PageSummary, alias="pageSummary")
    filters: FilterSet = Field(default_factory=FilterSet)
    sort: Optional[str] = None
    search: Optional[str] = None


class FilterOptions(BaseModel):
    """Distinct selectable values for every set-membership filter."""

    model_config = ConfigDict(populate_by_name=True)

    customer_regions: list[str] = Field(default_factory=list, alias="customerRegions")
    genders: list[str] = Field(default_factory=list)
    product_categories: list[str] = Field(default_factory=list, alias="productCategories")
    payment_methods: list[str] = Field(default_factory=list, alias="paymentMethods")
    order_statuses: list[str] = Field(default_factory=list, alias="orderStatuses")
    delivery_types: list[str] = Field(default_factory=list, alias="deliveryTypes")
    brands: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class FilterOptionsResponse(BaseModel):
    success: bool = True
    data: FilterOptions


class SalesStatistics(BaseModel):
    """Corpus-wide statistics over the final (post-discount) amount."""

    model_config = ConfigDict(populate_by_name=True)

    total_sales: int = Field(..., alias="totalSales")
    total_revenue: float = Field(..., alias="totalRevenue")
    avg_order_value: float = Field(..., alias="avgOrderValue")


class StatisticsResponse(BaseModel):
    success: bool = True
    data: SalesStatistics


class ErrorResponse(BaseModel):
    """Failure envelope shared by every endpoint."""

    success: bool = False
    message: str
    error: Optional[str] = None
