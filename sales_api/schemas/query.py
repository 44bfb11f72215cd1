"""Query schemas module.

Typed request-scoped objects produced by the parameter validator. Nothing
past the validator sees the raw query string.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class FilterSet(BaseModel):
    """Optional per-field constraints. ``None`` means unconstrained."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_region: Optional[list[str]] = Field(None, alias="customerRegion")
    gender: Optional[list[str]] = Field(None, alias="gender")
    product_category: Optional[list[str]] = Field(None, alias="productCategory")
    tags: Optional[list[str]] = Field(None, alias="tags")
    payment_method: Optional[list[str]] = Field(None, alias="paymentMethod")
    order_status: Optional[list[str]] = Field(None, alias="orderStatus")
    delivery_type: Optional[list[str]] = Field(None, alias="deliveryType")
    brand: Optional[list[str]] = Field(None, alias="brand")

    age_min: Optional[int] = Field(None, alias="ageMin")
    age_max: Optional[int] = Field(None, alias="ageMax")
    date_from: Optional[date] = Field(None, alias="dateFrom")
    date_to: Optional[date] = Field(None, alias="dateTo")
    price_min: Optional[float] = Field(None, alias="priceMin")
    price_max: Optional[float] = Field(None, alias="priceMax")


class QueryRequest(BaseModel):
    """Validated listing request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: int = Field(DEFAULT_PAGE, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize")
    search: Optional[str] = None
    sort: Optional[str] = None
    filters: FilterSet = Field(default_factory=FilterSet)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
