"""Response assembly module.

Reshapes stored sales into the display-name contract used by the client
and computes pagination metadata and per-page aggregates.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Sequence

from sales_api.models.sale import Sale
from sales_api.schemas.query import QueryRequest
from sales_api.schemas.sales import PageSummary, Pagination, SalesListResponse

# Sale attribute -> external display name, in output order
DISPLAY_NAMES = {
    "id": "Transaction ID",
    "date": "Date",
    "customer_id": "Customer ID",
    "customer_name": "Customer Name",
    "phone_number": "Phone Number",
    "gender": "Gender",
    "age": "Age",
    "customer_region": "Customer Region",
    "customer_type": "Customer Type",
    "product_id": "Product ID",
    "product_name": "Product Name",
    "brand": "Brand",
    "product_category": "Product Category",
    "tags": "Tags",
    "quantity": "Quantity",
    "price_per_unit": "Price per Unit",
    "discount_percentage": "Discount Percentage",
    "total_amount": "Total Amount",
    "final_amount": "Final Amount",
    "payment_method": "Payment Method",
    "order_status": "Order Status",
    "delivery_type": "Delivery Type",
    "store_id": "Store ID",
    "store_location": "Store Location",
    "salesperson_id": "Salesperson ID",
    "employee_name": "Employee Name",
}


def _display_value(sale: Sale, field: str) -> Any:
    if field == "tags":
        return sale.tag_names
    value = getattr(sale, field)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def to_display_record(sale: Sale) -> dict[str, Any]:
    return {name: _display_value(sale, field) for field, name in DISPLAY_NAMES.items()}


def count_pages(total_records: int, page_size: int) -> int:
    """ceil(total / page_size); an empty result has zero pages."""
    return -(-total_records // page_size)


def summarize_page(sales: Iterable[Sale]) -> PageSummary:
    """Aggregate the given page only. Nothing accumulates across pages."""
    quantity = 0
    amount = Decimal("0")
    discount = Decimal("0")
    for sale in sales:
        quantity += sale.quantity
        amount += Decimal(sale.total_amount)
        discount += Decimal(sale.total_amount) - Decimal(sale.final_amount)
    return PageSummary(
        total_quantity=quantity,
        total_amount=round(float(amount), 2),
        total_discount=round(float(discount), 2),
    )


def build_list_response(
    request: QueryRequest, sales: Sequence[Sale], total_records: int
) -> SalesListResponse:
    return SalesListResponse(
        data=[to_display_record(sale) for sale in sales],
        pagination=Pagination(
            page=request.page,
            page_size=request.page_size,
            total_pages=count_pages(total_records, request.page_size),
            total_records=total_records,
        ),
        page_summary=summarize_page(sales),
        filters=request.filters,
        sort=request.sort,
        search=request.search,
    )
