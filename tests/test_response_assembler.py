"""Tests for response assembly."""
from datetime import datetime
from decimal import Decimal

import pytest

from sales_api.services.query_params import parse_query_params
from sales_api.services.response_assembler import (
    DISPLAY_NAMES,
    build_list_response,
    count_pages,
    summarize_page,
    to_display_record,
)
from tests.factories import make_sale


class TestDisplayRecord:
    """Tests for the display-name contract."""

    def test_every_field_is_renamed(self):
        sale = make_sale(
            id="T1",
            tags=["organic", "summer"],
            date=datetime(2024, 3, 5, 23, 59, 59),
            price_per_unit=Decimal("99.50"),
        )
        record = to_display_record(sale)

        assert list(record) == list(DISPLAY_NAMES.values())
        assert record["Transaction ID"] == "T1"
        assert record["Customer Name"] == "Customer"
        assert record["Date"] == "2024-03-05"
        assert record["Tags"] == ["organic", "summer"]
        assert record["Price per Unit"] == 99.5
        assert record["Quantity"] == 1

    def test_contract_names(self):
        assert DISPLAY_NAMES["customer_id"] == "Customer ID"
        assert DISPLAY_NAMES["price_per_unit"] == "Price per Unit"
        assert DISPLAY_NAMES["discount_percentage"] == "Discount Percentage"
        assert DISPLAY_NAMES["salesperson_id"] == "Salesperson ID"
        assert len(set(DISPLAY_NAMES.values())) == len(DISPLAY_NAMES)


class TestPagination:
    @pytest.mark.parametrize(
        "total,page_size,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (100, 100, 1), (101, 100, 2)],
    )
    def test_count_pages(self, total, page_size, expected):
        assert count_pages(total, page_size) == expected


class TestPageSummary:
    def test_sums_current_page(self):
        sales = [
            make_sale(quantity=2, total_amount=Decimal("100.00"), final_amount=Decimal("90.00")),
            make_sale(quantity=3, total_amount=Decimal("50.50"), final_amount=Decimal("50.50")),
        ]
        summary = summarize_page(sales)
        assert summary.total_quantity == 5
        assert summary.total_amount == 150.5
        assert summary.total_discount == 10.0

    def test_empty_page(self):
        summary = summarize_page([])
        assert (summary.total_quantity, summary.total_amount, summary.total_discount) == (0, 0.0, 0.0)


class TestBuildListResponse:
    def test_envelope(self):
        request = parse_query_params(
            {"page": "2", "pageSize": "5", "gender": "Male", "sort": "name-asc", "search": "ra"}
        )
        response = build_list_response(request, [make_sale(id="T9")], 6)
        body = response.model_dump(by_alias=True, exclude_none=True, mode="json")

        assert body["success"] is True
        assert body["pagination"] == {
            "page": 2,
            "pageSize": 5,
            "totalPages": 2,
            "totalRecords": 6,
        }
        assert body["data"][0]["Transaction ID"] == "T9"
        assert body["filters"] == {"gender": ["Male"]}
        assert body["sort"] == "name-asc"
        assert body["search"] == "ra"
        assert body["pageSummary"]["totalQuantity"] == 1
