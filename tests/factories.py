"""Test data builders."""
from datetime import datetime
from decimal import Decimal

from sales_api.models.sale import Sale, SaleTag


def make_sale(**overrides) -> Sale:
    """Build a Sale with plausible defaults; ``tags`` is a list of strings."""
    tags = overrides.pop("tags", [])
    values = dict(
        customer_id="CUST-0",
        customer_name="Customer",
        phone_number="9000000000",
        gender="Male",
        age=30,
        customer_region="North",
        customer_type="Regular",
        product_id="PROD-0",
        product_name="Product",
        brand="Acme",
        product_category="Electronics",
        quantity=1,
        price_per_unit=Decimal("100.00"),
        discount_percentage=Decimal("0.00"),
        total_amount=Decimal("100.00"),
        final_amount=Decimal("100.00"),
        date=datetime(2024, 1, 1, 12, 0),
        payment_method="Cash",
        order_status="Completed",
        delivery_type="Standard",
        store_id="ST-1",
        store_location="Mumbai",
        salesperson_id="EMP-1",
        employee_name="Employee",
    )
    values.update(overrides)
    return Sale(**values, tags=[SaleTag(tag=tag) for tag in tags])
