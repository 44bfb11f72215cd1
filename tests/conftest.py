"""Pytest fixtures for an async SQLite sales store."""
from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sales_api.app import app
from sales_api.database.database import SalesStore, get_store
from sales_api.services.cache import clear_cache
from tests.factories import make_sale


@pytest.fixture(autouse=True)
def reset_cache():
    clear_cache()
    yield
    clear_cache()


@pytest_asyncio.fixture
async def store(tmp_path):
    """File-backed SQLite store.

    A file (rather than ``:memory:``) lets the concurrent page and count
    queries open separate connections onto the same data.
    """
    sales_store = SalesStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'sales.db'}")
    await sales_store.create_tables()
    yield sales_store
    await sales_store.dispose()


@pytest_asyncio.fixture
async def sample_sales(store):
    """Eight sales covering every filter dimension."""
    sales = [
        make_sale(
            id="T1",
            customer_name="Neha Yadav",
            phone_number="9876543210",
            gender="Female",
            age=21,
            customer_region="South",
            brand="Zenith",
            product_category="Clothing",
            tags=["organic", "summer"],
            quantity=5,
            total_amount=Decimal("500.00"),
            final_amount=Decimal("450.00"),
            date=datetime(2024, 1, 1, 0, 0),
            payment_method="UPI",
            order_status="Completed",
            delivery_type="Express",
        ),
        make_sale(
            id="T2",
            customer_name="Rahul Sharma",
            phone_number="9123456780",
            gender="Male",
            age=28,
            customer_region="North",
            brand="Acme",
            product_category="Electronics",
            tags=["gadgets"],
            quantity=2,
            total_amount=Decimal("2000.00"),
            final_amount=Decimal("1800.00"),
            date=datetime(2024, 1, 1, 23, 59, 59),
            payment_method="Credit Card",
            order_status="Pending",
            delivery_type="Standard",
        ),
        make_sale(
            id="T3",
            customer_name="Amit Kumar",
            phone_number="9988776655",
            gender="Male",
            age=45,
            customer_region="East",
            brand="Acme",
            product_category="Electronics",
            tags=["gadgets", "premium"],
            quantity=1,
            total_amount=Decimal("1500.00"),
            final_amount=Decimal("1500.00"),
            date=datetime(2024, 1, 2, 8, 30),
            payment_method="Cash",
            order_status="Completed",
            delivery_type="Standard",
        ),
        make_sale(
            id="T4",
            customer_name="Priya Singh",
            phone_number="9001122334",
            gender="Female",
            age=35,
            customer_region="West",
            brand="Bloom",
            product_category="Beauty",
            tags=["organic"],
            quantity=8,
            total_amount=Decimal("800.00"),
            final_amount=Decimal("640.00"),
            date=datetime(2023, 12, 31, 23, 59, 59),
            payment_method="UPI",
            order_status="Cancelled",
            delivery_type="Express",
        ),
        make_sale(
            id="T5",
            customer_name="Sneha Reddy",
            phone_number="9555512345",
            gender="Female",
            age=18,
            customer_region="South",
            brand="Zenith",
            product_category="Clothing",
            tags=[],
            quantity=3,
            total_amount=Decimal("300.00"),
            final_amount=Decimal("300.00"),
            date=datetime(2024, 2, 15, 14, 0),
            payment_method="Debit Card",
            order_status="Returned",
            delivery_type="Store Pickup",
        ),
        make_sale(
            id="T6",
            customer_name="Vikram Joshi",
            phone_number="9444412345",
            gender="Other",
            age=60,
            customer_region="North",
            brand="Bloom",
            product_category="Beauty",
            tags=["premium"],
            quantity=10,
            total_amount=Decimal("5000.00"),
            final_amount=Decimal("4000.00"),
            date=datetime(2024, 3, 1, 9, 15),
            payment_method="Credit Card",
            order_status="Completed",
            delivery_type="Express",
        ),
        make_sale(
            id="T7",
            customer_name="neha kapoor",
            phone_number="9333312345",
            gender="Female",
            age=30,
            customer_region="East",
            brand="Acme",
            product_category="Electronics",
            tags=["summer"],
            quantity=4,
            total_amount=Decimal("1200.00"),
            final_amount=Decimal("1080.00"),
            date=datetime(2024, 1, 15, 18, 45),
            payment_method="Cash",
            order_status="Pending",
            delivery_type="Standard",
        ),
        make_sale(
            id="T8",
            customer_name="Arjun Mehta",
            phone_number="9222212345",
            gender="Male",
            age=52,
            customer_region="West",
            brand="Zenith",
            product_category="Clothing",
            tags=["sale_50%"],
            quantity=6,
            total_amount=Decimal("600.00"),
            final_amount=Decimal("300.00"),
            date=datetime(2024, 2, 1, 10, 0),
            payment_method="Debit Card",
            order_status="Completed",
            delivery_type="Store Pickup",
        ),
    ]
    async with store.session() as session:
        session.add_all(sales)
        await session.commit()
    return sales


@pytest_asyncio.fixture
async def client(store):
    """HTTP client for the app with the test store injected."""
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
