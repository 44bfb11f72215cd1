"""Sale model module."""
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sales_api.database.database import Base


class SaleTag(Base):
    """One tag attached to a sale. A sale carries zero or more tags."""

    __tablename__ = "sale_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sale_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag: Mapped[str] = mapped_column(String(64), nullable=False, index=True)


class Sale(Base):
    """Retail sales transaction line."""

    __tablename__ = "sales"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    customer_id: Mapped[str] = mapped_column(String(32), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    gender: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    customer_region: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    customer_type: Mapped[str] = mapped_column(String(64), nullable=False)

    product_id: Mapped[str] = mapped_column(String(32), nullable=False)
    product_name: Mapped[str] = mapped_column(String(256), nullable=False)
    brand: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    product_category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    price_per_unit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, index=True)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    order_status: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    delivery_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    store_id: Mapped[str] = mapped_column(String(32), nullable=False)
    store_location: Mapped[str] = mapped_column(String(128), nullable=False)
    salesperson_id: Mapped[str] = mapped_column(String(32), nullable=False)
    employee_name: Mapped[str] = mapped_column(String(128), nullable=False)

    tags: Mapped[list[SaleTag]] = relationship(
        cascade="all, delete-orphan",
        order_by=SaleTag.id,
        lazy="selectin",
    )

    @property
    def tag_names(self) -> list[str]:
        return [t.tag for t in self.tags]
