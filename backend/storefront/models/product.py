"""
Storefront Backend — Product SQLAlchemy Model
===============================================

What:  ORM model for the `products` table.
Who:   ProductStore (CRUD + search) and OrderProcessor (inventory debits).

Table Design:
    - id: integer primary key assigned by the client that creates the product;
      order line items reference products by this value
    - available_inventory: never negative; a CHECK constraint backs up the
      guarded decrement in OrderProcessor
    - price: numeric; search matches against its textual form

id and available_inventory are 32-bit INTEGER columns on PostgreSQL. Values
outside that range are rejected before they reach a query.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, Float, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from storefront.database import Base

INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


def fits_integer_column(value: int) -> bool:
    """True when `value` can be bound to an INTEGER column."""
    return INTEGER_MIN <= value <= INTEGER_MAX


class Product(Base):
    """A product offered by the storefront."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Product identifier assigned by the client",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    price: Mapped[float] = mapped_column(Float, nullable=False)

    available_inventory: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Units available for sale; never negative",
    )

    # Relative path under the images directory (served at /images/<path>)
    image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint(
            "available_inventory >= 0",
            name="ck_products_available_inventory_non_negative",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, title='{self.title}', "
            f"available_inventory={self.available_inventory})>"
        )
