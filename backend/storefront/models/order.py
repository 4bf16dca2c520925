"""
Storefront Backend — Order SQLAlchemy Model
=============================================

What:  ORM model for the `orders` table (the order log).
Who:   OrderLog appends rows inside the OrderProcessor transaction and lists them.

Lifecycle:
    Created once by a successful order placement. Never updated or deleted.

product_ids and quantities are parallel JSON arrays: line item i is
(product_ids[i], quantities[i]). Product ids are not foreign keys; they are
checked only while the order is being placed.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from storefront.database import Base


class Order(Base):
    """A placed order."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str] = mapped_column(String(64), nullable=False)

    product_ids: Mapped[List[int]] = mapped_column(JSON, nullable=False)

    quantities: Mapped[List[int]] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_orders_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, name='{self.name}', items={len(self.product_ids)})>"
