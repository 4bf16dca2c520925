"""
Storefront Backend — Order Log
================================

What:  Append-only access to the `orders` table.
How:   `append` joins the caller's open transaction (OrderProcessor owns the
       transaction that also debits inventory); `list_all` opens its own session.
"""

import logging
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import Database
from storefront.exceptions import DatabaseError
from storefront.models.order import Order

logger = logging.getLogger(__name__)


class OrderLog:
    def __init__(self, database: Database):
        self._database = database

    async def append(
        self,
        session: AsyncSession,
        product_ids: Sequence[int],
        quantities: Sequence[int],
        name: str,
        phone: str,
    ) -> Order:
        """
        Add an order to the transaction open on `session`.

        The row is flushed so `order.id` is populated, but nothing is
        committed here.
        """
        order = Order(
            name=name,
            phone=phone,
            product_ids=list(product_ids),
            quantities=list(quantities),
        )
        session.add(order)
        await session.flush()
        return order

    async def list_all(self) -> List[Order]:
        """All orders, oldest first."""
        try:
            async with self._database.session() as session:
                result = await session.execute(
                    select(Order).order_by(Order.created_at, Order.id)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error fetching orders: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch orders",
                context={"error_type": type(e).__name__},
            )
