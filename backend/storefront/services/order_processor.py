"""
Storefront Backend — Order Processor
======================================

What:  Places an order: checks every line item against product inventory,
       debits inventory and appends the order, all in one transaction.
How:   One session, one transaction. Line items are handled strictly in input
       order; the first failing item rolls the whole transaction back.
Who:   POST /orders route handler.

Placement Flow:
    ┌──────────────┐   ┌──────────────────────────────┐   ┌────────────┐   ┌────────┐
    │ Preconditions│──▶│ for each line item:          │──▶│ Append to  │──▶│ Commit │
    │ (no I/O)     │   │   lock row → check → debit   │   │ Order Log  │   │        │
    └──────────────┘   └──────────────────────────────┘   └────────────┘   └────────┘
          │                        │ failure                     │ db error      │ db error
          ▼                        ▼                             ▼               ▼
      VALIDATION         rollback: PRODUCT_NOT_FOUND /        rollback: PROCESSING
                                   INSUFFICIENT_INVENTORY

Oversell protection:
    The product row is read with SELECT ... FOR UPDATE (PostgreSQL row lock;
    SQLite ignores the clause and serializes writers instead). The debit is a
    guarded UPDATE ... WHERE available_inventory >= :quantity, so a debit that
    would go negative affects zero rows and is reported as insufficient
    inventory even if a concurrent order committed between the read and the
    write. A product listed twice in one order is checked against the
    inventory already debited earlier in the same transaction.

Results:
    The processor never raises for business outcomes. It returns an
    OrderOutcome holding either the new order id or an OrderFailure; the HTTP
    boundary maps the failure kind to a status code.
"""

import enum
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import Database
from storefront.models.product import Product, fits_integer_column
from storefront.services.order_log import OrderLog

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = (
    "Invalid order data. Fields 'productIDs', 'quantities', 'name', and 'phone' are required."
)


class OrderFailureKind(str, enum.Enum):
    VALIDATION = "validation"
    PRODUCT_NOT_FOUND = "product_not_found"
    INSUFFICIENT_INVENTORY = "insufficient_inventory"
    PROCESSING = "processing"


@dataclass(frozen=True)
class OrderFailure:
    kind: OrderFailureKind
    message: str
    product_id: Optional[int] = None


@dataclass(frozen=True)
class OrderOutcome:
    order_id: Optional[uuid.UUID] = None
    failure: Optional[OrderFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, failure: OrderFailure) -> "OrderOutcome":
        return cls(failure=failure)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def check_order_request(
    product_ids: Sequence[int],
    quantities: Sequence[int],
    name: str,
    phone: str,
) -> Optional[OrderFailure]:
    """
    Validate an order request without touching the database.

    Returns:
        None when the request may be placed, otherwise a VALIDATION failure.
    """
    if not product_ids or not quantities or not (name or "").strip() or not (phone or "").strip():
        return OrderFailure(OrderFailureKind.VALIDATION, MISSING_FIELDS_MESSAGE)

    if len(product_ids) != len(quantities):
        return OrderFailure(
            OrderFailureKind.VALIDATION,
            "Invalid order data. 'productIDs' and 'quantities' must have the same length.",
        )

    for product_id in product_ids:
        if not isinstance(product_id, int) or isinstance(product_id, bool):
            return OrderFailure(
                OrderFailureKind.VALIDATION,
                "Invalid order data. Every product ID must be an integer.",
            )

    for product_id, quantity in zip(product_ids, quantities):
        if not _is_positive_int(quantity):
            return OrderFailure(
                OrderFailureKind.VALIDATION,
                f"Invalid order data. Quantity for product ID {product_id} must be a positive integer.",
                product_id=product_id,
            )

    return None


class OrderProcessor:
    """
    Atomic order placement over the product store and order log.

    Dependencies are passed in at construction; the processor keeps no
    per-request state, so one instance serves any number of concurrent
    requests.
    """

    def __init__(self, database: Database, order_log: Optional[OrderLog] = None):
        self._database = database
        self._order_log = order_log or OrderLog(database)

    async def place_order(
        self,
        product_ids: Sequence[int],
        quantities: Sequence[int],
        name: str,
        phone: str,
    ) -> OrderOutcome:
        """
        Validate stock and commit a sale.

        Args:
            product_ids: Product ids, one per line item.
            quantities: Units per line item, parallel to product_ids.
            name: Customer name.
            phone: Customer phone number.

        Returns:
            OrderOutcome with order_id on success, or with a failure whose
            kind is VALIDATION, PRODUCT_NOT_FOUND, INSUFFICIENT_INVENTORY or
            PROCESSING. On any failure nothing is persisted.
        """
        failure = check_order_request(product_ids, quantities, name, phone)
        if failure is not None:
            return OrderOutcome.failed(failure)

        try:
            async with self._database.session() as session:
                # The session autobegins its transaction on the first statement
                for product_id, quantity in zip(product_ids, quantities):
                    failure = await self._debit(session, product_id, quantity)
                    if failure is not None:
                        await session.rollback()
                        logger.info("Order rejected: %s", failure.message)
                        return OrderOutcome.failed(failure)

                order = await self._order_log.append(
                    session,
                    product_ids=product_ids,
                    quantities=quantities,
                    name=name.strip(),
                    phone=phone.strip(),
                )
                await session.commit()
        except SQLAlchemyError as e:
            # The session context manager has already rolled back
            logger.error("Error processing order: %s", str(e), exc_info=True)
            return OrderOutcome.failed(
                OrderFailure(OrderFailureKind.PROCESSING, "Failed to process order")
            )

        logger.info(
            "Order %s placed: %d line item(s), %d unit(s)",
            order.id,
            len(product_ids),
            sum(quantities),
        )
        return OrderOutcome(order_id=order.id)

    async def _debit(
        self,
        session: AsyncSession,
        product_id: int,
        quantity: int,
    ) -> Optional[OrderFailure]:
        """Lock, check and debit one line item inside the open transaction."""
        if not fits_integer_column(product_id):
            return _not_found(product_id)

        result = await session.execute(
            select(Product)
            .where(Product.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        product = result.scalar_one_or_none()

        if product is None:
            return _not_found(product_id)

        if quantity > product.available_inventory:
            return _insufficient(product_id)

        debited = await session.execute(
            update(Product)
            .where(
                Product.id == product_id,
                Product.available_inventory >= quantity,
            )
            .values(available_inventory=Product.available_inventory - quantity)
        )
        if debited.rowcount != 1:
            # A concurrent order took the stock after our read
            return _insufficient(product_id)

        return None


def _not_found(product_id: int) -> OrderFailure:
    return OrderFailure(
        OrderFailureKind.PRODUCT_NOT_FOUND,
        f"Product with ID {product_id} not found",
        product_id=product_id,
    )


def _insufficient(product_id: int) -> OrderFailure:
    return OrderFailure(
        OrderFailureKind.INSUFFICIENT_INVENTORY,
        f"Insufficient inventory for product ID {product_id}",
        product_id=product_id,
    )
