"""
Storefront Backend — Order Route Handlers
===========================================

What:  GET /orders and POST /orders.
How:   POST delegates to OrderProcessor, which returns an OrderOutcome instead
       of raising. This module maps each failure kind onto the application
       exception that the global handlers turn into a status code:

           VALIDATION              → ValidationError            → 400
           PRODUCT_NOT_FOUND       → NotFoundError              → 404
           INSUFFICIENT_INVENTORY  → InsufficientInventoryError → 400
           PROCESSING              → DatabaseError              → 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from storefront.dependencies import get_order_log, get_order_processor
from storefront.exceptions import (
    DatabaseError,
    InsufficientInventoryError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.schemas.common import ErrorResponse
from storefront.schemas.order import OrderCreate, OrderCreatedResponse, OrderResponse
from storefront.services.order_log import OrderLog
from storefront.services.order_processor import (
    OrderFailure,
    OrderFailureKind,
    OrderProcessor,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


def failure_to_exception(failure: OrderFailure) -> StorefrontError:
    """Translate an order failure into the exception for its HTTP status."""
    if failure.kind is OrderFailureKind.VALIDATION:
        context = {"product_id": failure.product_id} if failure.product_id is not None else None
        return ValidationError(message=failure.message, context=context)
    if failure.kind is OrderFailureKind.PRODUCT_NOT_FOUND:
        return NotFoundError(resource="product", resource_id=failure.product_id)
    if failure.kind is OrderFailureKind.INSUFFICIENT_INVENTORY:
        return InsufficientInventoryError(product_id=failure.product_id)
    return DatabaseError(message=failure.message, context={"kind": failure.kind.value})


@router.get(
    "/orders",
    response_model=List[OrderResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all orders",
)
async def list_orders(
    order_log: OrderLog = Depends(get_order_log),
) -> List[OrderResponse]:
    orders = await order_log.list_all()
    return [OrderResponse.model_validate(order) for order in orders]


@router.post(
    "/orders",
    status_code=201,
    response_model=OrderCreatedResponse,
    responses={
        201: {"description": "Order placed", "model": OrderCreatedResponse},
        400: {"description": "Invalid order or insufficient inventory", "model": ErrorResponse},
        404: {"description": "Unknown product id", "model": ErrorResponse},
        500: {"description": "Order could not be processed", "model": ErrorResponse},
    },
    summary="Place an order",
    description=(
        "Checks inventory for every line item and, if all are available, debits "
        "inventory and stores the order in a single transaction. Nothing is "
        "stored when any line item fails."
    ),
)
async def place_order(
    payload: OrderCreate,
    processor: OrderProcessor = Depends(get_order_processor),
) -> OrderCreatedResponse:
    outcome = await processor.place_order(
        product_ids=payload.product_ids,
        quantities=payload.quantities,
        name=payload.name,
        phone=payload.phone,
    )
    if not outcome.ok:
        raise failure_to_exception(outcome.failure)
    return OrderCreatedResponse(order_id=outcome.order_id)
