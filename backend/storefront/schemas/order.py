"""
Storefront Backend — Order Request/Response Schemas
=====================================================

What:  Pydantic models for POST /orders and GET /orders.
How:   The request model only checks presence and types. Business
       preconditions (non-empty, equal lengths, positive quantities, non-blank
       contact fields) belong to OrderProcessor so they hold for every caller.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_PRODUCT_IDS_ALIASES = AliasChoices("productIDs", "product_ids")


class OrderCreate(BaseModel):
    """
    What:  Order request body.

    Example:
        {"productIDs": [1, 3], "quantities": [2, 1],
         "name": "Ada Lovelace", "phone": "07700900000"}
    """

    product_ids: List[int] = Field(
        validation_alias=_PRODUCT_IDS_ALIASES,
        serialization_alias="productIDs",
    )
    quantities: List[int]
    name: str
    phone: str

    model_config = ConfigDict(populate_by_name=True)


class OrderResponse(BaseModel):
    """A stored order as returned by GET /orders."""

    id: uuid.UUID
    name: str
    phone: str
    product_ids: List[int] = Field(
        validation_alias=_PRODUCT_IDS_ALIASES,
        serialization_alias="productIDs",
    )
    quantities: List[int]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class OrderCreatedResponse(BaseModel):
    """Returned by POST /orders with HTTP 201."""

    success: bool = True
    order_id: uuid.UUID = Field(serialization_alias="orderId")
