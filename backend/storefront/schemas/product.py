"""
Storefront Backend — Product Request/Response Schemas
======================================================

What:  Pydantic models defining the product API contract.
How:   Wire names are camelCase (`availableInventory`) to match the storefront
       frontend; Python attributes are snake_case. Input accepts either form.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from storefront.models.product import INTEGER_MAX

_INVENTORY_ALIASES = AliasChoices("availableInventory", "available_inventory")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductCreate(BaseModel):
    """
    What:  Full product object sent to POST /products.
    Who:   Storefront admin tooling / seed scripts.
    """

    id: int = Field(ge=0, le=INTEGER_MAX, description="Product identifier assigned by the client")
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")
    location: str = Field(default="", max_length=255)
    price: float = Field(ge=0)
    available_inventory: int = Field(
        ge=0,
        le=INTEGER_MAX,
        validation_alias=_INVENTORY_ALIASES,
        serialization_alias="availableInventory",
        description="Units available for sale",
    )
    image: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Image path relative to the images directory",
    )

    model_config = ConfigDict(populate_by_name=True)


class ProductUpdate(BaseModel):
    """
    What:  Partial product fields for PUT /products/{id}.
    How:   Only the fields present in the request body are merged into the
           stored product. `id` cannot be changed; unknown fields are rejected.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)
    price: Optional[float] = Field(default=None, ge=0)
    available_inventory: Optional[int] = Field(
        default=None,
        ge=0,
        le=INTEGER_MAX,
        validation_alias=_INVENTORY_ALIASES,
        serialization_alias="availableInventory",
    )
    image: Optional[str] = Field(default=None, max_length=255)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProductUpdate":
        """Only `image` may be cleared with an explicit null."""
        for name in self.model_fields_set:
            if name != "image" and getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields present in the request, keyed by ORM attribute name."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """
    What:  A product as returned by GET /products and GET /search.
    """

    id: int
    title: str
    description: str
    location: str
    price: float
    available_inventory: int = Field(
        validation_alias=_INVENTORY_ALIASES,
        serialization_alias="availableInventory",
    )
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProductCreatedResponse(BaseModel):
    """Returned by POST /products with HTTP 201."""

    success: bool = True
    product_id: int = Field(serialization_alias="productId")


class ProductUpdatedResponse(BaseModel):
    """Returned by PUT /products/{id}."""

    success: bool = True
    message: str = "Product updated successfully"
