"""
Storefront Backend — Search Route Handler
===========================================

What:  GET /search?q=<text>: free-text product search for the storefront.
How:   Rejects a missing or empty `q`, then delegates to ProductStore.search.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from storefront.dependencies import get_product_store
from storefront.exceptions import ValidationError
from storefront.schemas.common import ErrorResponse
from storefront.schemas.product import ProductResponse
from storefront.services.product_store import ProductStore

router = APIRouter(tags=["Search"])


@router.get(
    "/search",
    response_model=List[ProductResponse],
    responses={
        400: {"description": "Missing search query", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Search products",
    description=(
        "Case-insensitive substring match on title, description, location and "
        "price; exact match on availableInventory when q is an integer."
    ),
)
async def search_products(
    q: Optional[str] = Query(default=None, description="Search text"),
    store: ProductStore = Depends(get_product_store),
) -> List[ProductResponse]:
    if not q:
        raise ValidationError(message="Search query is required", field="q")
    products = await store.search(q)
    return [ProductResponse.model_validate(product) for product in products]
