"""
Storefront Backend — Product Route Handlers
=============================================

What:  GET /products, POST /products, PUT /products/{id}.
How:   Thin handlers: parse the body, call ProductStore, shape the response.
Who:   Storefront frontend (listing) and admin tooling (create/update).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from storefront.dependencies import get_product_store
from storefront.schemas.common import ErrorResponse
from storefront.schemas.product import (
    ProductCreate,
    ProductCreatedResponse,
    ProductResponse,
    ProductUpdate,
    ProductUpdatedResponse,
)
from storefront.services.product_store import ProductStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all products",
)
async def list_products(
    store: ProductStore = Depends(get_product_store),
) -> List[ProductResponse]:
    products = await store.list_all()
    return [ProductResponse.model_validate(product) for product in products]


@router.post(
    "/products",
    status_code=201,
    response_model=ProductCreatedResponse,
    responses={
        201: {"description": "Product created", "model": ProductCreatedResponse},
        400: {"description": "Invalid product or duplicate id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Add a product",
)
async def create_product(
    payload: ProductCreate,
    store: ProductStore = Depends(get_product_store),
) -> ProductCreatedResponse:
    product_id = await store.insert_one(payload)
    return ProductCreatedResponse(product_id=product_id)


@router.put(
    "/products/{product_id}",
    response_model=ProductUpdatedResponse,
    responses={
        400: {"description": "Invalid fields", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update fields of a product",
    description="Merges the supplied fields into the stored product; omitted fields are left unchanged.",
)
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    store: ProductStore = Depends(get_product_store),
) -> ProductUpdatedResponse:
    await store.update_by_id(product_id, payload.changes())
    return ProductUpdatedResponse()
