"""
Storefront Backend — FastAPI Dependencies
===========================================

What:  Providers that hand route handlers their service objects.
How:   The lifespan stores the connected Database on `app.state.database`;
       each provider builds the requested service around it per request.

Example usage in a route:
    @router.get("/products")
    async def list_products(store: ProductStore = Depends(get_product_store)):
        return await store.list_all()
"""

from fastapi import Depends, Request

from storefront.database import Database
from storefront.services.order_log import OrderLog
from storefront.services.order_processor import OrderProcessor
from storefront.services.product_store import ProductStore


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database has not been initialised by the application lifespan")
    return database


def get_product_store(database: Database = Depends(get_database)) -> ProductStore:
    return ProductStore(database)


def get_order_log(database: Database = Depends(get_database)) -> OrderLog:
    return OrderLog(database)


def get_order_processor(
    database: Database = Depends(get_database),
    order_log: OrderLog = Depends(get_order_log),
) -> OrderProcessor:
    return OrderProcessor(database, order_log)
