"""
Storefront Backend — Product Store
====================================

What:  Single-record product operations: list, insert, partial update, search.
How:   Each method opens its own session from the injected Database, runs one
       statement (plus its commit) and translates driver errors into
       application exceptions.
Who:   Product and search route handlers.

Search semantics (GET /search?q=...):
    title / description / location   case-insensitive substring
    price                            substring of its textual form
    availableInventory               exact match on the leading integer of q, if any
    Any one criterion is enough; results are ordered by product id.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy import String, cast, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storefront.database import Database
from storefront.exceptions import DatabaseError, NotFoundError, ValidationError
from storefront.models.product import Product, fits_integer_column
from storefront.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int_query(query: str) -> Optional[int]:
    """
    Leading integer of the query, or None when it does not start with one.

    Examples: "5" -> 5, " 5 units" -> 5, "1.5" -> 1, "1_000" -> 1, "abc" -> None
    """
    match = _LEADING_INT.match(query)
    if match is None:
        return None
    return int(match.group(1))


class ProductStore:
    """
    Product collection accessor.

    Error Handling Strategy:
        Missing products raise NotFoundError, rejected input raises
        ValidationError, everything the driver raises is wrapped in
        DatabaseError with the driver error type in its context.
    """

    def __init__(self, database: Database):
        self._database = database

    async def list_all(self) -> List[Product]:
        """All products ordered by id."""
        try:
            async with self._database.session() as session:
                result = await session.execute(select(Product).order_by(Product.id))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching products",
                context={"error_type": type(e).__name__},
            )

    async def insert_one(self, payload: ProductCreate) -> int:
        """
        Store a new product.

        Returns:
            The id of the stored product.

        Raises:
            ValidationError: A product with the same id already exists.
            DatabaseError: The insert failed for any other reason.
        """
        product = Product(
            id=payload.id,
            title=payload.title,
            description=payload.description,
            location=payload.location,
            price=payload.price,
            available_inventory=payload.available_inventory,
            image=payload.image,
        )
        try:
            async with self._database.session() as session:
                async with session.begin():
                    session.add(product)
        except IntegrityError:
            raise ValidationError(
                message=f"Product with ID {payload.id} already exists",
                field="id",
                context={"product_id": payload.id},
            )
        except SQLAlchemyError as e:
            logger.error("Database error adding product %s: %s", payload.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error adding product",
                context={"product_id": payload.id, "error_type": type(e).__name__},
            )

        logger.info("Product %s added (inventory=%d)", product.id, product.available_inventory)
        return product.id

    async def update_by_id(self, product_id: int, fields: Dict[str, Any]) -> None:
        """
        Merge `fields` into the stored product.

        Args:
            product_id: Product to update.
            fields: ORM attribute names mapped to new values.

        Raises:
            ValidationError: No fields given, or an attempt to change the id.
            NotFoundError: No product has this id.
            DatabaseError: The update failed.
        """
        if not fields:
            raise ValidationError(message="No fields to update", context={"product_id": product_id})
        if "id" in fields:
            raise ValidationError(message="Product ID cannot be changed", field="id")
        if not fits_integer_column(product_id):
            raise NotFoundError(resource="product", resource_id=product_id)

        try:
            async with self._database.session() as session:
                async with session.begin():
                    result = await session.execute(
                        update(Product).where(Product.id == product_id).values(**fields)
                    )
                    matched = result.rowcount
        except IntegrityError:
            raise ValidationError(
                message="Update violates product constraints",
                context={"product_id": product_id, "fields": sorted(fields)},
            )
        except SQLAlchemyError as e:
            logger.error("Error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error updating product",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

        if matched == 0:
            raise NotFoundError(resource="product", resource_id=product_id)

        logger.info("Product %s updated: %s", product_id, ", ".join(sorted(fields)))

    async def search(self, query: str) -> List[Product]:
        """
        Products matching `query` on any searchable field.

        Query plan:
            SELECT * FROM products
            WHERE lower(title) LIKE lower('%q%') OR ... OR available_inventory = :n
            ORDER BY id
        """
        criteria = [
            Product.title.icontains(query, autoescape=True),
            Product.description.icontains(query, autoescape=True),
            Product.location.icontains(query, autoescape=True),
            cast(Product.price, String).icontains(query, autoescape=True),
        ]
        as_int = parse_int_query(query)
        if as_int is not None and fits_integer_column(as_int):
            criteria.append(Product.available_inventory == as_int)

        try:
            async with self._database.session() as session:
                result = await session.execute(
                    select(Product).where(or_(*criteria)).order_by(Product.id)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error searching products for %r: %s", query, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to search products",
                context={"error_type": type(e).__name__},
            )
