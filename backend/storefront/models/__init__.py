# Importing the models registers them with Base.metadata
from storefront.models.order import Order
from storefront.models.product import Product

__all__ = ["Order", "Product"]
