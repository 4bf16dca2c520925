"""
Storefront Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error taxonomy of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by the product store and by route handlers; caught by handlers.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    ├── InsufficientInventoryError   → 400 Bad Request (business rule)
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input fails validation.

    When:    Missing order fields, mismatched line items, empty search query,
             duplicate product id, empty update body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Search query is required",
            "details": {"field": "q"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(StorefrontError):
    """
    Raised when a requested resource does not exist.

    When:    PUT /products/{id} or an order line item with an unknown product id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with ID {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class InsufficientInventoryError(StorefrontError):
    """
    Raised when an order asks for more units than a product has available.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        product_id: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["product_id"] = product_id
        super().__init__(
            message=f"Insufficient inventory for product ID {product_id}",
            context=ctx,
        )
        self.product_id = product_id


class DatabaseError(StorefrontError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost, failed commit, serialization failure, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    travel in `context` and are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
