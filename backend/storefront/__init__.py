"""
Storefront Backend — Application Package Initializer
=====================================================

What: REST backend for the storefront: products, orders and product search.
Who:  Imported by uvicorn (storefront.main:app), Alembic and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │   Services (ProductStore, OrderLog, │  ← Business rules, transactions
    │            OrderProcessor)          │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Engine + session factory
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
