"""
Storefront Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own file-backed SQLite database (sqlite+aiosqlite)
       created from the ORM metadata, so services run real SQL and real
       transactions without a PostgreSQL server.

Fixture Hierarchy (all function-scoped):
    ├── database:          connected Database on a fresh SQLite file
    ├── seeded_database:   database + SAMPLE_PRODUCTS
    ├── product_store:     ProductStore on seeded_database
    ├── order_processor:   OrderProcessor on seeded_database
    ├── inventory_of:      reads a product's inventory
    ├── order_count:       counts stored orders
    ├── static_dirs:       temporary public/ and images/ roots
    └── test_client:       HTTPX AsyncClient bound to the FastAPI app
"""

import os

# Override settings for testing BEFORE any storefront imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "true"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from storefront.config import settings
from storefront.database import Database
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.services.order_processor import OrderProcessor
from storefront.services.product_store import ProductStore


SAMPLE_PRODUCTS = [
    {
        "id": 1,
        "title": "Math Tutoring",
        "description": "Weekly algebra and geometry sessions",
        "location": "London",
        "price": 100.0,
        "available_inventory": 5,
        "image": "math.png",
    },
    {
        "id": 2,
        "title": "English Club",
        "description": "Reading and creative writing",
        "location": "Oxford",
        "price": 80.0,
        "available_inventory": 3,
        "image": None,
    },
    {
        "id": 3,
        "title": "Music Lessons",
        "description": "Piano for beginners",
        "location": "Hendon",
        "price": 90.0,
        "available_inventory": 5,
        "image": None,
    },
]


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a connected Database backed by a temporary SQLite file.

    A file (not :memory:) gives each session its own connection, so
    concurrent transactions behave like they do against a real server.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}")
    await db.connect(create_tables=True)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def seeded_database(database):
    async with database.session() as session:
        async with session.begin():
            session.add_all([Product(**data) for data in SAMPLE_PRODUCTS])
    return database


@pytest.fixture
def product_store(seeded_database):
    return ProductStore(seeded_database)


@pytest.fixture
def order_processor(seeded_database):
    return OrderProcessor(seeded_database)


@pytest.fixture
def inventory_of(seeded_database):
    """
    Returns an async function reading a product's inventory in a fresh session.

    Usage:
        assert await inventory_of(1) == 5
    """
    async def _inventory_of(product_id: int) -> int:
        async with seeded_database.session() as session:
            result = await session.execute(
                select(Product.available_inventory).where(Product.id == product_id)
            )
            return result.scalar_one()

    return _inventory_of


@pytest.fixture
def order_count(seeded_database):
    """Returns an async function counting stored orders."""
    async def _order_count() -> int:
        async with seeded_database.session() as session:
            result = await session.execute(select(Order))
            return len(result.scalars().all())

    return _order_count


@pytest.fixture
def static_dirs(tmp_path, monkeypatch):
    """
    Points the static routes at temporary public/ and images/ directories.
    """
    public = tmp_path / "public"
    images = tmp_path / "images"
    public.mkdir()
    images.mkdir()
    (public / "index.html").write_text("<h1>Storefront</h1>")
    (public / "app.js").write_text("console.log('storefront');")
    (images / "math.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (tmp_path / "secret.txt").write_text("outside the roots")
    monkeypatch.setattr(settings, "public_root", str(public))
    monkeypatch.setattr(settings, "images_root", str(images))
    return public, images


@pytest_asyncio.fixture
async def test_client(seeded_database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the seeded Database is
    attached to app.state directly.
    """
    from storefront.main import create_app

    app = create_app()
    app.state.database = seeded_database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
