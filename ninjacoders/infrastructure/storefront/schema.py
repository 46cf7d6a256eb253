"""
SQL schema and catalogue seed for the storefront data store.

The DDL sticks to the subset shared by SQLite and PostgreSQL so the
same statements run in development, tests, and production.
"""

import logging
from pathlib import Path
from uuid import uuid4

from sqlalchemy import create_engine, make_url, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS products (
        id VARCHAR(36) PRIMARY KEY,
        sku VARCHAR(64) NOT NULL UNIQUE,
        name VARCHAR(200) NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        featured_image VARCHAR(255) NOT NULL DEFAULT '',
        requires_deposit BOOLEAN NOT NULL DEFAULT FALSE,
        price_cents INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS carts (
        id VARCHAR(36) PRIMARY KEY,
        status VARCHAR(20) NOT NULL,
        email VARCHAR(320),
        created_at VARCHAR(32) NOT NULL,
        checked_out_at VARCHAR(32)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cart_items (
        cart_id VARCHAR(36) NOT NULL REFERENCES carts (id),
        product_id VARCHAR(36) NOT NULL REFERENCES products (id),
        qty INTEGER NOT NULL CHECK (qty >= 1),
        position INTEGER NOT NULL,
        PRIMARY KEY (cart_id, product_id)
    )
    """,
)

DEFAULT_CATALOGUE = (
    {
        "sku": "NC-PY-101",
        "name": "Python Fundamentals",
        "description": "Two evenings of Python from zero: types, functions, and modules.",
        "featured_image": "/static/img/python-fundamentals.jpg",
        "requires_deposit": False,
        "price_cents": 19_900,
    },
    {
        "sku": "NC-WEB-201",
        "name": "Building Web APIs",
        "description": "Design, test, and ship an HTTP API in a weekend.",
        "featured_image": "/static/img/web-apis.jpg",
        "requires_deposit": False,
        "price_cents": 34_900,
    },
    {
        "sku": "NC-BOOT-301",
        "name": "Ninja Bootcamp",
        "description": "Five-day on-site bootcamp. A deposit secures your seat.",
        "featured_image": "/static/img/bootcamp.jpg",
        "requires_deposit": True,
        "price_cents": 149_900,
    },
)


def create_store_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the store.

    For file-backed SQLite the parent directory is created first and
    the connection may be shared across the request threadpool.
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def init_schema(engine: Engine) -> None:
    """Create the store tables if they do not exist yet."""
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info("Store schema ready.")


def seed_catalogue(engine: Engine, products=DEFAULT_CATALOGUE) -> int:
    """Insert the given products if the catalogue is empty.

    Returns:
        Number of products inserted.
    """
    with engine.begin() as conn:
        count = conn.execute(text("SELECT COUNT(*) FROM products")).scalar_one()
        if count:
            return 0
        conn.execute(
            text(
                """
                INSERT INTO products
                    (id, sku, name, description, featured_image, requires_deposit, price_cents)
                VALUES
                    (:id, :sku, :name, :description, :featured_image, :requires_deposit, :price_cents)
                """
            ),
            [{"id": product.get("id") or str(uuid4()), **product} for product in products],
        )
    logger.info("Seeded %d catalogue products.", len(products))
    return len(products)
