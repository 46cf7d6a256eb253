"""
Adapter: SQL data store for products and carts.

Implements the DataStoreGateway port on top of a SQLAlchemy engine.
Each per-cart mutation is a single statement or a single transaction,
which is what makes concurrent requests on the same cart safe.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator, Optional
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ninjacoders.domain.storefront.entities import (
    CENTS,
    Cart,
    CartStatus,
    LineItem,
    Product,
)
from ninjacoders.domain.storefront.errors import DataStoreError
from ninjacoders.domain.storefront.ports import DataStoreGateway

logger = logging.getLogger(__name__)

_PRODUCT_COLUMNS = (
    "p.id, p.sku, p.name, p.description, p.featured_image, "
    "p.requires_deposit, p.price_cents"
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _row_to_product(row) -> Product:
    return Product(
        id=row.id,
        sku=row.sku,
        name=row.name,
        description=row.description,
        featured_image=row.featured_image,
        requires_deposit=bool(row.requires_deposit),
        price=(Decimal(row.price_cents) / 100).quantize(CENTS),
    )


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Data store failed to %s: %s", operation, exc)
        raise DataStoreError(f"Data store failed to {operation}") from exc


class SqlDataStoreGateway(DataStoreGateway):
    """Persists the catalogue and carts with raw SQL through SQLAlchemy.

    Implements the DataStoreGateway port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    def get_products(self) -> list[Product]:
        query = text(f"SELECT {_PRODUCT_COLUMNS} FROM products p ORDER BY p.name")
        with _translate_errors("list products"), self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_product(r) for r in rows]

    def get_product(self, product_id: str) -> Optional[Product]:
        query = text(f"SELECT {_PRODUCT_COLUMNS} FROM products p WHERE p.id = :id")
        with _translate_errors("load product"), self._engine.connect() as conn:
            row = conn.execute(query, {"id": product_id}).fetchone()
        return _row_to_product(row) if row else None

    # ------------------------------------------------------------------
    # Carts
    # ------------------------------------------------------------------

    def create_cart(self) -> str:
        cart_id = str(uuid4())
        query = text(
            "INSERT INTO carts (id, status, created_at) VALUES (:id, :status, :created_at)"
        )
        with _translate_errors("create cart"), self._engine.begin() as conn:
            conn.execute(
                query,
                {"id": cart_id, "status": CartStatus.ACTIVE.value, "created_at": _now()},
            )
        return cart_id

    def get_cart(self, cart_id: str) -> Optional[Cart]:
        with _translate_errors("load cart"), self._engine.connect() as conn:
            return self._load_cart(conn, cart_id)

    def add_item(self, cart_id: str, product_id: str) -> bool:
        """Append the product at the end of the cart, or bump its quantity.

        The position is computed inside the same statement so that two
        concurrent adds of different products never share a slot. The
        row source is the cart itself, so nothing is inserted unless the
        cart is still active when the statement runs.
        """
        query = text(
            """
            INSERT INTO cart_items (cart_id, product_id, qty, position)
            SELECT c.id, :product_id, 1,
                   (SELECT COALESCE(MAX(ci.position), 0) + 1
                    FROM cart_items ci WHERE ci.cart_id = c.id)
            FROM carts c
            WHERE c.id = :cart_id AND c.status = :status
            ON CONFLICT (cart_id, product_id)
            DO UPDATE SET qty = cart_items.qty + 1
            """
        )
        params = {
            "cart_id": cart_id,
            "product_id": product_id,
            "status": CartStatus.ACTIVE.value,
        }
        with _translate_errors("add cart item"), self._engine.begin() as conn:
            result = conn.execute(query, params)
        return result.rowcount > 0

    def set_item_qty(self, cart_id: str, product_id: str, qty: int) -> bool:
        query = text(
            """
            UPDATE cart_items
            SET qty = :qty
            WHERE cart_id = :cart_id
              AND product_id = :product_id
              AND EXISTS (
                  SELECT 1 FROM carts c WHERE c.id = :cart_id AND c.status = :status
              )
            """
        )
        params = {
            "qty": qty,
            "cart_id": cart_id,
            "product_id": product_id,
            "status": CartStatus.ACTIVE.value,
        }
        with _translate_errors("update cart item"), self._engine.begin() as conn:
            result = conn.execute(query, params)
        return result.rowcount > 0

    def delete_item(self, cart_id: str, product_id: str) -> None:
        query = text(
            """
            DELETE FROM cart_items
            WHERE cart_id = :cart_id
              AND product_id = :product_id
              AND EXISTS (
                  SELECT 1 FROM carts c WHERE c.id = :cart_id AND c.status = :status
              )
            """
        )
        params = {
            "cart_id": cart_id,
            "product_id": product_id,
            "status": CartStatus.ACTIVE.value,
        }
        with _translate_errors("delete cart item"), self._engine.begin() as conn:
            conn.execute(query, params)

    def checkout(self, cart_id: str, email: str) -> Optional[Cart]:
        """Mark the cart checked out, then snapshot it, in one transaction.

        The status update is the first statement so the transaction holds
        the write lock before the items are read. Adds that race with the
        checkout either land before it and appear in the snapshot, or find
        the cart checked out and write nothing.
        """
        finalize = text(
            """
            UPDATE carts
            SET status = :checked_out, email = :email, checked_out_at = :now
            WHERE id = :cart_id AND status = :active
            """
        )
        with _translate_errors("check out cart"), self._engine.begin() as conn:
            result = conn.execute(
                finalize,
                {
                    "checked_out": CartStatus.CHECKED_OUT.value,
                    "active": CartStatus.ACTIVE.value,
                    "email": email,
                    "now": _now(),
                    "cart_id": cart_id,
                },
            )
            if result.rowcount == 0:
                return None
            return self._load_cart(conn, cart_id, CartStatus.CHECKED_OUT)

    def ping(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Data store ping failed: %s", exc)
            return False
        return True

    def _load_cart(
        self, conn: Connection, cart_id: str, status: CartStatus = CartStatus.ACTIVE
    ) -> Optional[Cart]:
        cart_row = conn.execute(
            text("SELECT id FROM carts WHERE id = :id AND status = :status"),
            {"id": cart_id, "status": status.value},
        ).fetchone()
        if cart_row is None:
            return None

        rows = conn.execute(
            text(
                f"""
                SELECT {_PRODUCT_COLUMNS}, ci.qty
                FROM cart_items ci
                JOIN products p ON p.id = ci.product_id
                WHERE ci.cart_id = :cart_id
                ORDER BY ci.position
                """
            ),
            {"cart_id": cart_id},
        ).fetchall()
        return Cart(
            id=cart_row.id,
            items=[LineItem(product=_row_to_product(r), qty=r.qty) for r in rows],
        )
