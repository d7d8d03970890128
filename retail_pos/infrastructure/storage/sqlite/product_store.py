"""SQLite implementation of catalog storage."""

from datetime import UTC, datetime
from typing import Any

import aiosqlite

from retail_pos.config import get_logger
from retail_pos.core.entities.product import Product, ProductStatus
from retail_pos.core.exceptions import (
    InsufficientStockError,
    ProductInUseError,
    ProductNotFoundError,
    ValidationError,
)
from retail_pos.core.interfaces.catalog_store import ICatalogStore
from retail_pos.core.interfaces.change_feed import IChangeFeed
from retail_pos.core.services.change_feed import TOPIC_PRODUCTS
from retail_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from retail_pos.infrastructure.storage.sqlite.rows import parse_timestamp

logger = get_logger(__name__)

# Columns an admin edit may change
UPDATABLE_FIELDS = ("name", "category", "sale_price", "stock_quantity", "status")


async def fetch_product(conn: aiosqlite.Connection, product_id: int) -> Product | None:
    """Read a product on an already-acquired connection."""
    cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
    row = await cursor.fetchone()
    if row is None:
        return None
    return SQLiteCatalogStore._row_to_product(row)


async def decrement_stock(
    conn: aiosqlite.Connection,
    product_id: int,
    quantity: int,
    now: datetime | None = None,
) -> None:
    """
    Guarded stock decrement on an open transaction.

    The WHERE clause refuses to take stock below zero, so a lost race
    surfaces as InsufficientStockError instead of oversold stock.
    """
    if quantity <= 0:
        raise ValidationError("quantity", "Quantity must be a positive integer", quantity)

    now = now or datetime.now(UTC)
    cursor = await conn.execute(
        """
        UPDATE products
        SET stock_quantity = stock_quantity - ?, updated_at = ?
        WHERE id = ? AND stock_quantity >= ?
        """,
        (quantity, now.isoformat(), product_id, quantity),
    )
    if cursor.rowcount == 1:
        return

    product = await fetch_product(conn, product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    raise InsufficientStockError(
        product_id=product_id,
        name=product.name,
        requested=quantity,
        available=product.stock_quantity,
    )


class SQLiteCatalogStore(ICatalogStore):
    """SQLite implementation of product storage."""

    def __init__(self, change_feed: IChangeFeed | None = None):
        self._change_feed = change_feed

    def _notify(self) -> None:
        if self._change_feed is not None:
            self._change_feed.notify(TOPIC_PRODUCTS)

    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        async with get_connection() as conn:
            return await fetch_product(conn, product_id)

    async def list_products(
        self,
        search: str | None = None,
        category: str | None = None,
        status: ProductStatus | None = None,
    ) -> list[Product]:
        """List products, newest first, optionally filtered."""
        sql = "SELECT * FROM products WHERE 1=1"
        params: list[Any] = []

        if search:
            sql += " AND (name LIKE ? OR category LIKE ?)"
            params.extend([f"%{search}%", f"%{search}%"])
        if category:
            sql += " AND category = ?"
            params.append(category)
        if status:
            sql += " AND status = ?"
            params.append(ProductStatus(status).value)

        sql += " ORDER BY created_at DESC, id DESC"

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def list_active(self) -> list[Product]:
        """List products that can be sold, by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE status = ? ORDER BY name, id",
                (ProductStatus.ACTIVE.value,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def list_low_stock(self, threshold: int = 20) -> list[Product]:
        """List products with stock at or below the threshold."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM products
                WHERE stock_quantity <= ?
                ORDER BY stock_quantity ASC, id
                """,
                (threshold,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def create_product(self, product: Product) -> Product:
        """Create a new product."""
        now = datetime.now(UTC)
        product.created_at = now
        product.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO products (
                    name, category, sale_price, stock_quantity,
                    status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.name,
                    product.category,
                    product.sale_price,
                    product.stock_quantity,
                    product.status.value,
                    product.created_at.isoformat(),
                    product.updated_at.isoformat(),
                ),
            )
            product.id = cursor.lastrowid

        logger.info("product_created", product_id=product.id, name=product.name)
        self._notify()
        return product

    async def update_product(self, product_id: int, changes: dict[str, Any]) -> Product:
        """Apply a partial update and return the stored product."""
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update product fields: {sorted(unknown)}")

        async with get_transaction() as conn:
            existing = await fetch_product(conn, product_id)
            if existing is None:
                raise ProductNotFoundError(product_id)

            # Re-validate the merged record so CHECK-style rules hold before writing
            merged = Product.model_validate(
                {**existing.model_dump(), **changes, "updated_at": datetime.now(UTC)}
            )
            await conn.execute(
                """
                UPDATE products SET
                    name = ?,
                    category = ?,
                    sale_price = ?,
                    stock_quantity = ?,
                    status = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    merged.name,
                    merged.category,
                    merged.sale_price,
                    merged.stock_quantity,
                    merged.status.value,
                    merged.updated_at.isoformat(),
                    product_id,
                ),
            )

        logger.info("product_updated", product_id=product_id, fields=sorted(changes))
        self._notify()
        return merged

    async def delete_product(self, product_id: int) -> None:
        """Delete a product that no invoice line references."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM products WHERE id = ?", (product_id,)
                )
                if cursor.rowcount == 0:
                    raise ProductNotFoundError(product_id)
        except aiosqlite.IntegrityError as e:
            raise ProductInUseError(product_id) from e

        logger.info("product_deleted", product_id=product_id)
        self._notify()

    async def decrement_stock(self, product_id: int, quantity: int) -> Product:
        """Remove quantity from stock in its own transaction."""
        async with get_transaction() as conn:
            await decrement_stock(conn, product_id, quantity)
            product = await fetch_product(conn, product_id)

        logger.info(
            "stock_decremented",
            product_id=product_id,
            quantity=quantity,
            remaining=product.stock_quantity if product else None,
        )
        self._notify()
        return product  # type: ignore[return-value]

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            sale_price=float(row["sale_price"]),
            stock_quantity=int(row["stock_quantity"]),
            status=ProductStatus(row["status"]),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
