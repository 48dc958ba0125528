# =============================================================================
# core/services/item_service.py - Item Business Logic
# =============================================================================
# Handles item queries for the home page, the public catalogue (/books) and
# the seller's own listings (/listings).
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ItemNotFoundError, NotOwnerError
from lib.database import Database

logger = logging.getLogger(__name__)


# One row per item/photo pair: an item with three photos yields three rows
HOME_QUERY = """
    SELECT items.id AS item_id,
           items.title AS item_title,
           items.price AS item_price,
           users.username AS seller,
           items.created_at AS post_date,
           photo_urls.photo_url AS item_photo
    FROM items
    JOIN users ON users.id = items.owner_id
    JOIN photo_urls ON photo_urls.item_id = items.id
    WHERE users.super_seller = true
      AND items.sold_status = false
    ORDER BY items.id, photo_urls.id
"""

_FIRST_PHOTO = """
    (SELECT photo_urls.photo_url FROM photo_urls
     WHERE photo_urls.item_id = items.id
     ORDER BY photo_urls.id LIMIT 1)
"""

_SUMMARY_COLUMNS = f"""
    items.id AS item_id,
    items.title,
    items.price,
    users.username AS seller,
    {_FIRST_PHOTO} AS photo_url,
    items.sold_status,
    items.created_at
"""


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ItemService:
    """
    Service for item operations.

    Provides a clean interface between routes and the items/photo_urls tables.
    """

    def __init__(self, db: Database):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_home_rows(self) -> list[dict[str, Any]]:
        """Unsold items of super sellers, one row per photo."""
        return await self.db.query(HOME_QUERY)

    async def search(
        self,
        q: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Search unsold items.

        Args:
            q: Case-insensitive substring of the title
            min_price: Lowest price in cents (inclusive)
            max_price: Highest price in cents (inclusive)
            limit: Page size
            offset: Rows to skip

        Returns:
            List of item summary dicts, newest first
        """
        conditions = ["items.sold_status = false"]
        params: dict[str, Any] = {"limit": limit, "offset": offset}

        if q:
            conditions.append("LOWER(items.title) LIKE :pattern ESCAPE '\\'")
            params["pattern"] = f"%{escape_like(q.lower())}%"
        if min_price is not None:
            conditions.append("items.price >= :min_price")
            params["min_price"] = min_price
        if max_price is not None:
            conditions.append("items.price <= :max_price")
            params["max_price"] = max_price

        sql = f"""
            SELECT {_SUMMARY_COLUMNS}
            FROM items
            JOIN users ON users.id = items.owner_id
            WHERE {" AND ".join(conditions)}
            ORDER BY items.created_at DESC, items.id DESC
            LIMIT :limit OFFSET :offset
        """
        return await self.db.query(sql, params)

    async def get_item(self, item_id: int) -> dict[str, Any]:
        """
        Get one item with all its photos.

        Raises:
            ItemNotFoundError: If the item doesn't exist
        """
        item = await self.db.fetch_one(
            f"""
            SELECT {_SUMMARY_COLUMNS}, items.owner_id, items.description
            FROM items
            JOIN users ON users.id = items.owner_id
            WHERE items.id = :item_id
            """,
            {"item_id": item_id},
        )
        if not item:
            raise ItemNotFoundError(item_id)

        photos = await self.db.query(
            "SELECT photo_url FROM photo_urls WHERE item_id = :item_id ORDER BY id",
            {"item_id": item_id},
        )
        item["photos"] = [photo["photo_url"] for photo in photos]
        return item

    async def list_for_owner(self, owner_id: int) -> list[dict[str, Any]]:
        """All items of one seller, sold or not, newest first."""
        return await self.db.query(
            f"""
            SELECT {_SUMMARY_COLUMNS}
            FROM items
            JOIN users ON users.id = items.owner_id
            WHERE items.owner_id = :owner_id
            ORDER BY items.created_at DESC, items.id DESC
            """,
            {"owner_id": owner_id},
        )

    async def get_owned_item(self, item_id: int, user_id: int) -> dict[str, Any]:
        """
        Get an item that must belong to `user_id`.

        Raises:
            ItemNotFoundError: If the item doesn't exist
            NotOwnerError: If someone else owns it
        """
        item = await self.db.fetch_one(
            "SELECT id AS item_id, owner_id FROM items WHERE id = :item_id",
            {"item_id": item_id},
        )
        if not item:
            raise ItemNotFoundError(item_id)
        if item["owner_id"] != user_id:
            raise NotOwnerError(item_id)
        return item

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_item(
        self,
        owner_id: int,
        title: str,
        price: int,
        description: str | None = None,
        photo_url: str | None = None,
    ) -> int:
        """
        Create a listing and its photo in one transaction.

        Args:
            owner_id: Seller's user ID
            title: Listing title
            price: Price in cents
            description: Optional description
            photo_url: Optional photo URL

        Returns:
            The new item ID
        """
        async with self.db.transaction() as tx:
            row = await tx.fetch_one(
                """
                INSERT INTO items (owner_id, title, description, price)
                VALUES (:owner_id, :title, :description, :price)
                RETURNING id
                """,
                {
                    "owner_id": owner_id,
                    "title": title,
                    "description": description,
                    "price": price,
                },
            )
            item_id = row["id"]

            if photo_url:
                await tx.query(
                    "INSERT INTO photo_urls (item_id, photo_url) VALUES (:item_id, :photo_url)",
                    {"item_id": item_id, "photo_url": photo_url},
                )

        logger.info(f"Created item {item_id} for user {owner_id}")
        return item_id

    async def mark_sold(self, item_id: int, user_id: int) -> None:
        """
        Mark one of the user's items as sold.

        Raises:
            ItemNotFoundError: If the item doesn't exist
            NotOwnerError: If someone else owns it
        """
        await self.get_owned_item(item_id, user_id)
        await self.db.query(
            "UPDATE items SET sold_status = true WHERE id = :item_id",
            {"item_id": item_id},
        )
        logger.info(f"Item {item_id} marked as sold by user {user_id}")

    async def delete_item(self, item_id: int, user_id: int) -> None:
        """
        Delete one of the user's items (photos, favorites and
        conversations go with it).

        Raises:
            ItemNotFoundError: If the item doesn't exist
            NotOwnerError: If someone else owns it
        """
        await self.get_owned_item(item_id, user_id)
        await self.db.query("DELETE FROM items WHERE id = :item_id", {"item_id": item_id})
        logger.info(f"Item {item_id} deleted by user {user_id}")
