# =============================================================================
# core/services/favorite_service.py - Favorites
# =============================================================================
# A user can favorite any item once; adding or removing twice is a no-op.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ItemNotFoundError
from lib.database import Database

logger = logging.getLogger(__name__)


class FavoriteService:
    """Service for the favorites table."""

    def __init__(self, db: Database):
        self.db = db

    async def list_for_user(self, user_id: int) -> list[dict[str, Any]]:
        """Favorited items of one user, most recently favorited first."""
        return await self.db.query(
            """
            SELECT items.id AS item_id,
                   items.title,
                   items.price,
                   items.sold_status,
                   users.username AS seller,
                   (SELECT photo_urls.photo_url FROM photo_urls
                    WHERE photo_urls.item_id = items.id
                    ORDER BY photo_urls.id LIMIT 1) AS photo_url,
                   favorites.created_at AS favorited_at
            FROM favorites
            JOIN items ON items.id = favorites.item_id
            JOIN users ON users.id = items.owner_id
            WHERE favorites.user_id = :user_id
            ORDER BY favorites.id DESC
            """,
            {"user_id": user_id},
        )

    async def add(self, user_id: int, item_id: int) -> None:
        """
        Favorite an item.

        Raises:
            ItemNotFoundError: If the item doesn't exist
        """
        item = await self.db.fetch_one(
            "SELECT id FROM items WHERE id = :item_id",
            {"item_id": item_id},
        )
        if not item:
            raise ItemNotFoundError(item_id)

        await self.db.query(
            """
            INSERT INTO favorites (user_id, item_id)
            VALUES (:user_id, :item_id)
            ON CONFLICT (user_id, item_id) DO NOTHING
            """,
            {"user_id": user_id, "item_id": item_id},
        )
        logger.debug(f"User {user_id} favorited item {item_id}")

    async def remove(self, user_id: int, item_id: int) -> None:
        """Un-favorite an item (no error if it wasn't a favorite)."""
        await self.db.query(
            "DELETE FROM favorites WHERE user_id = :user_id AND item_id = :item_id",
            {"user_id": user_id, "item_id": item_id},
        )
        logger.debug(f"User {user_id} removed favorite {item_id}")
