# =============================================================================
# core/services/conversation_service.py - Buyer/Seller Messaging
# =============================================================================
# A conversation links one buyer to one item; the item's owner is the
# other participant. There is at most one conversation per (item, buyer).
#
# Only the two participants may read or post; everyone else gets a
# not-found error so conversation IDs don't leak.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ConversationNotFoundError, ItemNotFoundError, OwnItemError
from lib.database import Database, Transaction

logger = logging.getLogger(__name__)

_CONVERSATION_COLUMNS = """
    conversations.id AS conversation_id,
    conversations.item_id,
    conversations.buyer_id,
    items.owner_id AS seller_id,
    items.title AS item_title,
    buyer.username AS buyer_name,
    seller.username AS seller_name
"""

_CONVERSATION_JOINS = """
    FROM conversations
    JOIN items ON items.id = conversations.item_id
    JOIN users buyer ON buyer.id = conversations.buyer_id
    JOIN users seller ON seller.id = items.owner_id
"""


class ConversationService:
    """Service for conversations and their messages."""

    def __init__(self, db: Database):
        self.db = db

    async def list_for_user(self, user_id: int) -> list[dict[str, Any]]:
        """
        Conversations where the user is buyer or seller.

        Returns:
            List of dicts with the participants, the item title and the
            latest message, most recent activity first
        """
        return await self.db.query(
            f"""
            SELECT {_CONVERSATION_COLUMNS},
                   (SELECT messages.body FROM messages
                    WHERE messages.conversation_id = conversations.id
                    ORDER BY messages.id DESC LIMIT 1) AS last_message,
                   (SELECT MAX(messages.id) FROM messages
                    WHERE messages.conversation_id = conversations.id) AS last_message_id
            {_CONVERSATION_JOINS}
            WHERE conversations.buyer_id = :user_id OR items.owner_id = :user_id
            ORDER BY last_message_id DESC, conversations.id DESC
            """,
            {"user_id": user_id},
        )

    async def get_for_participant(self, conversation_id: int, user_id: int) -> dict[str, Any]:
        """
        Get a conversation the user takes part in.

        Raises:
            ConversationNotFoundError: If it doesn't exist or the user isn't a participant
        """
        conversation = await self.db.fetch_one(
            f"""
            SELECT {_CONVERSATION_COLUMNS}
            {_CONVERSATION_JOINS}
            WHERE conversations.id = :conversation_id
            """,
            {"conversation_id": conversation_id},
        )
        if not conversation or user_id not in (conversation["buyer_id"], conversation["seller_id"]):
            raise ConversationNotFoundError(conversation_id)
        return conversation

    async def list_messages(self, conversation_id: int) -> list[dict[str, Any]]:
        """Messages of a conversation, oldest first."""
        return await self.db.query(
            """
            SELECT messages.id AS message_id,
                   messages.sender_id,
                   users.username AS sender_name,
                   messages.body,
                   messages.created_at
            FROM messages
            JOIN users ON users.id = messages.sender_id
            WHERE messages.conversation_id = :conversation_id
            ORDER BY messages.id
            """,
            {"conversation_id": conversation_id},
        )

    async def start(self, user_id: int, item_id: int, body: str) -> int:
        """
        Message the owner of an item.

        Reuses the existing conversation between this buyer and item.

        Returns:
            The conversation ID

        Raises:
            ItemNotFoundError: If the item doesn't exist
            OwnItemError: If the user owns the item
        """
        item = await self.db.fetch_one(
            "SELECT id, owner_id FROM items WHERE id = :item_id",
            {"item_id": item_id},
        )
        if not item:
            raise ItemNotFoundError(item_id)
        if item["owner_id"] == user_id:
            raise OwnItemError(item_id)

        async with self.db.transaction() as tx:
            existing = await tx.fetch_one(
                "SELECT id FROM conversations WHERE item_id = :item_id AND buyer_id = :buyer_id",
                {"item_id": item_id, "buyer_id": user_id},
            )
            if existing:
                conversation_id = existing["id"]
            else:
                created = await tx.fetch_one(
                    """
                    INSERT INTO conversations (item_id, buyer_id)
                    VALUES (:item_id, :buyer_id)
                    RETURNING id
                    """,
                    {"item_id": item_id, "buyer_id": user_id},
                )
                conversation_id = created["id"]
                logger.info(f"User {user_id} started conversation {conversation_id} about item {item_id}")

            await self._insert_message(tx, conversation_id, user_id, body)

        return conversation_id

    async def add_message(self, conversation_id: int, user_id: int, body: str) -> None:
        """
        Post a message to a conversation.

        Raises:
            ConversationNotFoundError: If the user isn't a participant
        """
        await self.get_for_participant(conversation_id, user_id)
        async with self.db.transaction() as tx:
            await self._insert_message(tx, conversation_id, user_id, body)

    @staticmethod
    async def _insert_message(tx: Transaction, conversation_id: int, sender_id: int, body: str) -> None:
        await tx.query(
            """
            INSERT INTO messages (conversation_id, sender_id, body)
            VALUES (:conversation_id, :sender_id, :body)
            """,
            {"conversation_id": conversation_id, "sender_id": sender_id, "body": body},
        )
