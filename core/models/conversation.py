# =============================================================================
# core/models/conversation.py - Conversation Schemas
# =============================================================================
# A conversation is between one buyer and the owner of one item.
# Messages belong to a conversation and are shown oldest first.
# =============================================================================

from pydantic import BaseModel, Field, field_validator

from lib.schema import MAX_INTEGER


class MessageForm(BaseModel):
    """Body of a message posted to an existing conversation."""

    body: str = Field(..., min_length=1, max_length=2000)

    @field_validator("body")
    @classmethod
    def strip_body(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be blank")
        return value


class ConversationStartForm(MessageForm):
    """
    First message about an item.

    Example:
        {"item_id": 3, "body": "Is this still available?"}
    """

    item_id: int = Field(..., ge=1, le=MAX_INTEGER)
