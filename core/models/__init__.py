# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - item.py: Catalogue responses and the new-listing form
# - conversation.py: Message and conversation-start forms
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Item Models - Catalogue and listings
# -----------------------------------------------------------------------------
from .item import (
    ItemDetail,
    ItemList,
    ItemSummary,
    ListingForm,
)

# -----------------------------------------------------------------------------
# Conversation Models - Buyer/seller messaging
# -----------------------------------------------------------------------------
from .conversation import (
    ConversationStartForm,
    MessageForm,
)

__all__ = [
    # Item
    "ItemDetail",
    "ItemList",
    "ItemSummary",
    "ListingForm",
    # Conversation
    "ConversationStartForm",
    "MessageForm",
]
