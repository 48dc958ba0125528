# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .conversation_service import ConversationService
from .favorite_service import FavoriteService
from .item_service import ItemService
from .user_service import UserService

__all__ = [
    "ConversationService",
    "FavoriteService",
    "ItemService",
    "UserService",
]
