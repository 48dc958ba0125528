# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains one router factory per resource:
# - home.py: Home page with featured items
# - health.py: Health check endpoints
# - books.py: Public item catalogue (JSON)
# - items.py: Item page with the message-the-seller form
# - listings.py: Seller's own listings
# - conversations.py: Buyer/seller messaging
# - favorites.py: Favorited items
#
# Each module exposes create_router(db, ...) and is mounted in main.py
# with a URL prefix.
# =============================================================================

from . import books
from . import conversations
from . import favorites
from . import health
from . import home
from . import items
from . import listings

__all__ = [
    "books",
    "conversations",
    "favorites",
    "health",
    "home",
    "items",
    "listings",
]
