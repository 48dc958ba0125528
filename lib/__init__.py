# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - database.py: Pooled async database handle and error classification
# - schema.py: Table definitions used to create the schema
# - featured.py: Random featured-item selection for the home page
# - utils.py: Shared formatting utilities (relative time, prices)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import Database, DatabaseError, DatabaseErrorKind, Transaction
from lib.featured import FEATURED_SLOTS, pick_featured_indices
from lib.utils import format_price, time_ago, to_cents

__all__ = [
    # Database
    "Database",
    "DatabaseError",
    "DatabaseErrorKind",
    "Transaction",
    # Featured items
    "FEATURED_SLOTS",
    "pick_featured_indices",
    # Utils
    "format_price",
    "time_ago",
    "to_cents",
]
