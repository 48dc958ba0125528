# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the marketplace's business logic:
# - models/: Pydantic schemas for items, forms and conversations
# - services/: Parameterized SQL for users, items, favorites and messages
#
# Routes stay thin: they parse input, call a service, and render or redirect.
# =============================================================================
