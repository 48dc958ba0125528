# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - auth/: Session cookie, login/logout
# - routers/: Page and JSON endpoints organized by resource
# - templates/: Jinja2 page templates
#
# The app layer is thin - it handles HTTP concerns and delegates
# queries to the core/ package.
# =============================================================================
