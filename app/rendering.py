# =============================================================================
# app/rendering.py - Jinja2 Template Setup
# =============================================================================
# Builds the Jinja2Templates instance shared by every page route and
# registers the formatting filters templates rely on.
# =============================================================================

from pathlib import Path

from fastapi.templating import Jinja2Templates

from lib.utils import format_price, time_ago

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_templates(directory: Path = TEMPLATES_DIR) -> Jinja2Templates:
    """
    Create the template renderer.

    Filters:
        price: cents -> "$12.50"
        timeago: timestamp -> "3 days ago"
    """
    templates = Jinja2Templates(directory=directory)
    templates.env.filters["price"] = format_price
    templates.env.filters["timeago"] = time_ago
    return templates
