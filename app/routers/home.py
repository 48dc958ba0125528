# =============================================================================
# app/routers/home.py - Home Page
# =============================================================================
# GET / renders up to five random featured items: unsold items of super
# sellers, one candidate row per item photo.
# =============================================================================

import logging
import random
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.auth.session import SESSION_NAME_KEY
from app.exceptions import database_error_response
from core.services.item_service import ItemService
from lib.database import Database, DatabaseError
from lib.featured import FEATURED_SLOTS, pick_featured_indices
from lib.utils import time_ago

logger = logging.getLogger(__name__)


def build_home_context(
    rows: list[dict[str, Any]],
    username: str | None,
    indices: list[int],
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Build the template variables for the home page.

    Args:
        rows: Home query rows (post_date still a timestamp)
        username: Display name from the session, None for visitors
        indices: Featured row indices, at most FEATURED_SLOTS of them
        now: Reference time for relative dates

    Returns:
        {"username": ..., "feature0": row | None, ..., "feature4": row | None}
    """
    items = [{**row, "post_date": time_ago(row["post_date"], now=now)} for row in rows]

    context: dict[str, Any] = {"username": username}
    for slot in range(FEATURED_SLOTS):
        context[f"feature{slot}"] = items[indices[slot]] if slot < len(indices) else None
    return context


def create_router(
    db: Database,
    templates: Jinja2Templates,
    rng: random.Random | None = None,
) -> APIRouter:
    """
    Build the home page router.

    Args:
        db: Shared database handle
        templates: Template renderer
        rng: Random source for featured selection (seeded in tests)
    """
    router = APIRouter()
    items = ItemService(db)

    @router.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        """Home page with featured items."""
        try:
            rows = await items.list_home_rows()
        except DatabaseError as e:
            return database_error_response(request, e)

        indices = pick_featured_indices(len(rows), rng=rng)
        context = build_home_context(rows, request.session.get(SESSION_NAME_KEY), indices)
        return templates.TemplateResponse(request, "index.html", context)

    return router
