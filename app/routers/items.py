# =============================================================================
# app/routers/items.py - Item Page
# =============================================================================
# Server-rendered page for one item: photos, price, seller, and for
# logged-in buyers the forms to favorite it and message the seller.
# The JSON form of the same item is GET /books/{item_id}.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.auth.dependencies import OptionalUser
from core.services.item_service import ItemService
from lib.database import Database
from lib.schema import MAX_INTEGER


def create_router(db: Database, templates: Jinja2Templates) -> APIRouter:
    """Build the /items router around the shared database handle."""
    router = APIRouter()
    items = ItemService(db)

    @router.get("/{item_id}", response_class=HTMLResponse)
    async def item_page(
        request: Request,
        item_id: Annotated[int, Path(ge=1, le=MAX_INTEGER, description="Item ID")],
        user: OptionalUser,
    ):
        """
        Item page.

        Raises:
            404: If the item doesn't exist
        """
        item = await items.get_item(item_id)
        return templates.TemplateResponse(
            request,
            "item.html",
            {
                "username": user.name if user else None,
                "item": item,
                "is_owner": user is not None and user.user_id == item["owner_id"],
            },
        )

    return router
