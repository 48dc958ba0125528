# =============================================================================
# app/routers/favorites.py - Favorites
# =============================================================================
# All endpoints require a session.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.auth.dependencies import CurrentUser
from core.services.favorite_service import FavoriteService
from lib.database import Database
from lib.schema import MAX_INTEGER

ItemId = Annotated[int, Path(ge=1, le=MAX_INTEGER, description="Item ID")]


def create_router(db: Database, templates: Jinja2Templates) -> APIRouter:
    """Build the /favorites router around the shared database handle."""
    router = APIRouter()
    favorites = FavoriteService(db)

    @router.get("", response_class=HTMLResponse)
    async def list_favorites(request: Request, user: CurrentUser):
        rows = await favorites.list_for_user(user.user_id)
        return templates.TemplateResponse(
            request,
            "favorites.html",
            {"username": user.name, "items": rows},
        )

    @router.post("/{item_id}")
    async def add_favorite(item_id: ItemId, user: CurrentUser):
        await favorites.add(user.user_id, item_id)
        return RedirectResponse("/favorites", status_code=status.HTTP_303_SEE_OTHER)

    @router.post("/{item_id}/delete")
    async def remove_favorite(item_id: ItemId, user: CurrentUser):
        await favorites.remove(user.user_id, item_id)
        return RedirectResponse("/favorites", status_code=status.HTTP_303_SEE_OTHER)

    return router
