# =============================================================================
# app/routers/listings.py - Seller Listings
# =============================================================================
# Pages and form posts for managing the logged-in user's own items.
# All endpoints require a session.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Form, Path, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.auth.dependencies import CurrentUser
from core.models.item import ListingForm
from core.services.item_service import ItemService
from lib.database import Database
from lib.schema import MAX_INTEGER
from lib.utils import to_cents

ItemId = Annotated[int, Path(ge=1, le=MAX_INTEGER, description="Item ID")]


def create_router(db: Database, templates: Jinja2Templates) -> APIRouter:
    """Build the /listings router around the shared database handle."""
    router = APIRouter()
    items = ItemService(db)

    @router.get("", response_class=HTMLResponse)
    async def my_listings(request: Request, user: CurrentUser):
        """All of the user's items, sold and unsold."""
        rows = await items.list_for_owner(user.user_id)
        return templates.TemplateResponse(
            request,
            "listings.html",
            {"username": user.name, "items": rows},
        )

    @router.get("/new", response_class=HTMLResponse)
    async def new_listing(request: Request, user: CurrentUser):
        """Form for a new listing."""
        return templates.TemplateResponse(request, "listing_new.html", {"username": user.name})

    @router.post("")
    async def create_listing(
        user: CurrentUser,
        form: Annotated[ListingForm, Form()],
    ):
        """Create a listing, then go back to the listings page."""
        await items.create_item(
            owner_id=user.user_id,
            title=form.title,
            price=to_cents(form.price),
            description=form.description,
            photo_url=form.photo_url,
        )
        return RedirectResponse("/listings", status_code=status.HTTP_303_SEE_OTHER)

    @router.post("/{item_id}/sold")
    async def mark_sold(item_id: ItemId, user: CurrentUser):
        """Mark an item as sold; it disappears from the home page and catalogue."""
        await items.mark_sold(item_id, user.user_id)
        return RedirectResponse("/listings", status_code=status.HTTP_303_SEE_OTHER)

    @router.post("/{item_id}/delete")
    async def delete_listing(item_id: ItemId, user: CurrentUser):
        """Delete an item and its photos."""
        await items.delete_item(item_id, user.user_id)
        return RedirectResponse("/listings", status_code=status.HTTP_303_SEE_OTHER)

    return router
