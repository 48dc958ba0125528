# =============================================================================
# app/routers/books.py - Public Item Catalogue
# =============================================================================
# JSON endpoints for browsing unsold items. No login required.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from core.models.item import ItemDetail, ItemList, ItemSummary
from core.services.item_service import ItemService
from lib.database import Database
from lib.schema import MAX_INTEGER


def create_router(db: Database) -> APIRouter:
    """Build the /books router around the shared database handle."""
    router = APIRouter()
    items = ItemService(db)

    @router.get("", response_model=ItemList)
    async def list_books(
        q: Annotated[str | None, Query(max_length=100, description="Title contains")] = None,
        min_price: Annotated[int | None, Query(ge=0, le=MAX_INTEGER, description="Minimum price in cents")] = None,
        max_price: Annotated[int | None, Query(ge=0, le=MAX_INTEGER, description="Maximum price in cents")] = None,
        limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
        offset: Annotated[int, Query(ge=0, description="Items to skip")] = 0,
    ):
        """
        List unsold items, newest first.

        Filters are optional and combine with AND.
        """
        rows = await items.search(
            q=q,
            min_price=min_price,
            max_price=max_price,
            limit=limit,
            offset=offset,
        )
        return ItemList(
            items=[ItemSummary(**row) for row in rows],
            limit=limit,
            offset=offset,
        )

    @router.get("/{item_id}", response_model=ItemDetail)
    async def get_book(
        item_id: Annotated[int, Path(ge=1, le=MAX_INTEGER, description="Item ID")],
    ):
        """
        Get one item with all its photos.

        Sold items are still returned (with sold_status = true).
        """
        item = await items.get_item(item_id)
        return ItemDetail(**item)

    return router
