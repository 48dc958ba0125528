# =============================================================================
# core/models/item.py - Item Schemas
# =============================================================================
# These models define the contract for item (listing) operations:
# - ItemSummary: One row of a catalogue listing
# - ItemDetail: One item with all of its photos
# - ItemList: Paginated catalogue response
# - ListingForm: Input posted by the "new listing" page
#
# Prices are integers in cents everywhere except ListingForm, where the
# seller types a currency amount.
# =============================================================================

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from lib.schema import MAX_INTEGER


class ItemSummary(BaseModel):
    """
    Schema for one item in a catalogue listing.

    Example:
        {
            "item_id": 3,
            "title": "Dune (first edition)",
            "price": 4500,
            "seller": "alice",
            "photo_url": "https://example.com/dune.jpg",
            "sold_status": false,
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    item_id: int = Field(..., description="Item identifier")
    title: str = Field(..., description="Listing title")
    price: int = Field(..., ge=0, description="Price in cents")
    seller: str = Field(..., description="Username of the owner")
    photo_url: str | None = Field(default=None, description="First photo, if any")
    sold_status: bool = Field(default=False, description="True once sold")
    created_at: datetime = Field(..., description="When the item was listed")


class ItemDetail(ItemSummary):
    """Schema for a single item, including every photo URL."""

    owner_id: int = Field(..., description="User ID of the owner")
    description: str | None = Field(default=None)
    photos: list[str] = Field(default_factory=list, description="All photo URLs")


class ItemList(BaseModel):
    """
    Schema for GET /books.

    Includes paging info so clients can request the next page.
    """

    items: list[ItemSummary] = Field(default_factory=list)
    limit: int = Field(..., ge=1, le=100)
    offset: int = Field(..., ge=0)


class ListingForm(BaseModel):
    """
    Schema for creating a listing from the HTML form.

    Example:
        {
            "title": "Dune (first edition)",
            "description": "Good condition",
            "price": "45.00",
            "photo_url": "https://example.com/dune.jpg"
        }
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    # Stored in cents in an INTEGER column
    price: Decimal = Field(..., ge=0, le=Decimal(MAX_INTEGER) / 100, max_digits=10, decimal_places=2)
    photo_url: str | None = Field(default=None, max_length=2048)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be blank")
        return value

    @field_validator("description", "photo_url")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        # Empty form fields arrive as ""
        if value is None or not value.strip():
            return None
        return value.strip()
