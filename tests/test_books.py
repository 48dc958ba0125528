# =============================================================================
# tests/test_books.py - Public Catalogue Tests
# =============================================================================
# Tests for GET /books and GET /books/{item_id}.
# =============================================================================

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def catalogue(seed):
    """Two sellers with a handful of items."""
    alice = await seed.user("alice", super_seller=True)
    bob = await seed.user("bob")
    ids = {
        "dune": await seed.item(alice, "Dune", price=4500),
        "hyperion": await seed.item(bob, "Hyperion", price=1200, photos=()),
        "sold": await seed.item(alice, "Neuromancer", price=800, sold=True),
        "percent": await seed.item(bob, "100% Cotton Tote", price=500),
    }
    return ids


class TestListBooks:
    """Tests for GET /books."""

    async def test_lists_unsold_newest_first(self, client, catalogue):
        response = await client.get("/books")

        assert response.status_code == 200
        body = response.json()
        titles = [item["title"] for item in body["items"]]
        assert titles == ["100% Cotton Tote", "Hyperion", "Dune"]
        assert body["limit"] == 20
        assert body["offset"] == 0

    async def test_summary_fields(self, client, catalogue):
        response = await client.get("/books", params={"q": "dune"})

        [item] = response.json()["items"]
        assert item["item_id"] == catalogue["dune"]
        assert item["price"] == 4500
        assert item["seller"] == "alice"
        assert item["photo_url"] == "https://example.com/photo.jpg"
        assert item["sold_status"] is False

    async def test_item_without_photo(self, client, catalogue):
        response = await client.get("/books", params={"q": "hyperion"})

        [item] = response.json()["items"]
        assert item["photo_url"] is None

    async def test_price_filters(self, client, catalogue):
        response = await client.get("/books", params={"min_price": 1000, "max_price": 2000})

        assert [item["title"] for item in response.json()["items"]] == ["Hyperion"]

    async def test_wildcards_in_query_match_literally(self, client, catalogue):
        """A '%' in q only matches titles that contain a '%'."""
        response = await client.get("/books", params={"q": "%"})
        assert [item["title"] for item in response.json()["items"]] == ["100% Cotton Tote"]

        response = await client.get("/books", params={"q": "_"})
        assert response.json()["items"] == []

    async def test_sql_in_query_is_data(self, client, catalogue):
        response = await client.get("/books", params={"q": "' OR '1'='1"})

        assert response.status_code == 200
        assert response.json()["items"] == []

    async def test_paging(self, client, catalogue):
        response = await client.get("/books", params={"limit": 1, "offset": 1})

        body = response.json()
        assert [item["title"] for item in body["items"]] == ["Hyperion"]
        assert body["limit"] == 1
        assert body["offset"] == 1

    @pytest.mark.parametrize(
        "params",
        [
            {"limit": 0},
            {"limit": 101},
            {"offset": -1},
            {"min_price": -5},
            {"max_price": 2**31},
            {"q": "x" * 101},
        ],
    )
    async def test_invalid_query_params(self, client, params):
        response = await client.get("/books", params=params)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestGetBook:
    """Tests for GET /books/{item_id}."""

    async def test_detail_with_all_photos(self, client, seed):
        owner_id = await seed.user("alice")
        item_id = await seed.item(
            owner_id,
            "Dune",
            description="First edition",
            photos=("https://example.com/a.jpg", "https://example.com/b.jpg"),
        )

        response = await client.get(f"/books/{item_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["owner_id"] == owner_id
        assert body["description"] == "First edition"
        assert body["photo_url"] == "https://example.com/a.jpg"
        assert body["photos"] == ["https://example.com/a.jpg", "https://example.com/b.jpg"]

    async def test_sold_item_still_visible(self, client, catalogue):
        response = await client.get(f"/books/{catalogue['sold']}")

        assert response.status_code == 200
        assert response.json()["sold_status"] is True

    async def test_missing_item(self, client):
        response = await client.get("/books/999")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "ITEM_NOT_FOUND"
        assert body["details"] == {"item_id": 999}

    async def test_non_numeric_id(self, client):
        response = await client.get("/books/abc")

        assert response.status_code == 422

    async def test_id_beyond_integer_column(self, client):
        response = await client.get(f"/books/{2**31}")

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
