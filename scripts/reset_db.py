#!/usr/bin/env python3
# =============================================================================
# scripts/reset_db.py - Recreate and Seed the Database
# =============================================================================
# Drops every table, recreates the schema and loads demo data.
# DESTROYS ALL DATA in the configured database.
#
# Usage:
#   python scripts/reset_db.py
#   python scripts/reset_db.py --no-seed
#
# Prerequisites:
#   - DATABASE_URL and SESSION_KEYS set (.env file)
# =============================================================================

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from lib.database import Database

DEMO_USERS = [
    # username, email, super_seller
    ("alice", "alice@example.com", True),
    ("bob", "bob@example.com", True),
    ("carol", "carol@example.com", False),
]

DEMO_ITEMS = [
    # owner, title, description, price (cents), sold, photos
    ("alice", "Dune", "Paperback, lightly read", 1200, False,
     ["https://picsum.photos/seed/dune/400/300"]),
    ("alice", "The Left Hand of Darkness", "Hardcover", 2500, False,
     ["https://picsum.photos/seed/lefthand/400/300", "https://picsum.photos/seed/lefthand2/400/300"]),
    ("alice", "Neuromancer", "First printing", 9900, True,
     ["https://picsum.photos/seed/neuromancer/400/300"]),
    ("bob", "Foundation", "Box set of three", 3000, False,
     ["https://picsum.photos/seed/foundation/400/300"]),
    ("bob", "Hyperion", None, 1500, False,
     ["https://picsum.photos/seed/hyperion/400/300"]),
    ("bob", "Snow Crash", "Some highlighting", 800, False,
     ["https://picsum.photos/seed/snowcrash/400/300"]),
    ("carol", "The Dispossessed", "Like new", 1800, False,
     ["https://picsum.photos/seed/dispossessed/400/300"]),
]


async def seed(db: Database) -> None:
    """Insert the demo users and items."""
    user_ids: dict[str, int] = {}
    async with db.transaction() as tx:
        for username, email, super_seller in DEMO_USERS:
            row = await tx.fetch_one(
                """
                INSERT INTO users (username, email, super_seller)
                VALUES (:username, :email, :super_seller)
                RETURNING id
                """,
                {"username": username, "email": email, "super_seller": super_seller},
            )
            user_ids[username] = row["id"]

        for owner, title, description, price, sold, photos in DEMO_ITEMS:
            row = await tx.fetch_one(
                """
                INSERT INTO items (owner_id, title, description, price, sold_status)
                VALUES (:owner_id, :title, :description, :price, :sold)
                RETURNING id
                """,
                {
                    "owner_id": user_ids[owner],
                    "title": title,
                    "description": description,
                    "price": price,
                    "sold": sold,
                },
            )
            for photo_url in photos:
                await tx.query(
                    "INSERT INTO photo_urls (item_id, photo_url) VALUES (:item_id, :photo_url)",
                    {"item_id": row["id"], "photo_url": photo_url},
                )


async def reset(with_seed: bool) -> None:
    db = Database(settings.DATABASE_URL)
    try:
        await db.drop_schema()
        await db.create_schema()
        print("Schema recreated")
        if with_seed:
            await seed(db)
            print(f"Seeded {len(DEMO_USERS)} users and {len(DEMO_ITEMS)} items")
    finally:
        await db.dispose()


def main():
    parser = argparse.ArgumentParser(description="Recreate and seed the marketplace database")
    parser.add_argument("--no-seed", action="store_true", help="Only recreate the schema")
    args = parser.parse_args()

    asyncio.run(reset(with_seed=not args.no_seed))


if __name__ == "__main__":
    main()
