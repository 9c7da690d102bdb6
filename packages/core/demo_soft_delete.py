#!/usr/bin/env python
"""Demo: deletes on Post become soft deletes (rows stay, flagged deleted)."""

from __future__ import annotations

import random

from soft_delete_core import DataClient, InMemoryExecutor, SoftDeleteMiddleware

TITLES = [
    "How to create soft delete middleware",
    "How to install the client",
    "How to update a record",
]

BLUE = "\u001b[1;34m"
GREEN = "\u001b[1;32m"
RED = "\u001b[1;31m"
RESET = "\u001b[0m"


async def demo_soft_delete() -> None:
    """Create three posts, delete them all, and show they are still stored."""
    executor = InMemoryExecutor({"Post": {"deleted": False}})

    async with DataClient(executor) as client:
        client.use(SoftDeleteMiddleware("Post"))
        posts = client.model("Post")

        print(f"{BLUE}STARTING SOFT DELETE TEST{RESET}")
        print(f"{BLUE}####################################{RESET}")

        created = await client.transaction(
            [posts.create(data={"title": random.choice(TITLES)}) for _ in range(3)]
        )
        ids = [post["id"] for post in created]
        print(f"Posts created with IDs: {GREEN}{ids}{RESET}")

        deleted = await posts.delete(where={"id": ids[0]})
        await posts.delete_many(where={"id": {"in": ids[1:]}})

        remaining = await posts.find_many(where={"id": {"in": ids}})

        print()
        print(f"Deleted post with ID: {GREEN}{deleted['id']}{RESET}")
        print(f"Deleted posts with IDs: {GREEN}{ids[1:]}{RESET}")
        print()
        answer = f"{GREEN}Yes!{RESET}" if len(remaining) == 3 else f"{RED}No!{RESET}"
        print(f"Are the posts still available?: {answer}")
        print()
        print(f"{BLUE}####################################{RESET}")

        everything = await posts.find_many()
        print(f"Number of posts: {GREEN}{len(everything)}{RESET}")

        soft_deleted = await posts.find_many(where={"deleted": True})
        print(f"Number of SOFT deleted posts: {GREEN}{len(soft_deleted)}{RESET}")


if __name__ == "__main__":
    import asyncio

    asyncio.run(demo_soft_delete())
