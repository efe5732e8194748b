"""
Basic client example - minimal configuration.

Usage:
    PNW_API_KEY=... python example/basic/main.py
"""

import asyncio
import logging
import os

from pnwkit import CacheOptions, PnWKit

logging.basicConfig(level=logging.INFO)


async def main():
    async with PnWKit(os.environ["PNW_API_KEY"], cache=CacheOptions(enabled=True, ttl=120)) as kit:
        page = await kit.queries.alliances() \
            .select("id", "name", "score") \
            .where({"orderBy": [{"column": "SCORE", "order": "DESC"}]}) \
            .include("nations", lambda b: b.select("id", "nation_name").where({"vmode": False})) \
            .first(5) \
            .execute(with_paginator=True)

        for alliance in page.data:
            print(alliance["name"], len(alliance["nations"]))
        print("total alliances:", page.paginator_info.total)


if __name__ == "__main__":
    asyncio.run(main())
