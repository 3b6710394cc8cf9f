from __future__ import annotations

import argparse
import asyncio
import sys

from rbx_economy.config import settings
from rbx_economy.economy_client import EconomyClient
from rbx_economy.errors import EconomyError
from rbx_economy.models import Limit

_LIMITS = {int(x): x for x in Limit}


async def main() -> int:
    p = argparse.ArgumentParser(description="Print every resale listing of a limited item, page by page.")
    p.add_argument("--item", required=True, type=int, help="Item (asset) id")
    p.add_argument("--limit", type=int, default=25, choices=sorted(_LIMITS), help="Page size (default 25)")
    p.add_argument("--max-pages", type=int, default=0, help="Stop after N pages (0 = no limit)")
    args = p.parse_args()

    try:
        settings.validate_required()
    except RuntimeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    client = EconomyClient(settings.roblosecurity)
    limit = _LIMITS[args.limit]

    cursor: str | None = None
    pages = 0
    total = 0
    while True:
        try:
            page = await client.resellers(args.item, limit, cursor)
        except EconomyError as e:
            print(f"ERROR [{e.kind}]: {e}", file=sys.stderr)
            return 1

        pages += 1
        for listing in page.items:
            total += 1
            serial = f"#{listing.serial_number}" if listing.serial_number is not None else "-"
            print(f"{listing.price:>10}  uaid={listing.uaid}  serial={serial}  seller={listing.reseller.name} ({listing.reseller.user_id})")

        cursor = page.next_cursor
        if cursor is None:
            break
        if args.max_pages and pages >= args.max_pages:
            break

    print(f"\n{total} listing(s) across {pages} page(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
