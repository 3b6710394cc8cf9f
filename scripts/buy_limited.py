from __future__ import annotations

import argparse
import asyncio
import sys

from rbx_economy.config import settings
from rbx_economy.economy_client import EconomyClient
from rbx_economy.errors import EconomyError, PurchaseError


async def main() -> int:
    p = argparse.ArgumentParser(
        description="Buy a tradable limited, retrying while the server answers with a retry-worthy purchase error."
    )
    p.add_argument("--product", required=True, type=int, help="Product id (not the item id)")
    p.add_argument("--seller", required=True, type=int, help="Seller user id")
    p.add_argument("--uaid", required=True, type=int, help="User asset id of the listing")
    p.add_argument("--price", required=True, type=int, help="Expected price in Robux")
    p.add_argument("--attempts", type=int, default=5, help="Maximum attempts (default 5)")
    p.add_argument("--delay", type=float, default=2.0, help="Seconds between attempts (default 2)")
    args = p.parse_args()

    try:
        settings.validate_required()
    except RuntimeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    client = EconomyClient(settings.roblosecurity)

    for attempt in range(1, args.attempts + 1):
        try:
            await client.purchase_tradable_limited(args.product, args.seller, args.uaid, args.price)
        except PurchaseError as e:
            print(f"attempt {attempt}/{args.attempts}: {e.purchase_kind.value}: {e.message!r}")
            if not e.purchase_kind.retry_worthy:
                return 1
        except EconomyError as e:
            print(f"ERROR [{e.kind}]: {e}", file=sys.stderr)
            return 1
        else:
            print(f"Purchased uaid={args.uaid} for {args.price}")
            return 0

        if attempt < args.attempts:
            await asyncio.sleep(args.delay)

    print("Gave up after the last attempt", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
