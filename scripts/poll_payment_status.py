#!/usr/bin/env python3
"""
Poll a transaction's status through the checkout API until it settles.

This is the server-side replacement for polling the gateway straight from the
browser: the secret key never leaves the API process.

Start the API first (in another terminal):
  uvicorn src.api.main:app --host 127.0.0.1 --port 5000

Then run this script with the id returned in `data.data.id` by /api/pay:
  python scripts/poll_payment_status.py 4975363
  python scripts/poll_payment_status.py 4975363 --base-url http://127.0.0.1:5000 --interval 5
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.config_loader import load_gateway_config  # noqa: E402

TERMINAL_EXIT_CODES = {"successful": 0, "failed": 2, "cancelled": 3}


def get_json(url: str, timeout: int = 30) -> Dict[str, Any]:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.json()


def poll_status(
    base_url: str,
    transaction_id: str,
    interval: float,
    max_attempts: int,
    fetch: Callable[[str], Dict[str, Any]] = get_json,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[str]:
    """Return the terminal status, or None if `max_attempts` ran out first."""
    url = f"{base_url.rstrip('/')}/api/transactions/{transaction_id}/verify"
    for attempt in range(1, max_attempts + 1):
        try:
            out = fetch(url)
        except requests.RequestException as e:
            # A failed lookup does not end polling; the next tick retries.
            print(f"   [{attempt}] lookup failed: {e}")
        else:
            status = out.get("status", "unknown")
            print(f"   [{attempt}] status={status}")
            if out.get("terminal"):
                return status
        if attempt < max_attempts:
            sleep(interval)
    return None


def main() -> int:
    polling = load_gateway_config().polling
    parser = argparse.ArgumentParser(description="Poll a checkout transaction until it succeeds or fails")
    parser.add_argument("transaction_id", help="Gateway transaction id (data.data.id from /api/pay)")
    parser.add_argument("--base-url", default="http://localhost:5000", help="API base URL")
    parser.add_argument("--interval", type=float, default=polling.interval_seconds, help="Seconds between lookups")
    parser.add_argument("--max-attempts", type=int, default=polling.max_attempts, help="Give up after this many lookups")
    args = parser.parse_args()

    print(f"=== Polling transaction {args.transaction_id} every {args.interval}s ===\n")
    status = poll_status(args.base_url, args.transaction_id, args.interval, args.max_attempts)
    if status is None:
        print("\nTransaction still pending; stopped polling.")
        return 1
    print(f"\nFinal status: {status}")
    return TERMINAL_EXIT_CODES.get(status, 1)


if __name__ == "__main__":
    sys.exit(main())
