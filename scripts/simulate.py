"""
Ordering Simulation Script

Fires many concurrent customer checkouts at a running server, then lets the
admin walk every order through the kitchen lifecycle.
Run from project root (server must be up): python scripts/simulate.py

Author: Khalil_Bannouri
Version: 3.1.0
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:3000"
TOTAL_CUSTOMERS = 20

ADMIN_FLOW = ["preparing", "ready", "completed"]


async def fetch_menu(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    response = await client.get(f"{API_BASE_URL}/api/menu-items")
    response.raise_for_status()
    return response.json()["items"]


def generate_random_items(menu: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Pick 1-4 distinct menu items with small quantities."""
    picks = random.sample(menu, k=min(len(menu), random.randint(1, 4)))
    return [
        {"menuItemId": item["id"], "quantity": random.randint(1, 3)}
        for item in picks
    ]


async def login(client: httpx.AsyncClient, username: str) -> None:
    """Register (ignoring user-exists) and log in; the cookie stays on the client."""
    response = await client.post(f"{API_BASE_URL}/api/users", json={"username": username})
    if response.status_code not in (201, 409):
        raise RuntimeError(f"register {username}: {response.text[:100]}")
    response = await client.post(f"{API_BASE_URL}/api/sessions", json={"username": username})
    response.raise_for_status()


# =============================================================================
# CUSTOMER SIMULATION
# =============================================================================

async def run_customer(menu: list[dict[str, Any]], customer_num: int) -> dict[str, Any]:
    """One customer: log in, fill the cart, check out, confirm the cart is empty."""
    username = f"sim_{customer_num:03d}_{random.randint(100, 999)}"
    start_time = time.time()

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            await login(client, username)

            items = generate_random_items(menu)
            response = await client.put(f"{API_BASE_URL}/api/cart", json={"items": items})
            response.raise_for_status()

            response = await client.post(f"{API_BASE_URL}/api/orders", json={"items": items})
            elapsed = round(time.time() - start_time, 3)
            if response.status_code != 201:
                return {
                    "customer": username,
                    "success": False,
                    "error": response.text[:100],
                    "time": elapsed,
                }

            order = response.json()["order"]
            cart = (await client.get(f"{API_BASE_URL}/api/cart")).json()["items"]
            return {
                "customer": username,
                "success": True,
                "order_id": order["id"],
                "total": order["totalPrice"],
                "cart_cleared": cart == [],
                "time": elapsed,
            }
        except (httpx.HTTPError, RuntimeError) as e:
            return {
                "customer": username,
                "success": False,
                "error": str(e)[:100],
                "time": round(time.time() - start_time, 3),
            }


# =============================================================================
# ADMIN SIMULATION
# =============================================================================

async def run_admin(order_ids: list[str]) -> int:
    """Advance every order to completed. Returns the number of failed updates."""
    failures = 0
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.post(f"{API_BASE_URL}/api/sessions", json={"username": "admin"})
        response.raise_for_status()

        for order_id in order_ids:
            for status in ADMIN_FLOW:
                response = await client.patch(
                    f"{API_BASE_URL}/api/admin/orders/{order_id}",
                    json={"status": status},
                )
                if response.status_code != 200:
                    failures += 1
                    print(f"   ⚠️ Order #{order_id} → {status}: {response.text[:80]}")
    return failures


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(num_customers: int = TOTAL_CUSTOMERS, skip_admin: bool = False) -> dict[str, Any]:
    print("=" * 70)
    print("🔥 ORDERING SIMULATION - CONCURRENT CHECKOUTS")
    print("=" * 70)
    print(f"📋 Customers: {num_customers}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient(timeout=30.0) as client:
        menu = await fetch_menu(client)
    if not menu:
        print("\n❌ Menu is empty. Start the server with SEED_MENU=true.")
        return {"total": num_customers, "successful": 0, "failed": num_customers}

    start_time = time.time()
    results = await asyncio.gather(*[run_customer(menu, i + 1) for i in range(num_customers)])
    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print(f"\n✅ Successful Orders: {len(successful)}/{num_customers}")
    print(f"❌ Failed Orders: {len(failed)}/{num_customers}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        ids = [int(r["order_id"]) for r in successful]
        not_cleared = [r for r in successful if not r["cart_cleared"]]
        print(f"\n📈 Order ids: {min(ids)}..{max(ids)} (unique: {len(set(ids)) == len(ids)})")
        print(f"   💰 Total Revenue: ${sum(r['total'] for r in successful):.2f}")
        print(f"   🛒 Carts left non-empty: {len(not_cleared)}")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   {f['customer']}: {f.get('error', 'Unknown error')}")

    if successful and not skip_admin:
        print("\n👩‍🍳 Admin walking orders through the kitchen...")
        failures = await run_admin([r["order_id"] for r in successful])
        print(f"   Status update failures: {failures}")

    print("\n" + "=" * 70)
    return {
        "total": num_customers,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Ordering Simulation Script")
    parser.add_argument("--customers", type=int, default=TOTAL_CUSTOMERS, help="Number of customers")
    parser.add_argument("--base-url", default=API_BASE_URL, help="Server base URL")
    parser.add_argument("--skip-admin", action="store_true", help="Do not advance order statuses")
    args = parser.parse_args()

    API_BASE_URL = args.base_url.rstrip("/")
    asyncio.run(run_simulation(args.customers, args.skip_admin))
