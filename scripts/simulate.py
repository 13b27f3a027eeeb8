"""
Order Flow Simulation Script

Places a burst of concurrent orders against a running server, then lists
them and walks each through a status update.
Run from project root: python scripts/simulate.py --orders 50

Version: 1.0.0
"""

import argparse
import asyncio
import random
import time
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8080"
TOTAL_ORDERS = 50
RESTAURANT_NUMBER = "1"

MENU_ITEMS = [
    {"name": "Masala Chai", "price": 2.5},
    {"name": "Paneer Tikka", "price": 8.0},
    {"name": "Veg Biryani", "price": 11.5},
    {"name": "Gulab Jamun", "price": 4.0},
]
STATUS_FLOW = ["confirmed", "preparing", "served"]


def generate_order_payload(restaurant_number: str) -> dict[str, Any]:
    """Generate a random table order, using both table field spellings."""
    items = []
    for item in random.sample(MENU_ITEMS, k=random.randint(1, 3)):
        items.append({**item, "qty": random.randint(1, 3)})

    payload: dict[str, Any] = {
        "restaurant_number": restaurant_number,
        "items": items,
        "total": round(sum(i["price"] * i["qty"] for i in items), 2),
        "payment_mode": random.choice(["cash", "card", "upi"]),
    }
    table_field = random.choice(["table_no", "table_number"])
    payload[table_field] = str(random.randint(1, 20))
    return payload


async def place_order(
    client: httpx.AsyncClient,
    order_num: int,
    restaurant_number: str,
) -> dict[str, Any]:
    """Send one order and time it."""
    start_time = time.time()
    try:
        response = await client.post("/api/order", json=generate_order_payload(restaurant_number))
        elapsed = round(time.time() - start_time, 3)
        data = response.json()
        return {
            "order_num": order_num,
            "success": response.status_code == 200 and data.get("success", False),
            "order_id": data.get("orderId"),
            "error": data.get("error"),
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def advance_order(client: httpx.AsyncClient, order_id: int) -> bool:
    """Move an order through the status flow, ending with payment."""
    for status in STATUS_FLOW:
        response = await client.patch(f"/api/orders/{order_id}", json={"status": status})
        if response.status_code != 200:
            return False
    response = await client.patch(f"/api/orders/{order_id}", json={"payment_status": "paid"})
    return response.status_code == 200


async def run_simulation(base_url: str, total: int, restaurant_number: str) -> None:
    print("=" * 60)
    print("🍽️  ORDER FLOW SIMULATION")
    print("=" * 60)
    print(f"   Target: {base_url}")
    print(f"   Orders: {total} (restaurant {restaurant_number})")
    print("=" * 60)

    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        health = await client.get("/health")
        print(f"🩺 Health: {health.json()}")

        start = time.time()
        results = await asyncio.gather(
            *(place_order(client, n, restaurant_number) for n in range(1, total + 1))
        )
        elapsed = round(time.time() - start, 3)

        placed = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]
        print(f"\n📦 Placed {len(placed)}/{total} orders in {elapsed}s")
        for r in failed[:5]:
            print(f"   ❌ #{r['order_num']}: {r['error']}")

        listing = await client.get("/api/orders", params={"restaurant_number": restaurant_number})
        orders = listing.json().get("orders", [])
        print(f"📋 Restaurant {restaurant_number} now lists {len(orders)} orders")

        advanced = await asyncio.gather(*(advance_order(client, r["order_id"]) for r in placed))
        print(f"🔁 Advanced {sum(advanced)}/{len(placed)} orders to served/paid")

        served = await client.get(f"/api/orders/{restaurant_number}", params={"status": "served"})
        print(f"✅ Served orders: {len(served.json().get('orders', []))}")

        rejected = await client.patch("/api/orders/not-a-number", json={"status": "served"})
        print(f"🚫 Invalid id check: {rejected.status_code} {rejected.json()}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate table-side order traffic")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Orders to place")
    parser.add_argument("--restaurant", default=RESTAURANT_NUMBER, help="Restaurant number")
    args = parser.parse_args()

    asyncio.run(run_simulation(args.url, args.orders, args.restaurant))


if __name__ == "__main__":
    main()
