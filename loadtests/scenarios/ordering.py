"""Ordering load test scenarios.

Concurrent buyers place orders against a small shared catalog, which is the
path where sequence numbering and the nth-order discount are contended.
An admin user polls the reports while orders are flowing.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.helpers.response import extract_error_detail

ADMIN_HEADERS = {"X-User-Id": "loadtest-admin", "X-User-Role": "admin"}

CATALOG = [
    ("Notebook", 15000),
    ("Pen", 1000),
    ("Desk Lamp", 120000),
    ("Backpack", 250000),
]


def stock_catalog(client) -> list[str]:
    """Add the load test catalog with plenty of stock and return item ids."""
    item_ids = []
    for item_name, price_in_paise in CATALOG:
        resp = client.post(
            "/admin/items",
            json={"item_name": item_name, "price_in_paise": price_in_paise, "available_qty": 1_000_000},
            headers=ADMIN_HEADERS,
            name="POST /admin/items",
        )
        if resp.status_code == 201:
            item_ids.append(resp.json()["item_id"])
    return item_ids


class PlaceAndPayJourney(SequentialTaskSet):
    """Place Order -> Pay."""

    def on_start(self):
        self.order = None

    @task
    def place_order(self):
        item_ids = self.user.item_ids
        lines = [
            {"item_id": item_id, "item_qty": random.randint(1, 3)}
            for item_id in random.sample(item_ids, k=random.randint(1, len(item_ids)))
        ]
        with self.client.post(
            "/orders",
            json={"items_list": lines},
            headers={"X-User-Id": self.user.user_id},
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.order = resp.json()
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pay(self):
        with self.client.post(
            f"/orders/{self.order['order_id']}/payment",
            json={"invoice_id": self.order["invoice_id"]},
            catch_response=True,
            name="POST /orders/{id}/payment",
        ) as resp:
            if resp.status_code != 200 or not resp.json()["paid"]:
                resp.failure(f"Payment failed: {resp.status_code} {extract_error_detail(resp)}")


class BuyerUser(HttpUser):
    tasks = [PlaceAndPayJourney]
    wait_time = between(0.5, 2)

    def on_start(self):
        self.user_id = f"buyer-{random.randint(1, 10_000)}"
        self.item_ids = stock_catalog(self.client)


class AdminReportsUser(HttpUser):
    wait_time = between(2, 5)
    weight = 1

    @task(3)
    def total_purchase_amount(self):
        self.client.get("/admin/orders/total", headers=ADMIN_HEADERS, name="GET /admin/orders/total")

    @task(2)
    def total_discount_amount(self):
        self.client.get("/admin/discount-codes/total", headers=ADMIN_HEADERS, name="GET /admin/discount-codes/total")

    @task(1)
    def items_purchased(self):
        self.client.get("/admin/items/purchased", headers=ADMIN_HEADERS, name="GET /admin/items/purchased")
