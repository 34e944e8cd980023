"""Locust load script for reelscroll.
Usage:
  locust -f perf/locustfile.py --host http://localhost:8000
"""
import os
import random
from locust import HttpUser, task, between

KINDS = os.getenv("REELSCROLL_KINDS", "movie,tv,anime").split(",")
SCROLL_DEPTH = int(os.getenv("REELSCROLL_SCROLL_DEPTH", "5"))


class BrowsingUser(HttpUser):
    wait_time = between(0.2, 1.0)

    def on_start(self):
        self.kind = random.choice(KINDS)
        self.page_id = self.client.post(f"/pages/{self.kind}", name="/pages/[kind]").json()["page_id"]
        self.categories = [
            c["id"] for c in self.client.get(f"/categories/{self.kind}", name="/categories/[kind]").json()["categories"]
        ]

    def on_stop(self):
        self.client.delete(f"/pages/{self.page_id}", name="/pages/[id]")

    @task(1)
    def switch_category(self):
        category = random.choice(self.categories)
        self.client.post(f"/pages/{self.page_id}/category/{category}", name="/pages/[id]/category/[category]")

    @task(3)
    def scroll(self):
        # Sentinel comes into view, then the grid grows and pushes it away
        for _ in range(SCROLL_DEPTH):
            self.client.post(f"/pages/{self.page_id}/visibility", json={"ratio": 1.0}, name="/pages/[id]/visibility")
            self.client.post(f"/pages/{self.page_id}/visibility", json={"ratio": 0.0}, name="/pages/[id]/visibility")
            self.client.get(f"/pages/{self.page_id}", name="/pages/[id]")

    @task(1)
    def home(self):
        self.client.get("/home")
