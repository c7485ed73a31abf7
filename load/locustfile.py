"""
Locust load script for the facility quote API.

Simulates visitors working the instant-quote calculator:
- Load the calculator defaults and industry catalogue once per session
- Fetch room presets when switching industry
- Re-price repeatedly while editing the facility (/quotes/estimate)
- Occasionally submit a lead with the quote they saw

Configure with env vars or Locust UI:
- HOST: pass via `--host https://quotes.example.com`
- QUOTE_LEAD_RATIO: fraction of sessions that submit a lead (default 0.05)

Run:
  locust -f load/locustfile.py --host http://localhost:8000
Open http://localhost:8089, start 50 users @ spawn 10/s.
"""

from __future__ import annotations

import os
import random
from typing import Dict, List

from locust import HttpUser, task, between, events
import logging


# --- Config -------------------------------------------------------------------

INDUSTRIES = [
    "education", "office", "medical", "retail", "warehouse", "hoa",
    "hotel", "government", "church", "fitness", "daycare",
]
LEAD_RATIO = float(os.getenv("QUOTE_LEAD_RATIO", "0.05") or 0.05)


# --- Helpers ------------------------------------------------------------------

def _safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        return {}


def _random_profile(industry: str) -> Dict:
    return {
        "industry": industry,
        "service_mode": random.choice(["recurring", "recurring", "onetime"]),
        "square_footage": random.choice([2500, 10000, 15000, 40000]),
        "frequency_per_week": random.randint(1, 7),
        "hotel_rooms": random.randint(20, 200),
        "labor_hours_per_day": random.choice([4, 8, 16]),
        "warehouse_scrubbing_sqft": random.choice([0, 5000, 20000]),
        "shower_count": random.randint(0, 12),
        "changing_stations": random.randint(0, 4),
        "seating_type": random.choice(["pews", "chairs"]),
        "building_size": random.choice(["small", "medium", "large", "luxury"]),
        "retail_size": random.choice(["small", "medium", "large"]),
    }


# --- The User Model -----------------------------------------------------------

class CalculatorUser(HttpUser):
    wait_time = between(1, 3)

    rooms: List[Dict] = []
    porters: List[Dict] = []
    industry: str = "education"

    def on_start(self):
        r = self.client.get("/api/v1/quotes/defaults", name="/quotes/defaults")
        body = _safe_json(r)
        self.rooms = body.get("rooms") or []
        self.porters = body.get("porters") or []
        self.client.get("/api/v1/quotes/industries", name="/quotes/industries")

    # ---- tasks ----

    @task(2)
    def switch_industry(self):
        self.industry = random.choice(INDUSTRIES)
        r = self.client.get(f"/api/v1/quotes/presets/{self.industry}", name="/quotes/presets")
        presets = _safe_json(r) if r.status_code == 200 else []
        if isinstance(presets, list) and presets:
            self.rooms = [
                {**p, "quantity": random.randint(0, 20)}
                for p in random.sample(presets, k=min(len(presets), 4))
            ]

    @task(10)
    def estimate(self):
        payload = {
            "profile": _random_profile(self.industry),
            "rooms": self.rooms,
            "porters": self.porters,
        }
        self.client.post("/api/v1/quotes/estimate", json=payload, name="/quotes/estimate")

    @task(1)
    def submit_lead(self):
        if random.random() > LEAD_RATIO:
            return
        payload = {
            "contact": {"email": f"load+{random.randint(1, 10**6)}@example.com"},
            "profile": _random_profile(self.industry),
            "rooms": self.rooms,
            "porters": self.porters,
            "funnel_stage": "QUOTE",
        }
        self.client.post("/api/v1/quotes/lead", json=payload, name="/quotes/lead")


# --- Optional event hooks -----------------------------------------------------

@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    logging.getLogger("locust").info(f"Starting quote load test against {environment.host}")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    logging.getLogger("locust").info("Test finished")
