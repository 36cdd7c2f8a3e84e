"""Tests for the REST API routes."""

import unittest

from fastapi.testclient import TestClient

from geocoin.api.app import create_app
from geocoin.config import GameConfig
from geocoin.core.board import Board
from geocoin.core.models import LatLng
from geocoin.systems.storage import InMemoryStore

CONFIG = GameConfig(cache_spawn_probability=1.0, neighborhood_size=1, log_level="WARNING")
START_CELL = Board(CONFIG.tile_degrees, 1).cell_for_point(LatLng(CONFIG.start_lat, CONFIG.start_lng))
I, J = START_CELL.i, START_CELL.j


class TestGameAPI(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore({START_CELL.key: "2"})
        self.client = TestClient(create_app(CONFIG, store=self.store))
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_state(self):
        resp = self.client.get("/api/v1/state")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["player"]["cell_i"], I)
        self.assertEqual(data["player"]["cell_j"], J)
        self.assertEqual(data["player"]["coin_count"], 0)
        self.assertEqual(len(data["caches"]), 9)
        here = [c for c in data["caches"] if (c["i"], c["j"]) == (I, J)]
        self.assertEqual(here[0]["tokens_remaining"], 2)
        self.assertAlmostEqual(here[0]["bounds"]["south"], I * CONFIG.tile_degrees)

    def test_withdraw_then_depleted(self):
        first = self.client.post(f"/api/v1/caches/{I}/{J}/withdraw")
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["serial"], f"{I}:{J}#1")
        self.assertEqual(first.json()["coin_count"], 1)

        self.client.post(f"/api/v1/caches/{I}/{J}/withdraw")
        empty = self.client.post(f"/api/v1/caches/{I}/{J}/withdraw")
        self.assertEqual(empty.status_code, 409)
        self.assertEqual(self.store.get(START_CELL.key), "0")
        self.assertEqual(self.store.get("coin1"), f"{I}:{J}#0")

    def test_withdraw_not_visible(self):
        resp = self.client.post(f"/api/v1/caches/{I + 40}/{J}/withdraw")
        self.assertEqual(resp.status_code, 404)

    def test_get_cache(self):
        resp = self.client.get(f"/api/v1/caches/{I}/{J}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["tokens_remaining"], 2)
        self.assertEqual(self.client.get(f"/api/v1/caches/{I + 40}/{J}").status_code, 404)

    def test_step(self):
        resp = self.client.post("/api/v1/player/step/north")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["moved"])
        self.assertEqual(len(body["evicted"]), 9)
        self.assertEqual(len(body["caches"]), 9)
        state = self.client.get("/api/v1/state").json()
        self.assertEqual(state["player"]["cell_i"], I + 1)
        self.assertEqual(len(state["player"]["trail"]), 2)

    def test_step_invalid_direction(self):
        self.assertEqual(self.client.post("/api/v1/player/step/up").status_code, 422)

    def test_location_fix_threshold(self):
        near = {"lat": CONFIG.start_lat + CONFIG.tile_degrees * 0.2, "lng": CONFIG.start_lng}
        resp = self.client.post("/api/v1/player/location", json=near)
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["moved"])

        far = {"lat": CONFIG.start_lat + CONFIG.tile_degrees * 5, "lng": CONFIG.start_lng}
        resp = self.client.post("/api/v1/player/location", json=far)
        self.assertTrue(resp.json()["moved"])

    def test_move_validates_coordinates(self):
        resp = self.client.post("/api/v1/player/move", json={"lat": 123.0, "lng": 0.0})
        self.assertEqual(resp.status_code, 422)

    def test_reset(self):
        self.client.post(f"/api/v1/caches/{I}/{J}/withdraw")
        resp = self.client.post("/api/v1/control/reset")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertIsNone(self.store.get("coin0"))
        state = self.client.get("/api/v1/state").json()
        self.assertEqual(state["player"]["coin_count"], 0)

    def test_config(self):
        data = self.client.get("/api/v1/config").json()
        self.assertEqual(data["tile_degrees"], CONFIG.tile_degrees)
        self.assertEqual(data["neighborhood_size"], 1)
        self.assertFalse(data["persistent"])

    def test_events(self):
        self.client.post(f"/api/v1/caches/{I}/{J}/withdraw")
        events = self.client.get("/api/v1/events", params={"since": 0}).json()["events"]
        categories = [e["category"] for e in events]
        self.assertIn("spawn", categories)
        self.assertEqual(categories[-1], "withdraw")
        self.assertEqual(events[-1]["cell"], [I, J])


class TestUninitialized(unittest.TestCase):
    def test_503_without_lifespan(self):
        from geocoin.api.dependencies import set_session

        set_session(None)
        client = TestClient(create_app(CONFIG))
        self.assertEqual(client.get("/api/v1/state").status_code, 503)
