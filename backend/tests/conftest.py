"""Shared fixtures: a seeded in-memory store, settings and an API client."""

import copy
from pathlib import Path

import jwt
import pytest
from fastapi.testclient import TestClient

from clanboard.api import create_app
from clanboard.config import AuthConfig, Settings, StoreConfig
from clanboard.storage import MemoryDocumentStore

JWT_SECRET = "test-secret"

SEED_DATA = {
    "users": {
        "m1": {
            "uid": "firebase-uid-1",
            "role": "admin",
            "nationality": "FR",
            "mainTroops": "infantry",
            "nickname": "Aria",
            "highestPower": 1000,
            "labels": ["core"],
        },
        "m2": {"nationality": "FR"},
        "m3": {},
    },
    "sheets": {
        "S0": {
            "season_name": "S0",
            "season_end": "2023-11-01",
            "2023-10-02": {
                "m1": {"name": "Aria", "manaSpent": 40, "unitsKilled": 5},
                "m2": {"name": "Bo", "manaSpent": "60"},
                "total": {"manaSpent": 100},
            },
            "2023-10-09": {
                "m1": {"name": "Aria", "manaSpent": 25},
            },
        },
        "S1": {
            "season_name": "S1",
            "current": True,
            "season_end": "2024-02-01",
            "weeks": [
                {"start": "2024-01-08", "end": "2024-01-14"},
                {"start": "2024-01-01", "end": "2024-01-07"},
            ],
        },
    },
    "snapshots": {
        "s1": {
            "season_name": "S1",
            "date": "2024-01-01",
            "member_id": "m1",
            "name": "Aria",
            "manaSpent": 100,
            "unitsKilled": 50,
            "merits": 10,
            "currentPower": 900,
            "highestPower": 1000,
            "homeServer": 42,
        },
        "s2": {
            "season_name": "S1",
            "date": "2024-01-01",
            "member_id": "m2",
            "name": "Bo",
            "manaSpent": 200,
            "unitsKilled": 80,
            "merits": 30,
            "homeServer": 7,
        },
        "s3": {
            "season_name": "S1",
            "date": "2024-01-08",
            "member_id": "m1",
            "name": "Aria",
            "manaSpent": 0,
            "unitsKilled": 70,
            "merits": 15,
            "homeServer": 42,
        },
    },
}


@pytest.fixture
def seed_data() -> dict:
    return copy.deepcopy(SEED_DATA)


@pytest.fixture
def store(seed_data) -> MemoryDocumentStore:
    return MemoryDocumentStore(seed_data)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        config_path=Path("missing-config.yaml"),
        store=StoreConfig(backend="memory"),
        auth=AuthConfig(jwt_secret=JWT_SECRET),
    )


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_token():
    def make(sub: str = "m1", email: str | None = "aria@example.com", secret: str = JWT_SECRET) -> str:
        claims = {"sub": sub}
        if email:
            claims["email"] = email
        return jwt.encode(claims, secret, algorithm="HS256")

    return make


@pytest.fixture
def auth_headers(make_token) -> dict:
    return {"Authorization": f"Bearer {make_token()}"}
