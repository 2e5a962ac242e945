"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from strategos.api.app import create_app
from strategos.api.runtime import ApiState
from strategos.config import Settings
from strategos.domain import models as dm
from strategos.repository import JsonRecordStore


def _make_app(tmp_path):
    def factory() -> ApiState:
        return ApiState(settings=Settings(data_dir=tmp_path, game_id="api-test"))

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_units(client: AsyncClient) -> None:
    response = await client.post(
        "/units",
        json={"id": "archer", "type": "archer", "attack": 15, "defense": 3, "owner": "p1"},
    )
    assert response.status_code == 201
    response = await client.post(
        "/units", json={"id": "cavalry", "type": "cavalry", "attack": 20, "defense": 8}
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_combat_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["technology_count"] == 20

        await _create_units(client)

        response = await client.post(
            "/combat",
            json={
                "attacker_id": "archer",
                "defender_id": "cavalry",
                "terrain": "plains",
                "weather": "clear",
                "formation": "line",
                "draw": 0.5,
            },
        )
        assert response.status_code == 200
        payload = response.json()
        assert payload["damage"] == 28
        assert payload["is_critical"] is False
        assert payload["experience_gained"] == 10
        assert payload["defender"]["health"] == 72
        assert payload["defender"]["status"] == "damaged"
        assert payload["event_sequence"] == 3

        response = await client.get("/units/cavalry")
        assert response.json()["health"] == 72

        response = await client.get("/events")
        assert [event["kind"] for event in response.json()] == [
            "unit_created",
            "unit_created",
            "combat",
        ]

    stored = JsonRecordStore(tmp_path).load_unit(dm.UnitID("archer"))
    assert stored.experience == 10


@pytest.mark.asyncio
async def test_combat_errors_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        await _create_units(client)

        response = await client.post("/units", json={"id": "archer", "type": "archer"})
        assert response.status_code == 409

        response = await client.post(
            "/combat", json={"attacker_id": "archer", "defender_id": "cavalry", "terrain": "lava"}
        )
        assert response.status_code == 422

        response = await client.post(
            "/combat", json={"attacker_id": "archer", "defender_id": "archer"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidAttackerError"

        response = await client.post(
            "/combat", json={"attacker_id": "archer", "defender_id": "ghost"}
        )
        assert response.status_code == 404

        response = await client.post(
            "/combat",
            json={"attacker_id": "archer", "defender_id": "cavalry", "special_ability": "charge"},
        )
        assert response.status_code == 200
        response = await client.post(
            "/combat",
            json={"attacker_id": "archer", "defender_id": "cavalry", "special_ability": "charge"},
        )
        assert response.status_code == 409
        assert response.json()["error"] == "AbilityOnCooldownError"

        response = await client.post("/turns/end", json={})
        assert response.status_code == 200
        assert response.json()[0]["ability_cooldowns"] == {"charge": 2}


@pytest.mark.asyncio
async def test_research_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/players", json={"id": "p1", "resources": {"science": 100}})
        assert response.status_code == 201
        assert response.json()["current_era"] == "ancient"

        response = await client.get("/players/p1/research/available")
        assert {tech["id"] for tech in response.json()} == {"agriculture", "mining", "writing"}

        response = await client.post("/players/p1/research", json={"technology": "bronze_working"})
        assert response.status_code == 409
        assert response.json()["error"] == "PrerequisitesNotMetError"

        response = await client.post("/players/p1/research", json={"technology": "agriculture"})
        assert response.status_code == 200
        started = response.json()
        assert started["resources"] == {"science": 90}
        assert started["current_research"]["technology"] == "agriculture"

        response = await client.post("/players/p1/research/progress", json={"points": 1})
        assert response.status_code == 200
        finished = response.json()
        assert finished["researched_technologies"] == ["agriculture"]
        assert finished["current_research"] is None

        response = await client.get("/players/p1/effects")
        assert response.json() == pytest.approx(
            {"food_production": 0.2, "population_growth": 0.1}
        )

        response = await client.get("/technologies/construction")
        assert response.status_code == 200
        assert response.json()["unlocks"] == [
            {"id": "walls", "kind": "building"},
            {"id": "aqueduct", "kind": "building"},
        ]

        response = await client.get("/technologies/alchemy")
        assert response.status_code == 404

        response = await client.get("/technologies/industrialization/path")
        assert response.json()["path"][-1] == "industrialization"

        response = await client.get("/technologies/feudalism/plan", params={"player_id": "p1"})
        assert response.json()["path"] == ["feudalism"]

        response = await client.get("/players/p1/unlocks")
        assert response.json() == {"units": [], "buildings": []}


@pytest.mark.asyncio
async def test_malformed_record_ids_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        await _create_units(client)

        response = await client.post("/combat", json={"attacker_id": "a b", "defender_id": "x"})
        assert response.status_code == 422

        response = await client.get("/units/a%20b")
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidRecordIdError"

        response = await client.post("/units/a%20b/heal")
        assert response.status_code == 400

        response = await client.get("/players/bad%20id/unlocks")
        assert response.status_code == 400

        response = await client.post("/turns/end", json={"unit_ids": ["archer", "a b"]})
        assert response.status_code == 400
