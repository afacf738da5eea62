"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_arcade.server.app import create_app
from snake_arcade.server.session_manager import SessionManager
from snake_arcade.storage import MemoryHighScoreStore

BASE = "http://test"


@pytest.fixture()
def app():
    application = create_app()
    application.state.session_manager = SessionManager()
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await app.state.session_manager.cleanup()


async def _create(client, **body) -> str:
    resp = await client.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["phase"] == "start"
        assert data["score"] == 0
        assert data["tick_ms"] == 140
        assert data["frame_rate"] == 60
        assert "session_id" in data

    @pytest.mark.asyncio
    async def test_create_custom(self, client):
        resp = await client.post("/sessions", json={
            "difficulty": "easy",
            "wrap": True,
            "speed_scaling": False,
            "grid_size": 16,
            "seed": 3,
            "frame_rate": 30,
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["tick_ms"] == 180
        assert data["frame_rate"] == 30

    @pytest.mark.asyncio
    async def test_create_invalid_difficulty(self, client):
        resp = await client.post("/sessions", json={"difficulty": "insane"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_create_grid_too_small(self, client):
        resp = await client.post("/sessions", json={"grid_size": 3})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_create_grid_too_small_for_snake(self, client):
        resp = await client.post("/sessions", json={"grid_size": 4})
        assert resp.status_code == 422
        assert "does not fit" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_session_limit(self, app, client):
        app.state.session_manager = SessionManager(max_sessions=1)
        await _create(client)
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 422


class TestListAndGet:
    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_list_after_create(self, client):
        await _create(client)
        resp = await client.get("/sessions")
        data = resp.json()
        assert len(data) == 1
        assert data[0]["phase"] == "start"
        assert data[0]["connected"] == 0

    @pytest.mark.asyncio
    async def test_get_existing(self, client):
        session_id = await _create(client, seed=1)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["session_id"] == session_id
        assert data["config"]["difficulty"] == "normal"
        state = data["state"]
        assert state["snake"] == [[11, 12], [10, 12], [9, 12]]
        assert state["head"] == [11, 12]
        assert state["phase"] == "start"

    @pytest.mark.asyncio
    async def test_get_not_found(self, client):
        resp = await client.get("/sessions/nonexistent")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_high_score_shared(self, app, client):
        app.state.session_manager = SessionManager(
            store=MemoryHighScoreStore(9),
        )
        resp = await client.post("/sessions", json={})
        assert resp.json()["high_score"] == 9


class TestCommands:
    @pytest.mark.asyncio
    async def test_toggle_starts_and_pauses(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/commands", json={"action": "toggle"},
        )
        assert resp.status_code == 200
        assert resp.json()["phase"] == "running"
        resp = await client.post(
            f"/sessions/{session_id}/commands", json={"action": "toggle"},
        )
        assert resp.json()["phase"] == "paused"

    @pytest.mark.asyncio
    async def test_direction_starts_game(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/commands", json={"direction": "up"},
        )
        assert resp.json()["phase"] == "running"

    @pytest.mark.asyncio
    async def test_restart(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/commands", json={"action": "restart"},
        )
        data = resp.json()
        assert data["phase"] == "running"
        assert data["score"] == 0
        assert data["snake"] == [[11, 12], [10, 12], [9, 12]]

    @pytest.mark.asyncio
    async def test_requires_exactly_one_field(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/commands", json={})
        assert resp.status_code == 422
        resp = await client.post(
            f"/sessions/{session_id}/commands",
            json={"action": "toggle", "direction": "up"},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_direction(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/commands", json={"direction": "north"},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_command_not_found(self, client):
        resp = await client.post(
            "/sessions/nonexistent/commands", json={"action": "toggle"},
        )
        assert resp.status_code == 404


class TestConfig:
    @pytest.mark.asyncio
    async def test_change_difficulty(self, client):
        session_id = await _create(client)
        resp = await client.patch(
            f"/sessions/{session_id}/config", json={"difficulty": "easy"},
        )
        assert resp.status_code == 200
        assert resp.json()["tick_ms"] == 180

    @pytest.mark.asyncio
    async def test_toggle_wrap_and_scaling(self, client):
        session_id = await _create(client)
        resp = await client.patch(
            f"/sessions/{session_id}/config",
            json={"wrap": True, "speed_scaling": False},
        )
        data = resp.json()
        assert data["wrap"] is True
        assert data["speed_scaling"] is False

    @pytest.mark.asyncio
    async def test_invalid_value(self, client):
        session_id = await _create(client)
        resp = await client.patch(
            f"/sessions/{session_id}/config", json={"difficulty": "brutal"},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_config_not_found(self, client):
        resp = await client.patch("/sessions/nonexistent/config", json={})
        assert resp.status_code == 404


class TestDeleteSession:
    @pytest.mark.asyncio
    async def test_delete(self, client):
        session_id = await _create(client)
        resp = await client.delete(f"/sessions/{session_id}")
        assert resp.status_code == 204
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_not_found(self, client):
        resp = await client.delete("/sessions/nonexistent")
        assert resp.status_code == 404
