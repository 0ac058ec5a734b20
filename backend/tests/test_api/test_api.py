"""Tests for API endpoints (LLM calls replaced by fakes)."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from quizscene.catalog.loader import load_catalog
from quizscene.catalog.store import ComponentStore
from quizscene.dependencies import get_session, get_store
from quizscene.main import app
from quizscene.services.session import EditorSession
from tests.conftest import BADGE_COMPONENT, GHOST_SCENE, SEDAN_STOP_SCENE, scene_copy


client = TestClient(app)


@pytest.fixture(autouse=True)
def session(tmp_path):
    s = EditorSession(load_catalog(), scene=scene_copy(SEDAN_STOP_SCENE))
    store = ComponentStore(tmp_path / "components")
    app.dependency_overrides[get_session] = lambda: s
    app.dependency_overrides[get_store] = lambda: store
    yield s
    app.dependency_overrides.clear()
    s.close()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["components_registered"] == 6


def test_prompts():
    data = client.get("/api/prompts").json()
    assert "Scene-Director" in data["scene"]
    assert "Component-Designer" in data["component"]


class TestComponents:
    def test_list(self):
        data = client.get("/api/components").json()
        assert len(data) == 6
        assert "defaultProps" in data[0]

    def test_list_by_category(self):
        data = client.get("/api/components", params={"category": "vehicle"}).json()
        assert {c["id"] for c in data} == {"vehicle_sedan", "vehicle_motorcycle"}

    def test_get(self):
        response = client.get("/api/components/sign_stop")
        assert response.status_code == 200
        assert response.json()["name"] == "Stop sign"

    def test_get_unknown(self):
        response = client.get("/api/components/ghost_car")
        assert response.status_code == 404

    def test_create_saves_and_registers(self, session, tmp_path):
        response = client.post("/api/components", json=BADGE_COMPONENT)
        assert response.status_code == 200
        data = response.json()
        assert data["saved"] is True
        assert "ui_badge" in session.registry
        assert (tmp_path / "components" / "ui_badge.json").exists()

    def test_create_invalid(self):
        response = client.post("/api/components", json={**BADGE_COMPONENT, "category": "nope"})
        assert response.status_code == 422
        assert response.json()["detail"][0]["location"] == "/category"

    def test_update(self, session):
        response = client.put(
            "/api/components/sign_stop",
            json={**BADGE_COMPONENT, "category": "sign", "name": "Big stop"},
        )
        assert response.status_code == 200
        assert session.registry.get("sign_stop").name == "Big stop"

    def test_update_unknown(self):
        response = client.put("/api/components/ghost_car", json=BADGE_COMPONENT)
        assert response.status_code == 404

    def test_delete_revalidates_scene(self, session):
        response = client.delete("/api/components/sign_stop")
        assert response.status_code == 200
        assert response.json()["missing_components"] == ["sign_stop"]
        assert session.missing == ["sign_stop"]
        assert client.delete("/api/components/sign_stop").status_code == 404

    def test_delete_with_locked_file(self, session, tmp_path, monkeypatch):
        from pathlib import Path

        client.post("/api/components", json=BADGE_COMPONENT)

        def locked(self, missing_ok=False):
            raise PermissionError("read-only directory")

        monkeypatch.setattr(Path, "unlink", locked)
        response = client.delete("/api/components/ui_badge")
        assert response.status_code == 200
        assert response.json()["file_removed"] is False
        assert "ui_badge" not in session.registry

    def test_validate(self):
        assert client.post("/api/components/validate", json={"component": BADGE_COMPONENT}).json()["valid"]
        data = client.post("/api/components/validate", json={"component": {"id": "x"}}).json()
        assert not data["valid"]
        assert data["errors"]


class TestScene:
    def test_validate_ghost(self):
        data = client.post("/api/scene/validate", json={"scene": GHOST_SCENE}).json()
        assert data["valid"] is False
        assert data["errors"][0]["message"] == "Object obj_7 references non-existent component: ghost_car"
        assert data["missing_components"] == ["ghost_car"]

    def test_render_session_scene(self):
        data = client.post("/api/scene/render", json={}).json()
        assert data["missing_components"] == []
        (block,) = data["blocks"]
        assert block["block_id"] == "main"
        assert block["placeholder"] is False
        assert data["svg"].startswith("<?xml")

    def test_render_given_scene(self):
        data = client.post("/api/scene/render", json={"scene": GHOST_SCENE, "title": "Ghost"}).json()
        assert data["missing_components"] == ["ghost_car"]
        assert "<title>Ghost</title>" in data["svg"]

    def test_render_png(self, monkeypatch):
        import quizscene.svg.rasterizer as rasterizer

        captured = {}

        def fake_png(svg, width=800, height=800):
            captured.update(svg=svg, width=width)
            return b"\x89PNG fake"

        monkeypatch.setattr(rasterizer, "render_svg_to_png", fake_png)
        response = client.post("/api/scene/render.png", json={"width": 400})
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == b"\x89PNG fake"
        assert captured["width"] == 400
        assert "question-banner" in captured["svg"]

    def test_render_png_failure(self, monkeypatch):
        import quizscene.svg.rasterizer as rasterizer

        def broken(svg, width=800, height=800):
            raise OSError("no cairo")

        monkeypatch.setattr(rasterizer, "render_svg_to_png", broken)
        assert client.post("/api/scene/render.png", json={}).status_code == 500

    def test_get_and_put_scene(self):
        data = client.get("/api/scene").json()
        assert data["scene"]["id"] == "scene_stop"

        data = client.put("/api/scene", json={"text": "{nope"}).json()
        assert data["errors"] == ["Invalid JSON syntax"]
        assert data["scene"]["id"] == "scene_stop"

        data = client.put("/api/scene", json={"text": json.dumps(GHOST_SCENE)}).json()
        assert data["missing_components"] == ["ghost_car"]
        assert data["scene"]["id"] == "scene_stop"


def _fake_llm(monkeypatch):
    import quizscene.llm.client as llm_client

    async def fake_scene(request, catalog, current_scene=None, history=None):
        return "```json\n" + json.dumps(GHOST_SCENE) + "\n```"

    async def fake_component(request, history=None):
        return "```json\n" + json.dumps({**BADGE_COMPONENT, "id": "ghost_car"}) + "\n```"

    monkeypatch.setattr(llm_client, "generate_scene", fake_scene)
    monkeypatch.setattr(llm_client, "generate_component", fake_component)


def test_chat_heals_missing_components(monkeypatch, session):
    _fake_llm(monkeypatch)
    response = client.post("/api/chat", json={"message": "Add a ghost car"})
    assert response.status_code == 200
    data = response.json()
    assert data["scene_updated"] is True
    assert data["missing_components"] == ["ghost_car"]
    assert len(data["jobs"]) == 1

    # Background job ran once the response was sent
    jobs = client.get("/api/jobs").json()
    assert jobs["active"] == 0
    assert jobs["jobs"][0]["status"] == "completed"
    assert jobs["jobs"][0]["component"]["id"] == "ghost_car"
    assert "ghost_car" in session.registry
    assert client.get("/api/scene").json()["missing_components"] == []

    assert client.delete("/api/jobs/completed").json() == {"cleared": 1}
    assert client.get("/api/jobs").json()["jobs"] == []


def test_chat_without_api_key(monkeypatch):
    from quizscene.config import settings

    monkeypatch.setattr(settings, "anthropic_api_key", "")
    data = client.post("/api/chat", json={"message": "Hello"}).json()
    assert data["scene_updated"] is False
    assert data["error"] == "No valid JSON found in response"
    assert data["jobs"] == []


def test_replay(monkeypatch, session):
    _fake_llm(monkeypatch)
    session.registry.remove("sign_stop")
    data = client.post("/api/scene/replay").json()
    assert data["missing_components"] == ["sign_stop"]
    assert len(data["jobs"]) == 1
