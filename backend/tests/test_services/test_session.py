"""Tests for the editor session."""

from __future__ import annotations

import asyncio
import json

import pytest

from quizscene.services.autoheal import AutoHealer
from quizscene.services.jobs import GenerationQueue
from quizscene.services.session import INVALID_JSON_MESSAGE, EditorSession
from tests.conftest import BADGE_COMPONENT, GHOST_SCENE, SEDAN_STOP_SCENE, make_component, scene_copy

GHOST_MESSAGE = "Object obj_7 references non-existent component: ghost_car"


@pytest.fixture
def session(catalog):
    s = EditorSession(catalog, scene=scene_copy(SEDAN_STOP_SCENE))
    yield s
    s.close()


def _fenced(doc) -> str:
    return "Updated scene:\n```json\n" + json.dumps(doc) + "\n```"


class TestSceneText:
    def test_invalid_json_keeps_scene(self, session):
        assert session.apply_scene_text("{oops") == [INVALID_JSON_MESSAGE]
        assert session.scene == SEDAN_STOP_SCENE
        assert session.scene_text == "{oops"

    def test_valid_text_replaces_scene(self, session):
        new_scene = scene_copy(SEDAN_STOP_SCENE)
        new_scene["id"] = "scene_edit"
        assert session.apply_scene_text(json.dumps(new_scene)) == []
        assert session.scene["id"] == "scene_edit"
        assert session.missing == []

    def test_missing_reference_keeps_scene(self, session):
        errors = session.apply_scene_text(json.dumps(GHOST_SCENE))
        assert errors == [GHOST_MESSAGE]
        assert session.missing == ["ghost_car"]
        assert session.scene["id"] == SEDAN_STOP_SCENE["id"]

    def test_schema_error_keeps_scene(self, session):
        errors = session.apply_scene_text(json.dumps({"id": "x", "version": 1}))
        assert errors
        assert session.scene["id"] == SEDAN_STOP_SCENE["id"]


class TestLLMResponse:
    def test_scene_adopted_even_with_missing_components(self, session):
        outcome = session.apply_llm_response(_fenced(GHOST_SCENE))
        assert outcome.scene_updated
        assert outcome.missing == ["ghost_car"]
        assert "1 component(s) are missing" in outcome.message
        assert session.scene["id"] == "scene_ghost"
        assert session.errors == [GHOST_MESSAGE]
        assert json.loads(session.scene_text) == GHOST_SCENE

    def test_clean_scene(self, session):
        outcome = session.apply_llm_response(_fenced(SEDAN_STOP_SCENE))
        assert outcome.message == "Scene updated."
        assert outcome.missing == []

    def test_schema_errors_reported(self, session):
        outcome = session.apply_llm_response(_fenced({"id": "broken", "version": 1}))
        assert outcome.message.startswith("Scene has errors:")
        assert session.scene["id"] == "broken"

    def test_no_json_leaves_state(self, session):
        outcome = session.apply_llm_response("I'd rather not.")
        assert not outcome.scene_updated
        assert outcome.message == "I'd rather not."
        assert outcome.error == "No valid JSON found in response"
        assert session.scene == SEDAN_STOP_SCENE


def test_chat_keeps_history(session):
    seen = []

    async def direct(request, catalog, current_scene, history):
        seen.append((request, len(catalog), current_scene["id"], history))
        return _fenced(GHOST_SCENE)

    outcome = asyncio.run(session.chat("Add a ghost car", direct=direct))
    assert outcome.missing == ["ghost_car"]
    asyncio.run(session.chat("Now remove it", direct=direct))

    assert seen[0] == ("Add a ghost car", 6, "scene_stop", [])
    assert seen[1][2] == "scene_ghost"
    assert [m["role"] for m in seen[1][3]] == ["user", "assistant"]
    assert len(session.history) == 4


def test_registry_changes_revalidate(session, catalog):
    session.apply_llm_response(_fenced(GHOST_SCENE))
    assert session.missing == ["ghost_car"]

    catalog.add(make_component("ghost_car"))
    assert session.missing == []
    assert session.errors == []

    session.delete_component("ghost_car")
    assert session.missing == ["ghost_car"]


def test_close_stops_revalidation(catalog):
    session = EditorSession(catalog, scene=scene_copy(GHOST_SCENE))
    session.close()
    catalog.add(make_component("ghost_car"))
    assert session.missing == ["ghost_car"]


def test_auto_heal_round_trip(catalog):
    async def generate(request):
        return "```json\n" + json.dumps({**BADGE_COMPONENT, "id": "ghost_car"}) + "\n```"

    queue = GenerationQueue()
    session = EditorSession(catalog, queue, AutoHealer(catalog, queue, generate), scene=scene_copy(GHOST_SCENE))
    assert session.missing == ["ghost_car"]

    job_ids = session.replay()
    assert len(job_ids) == 1
    asyncio.run(session.healer.run_jobs(job_ids))

    assert session.missing == []
    assert session.render().missing_components == []
    session.close()


def test_regenerate_existing_component(session):
    job_ids = session.regenerate_component("sign_stop")
    assert len(job_ids) == 1
    assert session.queue.get_job(job_ids[0]).component_id == "sign_stop"


def test_default_scene_is_empty(catalog):
    session = EditorSession(catalog)
    assert session.scene["blocks"] == []
    assert session.errors == []
    assert session.render().blocks == []
    session.close()
