"""Tests for saving components to a directory."""

from __future__ import annotations

import json
from pathlib import Path

from quizscene.catalog.loader import load_descriptors
from quizscene.catalog.store import ComponentStore, manual_save_instructions, prepare_component_for_save
from tests.conftest import BADGE_COMPONENT, make_component


def test_save_writes_pretty_json(tmp_path, badge):
    store = ComponentStore(tmp_path / "components")
    result = store.save(badge)
    assert result.success
    assert result.error is None

    path = tmp_path / "components" / "ui_badge.json"
    assert result.file_path == str(path)
    text = path.read_text()
    assert text.startswith('{\n  "id": "ui_badge"')
    assert json.loads(text)["defaultProps"] == BADGE_COMPONENT["defaultProps"]


def test_saved_file_loads_back(tmp_path, badge):
    ComponentStore(tmp_path).save(badge)
    (loaded,) = load_descriptors(tmp_path)
    assert loaded == badge


def test_invalid_component_not_written(tmp_path):
    result = ComponentStore(tmp_path).save({**BADGE_COMPONENT, "category": "nope"})
    assert not result.success
    assert result.error.startswith("Validation failed: ")
    assert list(tmp_path.iterdir()) == []


def test_save_batch(tmp_path):
    results = ComponentStore(tmp_path).save_batch([make_component("ui_a"), make_component("ui_b")])
    assert [r.success for r in results] == [True, True]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["ui_a.json", "ui_b.json"]


def test_delete(tmp_path, badge):
    store = ComponentStore(tmp_path)
    store.save(badge)
    assert store.delete("ui_badge") is True
    assert store.delete("ui_badge") is False


def test_prepare_component_for_save():
    valid, text, errors = prepare_component_for_save(BADGE_COMPONENT)
    assert valid and errors == []
    assert json.loads(text) == BADGE_COMPONENT

    valid, text, errors = prepare_component_for_save({"id": "x"})
    assert not valid and text is None
    assert errors


def test_manual_save_instructions(tmp_path, badge):
    text = manual_save_instructions(badge, tmp_path)
    assert str(tmp_path / "ui_badge.json") in text
    assert '"id": "ui_badge"' in text


def test_delete_unremovable_file_returns_false(tmp_path, badge, monkeypatch):
    store = ComponentStore(tmp_path)
    store.save(badge)

    def locked(self, missing_ok=False):
        raise PermissionError("read-only directory")

    monkeypatch.setattr(Path, "unlink", locked)
    assert store.delete("ui_badge") is False
    assert (tmp_path / "ui_badge.json").exists()
