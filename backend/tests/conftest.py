"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest

from quizscene.catalog.loader import load_catalog
from quizscene.catalog.registry import CatalogRegistry
from quizscene.models.catalog import ComponentDescriptor


# Scene with one road_scene block. Objects are listed out of z order on purpose.
SEDAN_STOP_SCENE = {
    "id": "scene_stop",
    "version": 1,
    "metadata": {"question_text": "Must the car stop at the STOP sign?", "difficulty": 2},
    "blocks": [
        {
            "id": "main",
            "type": "road_scene",
            "layout": {"x": 0, "y": 0, "w": 100, "h": 100},
            "content": {
                "background": "asphalt",
                "objects": [
                    {
                        "id": "sign",
                        "component_id": "sign_stop",
                        "transform": {"x": 45, "y": 40, "z_index": 20, "scale": 0.8},
                    },
                    {
                        "id": "car_blue",
                        "component_id": "vehicle_sedan",
                        "transform": {"x": 50, "y": 75, "rotation": 0, "z_index": 10},
                        "props": {"color": "#ef4444", "headlights": True},
                    },
                ],
            },
        }
    ],
}

GHOST_SCENE = {
    "id": "scene_ghost",
    "version": 1,
    "blocks": [
        {
            "id": "main",
            "type": "road_scene",
            "content": {
                "objects": [
                    {"id": "obj_1", "component_id": "vehicle_sedan", "transform": {"x": 10, "y": 10}},
                    {"id": "obj_7", "component_id": "ghost_car", "transform": {"x": 50, "y": 50}},
                ]
            },
        }
    ],
}

# One block of every type, side by side
ALL_BLOCKS_SCENE = {
    "id": "scene_all",
    "version": "2",
    "metadata": {"tags": ["demo"]},
    "blocks": [
        {
            "id": "road",
            "type": "road_scene",
            "title": "Intersection",
            "layout": {"x": 0, "y": 0, "w": 50, "h": 50},
            "content": {
                "background": "grass",
                "objects": [
                    {
                        "id": "road_v",
                        "component_id": "road_segment_straight",
                        "transform": {"x": 50, "y": 50, "z_index": 0},
                        "props": {"width": 20, "length": 100},
                    }
                ],
            },
        },
        {
            "id": "card",
            "type": "definition_card",
            "layout": {"x": 50, "y": 0, "w": 50, "h": 50},
            "content": {"title": "Stop", "text": "Come to a complete stop before the line."},
        },
        {
            "id": "speed",
            "type": "gauge",
            "layout": {"x": 0, "y": 50, "w": 25, "h": 25},
            "content": {
                "value": 70,
                "max": 130,
                "unit": "km/h",
                "label": "Speed",
                "zones": [{"min": 110, "max": 130, "color": "#ef4444"}],
            },
        },
        {
            "id": "steps",
            "type": "timeline",
            "layout": {"x": 25, "y": 50, "w": 25, "h": 25},
            "content": {
                "orientation": "horizontal",
                "events": [
                    {"id": "e1", "time": "0s", "title": "See sign"},
                    {"id": "e2", "time": "2s", "title": "Brake", "description": "Slow down gradually"},
                ],
            },
        },
        {
            "id": "compare",
            "type": "comparison_table",
            "layout": {"x": 50, "y": 50, "w": 50, "h": 25},
            "content": {
                "headers": ["Stop", "Yield"],
                "rows": [{"label": "Full stop", "values": ["Yes", "No"]}],
            },
        },
        {
            "id": "causes",
            "type": "cause_effect",
            "layout": {"x": 0, "y": 75, "w": 50, "h": 25},
            "content": {"cause": "Ice", "effect": "Skid"},
        },
        {
            "id": "icons",
            "type": "icon_grid",
            "layout": {"x": 50, "y": 75, "w": 50, "h": 25},
            "content": {"icons": []},
        },
    ],
}

BADGE_COMPONENT = {
    "id": "ui_badge",
    "version": "1.0.0",
    "type": "primitive",
    "category": "ui",
    "name": "Badge",
    "description": "Small round badge with a label.",
    "propsSchema": {"type": "object", "properties": {"label": {"type": "string"}}},
    "defaultProps": {"label": "A", "fill": "#22c55e"},
    "render": {"svg": "<circle r='2' fill='{fill}'/><text>{label}</text>"},
}


def make_component(component_id: str, **overrides) -> ComponentDescriptor:
    raw = {**copy.deepcopy(BADGE_COMPONENT), "id": component_id, **overrides}
    return ComponentDescriptor.model_validate(raw)


def scene_copy(scene: dict) -> dict:
    return copy.deepcopy(scene)


@pytest.fixture
def catalog() -> CatalogRegistry:
    """Fresh registry holding the built-in components."""
    return load_catalog()


@pytest.fixture
def empty_registry() -> CatalogRegistry:
    return CatalogRegistry()


@pytest.fixture
def badge() -> ComponentDescriptor:
    return make_component("ui_badge")
