"""Referential validation: every component id a scene names must be in the catalog."""

from __future__ import annotations

import logging
from typing import Any, Container

from quizscene.models.validation import MissingReference, ValidationResult
from quizscene.validation.schema import validate_scene

logger = logging.getLogger(__name__)

_MISSING_MARKER = "non-existent component"


def validate_scene_with_catalog(
    scene: Any,
    catalog: Container[str],
    strict: bool = False,
) -> ValidationResult:
    """Schema-validate ``scene``, then check its component references against ``catalog``.

    A structurally invalid scene returns the schema result unchanged. Only
    ``road_scene`` objects are checked unless ``strict`` is set, in which case
    ``definition_card.image_component_id`` is checked as well.
    """
    schema_result = validate_scene(scene)
    if not schema_result.valid:
        return schema_result

    missing: list[MissingReference] = []
    for bi, block in enumerate(scene["blocks"]):
        block_type = block.get("type")
        content = block.get("content") or {}
        if block_type == "road_scene":
            for oi, obj in enumerate(content.get("objects") or []):
                component_id = obj["component_id"]
                if component_id not in catalog:
                    missing.append(
                        MissingReference(
                            object_id=obj["id"],
                            component_id=component_id,
                            block_id=block["id"],
                            location=f"/blocks/{bi}/content/objects/{oi}/component_id",
                        )
                    )
        elif strict and block_type == "definition_card":
            image_id = content.get("image_component_id")
            if image_id and image_id not in catalog:
                missing.append(
                    MissingReference(
                        object_id=block["id"],
                        component_id=image_id,
                        block_id=block["id"],
                        location=f"/blocks/{bi}/content/image_component_id",
                    )
                )

    if missing:
        logger.debug("Scene %s references %d missing component(s)", scene.get("id"), len(missing))
        return ValidationResult.failed([m.to_issue() for m in missing], missing)
    return ValidationResult.ok()


def missing_component_from_message(message: str) -> str | None:
    """Recover the component id from a textual referential error.

    Kept for callers that only have the message text; everything inside the
    package reads ``ValidationResult.missing`` instead.
    """
    if _MISSING_MARKER not in message or ":" not in message:
        return None
    component_id = message.split(":", 1)[1].strip()
    return component_id or None
