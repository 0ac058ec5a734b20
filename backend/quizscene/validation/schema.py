"""Structural validation of component and scene documents.

Facade over pydantic: every ``ValidationError`` entry becomes a
``ValidationIssue`` whose location is a ``/``-joined path into the document.
Validation is strict: JSON values are never coerced across types, except an
integer where a float is expected. Nothing here consults the catalog, and
nothing here raises.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from quizscene.models.catalog import ComponentDescriptor
from quizscene.models.scene import BLOCK_TYPES, SceneJSON
from quizscene.models.validation import ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

_component_adapter = TypeAdapter(ComponentDescriptor)
_scene_adapter = TypeAdapter(SceneJSON)

# Union member names pydantic appends to error locations
_UNION_MEMBER_SEGMENTS = frozenset({"bool", "int", "float", "str"})


def validate_component(raw: Any) -> ValidationResult:
    return _validate(_component_adapter, raw, "component")


def validate_scene(raw: Any) -> ValidationResult:
    return _validate(_scene_adapter, raw, "scene")


def parse_component(raw: Any) -> ComponentDescriptor:
    """Validate and build a descriptor. Raises pydantic's ``ValidationError``."""
    return _component_adapter.validate_python(raw, strict=True)


def parse_scene(raw: Any) -> SceneJSON:
    return _scene_adapter.validate_python(raw, strict=True)


def _validate(adapter: TypeAdapter, raw: Any, kind: str) -> ValidationResult:
    if not isinstance(raw, dict):
        return ValidationResult.failed(
            [ValidationIssue(location="", message=f"{kind} must be an object, got {_json_type(raw)}")]
        )
    try:
        adapter.validate_python(raw, strict=True)
    except ValidationError as e:
        issues = [
            ValidationIssue(location=format_location(err["loc"]), message=err["msg"])
            for err in e.errors()
        ]
        logger.debug("%s failed schema validation with %d issue(s)", kind, len(issues))
        return ValidationResult.failed(issues)
    except Exception as e:
        logger.warning("Unexpected error validating %s: %s", kind, e)
        return ValidationResult.failed([ValidationIssue(location="", message=str(e))])
    return ValidationResult.ok()


def format_location(loc: tuple[Any, ...]) -> str:
    """Turn a pydantic ``loc`` tuple into a JSON-pointer style path.

    Tagged-union discriminator segments (``("blocks", 0, "road_scene", ...)``)
    and plain union member names are dropped so the path points into the
    document itself.
    """
    parts: list[str] = []
    prev: Any = None
    for seg in loc:
        if isinstance(seg, str):
            if isinstance(prev, int) and seg in BLOCK_TYPES:
                prev = seg
                continue
            if seg in _UNION_MEMBER_SEGMENTS or "[" in seg:
                prev = seg
                continue
        parts.append(str(seg))
        prev = seg
    return "/" + "/".join(parts) if parts else ""


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
