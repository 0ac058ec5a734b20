"""Two-stage document validation: structure first, then catalog references."""

from quizscene.validation.references import missing_component_from_message, validate_scene_with_catalog
from quizscene.validation.schema import parse_component, parse_scene, validate_component, validate_scene

__all__ = [
    "validate_component",
    "validate_scene",
    "validate_scene_with_catalog",
    "parse_component",
    "parse_scene",
    "missing_component_from_message",
]
