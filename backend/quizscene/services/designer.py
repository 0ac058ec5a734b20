"""Component-Designer workflow: turn a missing component id into a validated descriptor."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from quizscene.llm.extraction import JSONExtractionError, extract_json
from quizscene.models.catalog import ComponentDescriptor
from quizscene.validation.schema import parse_component, validate_component

logger = logging.getLogger(__name__)

# Async callable taking the designer request text and returning the raw LLM answer.
GenerateFn = Callable[[str], Awaitable[str]]

_CATEGORY_PREFIXES = (
    ("vehicle_", "vehicle"),
    ("sign_", "sign"),
    ("road_", "road_surface"),
    ("pedestrian_", "pedestrian"),
)


class ComponentGenerationError(ValueError):
    """The designer's answer could not be turned into a valid component."""


def infer_category(component_id: str) -> str:
    for prefix, category in _CATEGORY_PREFIXES:
        if component_id.startswith(prefix):
            return category
    return "abstract"


def readable_name(component_id: str) -> str:
    """``vehicle_truck`` -> ``Vehicle Truck``."""
    return " ".join(word[:1].upper() + word[1:] for word in component_id.split("_"))


def build_component_request(
    component_id: str,
    category: str | None = None,
    context: str | None = None,
) -> str:
    request = f'Create a component called "{readable_name(component_id)}" (ID: {component_id})'
    if category:
        request += f' in the category "{category}"'
    if context:
        request += f".\n\nContext: {context}"
    request += "\n\nGenerate a fitting SVG component, simple but visually clear."
    return request


async def _default_generate(request: str) -> str:
    from quizscene.llm.client import generate_component

    return await generate_component(request)


async def auto_generate_component(
    component_id: str,
    category: str | None = None,
    context: str | None = None,
    generate: GenerateFn | None = None,
) -> ComponentDescriptor:
    """Ask the designer for ``component_id`` and return it validated.

    The returned descriptor always carries the requested id, whatever the
    model chose to call it, so that the scene reference resolves.
    """
    request = build_component_request(component_id, category, context)
    raw_text = await (generate or _default_generate)(request)

    try:
        raw = extract_json(raw_text)
    except JSONExtractionError as e:
        raise ComponentGenerationError(str(e)) from e

    if raw.get("id") != component_id:
        logger.debug("Designer returned id %r for %s, overriding", raw.get("id"), component_id)
        raw["id"] = component_id

    result = validate_component(raw)
    if not result.valid:
        details = "; ".join(str(err) for err in result.errors or [])
        raise ComponentGenerationError(f"Generated component {component_id} is invalid: {details}")

    return parse_component(raw)
