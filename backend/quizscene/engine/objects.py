"""Scene object -> positioned SVG fragment."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from html import escape
from typing import Any, Mapping

from quizscene.engine.composite import CatalogLookup, ResolveReport, render_descriptor
from quizscene.engine.config import RenderConfig
from quizscene.engine.template import display_string, merge_props

logger = logging.getLogger(__name__)


@dataclass
class ObjectFragment:
    object_id: str
    component_id: str
    z_index: int
    svg: str
    placeholder: bool = False
    missing: list[str] = field(default_factory=list)


def _number(value: Any, default: float) -> float:
    """Finite JSON number, else ``default``. Booleans are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return value


def transform_attr(transform: Mapping[str, Any]) -> str:
    x = _number(transform.get("x"), 0)
    y = _number(transform.get("y"), 0)
    rotation = _number(transform.get("rotation"), 0)
    scale = _number(transform.get("scale"), 0) or 1
    return (
        f"translate({display_string(x)}, {display_string(y)}) "
        f"rotate({display_string(rotation)}) scale({display_string(scale)})"
    )


def z_index_of(obj: Mapping[str, Any]) -> int:
    transform = obj.get("transform")
    if not isinstance(transform, Mapping):
        return 0
    return int(_number(transform.get("z_index"), 0))


def missing_glyph(component_id: str, transform: str, config: RenderConfig) -> str:
    """Dashed red box with a "?"; stands in for an unresolved component."""
    return (
        f'<g transform="{transform}" class="missing-component">'
        f'<rect x="-5" y="-5" width="10" height="10" fill="{config.missing_fill}" '
        f'stroke="{config.missing_stroke}" stroke-width="0.5" stroke-dasharray="1,1" rx="1"/>'
        f'<text x="0" y="0" text-anchor="middle" dominant-baseline="middle" font-size="2" '
        f'fill="{config.missing_stroke}" font-weight="bold">?</text>'
        f"<title>Missing: {escape(component_id)}</title>"
        f"</g>"
    )


def render_object(
    obj: Mapping[str, Any],
    catalog: CatalogLookup,
    config: RenderConfig | None = None,
) -> ObjectFragment:
    """Render one ``road_scene`` object. Never raises."""
    config = config or RenderConfig()
    object_id = str(obj.get("id", ""))
    component_id = str(obj.get("component_id", ""))
    transform = obj.get("transform") if isinstance(obj.get("transform"), Mapping) else {}
    z_index = z_index_of(obj)
    transform_str = transform_attr(transform)

    descriptor = catalog.get(component_id) if component_id else None
    if descriptor is None:
        return ObjectFragment(
            object_id=object_id,
            component_id=component_id,
            z_index=z_index,
            svg=missing_glyph(component_id, transform_str, config),
            placeholder=True,
            missing=[component_id],
        )

    instance_props = obj.get("props") if isinstance(obj.get("props"), Mapping) else {}
    props = merge_props(descriptor.default_props, instance_props)
    report = ResolveReport()
    try:
        inner = render_descriptor(descriptor, props, catalog, report)
    except Exception as e:
        logger.warning("Rendering %s (%s) failed: %s", object_id, component_id, e)
        return ObjectFragment(
            object_id=object_id,
            component_id=component_id,
            z_index=z_index,
            svg=missing_glyph(component_id, transform_str, config),
            placeholder=True,
        )

    if not inner:
        svg = ""
    else:
        svg = (
            f'<g transform="{transform_str}" data-object-id="{escape(object_id)}" '
            f'data-component-id="{escape(component_id)}">{inner}</g>'
        )
    return ObjectFragment(
        object_id=object_id,
        component_id=component_id,
        z_index=z_index,
        svg=svg,
        missing=report.missing,
    )
