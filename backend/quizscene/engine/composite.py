"""Descriptor -> SVG markup, including recursive composite children.

A composite's ``children`` reference other descriptors by id. Each child is
drawn at its offset with props mapped from the parent:

    propsMapping: {"fill": "color"}    # child.fill <- parent.color
    propsMapping: {"fill": "{color}"}  # same, template form
    propsMapping: {"fill": "#000"}     # not a parent prop -> literal

Resolution carries the chain of ids being expanded; a child already on the
chain is a cycle and is skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from quizscene.engine.layers import render_layers
from quizscene.engine.template import display_string, merge_props, render_template
from quizscene.models.catalog import CompositeChild, ComponentDescriptor

logger = logging.getLogger(__name__)


class CatalogLookup(Protocol):
    def get(self, component_id: str) -> ComponentDescriptor | None: ...


@dataclass
class ResolveReport:
    """Side channel filled while resolving one object."""

    missing: list[str] = field(default_factory=list)
    cycles: list[str] = field(default_factory=list)

    def note_missing(self, component_id: str) -> None:
        if component_id not in self.missing:
            self.missing.append(component_id)


def render_descriptor(
    descriptor: ComponentDescriptor,
    props: Mapping[str, Any],
    catalog: CatalogLookup,
    report: ResolveReport | None = None,
    visited: frozenset[str] = frozenset(),
) -> str:
    """Markup for ``descriptor`` with already-merged ``props``.

    ``svg`` wins over ``layers``; children of composites are appended after
    the descriptor's own markup. A descriptor with none of these yields "".
    """
    report = report if report is not None else ResolveReport()
    visited = visited | {descriptor.id}

    parts: list[str] = []
    if descriptor.render is not None:
        if descriptor.render.svg:
            parts.append(render_template(descriptor.render.svg, props))
        elif descriptor.render.layers:
            parts.append(render_layers(descriptor.render.layers, props))

    for child in descriptor.children or []:
        parts.append(_render_child(child, props, catalog, report, visited))

    return "".join(parts)


def _render_child(
    child: CompositeChild,
    parent_props: Mapping[str, Any],
    catalog: CatalogLookup,
    report: ResolveReport,
    visited: frozenset[str],
) -> str:
    if child.component_id in visited:
        logger.warning("Composite cycle through %s skipped", child.component_id)
        report.cycles.append(child.component_id)
        return ""

    descriptor = catalog.get(child.component_id)
    if descriptor is None:
        report.note_missing(child.component_id)
        return ""

    mapped = map_child_props(child.props_mapping or {}, parent_props)
    props = merge_props(descriptor.default_props, mapped)
    inner = render_descriptor(descriptor, props, catalog, report, visited)

    offset = child.offset
    dx, dy, rot = (offset.x, offset.y, offset.rotation) if offset else (0.0, 0.0, 0.0)
    return (
        f'<g transform="translate({display_string(dx)}, {display_string(dy)}) '
        f'rotate({display_string(rot)})">{inner}</g>'
    )


def map_child_props(mapping: Mapping[str, str], parent_props: Mapping[str, Any]) -> dict[str, Any]:
    """Evaluate a child's ``propsMapping`` against its parent's props."""
    out: dict[str, Any] = {}
    for child_key, expr in mapping.items():
        name = expr.strip()
        if name.startswith("{") and name.endswith("}") and name[1:-1].strip() in parent_props:
            out[child_key] = parent_props[name[1:-1].strip()]
        elif name in parent_props:
            out[child_key] = parent_props[name]
        else:
            out[child_key] = render_template(expr, parent_props)
    return out
