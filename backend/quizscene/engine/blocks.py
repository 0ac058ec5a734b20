"""Per-type block renderers.

Every block becomes a ``RenderedBlock`` whatever its state: recognised types
go through their renderer, unrecognised types get the "unknown block"
placeholder and recognised types whose content does not parse get the
"invalid block" placeholder.
"""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass, field
from html import escape
from typing import Any, Callable, Literal, Mapping

from pydantic import BaseModel, ValidationError

from quizscene.engine.composite import CatalogLookup
from quizscene.engine.config import RenderConfig
from quizscene.engine.gauge import render_gauge
from quizscene.engine.layout import Rect
from quizscene.engine.objects import ObjectFragment, render_object, z_index_of
from quizscene.engine.template import display_string
from quizscene.models.scene import (
    ComparisonTableContent,
    DefinitionCardContent,
    GaugeContent,
    TimelineContent,
)

logger = logging.getLogger(__name__)

BlockKind = Literal["content", "unknown", "invalid"]

_FONT = 'font-family="Arial, sans-serif"'


@dataclass
class BlockBody:
    """Inner drawing of a block in its own viewBox."""

    view_w: float
    view_h: float
    svg: str
    kind: BlockKind = "content"
    objects: list[ObjectFragment] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@dataclass
class RenderedBlock:
    block_id: str
    type: str
    rect: Rect
    svg: str
    title: str | None = None
    kind: BlockKind = "content"
    objects: list[ObjectFragment] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def placeholder(self) -> bool:
        return self.kind != "content"


BlockRenderer = Callable[[Mapping[str, Any], Rect, CatalogLookup, RenderConfig], BlockBody]


# ── road_scene ──


def render_road_scene(content: Mapping[str, Any], rect: Rect, catalog: CatalogLookup, config: RenderConfig) -> BlockBody:
    """Background, then objects in ascending z_index (stable for ties)."""
    size = config.road_viewbox
    background = content.get("background") if isinstance(content.get("background"), str) else None
    parts = [
        f'<rect x="0" y="0" width="{display_string(size)}" height="{display_string(size)}" '
        f'fill="{config.background_fill(background)}"/>'
    ]

    raw_objects = content.get("objects")
    objects = [o for o in raw_objects if isinstance(o, Mapping)] if isinstance(raw_objects, list) else []
    fragments: list[ObjectFragment] = []
    missing: list[str] = []
    for obj in sorted(objects, key=z_index_of):
        fragment = render_object(obj, catalog, config)
        fragments.append(fragment)
        parts.append(fragment.svg)
        for component_id in fragment.missing:
            if component_id not in missing:
                missing.append(component_id)

    return BlockBody(size, size, "".join(parts), objects=fragments, missing=missing)


# ── definition_card ──


def render_definition_card(content: Mapping[str, Any], rect: Rect, catalog: CatalogLookup, config: RenderConfig) -> BlockBody:
    card = DefinitionCardContent.model_validate(content, strict=True)
    w, h = max(rect.w, 1.0), max(rect.h, 1.0)
    pad, font = 16.0, 16.0
    parts = [
        f'<rect x="0" y="0" width="{w:g}" height="{h:g}" rx="8" fill="#ffffff" stroke="#e5e7eb"/>'
    ]
    y = pad + font
    if card.title:
        parts.append(
            f'<text x="{pad:g}" y="{y:g}" {_FONT} font-size="{font + 2:g}" font-weight="bold" '
            f'fill="#111827">{escape(card.title)}</text>'
        )
        y += font * 1.6
    for line in wrap_text(card.text, w - 2 * pad, font):
        parts.append(
            f'<text x="{pad:g}" y="{y:g}" {_FONT} font-size="{font:g}" fill="#374151">{escape(line)}</text>'
        )
        y += font * 1.35
    return BlockBody(w, h, "".join(parts))


# ── gauge ──


def render_gauge_block(content: Mapping[str, Any], rect: Rect, catalog: CatalogLookup, config: RenderConfig) -> BlockBody:
    return BlockBody(200.0, 200.0, render_gauge(GaugeContent.model_validate(content, strict=True)))


# ── timeline ──


def render_timeline(content: Mapping[str, Any], rect: Rect, catalog: CatalogLookup, config: RenderConfig) -> BlockBody:
    timeline = TimelineContent.model_validate(content, strict=True)
    w, h = max(rect.w, 1.0), max(rect.h, 1.0)
    n = len(timeline.events)
    parts: list[str] = []

    if timeline.orientation == "horizontal":
        step = w / max(n, 1)
        cy = 40.0
        if n:
            parts.append(f'<line x1="{step / 2:g}" y1="{cy:g}" x2="{w - step / 2:g}" y2="{cy:g}" stroke="#93c5fd" stroke-width="4"/>')
        for i, event in enumerate(timeline.events):
            cx = step * i + step / 2
            parts.append(_marker(cx, cy, i + 1))
            ty = cy + 36
            if event.time:
                parts.append(_text(cx, ty, event.time, 11, "#6b7280", anchor="middle"))
                ty += 16
            parts.append(_text(cx, ty, event.title, 13, "#111827", anchor="middle", bold=True))
            if event.description:
                for line in wrap_text(event.description, step - 8, 11):
                    ty += 14
                    parts.append(_text(cx, ty, line, 11, "#4b5563", anchor="middle"))
    else:
        step = h / max(n, 1)
        cx = 28.0
        if n:
            parts.append(f'<line x1="{cx:g}" y1="{step / 2:g}" x2="{cx:g}" y2="{h - step / 2:g}" stroke="#93c5fd" stroke-width="4"/>')
        for i, event in enumerate(timeline.events):
            cy = step * i + step / 2
            parts.append(_marker(cx, cy, i + 1))
            tx = cx + 32
            ty = cy - 4
            if event.time:
                parts.append(_text(tx, ty - 14, event.time, 11, "#6b7280"))
            parts.append(_text(tx, ty, event.title, 14, "#111827", bold=True))
            if event.description:
                parts.append(_text(tx, ty + 16, event.description, 12, "#4b5563"))
    return BlockBody(w, h, "".join(parts))


def _marker(cx: float, cy: float, number: int) -> str:
    return (
        f'<circle cx="{cx:g}" cy="{cy:g}" r="16" fill="#3b82f6"/>'
        + _text(cx, cy + 5, str(number), 14, "#ffffff", anchor="middle", bold=True)
    )


# ── comparison_table ──


def render_comparison_table(content: Mapping[str, Any], rect: Rect, catalog: CatalogLookup, config: RenderConfig) -> BlockBody:
    table = ComparisonTableContent.model_validate(content, strict=True)
    w, h = max(rect.w, 1.0), max(rect.h, 1.0)
    cols = 1 + len(table.headers)
    col_w = w / cols
    row_h = min(40.0, h / (len(table.rows) + 1))
    parts: list[str] = []

    header = ["Feature", *table.headers]
    for c, label in enumerate(header):
        x = c * col_w
        parts.append(f'<rect x="{x:g}" y="0" width="{col_w:g}" height="{row_h:g}" fill="#3b82f6" stroke="#2563eb"/>')
        parts.append(_text(x + 8, row_h * 0.65, label, 13, "#ffffff", bold=True))

    for r, row in enumerate(table.rows):
        y = (r + 1) * row_h
        fill = "#f9fafb" if r % 2 == 0 else "#ffffff"
        cells = [row.label, *row.values]
        for c in range(cols):
            x = c * col_w
            parts.append(f'<rect x="{x:g}" y="{y:g}" width="{col_w:g}" height="{row_h:g}" fill="{fill}" stroke="#d1d5db"/>')
            if c < len(cells):
                parts.append(_text(x + 8, y + row_h * 0.65, cells[c], 12, "#374151", bold=(c == 0)))
    return BlockBody(w, h, "".join(parts))


# ── acknowledged but not drawn ──


def _not_implemented(label: str) -> BlockRenderer:
    def render(content: Mapping[str, Any], rect: Rect, catalog: CatalogLookup, config: RenderConfig) -> BlockBody:
        w, h = max(rect.w, 1.0), max(rect.h, 1.0)
        return BlockBody(
            w,
            h,
            f'<rect x="0" y="0" width="{w:g}" height="{h:g}" rx="8" fill="#ffffff" stroke="#e5e7eb"/>'
            + _text(16, 32, f"{label} (not yet implemented)", 13, "#4b5563"),
        )

    return render


BLOCK_RENDERERS: dict[str, BlockRenderer] = {
    "road_scene": render_road_scene,
    "definition_card": render_definition_card,
    "gauge": render_gauge_block,
    "timeline": render_timeline,
    "comparison_table": render_comparison_table,
    "cause_effect": _not_implemented("Cause-effect diagram"),
    "icon_grid": _not_implemented("Icon grid"),
}


def placeholder_body(rect: Rect, label: str, config: RenderConfig, kind: BlockKind) -> BlockBody:
    w, h = max(rect.w, 1.0), max(rect.h, 1.0)
    return BlockBody(
        w,
        h,
        f'<rect x="0" y="0" width="{w:g}" height="{h:g}" rx="6" fill="{config.unknown_fill}" '
        f'stroke="{config.unknown_stroke}"/>'
        + _text(w / 2, h / 2, label, 14, config.unknown_text_fill, anchor="middle", bold=True),
        kind=kind,
    )


def render_block_body(
    block_type: Any,
    content: Any,
    rect: Rect,
    catalog: CatalogLookup,
    config: RenderConfig,
) -> BlockBody:
    renderer = BLOCK_RENDERERS.get(block_type) if isinstance(block_type, str) else None
    if renderer is None:
        return placeholder_body(rect, f"Unknown block: {block_type}", config, "unknown")
    if isinstance(content, BaseModel):
        content = content.model_dump()
    if not isinstance(content, Mapping):
        return placeholder_body(rect, f"Invalid block: {block_type}", config, "invalid")
    try:
        return renderer(content, rect, catalog, config)
    except ValidationError as e:
        logger.debug("Block content for %s did not parse: %s", block_type, e.error_count())
        return placeholder_body(rect, f"Invalid block: {block_type}", config, "invalid")
    except Exception as e:
        logger.warning("Block renderer %s failed: %s", block_type, e)
        return placeholder_body(rect, f"Invalid block: {block_type}", config, "invalid")


# ── text helpers ──


def wrap_text(text: str, width: float, font_size: float) -> list[str]:
    """Greedy word wrap using an average glyph width of 0.55em."""
    chars = max(int(width / (font_size * 0.55)), 8)
    return textwrap.wrap(text, width=chars) or [""]


def _text(
    x: float,
    y: float,
    body: str,
    size: float,
    fill: str,
    anchor: str = "start",
    bold: bool = False,
) -> str:
    weight = ' font-weight="bold"' if bold else ""
    return (
        f'<text x="{x:g}" y="{y:g}" {_FONT} font-size="{size:g}" fill="{fill}" '
        f'text-anchor="{anchor}"{weight}>{escape(body)}</text>'
    )
