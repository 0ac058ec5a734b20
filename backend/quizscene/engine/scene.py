"""Scene renderer: walks the block list and composes one SVG document."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from html import escape
from typing import Any, Mapping

from quizscene.engine.blocks import RenderedBlock, placeholder_body, render_block_body
from quizscene.engine.composite import CatalogLookup
from quizscene.engine.config import RenderConfig
from quizscene.engine.layout import Rect, resolve_layout
from quizscene.models.scene import SceneJSON
from quizscene.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)


@dataclass
class SceneRender:
    """Rendered blocks in document order, plus every unresolved component id."""

    blocks: list[RenderedBlock] = field(default_factory=list)
    missing_components: list[str] = field(default_factory=list)
    question_text: str | None = None
    canvas_width: float = 1000.0
    canvas_height: float = 1000.0
    banner_svg: str = ""
    processing_time_ms: float = 0.0

    def to_svg(self, title: str = "") -> str:
        fragments = ([self.banner_svg] if self.banner_svg else []) + [b.svg for b in self.blocks]
        return serialize_svg(
            fragments,
            canvas_w=self.canvas_width,
            canvas_h=self.canvas_height,
            title=title,
            description=self.question_text or "",
        )


class SceneRenderer:
    """Renders scene documents against a catalog.

    The catalog is read through one snapshot per ``render`` call. Partial or
    invalid documents are tolerated: every block produces a ``RenderedBlock``.
    """

    def __init__(self, catalog: Any, config: RenderConfig | None = None) -> None:
        self.catalog = catalog
        self.config = config or RenderConfig()

    def render(self, scene: SceneJSON | Mapping[str, Any] | Any) -> SceneRender:
        start = time.perf_counter()
        config = self.config
        catalog = self._snapshot()

        doc = _as_document(scene)
        question = _question_text(doc)
        result = SceneRender(
            question_text=question,
            canvas_width=config.canvas_width,
            canvas_height=config.canvas_height,
        )

        container = Rect(0.0, 0.0, config.canvas_width, config.canvas_height)
        if question:
            result.banner_svg = self._banner(question)
            container = container.inset_top(config.banner_height)

        raw_blocks = doc.get("blocks")
        for raw in raw_blocks if isinstance(raw_blocks, list) else []:
            block = self._render_block(raw, container, catalog)
            result.blocks.append(block)
            for component_id in block.missing:
                if component_id not in result.missing_components:
                    result.missing_components.append(component_id)

        result.processing_time_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "Rendered %d block(s), %d missing component(s) in %.1fms",
            len(result.blocks),
            len(result.missing_components),
            result.processing_time_ms,
        )
        return result

    def _snapshot(self) -> CatalogLookup:
        snapshot = getattr(self.catalog, "snapshot", None)
        return snapshot() if callable(snapshot) else self.catalog

    def _render_block(self, raw: Any, container: Rect, catalog: CatalogLookup) -> RenderedBlock:
        config = self.config
        if not isinstance(raw, Mapping):
            body = placeholder_body(container, "Invalid block", config, "invalid")
            return RenderedBlock(
                block_id="",
                type="",
                rect=container,
                svg=_place(body.svg, container, body.view_w, body.view_h),
                kind=body.kind,
            )

        block_id = str(raw.get("id", ""))
        block_type = raw.get("type")
        rect = resolve_layout(raw.get("layout"), container)
        title = raw.get("title") if isinstance(raw.get("title"), str) and raw.get("title") else None

        body_rect = rect.inset_top(config.title_height) if title else rect
        body = render_block_body(block_type, raw.get("content"), body_rect, catalog, config)

        parts = [f'<g class="block block-{escape(str(block_type))}" data-block-id="{escape(block_id)}">']
        if title:
            parts.append(self._title_strip(rect, title))
        parts.append(_place(body.svg, body_rect, body.view_w, body.view_h))
        parts.append("</g>")

        return RenderedBlock(
            block_id=block_id,
            type=str(block_type),
            rect=rect,
            svg="".join(parts),
            title=title,
            kind=body.kind,
            objects=body.objects,
            missing=body.missing,
        )

    def _banner(self, question: str) -> str:
        c = self.config
        return (
            f'<g class="question-banner">'
            f'<rect x="0" y="0" width="{c.canvas_width:g}" height="{c.banner_height:g}" fill="{c.banner_fill}"/>'
            f'<text x="16" y="{c.banner_height * 0.6:g}" font-family="Arial, sans-serif" font-size="20" '
            f'font-weight="bold" fill="{c.banner_text_fill}">{escape(question)}</text>'
            f"</g>"
        )

    def _title_strip(self, rect: Rect, title: str) -> str:
        h = min(self.config.title_height, rect.h)
        return (
            f'<rect x="{rect.x:g}" y="{rect.y:g}" width="{rect.w:g}" height="{h:g}" fill="#f3f4f6" stroke="#e5e7eb"/>'
            f'<text x="{rect.x + 12:g}" y="{rect.y + h * 0.65:g}" font-family="Arial, sans-serif" '
            f'font-size="14" font-weight="bold" fill="#111827">{escape(title)}</text>'
        )


def _place(body: str, rect: Rect, view_w: float, view_h: float) -> str:
    return (
        f'<svg x="{rect.x:g}" y="{rect.y:g}" width="{rect.w:g}" height="{rect.h:g}" '
        f'viewBox="0 0 {view_w:g} {view_h:g}" preserveAspectRatio="xMidYMid meet" overflow="hidden">'
        f"{body}</svg>"
    )


def _as_document(scene: Any) -> Mapping[str, Any]:
    if isinstance(scene, SceneJSON):
        return scene.model_dump()
    if isinstance(scene, Mapping):
        return scene
    return {}


def _question_text(doc: Mapping[str, Any]) -> str | None:
    metadata = doc.get("metadata")
    if isinstance(metadata, Mapping):
        question = metadata.get("question_text")
        if isinstance(question, str) and question:
            return question
    return None


def render_scene(scene: Any, catalog: Any, config: RenderConfig | None = None) -> SceneRender:
    return SceneRenderer(catalog, config).render(scene)
