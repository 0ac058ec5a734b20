"""PNG previews of composed scenes (cairosvg)."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def render_svg_to_png(svg: str, width: int = 800, height: int = 800) -> bytes:
    """Render an SVG document to PNG bytes."""
    import cairosvg

    try:
        return cairosvg.svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
    except Exception as e:
        logger.warning("Failed to render scene to PNG: %s", e)
        raise
