"""Render configuration: canvas geometry, fixed palettes and placeholder styling."""

from __future__ import annotations

from dataclasses import dataclass, field

# Road-scene backgrounds: a closed table, unknown keys fall back to asphalt.
ROAD_BACKGROUNDS: dict[str, str] = {
    "asphalt": "#71717a",
    "grass": "#86efac",
}
DEFAULT_BACKGROUND = "asphalt"


@dataclass
class RenderConfig:
    """Controls the composed scene document."""

    # Outer canvas in user units; block layouts are percentages of it
    canvas_width: float = 1000.0
    canvas_height: float = 1000.0

    # Question banner drawn when metadata.question_text is set
    banner_height: float = 60.0
    banner_fill: str = "#2563eb"
    banner_text_fill: str = "#ffffff"

    # Title strip on top of titled blocks
    title_height: float = 36.0

    # Road scenes use normalized 0-100 coordinates
    road_viewbox: float = 100.0

    backgrounds: dict[str, str] = field(default_factory=lambda: dict(ROAD_BACKGROUNDS))
    default_background: str = DEFAULT_BACKGROUND

    # Missing-component glyph
    missing_fill: str = "#fee2e2"
    missing_stroke: str = "#dc2626"

    # Unknown / invalid block placeholder
    unknown_fill: str = "#fee2e2"
    unknown_stroke: str = "#fca5a5"
    unknown_text_fill: str = "#b91c1c"

    def background_fill(self, key: str | None) -> str:
        if key in self.backgrounds:
            return self.backgrounds[key]
        return self.backgrounds.get(self.default_background, ROAD_BACKGROUNDS[DEFAULT_BACKGROUND])
