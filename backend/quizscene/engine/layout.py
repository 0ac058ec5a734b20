"""Percentage layout -> container rectangles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def inset_top(self, amount: float) -> "Rect":
        amount = min(max(amount, 0.0), self.h)
        return Rect(self.x, self.y + amount, self.w, self.h - amount)


def resolve_layout(layout: Any, container: Rect) -> Rect:
    """Place a block inside ``container``.

    ``layout`` is ``{x, y, w, h}`` in percent of the container (a mapping or
    a model with those attributes). Missing or malformed layouts fill the
    container.
    """
    if layout is None:
        return container
    try:
        x, y, w, h = (float(_field(layout, name)) for name in ("x", "y", "w", "h"))
    except (KeyError, AttributeError, TypeError, ValueError):
        logger.debug("Malformed layout %r, using full container", layout)
        return container
    return Rect(
        container.x + container.w * x / 100.0,
        container.y + container.h * y / 100.0,
        container.w * w / 100.0,
        container.h * h / 100.0,
    )


def _field(layout: Any, name: str) -> Any:
    if isinstance(layout, dict):
        return layout[name]
    return getattr(layout, name)
