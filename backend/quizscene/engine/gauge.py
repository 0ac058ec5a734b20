"""Circular gauge drawing: a 270° sweep from -135° to +135°."""

from __future__ import annotations

import math
from html import escape

from quizscene.engine.template import display_string
from quizscene.models.scene import GaugeContent

_SWEEP_DEG = 270.0
_START_DEG = -135.0

# Drawn in a 200x200 box
_CENTER = 100.0
_RADIUS = 70.0
_NEEDLE = 60.0
_STROKE = 20

_TRACK_COLOR = "#e5e7eb"
_VALUE_COLOR = "#3b82f6"
_NEEDLE_COLOR = "#dc2626"


def polar_to_cartesian(cx: float, cy: float, radius: float, angle_deg: float) -> tuple[float, float]:
    """0° points up, angles grow clockwise."""
    rad = math.radians(angle_deg - 90.0)
    return cx + radius * math.cos(rad), cy + radius * math.sin(rad)


def describe_arc(cx: float, cy: float, radius: float, start_deg: float, end_deg: float) -> str:
    sx, sy = polar_to_cartesian(cx, cy, radius, end_deg)
    ex, ey = polar_to_cartesian(cx, cy, radius, start_deg)
    large_arc = "0" if end_deg - start_deg <= 180 else "1"
    return f"M {sx:.2f} {sy:.2f} A {radius:g} {radius:g} 0 {large_arc} 0 {ex:.2f} {ey:.2f}"


def value_angle(value: float, lo: float, hi: float) -> float:
    """Map a value onto the sweep, clamped to the dial."""
    span = hi - lo
    if span <= 0:
        return _START_DEG
    fraction = min(max((value - lo) / span, 0.0), 1.0)
    return fraction * _SWEEP_DEG + _START_DEG


def render_gauge(content: GaugeContent) -> str:
    """SVG body in a 0 0 200 200 viewBox."""
    lo, hi = content.min, content.max
    angle = value_angle(content.value, lo, hi)

    parts = [
        f'<path d="M 30 150 A 70 70 0 1 1 170 150" fill="none" stroke="{_TRACK_COLOR}" '
        f'stroke-width="{_STROKE}" stroke-linecap="round"/>'
    ]
    for zone in content.zones:
        z0 = value_angle(zone.min, lo, hi)
        z1 = value_angle(zone.max, lo, hi)
        parts.append(
            f'<path d="{describe_arc(_CENTER, _CENTER, _RADIUS, z0, z1)}" fill="none" '
            f'stroke="{escape(zone.color)}" stroke-width="{_STROKE}" stroke-linecap="round"/>'
        )
    parts.append(
        f'<path d="{describe_arc(_CENTER, _CENTER, _RADIUS, _START_DEG, angle)}" fill="none" '
        f'stroke="{_VALUE_COLOR}" stroke-width="{_STROKE}" stroke-linecap="round"/>'
    )
    parts.append(
        f'<text x="100" y="110" text-anchor="middle" font-size="32" font-weight="bold" '
        f'fill="#1f2937">{display_string(content.value)}</text>'
    )
    parts.append(
        f'<text x="100" y="130" text-anchor="middle" font-size="14" fill="#6b7280">'
        f"{escape(content.unit)}</text>"
    )

    # Needle points at the end of the value arc
    nx, ny = polar_to_cartesian(_CENTER, _CENTER, _NEEDLE, angle)
    parts.append(
        f'<line x1="100" y1="100" x2="{nx:.2f}" y2="{ny:.2f}" stroke="{_NEEDLE_COLOR}" '
        f'stroke-width="3" stroke-linecap="round"/>'
    )
    parts.append(f'<circle cx="100" cy="100" r="5" fill="{_NEEDLE_COLOR}"/>')

    if content.label:
        parts.append(
            f'<text x="100" y="190" text-anchor="middle" font-size="14" fill="#374151">'
            f"{escape(content.label)}</text>"
        )
    return "".join(parts)
