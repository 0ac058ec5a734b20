"""Write the composed scene document."""

from __future__ import annotations

from html import escape


def serialize_svg(
    fragments: list[str],
    canvas_w: float = 1000.0,
    canvas_h: float = 1000.0,
    title: str = "",
    description: str = "",
    styles: dict[str, str] | None = None,
) -> str:
    """Wrap already-rendered fragments in a standalone SVG document."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {canvas_w:g} {canvas_h:g}" width="{canvas_w:g}" height="{canvas_h:g}"'
        f' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")

    if styles:
        lines.append("  <style>")
        for selector, props in styles.items():
            lines.append(f"    {selector} {{ {props} }}")
        lines.append("  </style>")

    for fragment in fragments:
        if fragment:
            lines.append(f"  {fragment}")

    lines.append("</svg>")
    return "\n".join(lines)
