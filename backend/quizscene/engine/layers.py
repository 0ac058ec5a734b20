"""Structured layer rendering for descriptors that expose ``render.layers``."""

from __future__ import annotations

import logging
from html import escape
from typing import Any, Mapping

from quizscene.engine.template import display_string, is_truthy, render_template
from quizscene.models.catalog import RenderLayer

logger = logging.getLogger(__name__)

# Per-type attribute fallbacks, in output order
_LAYER_DEFAULTS: dict[str, dict[str, Any]] = {
    "rect": {"x": 0, "y": 0, "width": 10, "height": 10, "fill": "gray"},
    "circle": {"cx": 0, "cy": 0, "r": 5, "fill": "gray"},
    "path": {"d": "", "fill": "none", "stroke": "black"},
    "text": {"x": 0, "y": 0, "font-size": 4, "fill": "black"},
    "image": {"x": 0, "y": 0, "width": 10, "height": 10},
}

# Layer props that are content, not attributes
_TEXT_BODY_KEY = "text"


def render_layers(layers: list[RenderLayer], props: Mapping[str, Any]) -> str:
    return "".join(render_layer(layer, props) for layer in layers)


def render_layer(layer: RenderLayer, props: Mapping[str, Any]) -> str:
    """Render one layer. Unknown types and unmet conditions produce ""."""
    defaults = _LAYER_DEFAULTS.get(layer.type)
    if defaults is None:
        logger.debug("Unknown layer type %r skipped", layer.type)
        return ""
    if layer.condition and not is_truthy(props.get(layer.condition)):
        return ""

    resolved = {k: _resolve(v, props) for k, v in layer.props.items()}
    attrs: dict[str, Any] = {**defaults, **resolved}

    body = ""
    if layer.type == "text":
        body = escape(display_string(attrs.pop(_TEXT_BODY_KEY, "")), quote=False)

    attr_str = " ".join(f'{k}="{escape(display_string(v))}"' for k, v in attrs.items())
    if layer.type == "text":
        return f"<text {attr_str}>{body}</text>"
    return f"<{layer.type} {attr_str}/>"


def _resolve(value: Any, props: Mapping[str, Any]) -> Any:
    """String values are templates over the merged props; a bare ``{key}`` keeps the raw value."""
    if not isinstance(value, str):
        return value
    if value.startswith("{") and value.endswith("}") and value[1:-1] in props:
        return props[value[1:-1]]
    return render_template(value, props)
