"""Placeholder interpolation for component SVG templates.

Two phases, each walking the props in insertion order over the whole string:

1. Conditional ``{key ? "A" : "B"}`` -> ``A`` when the value is truthy, else ``B``.
2. Simple ``{key}`` -> the value's display string.

The simple phase runs after every conditional, so a ``{key}`` written inside
a conditional branch is expanded as well. A substituted value containing
``{other}`` is expanded only if ``other`` comes later in the props.
Placeholders naming keys absent from the props are left as written. Keys
are matched literally.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Mapping


def merge_props(
    default_props: Mapping[str, Any] | None,
    instance_props: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Instance values override defaults; order follows defaults, then new instance keys."""
    return {**(default_props or {}), **(instance_props or {})}


def is_truthy(value: Any) -> bool:
    """Document truthiness: 0, false, "" and null are falsy, everything else truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def display_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(display_string(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def _conditional_pattern(key: str) -> re.Pattern[str]:
    return re.compile(r"\{" + re.escape(key) + r'\s*\?\s*"([^"]+)"\s*:\s*"([^"]+)"\}')


def _simple_token(key: str) -> str:
    return "{" + key + "}"


def render_template(template: str, props: Mapping[str, Any]) -> str:
    """Expand conditional, then simple placeholders of ``template`` from ``props``."""
    out = template

    for key, value in props.items():
        branch = 1 if is_truthy(value) else 2
        out = _conditional_pattern(str(key)).sub(lambda m, b=branch: m.group(b), out)

    for key, value in props.items():
        out = out.replace(_simple_token(str(key)), display_string(value))

    return out


def find_placeholders(template: str) -> list[str]:
    """Names of every ``{name}`` or ``{name ? ...}`` placeholder, first-seen order."""
    names: dict[str, None] = {}
    for m in re.finditer(r"\{([A-Za-z_][\w-]*)\s*(?:\}|\?)", template):
        names.setdefault(m.group(1), None)
    return list(names)
