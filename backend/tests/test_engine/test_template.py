"""Tests for placeholder interpolation."""

from __future__ import annotations

import pytest

from quizscene.engine.template import (
    display_string,
    find_placeholders,
    is_truthy,
    merge_props,
    render_template,
)


COND = '{x ? "A" : "B"}'


class TestConditional:
    def test_falsy_zero_picks_second_literal(self):
        assert render_template(COND, {"x": 0}) == "B"

    def test_truthy_one_picks_first_literal(self):
        assert render_template(COND, {"x": 1}) == "A"

    def test_absent_key_left_unchanged(self):
        assert render_template(COND, {"y": 1}) == COND

    @pytest.mark.parametrize("value", [False, 0, 0.0, "", None])
    def test_falsy_values(self, value):
        assert render_template(COND, {"x": value}) == "B"

    @pytest.mark.parametrize("value", [True, 2, -1, 0.5, "0", "no"])
    def test_truthy_values(self, value):
        assert render_template(COND, {"x": value}) == "A"

    def test_whitespace_around_operators_is_optional(self):
        assert render_template('{x?"on":"off"}', {"x": True}) == "on"
        assert render_template('{x  ?  "on"  :  "off"}', {"x": False}) == "off"

    def test_every_occurrence_replaced(self):
        tpl = '<a f=\'{lit ? "#ff0" : "#666"}\'/><b f=\'{lit ? "#ff0" : "#666"}\'/>'
        assert render_template(tpl, {"lit": True}) == "<a f='#ff0'/><b f='#ff0'/>"

    def test_empty_literal_does_not_match(self):
        tpl = '{x ? "" : "B"}'
        assert render_template(tpl, {"x": True}) == tpl

    def test_branch_placeholders_expanded_by_simple_phase(self):
        tpl = '{a ? "{b}" : "none"}'
        assert render_template(tpl, {"a": True, "b": "X"}) == "X"
        assert render_template(tpl, {"b": "X", "a": True}) == "X"

    def test_no_placeholder_left_for_known_keys(self):
        props = {"on": 1, "color": "#f00", "label": "Go"}
        tpl = '<g fill=\'{on ? "{color}" : "none"}\'>{label}{on}</g>'
        out = render_template(tpl, props)
        assert out == "<g fill='#f00'>Go1</g>"
        for key in props:
            assert "{" + key + "}" not in out


class TestSimple:
    def test_string_value(self):
        assert render_template("<rect fill='{color}'/>", {"color": "#3b82f6"}) == "<rect fill='#3b82f6'/>"

    def test_display_strings(self):
        out = render_template("{a}|{b}|{c}|{d}", {"a": True, "b": False, "c": 4.0, "d": 0.5})
        assert out == "true|false|4|0.5"

    def test_unknown_placeholder_kept(self):
        assert render_template("{nope} {x}", {"x": 1}) == "{nope} 1"

    def test_keys_matched_literally(self):
        assert render_template("{a.b}{aXb}", {"a.b": 7}) == "7{aXb}"
        assert render_template('{a+ ? "y" : "n"}', {"a+": 1}) == "y"

    def test_conditionals_run_before_simple(self):
        tpl = '{x}:{x ? "yes" : "no"}'
        assert render_template(tpl, {"x": 0}) == "0:no"

    def test_substitution_order_follows_props(self):
        assert render_template("{a}", {"a": "{b}", "b": "X"}) == "X"
        assert render_template("{a}", {"b": "X", "a": "{b}"}) == "{b}"


def test_merge_props_instance_wins():
    merged = merge_props({"color": "#000", "size": 4}, {"color": "#fff", "extra": 1})
    assert merged == {"color": "#fff", "size": 4, "extra": 1}
    assert list(merged) == ["color", "size", "extra"]


def test_merge_props_handles_none():
    assert merge_props(None, None) == {}
    assert merge_props({"a": 1}, None) == {"a": 1}


def test_default_svg_leaves_no_placeholders(catalog):
    sedan = catalog.get("vehicle_sedan")
    props = merge_props(sedan.default_props, {"color": "#ef4444"})
    out = render_template(sedan.render.svg, props)
    for key in props:
        assert "{" + key + "}" not in out
        assert "{" + key + " ?" not in out
    assert "#ef4444" in out
    assert "#6b7280" in out  # headlights off by default


def test_is_truthy_nan():
    assert is_truthy(float("nan")) is False


def test_display_string_collections():
    assert display_string([1, "a", True]) == "1,a,true"
    assert display_string(None) == "null"


def test_find_placeholders():
    tpl = '<g fill="{color}" o=\'{on ? "1" : "0"}\'>{color}{label}</g>'
    assert find_placeholders(tpl) == ["color", "on", "label"]
