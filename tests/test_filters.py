"""Tests for the filter pipeline and HTML helpers."""

from poptags.engine import html
from poptags.engine.filters import FilterPipeline


def test_empty_pipeline_is_falsy():
    assert not FilterPipeline()
    assert FilterPipeline({"format": lambda value, options: value})


def test_filters_run_in_registration_order():
    pipeline = FilterPipeline(
        {
            "a": lambda value, options: value + "a",
            "b": lambda value, options: value + "b",
        }
    )
    assert pipeline.apply("x", {"b": "", "a": ""}) == "xab"


def test_filter_skipped_without_attribute():
    pipeline = FilterPipeline({"a": lambda value, options: "changed"})
    assert pipeline.apply("x", {}) == "x"


def test_filter_result_is_stringified():
    pipeline = FilterPipeline({"len": lambda value, options: len(value)})
    assert pipeline.apply("abc", {"len": ""}) == "3"


def test_escape():
    assert html.escape('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"


def test_element_with_class():
    assert html.element("span", "x", "a&b") == '<span class="a&amp;b">x</span>'


def test_join_variants():
    parts = ["a", "b", "c"]
    assert html.join(parts, {}) == "abc"
    assert html.join(parts, {"break": "br"}) == "a<br />b<br />c"
    assert html.join(parts, {"break": "li"}) == "<li>a</li><li>b</li><li>c</li>"
    assert html.join(parts, {"break": ", ", "last": " & "}) == "a, b & c"
    assert html.join(["a"], {"break": ", ", "last": " & "}) == "a"


def test_join_drops_empty_parts():
    assert html.join(["a", "", "b"], {"break": ", "}) == "a, b"
    assert html.join(["a", ""], {"break": "li"}) == "<li>a</li>"
