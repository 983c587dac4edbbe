"""Tests for the scope chain."""

from poptags.engine.content import MISSING, String
from poptags.engine.scope import Iteration, Scope


def test_lookup_crawls_up():
    root = Scope({"title": "Hello", "content": {"body": "text"}})
    inner = root.child({"body": "text"})
    assert inner.lookup("body") == String("text")
    assert inner.lookup("title") == String("Hello")
    assert inner.lookup("nothing") is MISSING


def test_nearest_definition_wins():
    root = Scope({"title": "outer"})
    inner = root.child({"title": "inner"})
    assert inner.get("title") == "inner"


def test_null_stops_the_crawl():
    root = Scope({"title": "outer"})
    inner = root.child({"title": None})
    assert inner.get("title", "default") is None


def test_get_default_when_missing():
    assert Scope({}).get("x", "fallback") == "fallback"


def test_bindings_shadow_value():
    scope = Scope({"value": "own"}).child("Hello", bindings={"value": "Hello"})
    assert scope.get("value") == "Hello"


def test_lookup_without_name_returns_value():
    scope = Scope({"a": 1})
    assert scope.lookup().raw == {"a": 1}


def test_own_does_not_crawl():
    root = Scope({"title": "Hello"})
    assert root.child({}).own("title") is MISSING


def test_nearest_iteration():
    root = Scope({})
    item = root.child({}, iteration=Iteration(0, 2))
    nested = item.child({})
    assert nested.nearest_iteration() == Iteration(0, 2)
    assert root.nearest_iteration() is None


def test_iteration_first_and_last():
    assert Iteration(0, 1).first and Iteration(0, 1).last
    assert Iteration(1, 3).first is False
    assert Iteration(2, 3).last


def test_chain_is_innermost_first():
    root = Scope({})
    leaf = root.child({}).child({})
    assert list(leaf.chain())[-1] is root
    assert len(list(leaf.chain())) == 3
