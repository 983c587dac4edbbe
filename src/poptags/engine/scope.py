"""Scope - a linked view over a content value and its enclosing scopes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from poptags.engine.content import MISSING, ContentValue, Missing, wrap


@dataclass(frozen=True)
class Iteration:
    """Position of the current element within the array being repeated."""

    index: int
    length: int

    @property
    def first(self) -> bool:
        return self.index == 0

    @property
    def last(self) -> bool:
        return self.index == self.length - 1


class Scope:
    """One link of the scope chain.

    Lookup checks this scope's extra bindings, then the own properties of
    its value, then repeats on the parent until the chain is exhausted.
    Scopes are never mutated after creation; nested evaluation pushes a
    child instead.
    """

    __slots__ = ("value", "parent", "bindings", "iteration", "collection")

    def __init__(
        self,
        value: Any,
        parent: Optional["Scope"] = None,
        bindings: Optional[Dict[str, Any]] = None,
        iteration: Optional[Iteration] = None,
        collection: bool = False,
    ):
        self.value: ContentValue = wrap(value)
        self.parent = parent
        self.bindings = (
            {name: wrap(bound) for name, bound in bindings.items()} if bindings else None
        )
        self.iteration = iteration
        # True for the single scope of a repeat="false" array
        self.collection = collection

    def child(
        self,
        value: Any,
        bindings: Optional[Dict[str, Any]] = None,
        iteration: Optional[Iteration] = None,
        collection: bool = False,
    ) -> "Scope":
        return Scope(value, self, bindings, iteration, collection)

    def own(self, name: str) -> ContentValue:
        """Resolve `name` in this scope only, without crawling up."""
        if self.bindings and name in self.bindings:
            return self.bindings[name]
        return self.value.get(name)

    def lookup(self, name: Optional[str] = None) -> ContentValue:
        """Resolve `name` up the chain; with no name, return this scope's value."""
        if name is None:
            return self.value
        for scope in self.chain():
            found = scope.own(name)
            if not isinstance(found, Missing):
                return found
        return MISSING

    def get(self, name: str, default: Any = None) -> Any:
        """Like lookup, but returns the plain host value."""
        found = self.lookup(name)
        return default if isinstance(found, Missing) else found.raw

    def chain(self) -> Iterator["Scope"]:
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def nearest_iteration(self) -> Optional[Iteration]:
        for scope in self.chain():
            if scope.iteration is not None:
                return scope.iteration
        return None

    def __repr__(self) -> str:
        parent_id = f", parent=#{id(self.parent)}" if self.parent else ""
        return f"<Scope {type(self.value).__name__}{parent_id}>"
