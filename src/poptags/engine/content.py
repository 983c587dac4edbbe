"""Content Value Model.

Every host value (mapping, object, list, function, primitive) is normalized
into one closed variant before any lookup or rendering happens:

    Missing | Null | Bool | Number | String | Array | Callable | Object
"""

from __future__ import annotations

import inspect
import numbers
from collections.abc import Iterator, Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, Optional, Tuple


class ContentValue:
    """Base of the content variant."""

    raw: Any = None

    @property
    def present(self) -> bool:
        """Presence test used by `no_` tags and boolean dispatch."""
        return True

    def get(self, name: str) -> "ContentValue":
        """Own-property lookup. Only objects have properties."""
        return MISSING


@dataclass(frozen=True)
class Missing(ContentValue):
    """The name was not found anywhere."""

    @property
    def present(self) -> bool:
        return False


@dataclass(frozen=True)
class Null(ContentValue):
    """The name was found and bound to None."""

    @property
    def present(self) -> bool:
        return False


@dataclass(frozen=True)
class Bool(ContentValue):
    raw: bool

    @property
    def present(self) -> bool:
        return self.raw

    @property
    def text(self) -> str:
        return "true" if self.raw else "false"


@dataclass(frozen=True)
class Number(ContentValue):
    # zero is present: falsiness is not emptiness for numbers
    raw: Any

    @property
    def text(self) -> str:
        return str(self.raw)


@dataclass(frozen=True)
class String(ContentValue):
    raw: str

    @property
    def present(self) -> bool:
        return bool(self.raw)

    @property
    def text(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Array(ContentValue):
    items: Tuple[Any, ...]

    @property
    def raw(self) -> Tuple[Any, ...]:  # type: ignore[override]
        return self.items

    @property
    def present(self) -> bool:
        return bool(self.items)

    def window(self, skip: int = 0, limit: Optional[int] = None) -> "Array":
        """Drop the first `skip` items, then keep at most `limit`."""
        items = self.items[max(skip, 0) :]
        if limit is not None:
            items = items[: max(limit, 0)]
        return Array(items)


@dataclass(frozen=True)
class Callable(ContentValue):
    """A host function, called as fn(options, enclosing, scope)."""

    raw: Any


@dataclass(frozen=True)
class Object(ContentValue):
    """A mapping or arbitrary host object exposing named properties."""

    raw: Any

    def get(self, name: str) -> ContentValue:
        raw = self.raw
        if isinstance(raw, Mapping):
            return wrap(raw[name]) if name in raw else MISSING

        if name.startswith("_"):
            return MISSING

        override = getattr(raw, "lookup", None)
        if callable(override):
            found = override(name)
            return MISSING if found is None else wrap(found)

        try:
            value = getattr(raw, name)
        except AttributeError:
            return MISSING
        return wrap(value)

    @property
    def html(self) -> Any:
        """The html producer: a callable of options, a string, or None."""
        raw = self.raw
        if hasattr(raw, "__html__"):
            return raw.__html__
        if isinstance(raw, Mapping):
            return raw.get("html")
        return getattr(raw, "html", None)


MISSING = Missing()
NULL = Null()

_SCALAR_SEQUENCES = (str, bytes, bytearray)


def wrap(raw: Any) -> ContentValue:
    """Normalize a host value into the content variant."""
    if isinstance(raw, ContentValue):
        return raw
    if raw is None:
        return NULL
    if isinstance(raw, bool):
        return Bool(raw)
    if hasattr(raw, "__html__"):
        # markupsafe.Markup and friends: pre-escaped, despite being str
        return Object(raw)
    if isinstance(raw, str):
        return String(raw)
    if isinstance(raw, numbers.Number):
        return Number(raw)
    if isinstance(raw, Mapping):
        return Object(raw)
    if isinstance(raw, (Sequence, Set, Iterator)) and not isinstance(
        raw, _SCALAR_SEQUENCES
    ):
        return Array(tuple(raw))
    if callable(raw) and not isinstance(raw, type):
        return Callable(raw)
    return Object(raw)


def invoke(fn: Any, *args: Any) -> Any:
    """Call `fn` with as many leading `args` as it accepts positionally."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return fn(*args)

    accepted = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return fn(*args)
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            accepted += 1
    return fn(*args[:accepted])
