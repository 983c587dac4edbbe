"""Node Tree - the immutable compiled form of a template."""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Union

import msgspec


class Text(msgspec.Struct, frozen=True, tag="text"):
    """Literal output, passed through verbatim."""

    text: str


class Tag(msgspec.Struct, frozen=True, tag="tag"):
    """A `<pop:...>` element.

    Attribute values are either literal strings or, when the value embeds
    tags of its own, a tuple of nodes rendered against the tag's scope.
    """

    name: str
    namespace: Optional[str] = None
    attributes: Dict[str, AttributeValue] = {}
    children: Tuple[Node, ...] = ()
    self_closing: bool = False

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}:{self.name}"
        return self.name

    def literal(self, attribute: str) -> Optional[str]:
        """Return a static attribute value, or None if absent or dynamic."""
        value = self.attributes.get(attribute)
        return value if isinstance(value, str) else None


Node = Union[Text, Tag]
AttributeValue = Union[str, Tuple[Node, ...]]


def walk(nodes: Tuple[Node, ...]):
    """Yield every Tag in `nodes`, depth first, including attribute trees."""
    for node in nodes:
        if isinstance(node, Tag):
            yield node
            for value in node.attributes.values():
                if not isinstance(value, str):
                    yield from walk(value)
            yield from walk(node.children)


def dump(nodes: Tuple[Node, ...]) -> bytes:
    """Serialize a compiled tree to JSON."""
    return msgspec.json.encode(nodes)


def load(data: bytes | str) -> Tuple[Node, ...]:
    """Decode a tree produced by `dump`."""
    return msgspec.json.decode(data, type=Tuple[Node, ...])
