"""Parser - builds the Node Tree from lexer tokens."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from poptags.ast.lexer import PREFIX, Lexer, RawAttribute, Token, TokenKind
from poptags.ast.node import AttributeValue, Node, Tag, Text
from poptags.exceptions import CompileError

log = logging.getLogger(__name__)


class Parser:
    """Compiles template text into a tuple of nodes.

    Tag names may carry an extension namespace (`ext:title`) and dotted
    paths (`content.author.name`), which expand to nested tags. Attribute
    values that contain tags are compiled recursively.
    """

    def __init__(self, template: Optional[str] = None):
        self.template = template

    def parse(self, text: str) -> Tuple[Node, ...]:
        nodes = self._parse(Lexer(text, template=self.template))
        log.debug(f"Compiled {self.template or '<string>'}: {len(nodes)} top-level nodes")
        return nodes

    def _parse(self, lexer: Lexer) -> Tuple[Node, ...]:
        # Each frame: the opening token and the children collected so far
        stack: List[Tuple[Optional[Token], List[Node]]] = [(None, [])]

        for token in lexer.tokenize():
            children = stack[-1][1]

            if token.kind is TokenKind.TEXT:
                children.append(Text(token.value))

            elif token.kind is TokenKind.OPEN:
                if token.self_closing:
                    children.append(self._build(lexer, token, []))
                else:
                    stack.append((token, []))

            else:
                opener = stack[-1][0]
                if opener is None:
                    raise lexer.error(
                        "Closing tag without opening tag", token.offset, token.source
                    )
                if opener.value != token.value:
                    raise lexer.error(
                        f"Mismatched closing tag, expected </{PREFIX}{opener.value}>",
                        token.offset,
                        token.source,
                    )
                stack.pop()
                stack[-1][1].append(self._build(lexer, opener, children))

        if len(stack) > 1:
            opener = stack[-1][0]
            assert opener is not None
            raise lexer.error("Unclosed tag", opener.offset, opener.source)

        return tuple(stack[0][1])

    def _build(self, lexer: Lexer, token: Token, children: List[Node]) -> Tag:
        namespace: Optional[str] = None
        path = token.value
        if ":" in path:
            namespace, path = path.split(":", 1)

        segments = path.split(".")
        if namespace == "" or ":" in path or not all(segments):
            raise lexer.error("Invalid tag name", token.offset, token.source)

        attributes = {
            attribute.name: self._attribute(lexer, attribute)
            for attribute in token.attributes
        }

        # a.b.c expands to <a><b><c .../></b></a>; attributes stay on the leaf
        node = Tag(
            name=segments[-1],
            namespace=namespace if len(segments) == 1 else None,
            attributes=attributes,
            children=tuple(children),
            self_closing=token.self_closing,
        )
        for depth, segment in reversed(list(enumerate(segments[:-1]))):
            node = Tag(
                name=segment,
                namespace=namespace if depth == 0 else None,
                children=(node,),
            )
        return node

    def _attribute(self, lexer: Lexer, attribute: RawAttribute) -> AttributeValue:
        if "<" + PREFIX not in attribute.value:
            return attribute.value
        nested = Lexer(
            lexer.text,
            start=attribute.offset,
            end=attribute.offset + len(attribute.value),
            template=lexer.template,
        )
        return self._parse(nested)


def parse_text(text: str, template: Optional[str] = None) -> Tuple[Node, ...]:
    """Compile `text` and return its nodes, raising CompileError on bad syntax."""
    return Parser(template).parse(text)
