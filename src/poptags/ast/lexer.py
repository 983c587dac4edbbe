"""Lexer - splits template text into text, open-tag and close-tag tokens.

Only `<pop:...>` and `</pop:...>` are structured syntax. Everything else,
including HTML comments and whatever they contain, is text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from poptags.exceptions import CompileError

PREFIX = "pop:"

# Earliest interesting position: a tag open, a tag close or a comment
MARKER = re.compile(r"<(?:/pop:|pop:|!--)")
NAME = re.compile(r"[A-Za-z_][\w.:-]*")
ATTRIBUTE = re.compile(r"\s+([A-Za-z_][\w.:-]*)\s*=\s*")
TAG_END = re.compile(r"\s*(/?)>")
CLOSE_END = re.compile(r"\s*>")

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

FRAGMENT_WIDTH = 40


class TokenKind(str, Enum):
    TEXT = "text"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class RawAttribute:
    """An attribute as written: name, unparsed value and where the value starts."""

    name: str
    value: str
    offset: int


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str  # text for TEXT tokens, tag name otherwise
    offset: int
    source: str = ""  # the tag as written
    attributes: Tuple[RawAttribute, ...] = field(default_factory=tuple)
    self_closing: bool = False


class Lexer:
    """Tokenizes `text[start:end]`, reporting positions against all of `text`."""

    def __init__(
        self,
        text: str,
        start: int = 0,
        end: Optional[int] = None,
        template: Optional[str] = None,
    ):
        self.text = text
        self.start = start
        self.end = len(text) if end is None else end
        self.template = template

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        text_start = pos = self.start

        while pos < self.end:
            match = MARKER.search(self.text, pos, self.end)
            if match is None:
                break

            at = match.start()
            if match.group() == COMMENT_OPEN:
                close = self.text.find(COMMENT_CLOSE, at + len(COMMENT_OPEN), self.end)
                pos = self.end if close == -1 else close + len(COMMENT_CLOSE)
                continue

            if at > text_start:
                tokens.append(
                    Token(TokenKind.TEXT, self.text[text_start:at], text_start)
                )

            if match.group() == "</pop:":
                token, pos = self._close_tag(at)
            else:
                token, pos = self._open_tag(at)
            tokens.append(token)
            text_start = pos

        if text_start < self.end:
            tokens.append(
                Token(TokenKind.TEXT, self.text[text_start : self.end], text_start)
            )
        return tokens

    def _open_tag(self, at: int) -> Tuple[Token, int]:
        pos = at + len("<") + len(PREFIX)
        name = NAME.match(self.text, pos, self.end)
        if name is None:
            raise self.error("Invalid tag name", at)
        pos = name.end()

        attributes: List[RawAttribute] = []
        while True:
            end = TAG_END.match(self.text, pos, self.end)
            if end is not None:
                token = Token(
                    TokenKind.OPEN,
                    name.group(),
                    at,
                    source=self.text[at : end.end()],
                    attributes=tuple(attributes),
                    self_closing=bool(end.group(1)),
                )
                return token, end.end()

            attribute = ATTRIBUTE.match(self.text, pos, self.end)
            if attribute is None:
                raise self.error("Malformed tag", at)

            quote_at = attribute.end()
            quote = self.text[quote_at : quote_at + 1]
            if quote not in ('"', "'"):
                raise self.error("Attribute value must be quoted", at)
            closing = self.text.find(quote, quote_at + 1, self.end)
            if closing == -1:
                raise self.error("Unterminated attribute value", at)

            attributes.append(
                RawAttribute(
                    attribute.group(1),
                    self.text[quote_at + 1 : closing],
                    quote_at + 1,
                )
            )
            pos = closing + 1

    def _close_tag(self, at: int) -> Tuple[Token, int]:
        pos = at + len("</") + len(PREFIX)
        name = NAME.match(self.text, pos, self.end)
        if name is None:
            raise self.error("Invalid closing tag", at)
        end = CLOSE_END.match(self.text, name.end(), self.end)
        if end is None:
            raise self.error("Malformed closing tag", at)
        token = Token(
            TokenKind.CLOSE, name.group(), at, source=self.text[at : end.end()]
        )
        return token, end.end()

    def position(self, offset: int) -> Tuple[int, int]:
        """1-based (line, column) of `offset` in the full text."""
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def error(self, message: str, offset: int, fragment: Optional[str] = None) -> CompileError:
        if fragment is None:
            fragment = self.text[offset : min(self.end, offset + FRAGMENT_WIDTH)]
            fragment = fragment.split("\n", 1)[0]
        line, column = self.position(offset)
        return CompileError(message, fragment, line, column, self.template)
