"""poptags.ast - template text to Node Tree."""

from poptags.ast.lexer import Lexer, Token, TokenKind
from poptags.ast.node import AttributeValue, Node, Tag, Text, dump, load, walk
from poptags.ast.parser import Parser, parse_text

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "Node",
    "Tag",
    "Text",
    "AttributeValue",
    "Parser",
    "parse_text",
    "dump",
    "load",
    "walk",
]
