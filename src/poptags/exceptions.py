"""poptags Exceptions

Error taxonomy for the template compiler and renderer.
"""

from __future__ import annotations


class TemplateError(Exception):
    """Base exception for all poptags errors."""

    pass


class CompileError(TemplateError):
    """Raised when template text contains a malformed or unterminated tag."""

    def __init__(
        self,
        message: str,
        fragment: str,
        line: int | None = None,
        column: int | None = None,
        template: str | None = None,
    ):
        self.reason = message
        self.fragment = fragment
        self.line = line
        self.column = column
        self.template = template
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.template or "<string>"
        if self.line is not None:
            where = f"{where}:{self.line}:{self.column}"
        return f"{where}: {self.reason}: {self.fragment!r}"


class ResolutionError(TemplateError):
    """Raised when a template that must exist cannot be read."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind.capitalize()} not found: {name}")


class TemplateRecursionError(TemplateError, RecursionError):
    """Raised when includes or layouts nest deeper than the configured limit."""

    def __init__(self, depth: int, tag: str):
        self.depth = depth
        self.tag = tag
        super().__init__(
            f"Maximum template nesting depth ({depth}) exceeded at <pop:{tag}>"
        )
