"""Template - the public entry point: construct, compile, render."""

from __future__ import annotations

import logging
from typing import Any, Optional, Set, Tuple

from poptags.ast import Node, parse_text, walk
from poptags.config import TemplateConfig
from poptags.engine.filters import FilterPipeline
from poptags.engine.layout import compose
from poptags.engine.renderer import Renderer
from poptags.engine.resolver import Resolver
from poptags.engine.scope import Scope
from poptags.exceptions import ResolutionError, TemplateRecursionError

log = logging.getLogger(__name__)


class Template:
    """A `<pop:...>` template.

    Construction only stores options; syntax is checked by `compile()`,
    which `render()` calls lazily. The compiled tree is immutable and can
    be rendered any number of times.

    Usage:
        Template(template="<h1><pop:title /></h1>").render({"title": "Hi"})

        Template(name="page", read=DirectoryReader("templates")).render(content)
    """

    def __init__(self, template: Optional[str] = None, **options: Any):
        self.config = TemplateConfig(template=template, **options)
        self._nodes: Optional[Tuple[Node, ...]] = None
        self._filters = FilterPipeline(self.config.filters)

    @classmethod
    def from_config(cls, config: TemplateConfig) -> "Template":
        template = cls.__new__(cls)
        template.config = config
        template._nodes = None
        template._filters = FilterPipeline(config.filters)
        return template

    @property
    def name(self) -> Optional[str]:
        return self.config.name

    @property
    def nodes(self) -> Tuple[Node, ...]:
        """The compiled Node Tree."""
        if self._nodes is None:
            self.compile()
        assert self._nodes is not None
        return self._nodes

    def source(self) -> str:
        if self.config.template is not None:
            return self.config.template
        assert self.config.name is not None and self.config.read is not None
        text = self.config.read(self.config.name)
        if text is None:
            raise ResolutionError("template", self.config.name)
        return text

    def compile(self) -> None:
        """Check the syntax of this template and of every template it names.

        Layouts and includes referenced by a literal name are read and
        compiled too, so an error anywhere surfaces here. Templates that
        cannot be read are skipped: they render as nothing.
        """
        if self._nodes is not None:
            return
        nodes = parse_text(self.source(), template=self.config.name)
        self._validate_references(nodes)
        self._nodes = nodes

    def _validate_references(self, nodes: Tuple[Node, ...]) -> None:
        resolver = Resolver(self.config.read, layout_prefix=self.config.layout_prefix)
        seen: Set[str] = set()
        if self.config.name is not None:
            seen.add(self.config.name)

        pending = [nodes]
        while pending:
            for tag in walk(pending.pop()):
                if tag.namespace is not None:
                    continue
                if tag.name == "include":
                    name = tag.literal("template")
                elif tag.name == "layout":
                    name = tag.literal("name")
                    name = None if name is None else self.config.layout_prefix + name
                else:
                    continue
                if name is None or name in seen or self.config.read is None:
                    continue
                seen.add(name)
                referenced = resolver.template(name)
                if referenced is not None:
                    pending.append(referenced)

    def render(self, content: Any = None) -> str:
        """Render against `content`, the root of the scope chain."""
        nodes = self.nodes
        preloaded = {self.config.name: nodes} if self.config.name is not None else None
        resolver = Resolver(
            self.config.read,
            self.config.require,
            layout_prefix=self.config.layout_prefix,
            preloaded=preloaded,
        )
        renderer = Renderer(resolver, self._filters, max_depth=self.config.max_depth)
        root = Scope({} if content is None else content)
        try:
            return compose(renderer, nodes, root)
        except TemplateRecursionError:
            raise
        except RecursionError as exc:
            # deep data exhausted the interpreter stack before the include limit
            raise TemplateRecursionError(self.config.max_depth, "include") from exc

    def __repr__(self) -> str:
        label = self.config.name or "<string>"
        state = "compiled" if self._nodes is not None else "not compiled"
        return f"<Template {label} ({state})>"
