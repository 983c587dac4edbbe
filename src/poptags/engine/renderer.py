"""Renderer - evaluates a Node Tree against a scope chain.

Tag dispatch, for a tag rendered against scope S:

1. Attributes whose values embed tags are rendered against S first.
2. The subject is resolved: through the extension object for `ns:tag`,
   as a negated presence test for `no_tag`, by a dedicated handler for
   structural tags, and otherwise by looking the name up in S.
3. The subject is rendered according to its content variant, then
   filtered and wrapped.
4. An empty result falls back to the `default` attribute.
"""

from __future__ import annotations

import logging
from typing import Callable as _Callable, Dict, List, Optional, Tuple

from poptags.ast import Node, Tag, Text
from poptags.engine import html
from poptags.engine.content import (
    MISSING,
    Array,
    Bool,
    Callable,
    ContentValue,
    Number,
    Object,
    String,
    invoke,
    wrap,
)
from poptags.engine.filters import FilterPipeline
from poptags.engine.layout import Registry
from poptags.engine.resolver import Resolver
from poptags.engine.scope import Iteration, Scope
from poptags.exceptions import TemplateRecursionError

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

NEGATION = "no_"

Options = Dict[str, str]


class Enclosing:
    """Handle passed to host callables to render the tag's own children."""

    def __init__(self, renderer: "Renderer", nodes: Tuple[Node, ...], scope: Scope):
        self._renderer = renderer
        self._nodes = nodes
        self._scope = scope

    def render(self) -> str:
        return self._renderer.render(self._nodes, self._scope)


class Renderer:
    """Evaluates nodes for one render call.

    Holds the per-call state: the resolver caches, the block registry and
    the current include depth. Create a fresh Renderer for every render.
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        filters: Optional[FilterPipeline] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        registry: Optional[Registry] = None,
    ):
        self.resolver = resolver or Resolver()
        self.filters = filters or FilterPipeline()
        self.max_depth = max_depth
        self.registry = registry or Registry()
        self.depth = 0

        self._handlers: Dict[str, _Callable[[Tag, Options, Scope], str]] = {
            "include": self._include,
            "layout": self._layout,
            "block": self._block,
            "region": self._region,
            "first": self._first,
            "last": self._last,
            "value": self._value,
            "values": self._values,
        }

    def render(self, nodes: Tuple[Node, ...], scope: Scope) -> str:
        return "".join([self.render_node(node, scope) for node in nodes])

    def render_node(self, node: Node, scope: Scope) -> str:
        if isinstance(node, Text):
            return node.text
        return self.render_tag(node, scope)

    def render_tag(self, tag: Tag, scope: Scope) -> str:
        options = self.options(tag, scope)

        name = tag.name
        negate = name.startswith(NEGATION) and len(name) > len(NEGATION)
        if negate:
            name = name[len(NEGATION) :]

        parent = scope
        if tag.namespace is not None:
            # the extension is the lookup root for this tag only
            home = self.resolver.extension(tag.namespace, scope)
            subject = home.own(name) if home is not None else MISSING
            parent = home or scope
        elif not negate and name in self._handlers:
            return self._default(self._handlers[name](tag, options, scope), options)
        else:
            subject = scope.lookup(name)

        if negate:
            if self.present(subject, tag, options, scope):
                output = ""
            else:
                output = self.render(tag.children, scope)
        else:
            output = self.render_value(subject, tag, options, scope, parent)
        return self._default(output, options)

    def options(self, tag: Tag, scope: Scope) -> Options:
        """Resolve attributes, rendering the dynamic ones against `scope`."""
        return {
            name: value if isinstance(value, str) else self.render(value, scope)
            for name, value in tag.attributes.items()
        }

    # -- values ---------------------------------------------------------------

    def render_value(
        self,
        subject: ContentValue,
        tag: Tag,
        options: Options,
        scope: Scope,
        parent: Scope,
    ) -> str:
        if isinstance(subject, Callable):
            result = self.call(subject, tag, options, scope)
            if tag.children and isinstance(result, (String, Number)):
                # a filter over enclosing.render(): already markup
                return self.finish(result.text, options)
            return self.render_value(result, tag, options, scope, parent)

        if not subject.present and not isinstance(subject, (Bool, Number)):
            return ""

        if isinstance(subject, Array):
            return self.render_array(subject, tag, options, scope, parent)

        if isinstance(subject, Bool):
            if not tag.children:
                return self.finish(subject.text, options)
            if not subject.raw:
                return ""
            return self.finish(self.render(tag.children, scope), options)

        if tag.children:
            return self.finish(self.render(tag.children, parent.child(subject)), options)

        return self.finish(self.inline(subject, options), options)

    def render_array(
        self,
        array: Array,
        tag: Tag,
        options: Options,
        scope: Scope,
        parent: Scope,
    ) -> str:
        if options.get("repeat") == "false":
            collection = parent.child(array, bindings={"values": array}, collection=True)
            if tag.children:
                body = self.render(tag.children, collection)
            else:
                body = html.join([self.inline(wrap(item), options) for item in array.items], options)
            return self.finish(body, options)

        parts: List[str] = []
        length = len(array.items)
        for index, item in enumerate(array.items):
            value = wrap(item)
            if isinstance(value, Callable):
                # resolved once, before first/last apply
                value = self.call(value, tag, options, scope)

            iteration = Iteration(index, length)
            if tag.children:
                bindings = {"value": value} if isinstance(value, (String, Number, Bool)) else None
                element = parent.child(value, bindings=bindings, iteration=iteration)
                parts.append(self.render(tag.children, element))
            else:
                parts.append(self.inline(value, options))

        return self.finish(html.join(parts, options), options)

    def inline(self, value: ContentValue, options: Options) -> str:
        """Render a value that has no enclosed tags to text."""
        if isinstance(value, (String, Number)):
            if options.get("escape") == "false":
                return value.text
            return html.escape(value.text)
        if isinstance(value, Bool):
            return value.text
        if isinstance(value, Object):
            return self.html(value, options)
        if isinstance(value, Array):
            return html.join([self.inline(wrap(item), options) for item in value.items], options)
        return ""

    def html(self, value: Object, options: Options) -> str:
        """Output of an object's html producer; any failure renders nothing."""
        producer = value.html
        if producer is None:
            return ""
        try:
            result = producer if isinstance(producer, str) else invoke(producer, options)
            if result is None:
                return ""
            return result if isinstance(result, str) else str(result)
        except Exception as exc:
            log.debug(f"html producer failed, rendering nothing: {exc!r}")
            return ""

    def call(self, subject: Callable, tag: Tag, options: Options, scope: Scope) -> ContentValue:
        enclosing = Enclosing(self, tag.children, scope)
        return wrap(invoke(subject.raw, options, enclosing, scope))

    def present(self, subject: ContentValue, tag: Tag, options: Options, scope: Scope) -> bool:
        if isinstance(subject, Callable):
            return self.present(self.call(subject, tag, options, scope), tag, options, scope)
        return subject.present

    def finish(self, body: str, options: Options) -> str:
        """Apply filters, then the `wrap` element; empty output stays empty."""
        if not body:
            return ""
        if self.filters:
            body = self.filters.apply(body, options)
        wrapper = options.get("wrap")
        if wrapper and body:
            body = html.element(wrapper, body, options.get("class"))
        return body

    def _default(self, output: str, options: Options) -> str:
        if not output and "default" in options:
            return options["default"]
        return output

    # -- structural tags ------------------------------------------------------

    def _include(self, tag: Tag, options: Options, scope: Scope) -> str:
        name = options.get("template")
        if not name:
            log.warning("<pop:include> without a template name")
            return ""
        nodes = self.resolver.template(name)
        if nodes is None:
            return ""
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise TemplateRecursionError(self.max_depth, f"include template=\"{name}\"")
            # evaluated against the current chain, not a fresh root
            return self.finish(self.render(nodes, scope), options)
        finally:
            self.depth -= 1

    def _layout(self, tag: Tag, options: Options, scope: Scope) -> str:
        name = options.get("name")
        if name:
            self.registry.request_layout(name)
        return ""

    def _block(self, tag: Tag, options: Options, scope: Scope) -> str:
        region = options.get("region")
        if region:
            self.registry.add_block(region, tag.children, scope)
        return ""

    def _region(self, tag: Tag, options: Options, scope: Scope) -> str:
        block = self.registry.blocks.get(options.get("name", ""))
        if block is None:
            return self.finish(self.render(tag.children, scope), options)
        return self.finish(self.render(block.nodes, block.scope), options)

    def _first(self, tag: Tag, options: Options, scope: Scope) -> str:
        iteration = scope.nearest_iteration()
        if iteration is None or not iteration.first:
            return ""
        return self.finish(self.render(tag.children, scope), options)

    def _last(self, tag: Tag, options: Options, scope: Scope) -> str:
        iteration = scope.nearest_iteration()
        if iteration is None or not iteration.last:
            return ""
        return self.finish(self.render(tag.children, scope), options)

    def _value(self, tag: Tag, options: Options, scope: Scope) -> str:
        if scope.collection:
            # repeat="false" exposes the array as `values`, never `value`
            return ""
        return self.render_value(scope.lookup("value"), tag, options, scope, scope)

    def _values(self, tag: Tag, options: Options, scope: Scope) -> str:
        subject = scope.lookup("values")
        if isinstance(subject, Array):
            subject = subject.window(_int(options.get("skip"), 0), _int(options.get("limit"), None))
        return self.render_value(subject, tag, options, scope, scope)


def _int(value: Optional[str], fallback: Optional[int]) -> Optional[int]:
    if value is None:
        return fallback
    try:
        return int(value.strip())
    except ValueError:
        return fallback
