"""Resolver - fetches templates and extensions through host callbacks.

One Resolver lives for exactly one render call: compiled includes and
required extensions are memoized per name for that call only, so template
sources edited between renders are picked up.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from poptags.ast import Node, parse_text
from poptags.engine.content import ContentValue, wrap
from poptags.engine.scope import Scope

log = logging.getLogger(__name__)

ReadFn = Callable[[str], Optional[str]]
RequireFn = Callable[[str], Any]


class Resolver:
    """Resolves template names and extension namespaces for one render."""

    def __init__(
        self,
        read: Optional[ReadFn] = None,
        require: Optional[RequireFn] = None,
        layout_prefix: str = "layouts/",
        preloaded: Optional[Dict[str, Tuple[Node, ...]]] = None,
    ):
        self.read = read
        self.require = require
        self.layout_prefix = layout_prefix
        self._templates: Dict[str, Optional[Tuple[Node, ...]]] = dict(preloaded or {})
        self._extensions: Dict[str, Optional[ContentValue]] = {}

    def template(self, name: str) -> Optional[Tuple[Node, ...]]:
        """Compiled nodes of template `name`, or None if it cannot be read.

        CompileError from a fetched template propagates.
        """
        if name in self._templates:
            return self._templates[name]

        source = self.read(name) if self.read is not None else None
        if source is None:
            log.warning(f"Template not found: {name}")
            nodes = None
        else:
            log.debug(f"Compiling template {name}")
            nodes = parse_text(source, template=name)

        self._templates[name] = nodes
        return nodes

    def layout(self, name: str) -> Optional[Tuple[Node, ...]]:
        return self.template(self.layout_prefix + name)

    def extension(self, namespace: str, scope: Scope) -> Optional[Scope]:
        """A scope rooted at the extension's exported object.

        Its parent is `scope`, so tags nested under an extension tag still
        see the ambient content.
        """
        if namespace not in self._extensions:
            exported = self.require(namespace) if self.require is not None else None
            if exported is None:
                log.warning(f"Extension not found: {namespace}")
                self._extensions[namespace] = None
            else:
                log.debug(f"Loaded extension {namespace}")
                self._extensions[namespace] = wrap(exported)

        value = self._extensions[namespace]
        if value is None:
            return None
        return scope.child(value)
