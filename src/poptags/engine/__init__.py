"""poptags.engine - evaluates a Node Tree against content."""

from poptags.engine.content import ContentValue, wrap
from poptags.engine.filters import FilterPipeline
from poptags.engine.layout import Registry, compose
from poptags.engine.renderer import Enclosing, Renderer
from poptags.engine.resolver import Resolver
from poptags.engine.scope import Iteration, Scope

__all__ = [
    "ContentValue",
    "wrap",
    "FilterPipeline",
    "Registry",
    "compose",
    "Enclosing",
    "Renderer",
    "Resolver",
    "Iteration",
    "Scope",
]
