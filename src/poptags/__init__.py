"""poptags - a tag-based template compiler and renderer.

Templates are markup containing `<pop:...>` tags. They compile to an
immutable Node Tree, which renders against a hierarchical content scope.
"""

from poptags._version import __version__
from poptags.config import TemplateConfig
from poptags.engine.content import ContentValue
from poptags.engine.scope import Scope
from poptags.exceptions import (
    CompileError,
    ResolutionError,
    TemplateError,
    TemplateRecursionError,
)
from poptags.template import Template

__all__ = [
    "__version__",
    "Template",
    "TemplateConfig",
    "Scope",
    "ContentValue",
    "TemplateError",
    "CompileError",
    "ResolutionError",
    "TemplateRecursionError",
]
