"""Layout/region compositing.

Rendering a template that contains `<pop:layout name="X"/>` is two-pass:
the entry template is rendered first, which fills the block registry and
records the requested layout; its own output is then discarded and
`layouts/X` is rendered against the same root scope, expanding each
`<pop:region>` from the registry. A layout that cannot be read keeps the
output rendered so far.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from poptags.ast import Node
from poptags.engine.scope import Scope
from poptags.exceptions import TemplateRecursionError

if TYPE_CHECKING:
    from poptags.engine.renderer import Renderer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    """Captured children of a `block` tag and the scope they were defined in."""

    nodes: Tuple[Node, ...]
    scope: Scope


@dataclass
class Registry:
    """Blocks and pending layout of a single render call."""

    blocks: Dict[str, Block] = field(default_factory=dict)
    pending: Optional[str] = None
    applied: List[str] = field(default_factory=list)

    def add_block(self, region: str, nodes: Tuple[Node, ...], scope: Scope) -> None:
        # first definition wins: the entry template beats intermediate layouts
        if region not in self.blocks:
            self.blocks[region] = Block(nodes, scope)

    def request_layout(self, name: str) -> None:
        if self.pending is None:
            self.pending = name

    def take_layout(self) -> Optional[str]:
        name, self.pending = self.pending, None
        if name is not None:
            self.applied.append(name)
        return name


def compose(renderer: "Renderer", nodes: Tuple[Node, ...], root: Scope) -> str:
    """Render `nodes`, then apply the layout chain they request, if any."""
    registry = renderer.registry
    output = renderer.render(nodes, root)

    while True:
        name = registry.take_layout()
        if name is None:
            return output
        if len(registry.applied) > renderer.max_depth:
            raise TemplateRecursionError(renderer.max_depth, "layout")

        layout = renderer.resolver.layout(name)
        if layout is None:
            log.warning(f"Layout not found: {name}")
            return output
        log.debug(f"Applying layout {name} with regions {sorted(registry.blocks)}")
        output = renderer.render(layout, root)
