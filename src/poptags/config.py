"""Construction options for a Template."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from poptags.engine.renderer import DEFAULT_MAX_DEPTH


class TemplateConfig(BaseModel):
    """Validated options accepted by `Template`.

    The source comes from `template` when given, otherwise from
    `read(name)`. `name` also labels errors and log records.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True, extra="forbid")

    template: Optional[str] = None
    name: Optional[str] = None
    read: Optional[Callable[[str], Optional[str]]] = None
    require: Optional[Callable[[str], Any]] = None
    # insertion order is the order filters run in
    filters: Dict[str, Callable[..., Any]] = {}
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)
    layout_prefix: str = "layouts/"

    @model_validator(mode="after")
    def _check_source(self) -> "TemplateConfig":
        if self.template is None and (self.name is None or self.read is None):
            raise ValueError("Must provide either 'template' or both 'name' and 'read'")
        return self
