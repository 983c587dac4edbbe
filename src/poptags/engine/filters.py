"""Filter pipeline - host functions keyed by attribute name."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

log = logging.getLogger(__name__)

FilterFn = Callable[[str, Dict[str, str]], Optional[Any]]


class FilterPipeline:
    """Applies every registered filter whose attribute a tag carries.

    Filters run in registration order on the rendered (already escaped)
    value. A filter returning None leaves the value unchanged.
    """

    def __init__(self, filters: Optional[Mapping[str, FilterFn]] = None):
        self.filters: Dict[str, FilterFn] = dict(filters or {})

    def __bool__(self) -> bool:
        return bool(self.filters)

    def apply(self, value: str, options: Dict[str, str]) -> str:
        for attribute, fn in self.filters.items():
            if attribute not in options:
                continue
            result = fn(value, options)
            if result is not None:
                log.debug(f"Filter '{attribute}' transformed value")
                value = str(result)
        return value
