"""File-system providers for the `read` and `require` callbacks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

log = logging.getLogger(__name__)

DATA_SUFFIXES = (".yaml", ".yml", ".json")


def _inside(root: Path, name: str) -> Optional[Path]:
    """Resolve `name` under `root`, or None if it escapes it."""
    candidate = (root / name).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


class DirectoryReader:
    """`read` callback serving templates from a directory.

    `read("layouts/default")` returns the text of `layouts/default` or
    `layouts/default.html` under the root, or None.
    """

    def __init__(self, root: str | Path, suffix: str = ".html", encoding: str = "utf-8"):
        self.root = Path(root).resolve()
        self.suffix = suffix
        self.encoding = encoding

    def __call__(self, name: str) -> Optional[str]:
        for candidate in (name, name + self.suffix):
            path = _inside(self.root, candidate)
            if path is not None and path.is_file():
                log.debug(f"Reading template {name} from {path}")
                return path.read_text(encoding=self.encoding)
        return None


class DataDirectory:
    """`require` callback loading extension objects from YAML/JSON files."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def __call__(self, name: str) -> Any:
        for suffix in DATA_SUFFIXES:
            path = _inside(self.root, name + suffix)
            if path is not None and path.is_file():
                log.debug(f"Loading extension {name} from {path}")
                return load_content(path)
        return None


def load_content(path: str | Path) -> Any:
    """Load a YAML (or JSON) content document; an empty file is {}."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return {} if data is None else data
