"""HTML output helpers: escaping, wrap elements and repetition glue."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

VOID_ELEMENTS = frozenset(
    "area base br col embed hr img input link meta param source track wbr".split()
)
ELEMENTS = frozenset(
    "a abbr address article aside audio b bdi bdo blockquote body button canvas "
    "caption cite code colgroup data datalist dd del details dfn dialog div dl dt "
    "em fieldset figcaption figure footer form h1 h2 h3 h4 h5 h6 head header html "
    "i iframe ins kbd label legend li main map mark meter nav noscript object ol "
    "optgroup option output p picture pre progress q rp rt ruby s samp script "
    "section select small span strong style sub summary sup svg table tbody td "
    "template textarea tfoot th thead time title tr u ul var video".split()
)

_ENTITIES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))


def escape(text: str) -> str:
    for char, entity in _ENTITIES:
        text = text.replace(char, entity)
    return text


def element(name: str, body: str, css_class: Optional[str] = None) -> str:
    """Wrap `body` in `<name>`, with an optional class attribute."""
    if css_class:
        return f'<{name} class="{escape(css_class)}">{body}</{name}>'
    return f"<{name}>{body}</{name}>"


def join(parts: Sequence[str], options: Mapping[str, str]) -> str:
    """Glue the outputs of a repetition according to `break` and `last`.

    A void element name (`br`) is emitted between items, any other element
    name (`li`) wraps every item, anything else is a literal separator.
    Empty parts are dropped.
    """
    parts = [part for part in parts if part]
    separator = options.get("break")
    if not parts or separator is None:
        return "".join(parts)

    name = separator.strip().lower()
    if name in VOID_ELEMENTS:
        separator = f"<{name} />"
    elif name in ELEMENTS:
        return "".join(element(name, part) for part in parts)

    final = options.get("last", separator)
    if len(parts) == 1:
        return parts[0]
    return separator.join(parts[:-1]) + final + parts[-1]
