"""Helpers for navigating front-end syntax nodes.

The extraction layer only relies on the attribute names and
``kind.name`` strings exposed by ``pyslang`` syntax nodes; it never
imports ``pyslang`` itself.  Any object tree exposing the same
attributes (for example hand-built fixtures in tests) can be walked
with these helpers.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Iterator


def kind_name(node: Any) -> str:
    """Return the name of a node's syntax kind, or ``""``."""
    kind = getattr(node, "kind", None)
    if kind is None:
        return ""
    return getattr(kind, "name", "") or ""


def token_text(token: Any) -> str:
    """Return the text of a token; missing tokens yield ``""``."""
    if token is None:
        return ""
    return getattr(token, "valueText", "") or ""


def node_text(node: Any) -> str:
    """Return the source text of a node with comments and whitespace collapsed."""
    if node is None:
        return ""
    text = str(node)
    text = re.sub(r"//[^\n]*", "", text)
    text = re.sub(r"/\*.*?\*/", "", text, flags=re.DOTALL)
    return " ".join(text.split())


def iter_kind(items: Iterable[Any], *kinds: str) -> Iterator[Any]:
    """Yield the items of a syntax list whose kind is one of ``kinds``.

    Separated lists also contain separator tokens (commas); those are
    skipped because their kind never matches a syntax kind name.
    """
    if items is None:
        return
    for item in items:
        if kind_name(item) in kinds:
            yield item


def iter_declarators(items: Iterable[Any]) -> Iterator[Any]:
    """Yield the declarators of a separated list, skipping separators."""
    if items is None:
        return
    for item in items:
        if hasattr(item, "name") and hasattr(item, "dimensions"):
            yield item
