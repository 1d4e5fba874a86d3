# src/menu_auditor/dom/navigator.py
"""
Read-only query helpers over an HTMLDocument or any of its elements.

Selection is delegated to soupsieve, the CSS engine behind bs4's ``select``,
running on the parsed tree the document was built from.
"""
from typing import List, Optional, Union

import soupsieve as sv

from .core import ElementBase
from .errors import MissingElementError, SelectorError
from .models import HTMLDocument

Scope = Union[HTMLDocument, ElementBase]


def query(scope: Scope, selector: str) -> List[ElementBase]:
    """
    Returns every element under ``scope`` matching ``selector``, in document order.

    For a document the root element is itself a candidate. For an element only
    its descendants are candidates; combinators may still match its ancestors
    unless the selector is anchored with ``:scope``.
    """
    if not selector or not selector.strip():
        raise SelectorError("Empty selector")

    handle = scope.handle
    if handle is None:
        raise ValueError(f"<{getattr(scope, 'tag', 'document')}> is not attached to a parsed document")

    try:
        tags = sv.select(selector, handle.node)
    except sv.SelectorSyntaxError as e:
        raise SelectorError(f"Invalid selector {selector!r}: {e}") from e

    # Tags outside the <html> root have no mirrored element
    found = (handle.element_for(tag) for tag in tags)
    return [element for element in found if element is not None]


def query_one(scope: Scope, selector: str) -> Optional[ElementBase]:
    """Returns the first match or None."""
    found = query(scope, selector)
    return found[0] if found else None


def require_one(scope: Scope, selector: str, what: str) -> ElementBase:
    """Returns the first match; raises MissingElementError when there is none."""
    element = query_one(scope, selector)
    if element is None:
        raise MissingElementError(selector, what)
    return element


def require_all(scope: Scope, selector: str, what: str) -> List[ElementBase]:
    """Returns all matches; raises MissingElementError when there are none."""
    found = query(scope, selector)
    if not found:
        raise MissingElementError(selector, what)
    return found


def text(node: Optional[ElementBase]) -> str:
    """Visible text of a node and its descendants."""
    return node.text if node is not None else ""


def contains_phrase(haystack: Optional[str], phrase: str, ignore_case: bool = True) -> bool:
    """Whitespace-normalised substring match."""
    if haystack is None:
        return False
    hay = " ".join(haystack.split())
    needle = " ".join(phrase.split())
    if ignore_case:
        return needle.casefold() in hay.casefold()
    return needle in hay
