from typing import Sequence

from ..core import ElementBase
from ..errors import AssertionFailure
from ..navigator import Scope, contains_phrase, query, require_one, text


def assert_nav_links(
        container: ElementBase,
        selector: str,
        labels: Sequence[str],
        first_href: str,
        region: str
) -> None:
    """
    The container must hold exactly one link per expected label, every label
    must appear in one of the link texts, and the first link must open
    ``first_href``.
    """
    links = query(container, "a")
    observed = [text(a) for a in links]
    if len(links) != len(labels):
        raise AssertionFailure(
            f"{region} navigation holds the wrong number of links",
            selector=f"{selector} a",
            expected=len(labels),
            observed=len(links)
        )

    missing = [label for label in labels if not any(contains_phrase(o, label) for o in observed)]
    if missing:
        raise AssertionFailure(
            f"{region} navigation is missing link labels {missing}",
            selector=f"{selector} a",
            expected=list(labels),
            observed=observed
        )

    href = links[0].get("href") or ""
    if first_href not in href:
        raise AssertionFailure(
            f"{region} navigation does not start with the menu link",
            selector=f"{selector} a",
            expected=first_href,
            observed=href
        )


def assert_first_link_to(scope: Scope, selector: str, href: str, what: str) -> None:
    """The first element matching ``selector`` must link to a target containing ``href``."""
    link = require_one(scope, selector, what)
    actual = link.get("href") or ""
    if href not in actual:
        raise AssertionFailure(f"{what} points elsewhere", selector=selector, expected=href, observed=actual)
