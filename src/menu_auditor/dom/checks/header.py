from menu_auditor.model import MenuExpectations

from ..core import CheckDefinition, check_spec
from ..errors import AssertionFailure
from ..models import HTMLDocument
from ..navigator import contains_phrase, require_all, require_one, text
from .common import assert_first_link_to, assert_nav_links


# --- CHECKS ---

@check_spec(code="HEADER_TITLE")
def check_header_title(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Exactly one h1 naming the restaurant."""
    titles = require_all(doc, "body h1", "title heading")
    if len(titles) != 1:
        raise AssertionFailure(
            "Page must have exactly one title heading",
            selector="body h1",
            expected=1,
            observed=len(titles)
        )

    observed = text(titles[0])
    if not contains_phrase(observed, expected.title_text):
        raise AssertionFailure(
            "Title heading does not name the restaurant",
            selector="body h1",
            expected=expected.title_text,
            observed=observed
        )


@check_spec(code="HEADER_HOME_LINK")
def check_header_home_link(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Header title links back to the home page."""
    assert_first_link_to(doc, "header a", expected.home_href, "header home link")


@check_spec(code="HEADER_NAV_LINKS")
def check_header_nav_links(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Header nav link group holds the four page links, menu first."""
    container = require_one(doc, "header nav div", "header navigation link group")
    assert_nav_links(container, "header nav div", expected.nav_labels, expected.menu_href, "Header")


@check_spec(code="HEADER_SOCIAL_ICONS")
def check_header_social_icons(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Header nav carries one icon per social network."""
    icons = require_all(doc, "header nav i", "social media icons")
    if len(icons) != len(expected.social_icons):
        raise AssertionFailure(
            "Header holds the wrong number of social media icons",
            selector="header nav i",
            expected=len(expected.social_icons),
            observed=len(icons)
        )

    seen = set()
    for icon in icons:
        ident = icon.get("class") or ""
        network = next((name for name in expected.social_icons if name in ident), None)
        if network is None:
            raise AssertionFailure(
                "Unexpected social media icon",
                selector="header nav i",
                expected=list(expected.social_icons),
                observed=ident
            )
        seen.add(network)

    missing = [name for name in expected.social_icons if name not in seen]
    if missing:
        raise AssertionFailure(
            f"Social media icons missing for {missing}",
            selector="header nav i",
            expected=list(expected.social_icons),
            observed=[i.get("class") for i in icons]
        )


# --- CHECK DEFINITION ---

DEFINITION = CheckDefinition(
    region="header",
    order=20,
    checks=[
        check_header_title,
        check_header_home_link,
        check_header_nav_links,
        check_header_social_icons,
    ]
)
