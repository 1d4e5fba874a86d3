from menu_auditor.model import MenuExpectations

from ..core import CheckDefinition, check_spec
from ..errors import AssertionFailure, MissingElementError
from ..models import HTMLDocument
from ..navigator import query


def _head(doc: HTMLDocument):
    if doc.head is None:
        raise MissingElementError("head", "document head")
    return doc.head


# --- CHECKS ---

@check_spec(code="STYLESHEET_LINK")
def check_stylesheet_link(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Head links the page stylesheet."""
    hrefs = [link.get("href") for link in query(_head(doc), "link[href]")]
    if expected.stylesheet_href not in hrefs:
        raise AssertionFailure(
            "External stylesheet is not linked",
            selector="head link[href]",
            expected=expected.stylesheet_href,
            observed=hrefs
        )


@check_spec(code="VIEWPORT_META")
def check_viewport_meta(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Head declares the responsive viewport."""
    contents = [meta.get("content") for meta in query(_head(doc), "meta[content]")]
    if expected.viewport_content not in contents:
        raise AssertionFailure(
            "Viewport meta tag is missing",
            selector="head meta[content]",
            expected=expected.viewport_content,
            observed=contents
        )


# --- CHECK DEFINITION ---

DEFINITION = CheckDefinition(
    region="head",
    order=10,
    checks=[check_stylesheet_link, check_viewport_meta]
)
