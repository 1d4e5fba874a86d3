from menu_auditor.model import MenuExpectations

from ..core import CheckDefinition, check_spec
from ..errors import AssertionFailure
from ..models import HTMLDocument
from ..navigator import contains_phrase, require_one, text
from .common import assert_nav_links


# --- CHECKS ---

@check_spec(code="FOOTER_SIGNUP_FORM")
def check_footer_signup_form(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Footer offers an e-mail input and a sign-up button."""
    email_input = require_one(doc, "footer input", "footer e-mail input")
    placeholder = email_input.get("placeholder") or ""
    if not contains_phrase(placeholder, expected.email_placeholder, ignore_case=False):
        raise AssertionFailure(
            "Footer input has the wrong placeholder",
            selector="footer input",
            expected=expected.email_placeholder,
            observed=placeholder
        )

    button = require_one(doc, "footer button", "footer sign-up button")
    if not contains_phrase(text(button), expected.signup_label, ignore_case=False):
        raise AssertionFailure(
            "Footer button has the wrong label",
            selector="footer button",
            expected=expected.signup_label,
            observed=text(button)
        )


@check_spec(code="FOOTER_NAV_LINKS")
def check_footer_nav_links(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Footer nav repeats the four header page links, menu first."""
    container = require_one(doc, "footer nav", "footer navigation")
    assert_nav_links(container, "footer nav", expected.nav_labels, expected.menu_href, "Footer")


# --- CHECK DEFINITION ---

DEFINITION = CheckDefinition(
    region="footer",
    order=40,
    checks=[check_footer_signup_form, check_footer_nav_links]
)
