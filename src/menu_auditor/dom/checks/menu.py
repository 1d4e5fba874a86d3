from typing import List, Tuple

from menu_auditor.model import MenuExpectations

from ..core import CheckDefinition, ElementBase, check_spec
from ..errors import AssertionFailure, MissingElementError
from ..models import HTMLDocument
from ..navigator import contains_phrase, query, query_one, require_all, require_one, text

SECTION = ".menu-section"
ITEM = ".menu-item"


def _items(doc: HTMLDocument) -> List[Tuple[int, int, ElementBase]]:
    """(section number, item number, item) for every item, numbered from 1."""
    sections = require_all(doc, SECTION, "menu sections")
    found = [
        (s_idx, i_idx, item)
        for s_idx, section in enumerate(sections, start=1)
        for i_idx, item in enumerate(query(section, ITEM), start=1)
    ]
    if not found:
        raise MissingElementError(f"{SECTION} {ITEM}", "menu items")
    return found


def _label(item: ElementBase) -> str:
    first = query_one(item, "h4")
    return text(first) if first is not None else text(item)[:40]


# --- CHECKS ---

@check_spec(code="MENU_TITLE")
def check_menu_title(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Menu is introduced by a 'Food & Drink' heading."""
    title = require_one(doc, "body h2", "menu title")
    if not contains_phrase(text(title), expected.menu_title_text):
        raise AssertionFailure(
            "Menu title has the wrong text",
            selector="body h2",
            expected=expected.menu_title_text,
            observed=text(title)
        )


@check_spec(code="MENU_SECTIONS")
def check_menu_sections(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Five titled menu sections in the expected order."""
    sections = require_all(doc, SECTION, "menu sections")
    if len(sections) != len(expected.sections):
        raise AssertionFailure(
            "Wrong number of menu sections",
            selector=SECTION,
            expected=len(expected.sections),
            observed=len(sections)
        )

    titles = []
    for number, section in enumerate(sections, start=1):
        heading = query_one(section, "h2, h3")
        if heading is None:
            raise MissingElementError(f"{SECTION} h2, h3", f"title of menu section {number}")
        titles.append(text(heading))

    for number, (label, title) in enumerate(zip(expected.sections, titles), start=1):
        if not contains_phrase(title, label):
            raise AssertionFailure(
                f"Menu section {number} is mislabeled or out of order",
                selector=SECTION,
                expected=list(expected.sections),
                observed=titles
            )


@check_spec(code="MENU_ITEM_COUNT")
def check_menu_item_count(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Every menu section lists three to five items."""
    low, high = expected.min_items_per_section, expected.max_items_per_section
    for number, section in enumerate(require_all(doc, SECTION, "menu sections"), start=1):
        count = len(query(section, ITEM))
        if not low <= count <= high:
            raise AssertionFailure(
                f"Menu section {number} lists an inappropriate number of items",
                selector=f"{SECTION} {ITEM}",
                expected=f"{low}..{high}",
                observed=count
            )


@check_spec(code="MENU_ITEM_HEADINGS")
def check_menu_item_headings(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Every menu item has an h4 for its name and one for its price."""
    for s_idx, i_idx, item in _items(doc):
        count = len(query(item, "h4"))
        if count != expected.headings_per_item:
            raise AssertionFailure(
                f"Item {i_idx} of section {s_idx} ({_label(item)!r}) has the wrong number of h4 headings",
                selector=f"{ITEM} h4",
                expected=expected.headings_per_item,
                observed=count
            )


@check_spec(code="MENU_ITEM_PARAGRAPHS")
def check_menu_item_paragraphs(doc: HTMLDocument, expected: MenuExpectations) -> None:
    """Every menu item has a description and at most one dietary label."""
    low, high = expected.min_paragraphs_per_item, expected.max_paragraphs_per_item
    for s_idx, i_idx, item in _items(doc):
        count = len(query(item, "p"))
        if not low <= count <= high:
            raise AssertionFailure(
                f"Item {i_idx} of section {s_idx} ({_label(item)!r}) has the wrong number of paragraphs",
                selector=f"{ITEM} p",
                expected=f"{low}..{high}",
                observed=count
            )


# --- CHECK DEFINITION ---

DEFINITION = CheckDefinition(
    region="menu",
    order=30,
    checks=[
        check_menu_title,
        check_menu_sections,
        check_menu_item_count,
        check_menu_item_headings,
        check_menu_item_paragraphs,
    ]
)
