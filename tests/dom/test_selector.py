# tests/dom/test_selector.py
import pytest

from menu_auditor.dom.core import ElementBase
from menu_auditor.dom.errors import MissingElementError, SelectorError
from menu_auditor.dom.navigator import contains_phrase, query, query_one, require_all, require_one, text

PAGE = """
<html>
<head><link rel="stylesheet" href="css/site.css"></head>
<body>
  <div id="main" class="box wide">
    <p class="lead" data-kind="intro-text">One</p>
    <section>
      <p>Two</p>
      <div class="box"><p lang="en-GB">Three</p></div>
    </section>
  </div>
  <p>Four</p>
</body>
</html>
"""


@pytest.fixture
def doc(builder):
    return builder.parse_doc("page.html", PAGE)


def texts(nodes):
    return [text(n) for n in nodes]


def test_matches_are_the_frozen_elements_of_the_tree(doc):
    assert query(doc, "html") == [doc.root]
    assert query_one(doc, "html") is doc.root
    assert query_one(doc, "body") is doc.body


def test_tag_selection_in_document_order(doc):
    assert texts(query(doc, "p")) == ["One", "Two", "Three", "Four"]


def test_class_and_id_selection(doc):
    assert [n.get("id") for n in query(doc, ".box.wide")] == ["main"]
    assert len(query(doc, ".box")) == 2
    assert texts(query(doc, "#main > p")) == ["One"]


def test_descendant_versus_child(doc):
    assert texts(query(doc, "#main p")) == ["One", "Two", "Three"]
    assert texts(query(doc, "#main > p")) == ["One"]
    assert texts(query(doc, "body > p")) == ["Four"]
    assert texts(query(doc, "div > section > div > p")) == ["Three"]


@pytest.mark.parametrize("selector, expected", [
    ("[data-kind]", ["One"]),
    ('[data-kind="intro-text"]', ["One"]),
    ("[data-kind^=intro]", ["One"]),
    ("[data-kind$='text']", ["One"]),
    ("[data-kind*=tro-te]", ["One"]),
    ("[lang|=en]", ["Three"]),
    ('[class~="lead"]', ["One"]),
    ('[data-kind="intro"]', []),
])
def test_attribute_selection(doc, selector, expected):
    assert texts(query(doc, selector)) == expected


def test_selector_groups_keep_document_order_without_duplicates(doc):
    assert texts(query(doc, "body > p, .lead, section p")) == ["One", "Two", "Three", "Four"]


def test_scoped_query_only_returns_descendants(doc):
    section = query_one(doc, "section")
    assert texts(query(section, "p")) == ["Two", "Three"]
    assert query(section, "section") == []
    # Ancestors above the scope still take part in combinators
    assert texts(query(section, "#main p")) == ["Two", "Three"]
    assert texts(query(section, ":scope > p")) == ["Two"]
    assert texts(query(section, ":scope div p")) == ["Three"]


def test_head_queries(doc):
    assert query_one(doc, 'head link[href="css/site.css"]') is not None
    assert query_one(doc, "body link") is None


def test_fragment_root_is_selectable(builder):
    doc = builder.parse_doc("fragment.html", "<body><p>Hi</p></body>")
    assert query_one(doc, "html") is doc.root
    assert texts(query(doc, "html > body > p")) == ["Hi"]


def test_require_helpers_name_missing_structure(doc):
    assert text(require_one(doc, ".lead", "lead paragraph")) == "One"
    assert len(require_all(doc, "p", "paragraphs")) == 4

    with pytest.raises(MissingElementError) as exc:
        require_all(doc, "table tr", "table rows")
    assert exc.value.selector == "table tr"
    assert "Missing table rows" in str(exc.value)


def test_queries_do_not_change_the_tree(doc):
    before = doc.model_dump()
    for selector in ("p", "#main p", "section > div", "[lang|=en]"):
        query(doc, selector)
    assert doc.model_dump() == before


def test_documents_parsed_twice_compare_equal(builder):
    assert builder.parse_doc("page.html", PAGE) == builder.parse_doc("page.html", PAGE)


@pytest.mark.parametrize("selector", ["", "   ", "> p", "p >", "p,", "div..x", "[x=]", "p:no-such-pseudo"])
def test_invalid_selectors_raise(doc, selector):
    with pytest.raises(SelectorError):
        query(doc, selector)


def test_hand_built_elements_cannot_be_queried():
    with pytest.raises(ValueError, match="not attached"):
        query(ElementBase(tag="div"), "p")


def test_contains_phrase():
    assert contains_phrase("Special   Offers", "special offers")
    assert not contains_phrase("Special Offers", "special offers", ignore_case=False)
    assert not contains_phrase(None, "x")
