# tests/conftest.py
import pytest
from bs4 import BeautifulSoup

from menu_auditor.dom.builder import DOMBuilder
from menu_auditor.dom.engine import CheckEngine
from menu_auditor.model import MenuExpectations
from menu_auditor.utils.path_utils import PathUtils


@pytest.fixture(scope="session")
def menu_html() -> str:
    """The bundled reference menu page."""
    return PathUtils.get_default_fixture().read_text(encoding="utf-8")


@pytest.fixture
def builder() -> DOMBuilder:
    return DOMBuilder()


@pytest.fixture
def menu_doc(builder, menu_html):
    return builder.parse_doc("menu.html", menu_html)


@pytest.fixture
def expected() -> MenuExpectations:
    return MenuExpectations()


@pytest.fixture
def engine() -> CheckEngine:
    return CheckEngine()


@pytest.fixture
def failing_codes(engine, builder, expected):
    """Parses markup, runs every check and returns the codes that did not pass."""
    def run(html: str) -> set:
        doc = builder.parse_doc("mutated.html", html)
        return {r.code for r in engine.run(doc, expected) if not r.passed}
    return run


@pytest.fixture
def without(menu_html):
    """
    Returns a function that removes the ``index``-th element matching a CSS
    selector from the reference page and gives back the resulting markup.
    """
    def remove(selector: str, index: int = 0) -> str:
        soup = BeautifulSoup(menu_html, "html.parser")
        soup.select(selector)[index].decompose()
        return str(soup)
    return remove
