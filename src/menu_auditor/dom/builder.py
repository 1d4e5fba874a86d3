# src/menu_auditor/dom/builder.py
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Union

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, FeatureNotFound, NavigableString, \
    ProcessingInstruction, Tag
from bs4.builder import ParserRejectedMarkup

from .core import ElementBase, NodeHandle
from .errors import ParseError
from .models import HTMLDocument

logger = logging.getLogger(__name__)

# Elements whose text never contributes to the visible text of an ancestor
INVISIBLE_TAGS = frozenset({"script", "style", "template", "noscript"})

# NavigableString subclasses that are markup, not text
_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction)


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into an immutable HTMLDocument.

    Embedded scripts are kept as inert nodes; nothing in the markup is ever
    executed to materialize the tree.
    """

    def __init__(
            self,
            parser: str = "html.parser",
            require_doctype: bool = False,
            require_body: bool = True,
            encoding: str = "utf-8"
    ):
        self.parser = parser
        self.require_doctype = require_doctype
        self.require_body = require_body
        self.encoding = encoding

    def load(self, path: Union[str, Path]) -> HTMLDocument:
        """Reads a fixture from disk and parses it."""
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ParseError(str(path), f"cannot read file ({e.strerror or e})") from e
        logger.debug("Read %d bytes from %s", len(raw), path)
        return self.parse_doc(str(path), raw)

    def parse_doc(self, source: str, html: Union[str, bytes]) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            source (str): Path or label identifying the document in reports.
            html (Union[str, bytes]): The raw markup.

        Returns:
            HTMLDocument: The frozen document tree.

        Raises:
            ParseError: If the markup cannot be turned into a usable tree.
        """
        if isinstance(html, bytes):
            try:
                html = html.decode(self.encoding)
            except UnicodeDecodeError as e:
                raise ParseError(source, f"not valid {self.encoding}: {e.reason}") from e

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '').strip()
        if not clean_html:
            raise ParseError(source, "document is empty")

        try:
            soup = BeautifulSoup(clean_html, self.parser)
        except FeatureNotFound as e:
            raise ParseError(source, f"parser '{self.parser}' is not available") from e
        except ParserRejectedMarkup as e:
            raise ParseError(source, f"markup rejected by parser: {e}") from e

        has_doctype = any(isinstance(item, Doctype) for item in soup.contents)
        if self.require_doctype and not has_doctype:
            raise ParseError(source, "missing <!DOCTYPE html>")

        top_level = [item for item in soup.contents if isinstance(item, Tag)]
        if not top_level:
            raise ParseError(source, "no elements found in markup")

        html_tag = soup.find("html")
        if html_tag is None:
            # Fragments without an <html> root get a synthetic one
            html_tag = soup.new_tag("html")
            for item in list(soup.contents):
                if not isinstance(item, Doctype):
                    html_tag.append(item.extract())
            soup.append(html_tag)

        document = HTMLDocument(source=source, has_doctype=has_doctype, root=self._build_tree(html_tag))
        if self.require_body and document.body is None:
            raise ParseError(source, "no <body> element")

        index: Dict[int, ElementBase] = {}
        _attach(document.root, html_tag, index)
        document._handle = NodeHandle(soup, index)

        logger.debug("Parsed %s (doctype=%s, %d elements)", source, has_doctype, len(index))
        return document

    def _build_children(self, tag: Tag) -> Tuple[List[ElementBase], List[str]]:
        children: List[ElementBase] = []
        texts: List[str] = []
        for child in tag.children:
            if isinstance(child, Tag):
                element = self._build_tree(child)
                children.append(element)
                if child.name not in INVISIBLE_TAGS and element.text:
                    texts.append(element.text)
            elif isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT):
                texts.append(str(child))
        return children, texts

    def _build_tree(self, tag: Tag) -> ElementBase:
        """Recursively builds the frozen element tree from a BeautifulSoup Tag."""
        children, texts = self._build_children(tag)
        text = "" if tag.name in INVISIBLE_TAGS else _normalize(texts)
        return ElementBase(
            tag=tag.name,
            attrs=tuple((name, _attr_value(value)) for name, value in tag.attrs.items()),
            text=text,
            children=tuple(children)
        )


def _attr_value(value) -> str:
    # bs4 returns multi-valued attributes (class, rel) as lists
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return "" if value is None else str(value)


def _normalize(texts: List[str]) -> str:
    return " ".join(" ".join(texts).split())


def _attach(element: ElementBase, tag: Tag, index: Dict[int, ElementBase]) -> None:
    """Links every element of the finished tree to the bs4 tag it mirrors."""
    index[id(tag)] = element
    element._handle = NodeHandle(tag, index)
    child_tags = [child for child in tag.children if isinstance(child, Tag)]
    for child, child_tag in zip(element.children, child_tags):
        _attach(child, child_tag, index)
