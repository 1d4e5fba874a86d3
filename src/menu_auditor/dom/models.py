# src/menu_auditor/dom/models.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .core import ElementBase, NodeHandle


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML document.

    The model is frozen and owns the root of the element tree. It is built
    once per run and shared read-only by every check, so no mutating
    operation is exposed.
    """
    model_config = ConfigDict(frozen=True)

    source: str
    has_doctype: bool = False
    root: ElementBase

    _handle: Optional[NodeHandle] = PrivateAttr(default=None)

    @property
    def handle(self) -> Optional[NodeHandle]:
        """The BeautifulSoup object the tree was built from."""
        return self._handle

    def _region(self, tag: str) -> Optional[ElementBase]:
        for child in self.root.children:
            if child.tag == tag:
                return child
        return None

    @property
    def head(self) -> Optional[ElementBase]:
        return self._region("head")

    @property
    def body(self) -> Optional[ElementBase]:
        return self._region("body")
