from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr


def check_spec(code: str, description: str = ""):
    """
    Decorator to declare the stable code and description of a check function.
    Facilitates auto-discovery by the CheckRegistry.
    """
    def decorator(func):
        func.check_code = code
        if not description and func.__doc__:
            func.check_description = func.__doc__.strip().splitlines()[0]
        else:
            func.check_description = description
        return func
    return decorator


class NodeHandle:
    """
    Link from a frozen model back to the bs4 node it was built from.

    ``index`` maps ``id(tag)`` to the element mirroring that tag and is shared
    by every handle of one document, so selector matches on the bs4 tree can
    be translated back into elements.
    """
    __slots__ = ("node", "index")

    def __init__(self, node: Any, index: Dict[int, "ElementBase"]):
        self.node = node
        self.index = index

    def element_for(self, tag: Any) -> Optional["ElementBase"]:
        return self.index.get(id(tag))

    # Handles are invisible to model equality
    def __eq__(self, other):
        return isinstance(other, NodeHandle)


class ElementBase(BaseModel):
    """
    Immutable node of the parsed document tree.

    Attributes are kept as ordered (name, value) pairs; multi-valued
    attributes such as ``class`` are joined by a single space.
    """
    model_config = ConfigDict(frozen=True)

    tag: str
    attrs: Tuple[Tuple[str, str], ...] = ()
    text: str = ""
    children: Tuple["ElementBase", ...] = ()

    _handle: Optional[NodeHandle] = PrivateAttr(default=None)

    @property
    def handle(self) -> Optional[NodeHandle]:
        """The parsed node behind this element; None for hand-built elements."""
        return self._handle

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Returns the value of the first attribute called ``name``."""
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    @property
    def classes(self) -> Tuple[str, ...]:
        return tuple((self.get("class") or "").split())

    def has_class(self, name: str) -> bool:
        return name in self.classes

    @property
    def is_empty(self) -> bool:
        """Returns True if the element contains no text and no children."""
        return not self.text and not self.children


ElementBase.model_rebuild()


@dataclass(frozen=True)
class RegisteredCheck:
    """A check function bound to its code and region."""
    code: str
    region: str
    description: str
    func: Callable


class CheckDefinition:
    """
    Configuration object binding a page region to its ordered checks.
    """

    def __init__(self, region: str, checks: List[Callable], order: int = 100):
        self.region = region
        self.order = order
        self.checks: List[RegisteredCheck] = []

        seen: Set[str] = set()
        for func in checks:
            code = getattr(func, "check_code", None)
            if not code:
                raise ValueError(f"Check '{func.__name__}' in region '{region}' is missing @check_spec")
            if code in seen:
                raise ValueError(f"Duplicate check code '{code}' in region '{region}'")
            seen.add(code)
            self.checks.append(RegisteredCheck(
                code=code,
                region=region,
                description=getattr(func, "check_description", ""),
                func=func
            ))

        self.codes = [c.code for c in self.checks]
