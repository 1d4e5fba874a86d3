from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CheckStatus(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    # The check itself malfunctioned (bad selector, unexpected exception)
    ERROR = "ERROR"


class CheckResult(BaseModel):
    """
    Outcome of evaluating a single check against a document.
    """
    code: str  # e.g., 'HEADER_NAV_LINKS', 'MENU_SECTIONS'
    region: str  # e.g., 'head', 'header', 'menu', 'footer'
    description: str = ""
    status: CheckStatus
    message: str = ""  # Human-readable explanation, empty when passed

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASSED


class RunReport(BaseModel):
    """
    Aggregate of all check results for one run over one fixture.
    """
    source: str
    results: List[CheckResult] = Field(default_factory=list)
    duration: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == CheckStatus.PASSED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == CheckStatus.FAILED)

    @property
    def errored(self) -> int:
        return sum(1 for r in self.results if r.status == CheckStatus.ERROR)

    @property
    def ok(self) -> bool:
        return self.passed == self.total

    def failures(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]

    def export_rows(self) -> List[Dict[str, Any]]:
        """Flat rows for tabular export."""
        return [
            {
                "Source": self.source,
                "Region": r.region,
                "Code": r.code,
                "Status": r.status.value,
                "Description": r.description,
                "Message": r.message
            }
            for r in self.results
        ]


class MenuExpectations(BaseModel):
    """
    Literal values the menu page checks compare against.
    Defaults describe the reference fixture; settings.json may override them.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Head
    stylesheet_href: str = "css/menu.css"
    viewport_content: str = "width=device-width, initial-scale=1.0"

    # Header
    title_text: str = "BLOOMTECH BAR AND GRILL"
    home_href: str = "index.html"
    menu_href: str = "menu.html"
    nav_labels: Tuple[str, ...] = ("Menu", "Reservations", "Special Offers", "Contact")
    social_icons: Tuple[str, ...] = ("facebook", "twitter", "instagram")

    # Menu
    menu_title_text: str = "Food & Drink"
    sections: Tuple[str, ...] = ("Drinks", "Appetizers", "Soup and Salad", "Entrees", "Desserts")
    min_items_per_section: int = 3
    max_items_per_section: int = 5
    headings_per_item: int = 2
    min_paragraphs_per_item: int = 1
    max_paragraphs_per_item: int = 2

    # Footer
    email_placeholder: str = "Email Address"
    signup_label: str = "Sign Up"

    @model_validator(mode='after')
    def validate_ranges(self):
        """Item and paragraph ranges must be non-empty."""
        if self.min_items_per_section > self.max_items_per_section:
            raise ValueError("min_items_per_section exceeds max_items_per_section")
        if self.min_paragraphs_per_item > self.max_paragraphs_per_item:
            raise ValueError("min_paragraphs_per_item exceeds max_paragraphs_per_item")
        return self
