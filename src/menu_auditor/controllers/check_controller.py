import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from menu_auditor.dom.builder import DOMBuilder
from menu_auditor.dom.engine import CheckEngine
from menu_auditor.dom.models import HTMLDocument
from menu_auditor.managers.config_manager import ConfigManager, config_manager
from menu_auditor.model import MenuExpectations, RunReport
from menu_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class CheckController:
    """
    Orchestrates a run: loads the fixture once, evaluates every check against
    the shared document and aggregates the results into a RunReport.
    """

    def __init__(self, config: Optional[ConfigManager] = None):
        self.config = config or config_manager

        self.builder = DOMBuilder(
            parser=self.config.get_nested("loader.parser", "html.parser"),
            require_doctype=self.config.get_nested("loader.require_doctype", False),
            require_body=self.config.get_nested("loader.require_body", True),
            encoding=self.config.get_nested("loader.encoding", "utf-8")
        )
        self.engine = CheckEngine()
        # Raises pydantic.ValidationError on a malformed expectations section
        self.expected = MenuExpectations(**self.config.get_nested("expectations", {}))

    def default_fixture(self) -> Path:
        return PathUtils.resolve_fixture(self.config.get_nested("fixture.path"))

    def load(self, fixture: Optional[Union[str, Path]] = None, html: Optional[Union[str, bytes]] = None) -> HTMLDocument:
        """
        Builds the document from in-memory markup when ``html`` is given,
        otherwise from the fixture file. Raises ParseError on failure.
        """
        if html is not None:
            return self.builder.parse_doc(str(fixture or "<memory>"), html)
        path = PathUtils.resolve_fixture(fixture) if fixture else self.default_fixture()
        return self.builder.load(path)

    def run(
            self,
            fixture: Optional[Union[str, Path]] = None,
            html: Optional[Union[str, bytes]] = None,
            workers: Optional[int] = None,
            codes: Optional[Iterable[str]] = None,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> RunReport:
        """Loads the fixture and runs the checks. ParseError propagates to the caller."""
        workers = workers or self.config.get_nested("runner.workers", 1)

        start = time.perf_counter()
        doc = self.load(fixture, html)
        logger.info(f"Running checks on {doc.source} with {workers} worker(s)")

        results = self.engine.run(
            doc,
            self.expected,
            workers=workers,
            codes=codes,
            progress_callback=progress_callback
        )
        report = RunReport(source=doc.source, results=results, duration=time.perf_counter() - start)

        logger.info(f"{report.passed}/{report.total} checks passed for {doc.source}")
        for failure in report.failures():
            logger.debug(f"{failure.code} {failure.status.value}: {failure.message}")
        return report
