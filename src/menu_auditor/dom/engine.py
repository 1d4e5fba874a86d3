# src/menu_auditor/dom/engine.py
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterable, List, Optional

from menu_auditor.model import CheckResult, CheckStatus, MenuExpectations

from .core import RegisteredCheck
from .errors import AssertionFailure
from .models import HTMLDocument
from .registry import CheckRegistry

logger = logging.getLogger(__name__)


def evaluate_check(check: RegisteredCheck, doc: HTMLDocument, expected: MenuExpectations) -> CheckResult:
    """
    Runs one check and converts its outcome into a CheckResult.

    AssertionFailure means the document does not match. Any other exception
    means the check itself is broken and is reported as ERROR.
    """
    status, message = CheckStatus.PASSED, ""
    try:
        check.func(doc, expected)
    except AssertionFailure as e:
        status, message = CheckStatus.FAILED, str(e)
    except Exception as e:
        logger.error(f"Check {check.code} crashed: {e}", exc_info=True)
        status, message = CheckStatus.ERROR, f"{type(e).__name__}: {e}"

    logger.debug(f"{check.code}: {status.value}")
    return CheckResult(
        code=check.code,
        region=check.region,
        description=check.description,
        status=status,
        message=message
    )


class CheckEngine:
    """
    Evaluates registered checks against a parsed HTMLDocument.

    Checks are pure functions of the frozen document, so they can run on a
    thread pool without coordination. Results always follow registry order.
    """

    def __init__(self):
        """Initializes the engine by discovering and loading all available checks."""
        CheckRegistry.discover()
        self.checks = CheckRegistry.get_all_checks()

    def select(self, codes: Optional[Iterable[str]] = None) -> List[RegisteredCheck]:
        """Returns the checks to run; raises ValueError for unknown codes."""
        if not codes:
            return list(self.checks)

        wanted = {c.upper() for c in codes}
        unknown = sorted(wanted - {c.code for c in self.checks})
        if unknown:
            raise ValueError(f"Unknown check code(s): {', '.join(unknown)}")
        return [c for c in self.checks if c.code in wanted]

    def run(
            self,
            doc: HTMLDocument,
            expected: MenuExpectations,
            workers: int = 1,
            codes: Optional[Iterable[str]] = None,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[CheckResult]:
        """
        Runs the selected checks.

        Args:
            doc (HTMLDocument): The parsed document, shared read-only.
            expected (MenuExpectations): Literal values to compare against.
            workers (int): Thread count; 1 runs sequentially.
            codes (Optional[Iterable[str]]): Restrict the run to these codes.
            progress_callback: Called with (done, total) after each check.

        Returns:
            List[CheckResult]: One result per check, in registry order.
        """
        selected = self.select(codes)
        total = len(selected)
        func = partial(evaluate_check, doc=doc, expected=expected)

        results: List[CheckResult] = []
        if workers <= 1:
            results_iter = map(func, selected)
            for i, result in enumerate(results_iter):
                results.append(result)
                if progress_callback:
                    progress_callback(i + 1, total)
            return results

        with ThreadPoolExecutor(max_workers=workers) as executor:
            for i, result in enumerate(executor.map(func, selected)):
                results.append(result)
                if progress_callback:
                    progress_callback(i + 1, total)
        return results
