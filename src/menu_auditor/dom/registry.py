# src/menu_auditor/dom/registry.py
import importlib
import logging
import pkgutil
from typing import Dict, List, Optional

from .core import CheckDefinition, RegisteredCheck

logger = logging.getLogger(__name__)


class CheckRegistry:
    """
    Central registry for structural checks.

    Dynamically discovers CheckDefinition modules from the
    'menu_auditor.dom.checks' package and orders their checks by region.
    """

    _checks: List[RegisteredCheck] = []
    _by_code: Dict[str, RegisteredCheck] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers all check definitions found in the 'menu_auditor.dom.checks' package.

        Modules without a `DEFINITION` attribute (helpers) are skipped. A module
        that fails to import or a duplicated code aborts discovery: a silently
        missing check would make a broken document look valid.
        """
        if cls._loaded:
            return

        import menu_auditor.dom.checks as checks_pkg

        definitions: List[CheckDefinition] = []
        for _, name, _ in pkgutil.iter_modules(checks_pkg.__path__):
            full_name = f"menu_auditor.dom.checks.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error(f"Error loading check module {name}: {e}")
                raise

            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, CheckDefinition):
                definitions.append(defn)
                logger.debug(f"Checks loaded: {defn.region} ({', '.join(defn.codes)})")

        checks: List[RegisteredCheck] = []
        by_code: Dict[str, RegisteredCheck] = {}
        for defn in sorted(definitions, key=lambda d: (d.order, d.region)):
            for check in defn.checks:
                if check.code in by_code:
                    raise ValueError(f"Check code '{check.code}' registered twice")
                by_code[check.code] = check
                checks.append(check)

        cls._checks = checks
        cls._by_code = by_code
        cls._loaded = True

    @classmethod
    def get_check(cls, code: str) -> Optional[RegisteredCheck]:
        """Retrieves a registered check by its code."""
        return cls._by_code.get(code)

    @classmethod
    def get_all_checks(cls) -> List[RegisteredCheck]:
        """Returns every registered check in region order."""
        return list(cls._checks)

    @classmethod
    def get_all_codes(cls) -> List[str]:
        return [c.code for c in cls._checks]
