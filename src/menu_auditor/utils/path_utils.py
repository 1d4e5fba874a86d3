# src/menu_auditor/utils/path_utils.py
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed menu_auditor package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def get_fixtures_dir() -> Path:
        return PathUtils.get_package_root() / "fixtures"

    @staticmethod
    def get_default_fixture() -> Path:
        """Returns the bundled reference menu page."""
        return PathUtils.get_fixtures_dir() / "menu.html"

    @staticmethod
    def resolve_fixture(path: Optional[Union[str, Path]]) -> Path:
        """
        Resolves a fixture path. Relative paths that do not exist from the
        working directory are looked up relative to the package root.
        """
        if not path:
            return PathUtils.get_default_fixture()
        candidate = Path(path).expanduser()
        if candidate.is_absolute() or candidate.exists():
            return candidate
        packaged = PathUtils.get_package_root() / candidate
        if packaged.exists():
            logger.debug("Resolved fixture %s inside package root", path)
            return packaged
        return candidate
