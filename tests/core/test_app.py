# tests/core/test_app.py
import json

import pytest

from menu_auditor.app import EXIT_FAILED, EXIT_FATAL, EXIT_OK, main
from menu_auditor.managers.config_manager import config_manager
from menu_auditor.utils.path_utils import PathUtils


@pytest.fixture(autouse=True)
def restore_config():
    """main() applies --set overrides to the global config; undo them after each test."""
    yield
    config_manager.reset()


def test_reference_page_exits_zero(capsys):
    assert main(["--no-progress"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Passed:              13" in out
    assert "Failed:              0" in out


def test_broken_page_exits_non_zero(tmp_path, without, capsys):
    page = tmp_path / "menu.html"
    page.write_text(without("footer button"), encoding="utf-8")

    assert main([str(page), "--no-progress"]) == EXIT_FAILED
    out = capsys.readouterr().out
    assert "FOOTER_SIGNUP_FORM" in out
    assert "Missing footer sign-up button" in out


def test_malformed_page_is_fatal(tmp_path, capsys):
    page = tmp_path / "menu.html"
    page.write_text("no markup here", encoding="utf-8")

    assert main([str(page), "--no-progress"]) == EXIT_FATAL
    out = capsys.readouterr().out
    assert "FATAL" in out
    assert "No checks were run" in out


def test_missing_file_is_fatal(tmp_path):
    assert main([str(tmp_path / "nope.html"), "--no-progress"]) == EXIT_FATAL


def test_unknown_check_is_fatal():
    assert main(["--check", "NOT_A_CHECK", "--no-progress"]) == EXIT_FATAL


def test_overrides_reach_the_checks(capsys):
    code = main(["--set", "expectations.title_text=Other Diner", "--check", "HEADER_TITLE", "--no-progress"])
    assert code == EXIT_FAILED
    assert "Other Diner" in capsys.readouterr().out


def test_invalid_override_is_fatal():
    assert main(["--set", "no-equals-sign"]) == EXIT_FATAL


def test_uncastable_override_is_fatal(capsys):
    assert main(["--set", "runner.workers=abc", "--no-progress"]) == EXIT_FATAL
    assert "runner.workers=abc" in capsys.readouterr().out
    assert config_manager.get_nested("runner.workers") == 1


def test_missing_config_file_is_fatal(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "absent.json"), "--no-progress"]) == EXIT_FATAL
    assert "could not load configuration" in capsys.readouterr().out


def test_alternative_config_file_is_used(tmp_path):
    settings = json.loads(PathUtils.get_settings_file().read_text(encoding="utf-8"))
    settings["expectations"]["title_text"] = "Other Diner"
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(settings), encoding="utf-8")

    assert main(["--config", str(path), "--check", "HEADER_TITLE", "--no-progress"]) == EXIT_FAILED


def test_list_checks(capsys):
    assert main(["--list"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "HEADER_SOCIAL_ICONS" in out
    assert "MENU_ITEM_PARAGRAPHS" in out


def test_parallel_workers_with_progress(capsys):
    assert main(["--workers", "4"]) == EXIT_OK


def test_export_csv_and_json(tmp_path):
    csv_path = tmp_path / "out" / "results.csv"
    assert main(["--no-progress", "--export", str(csv_path)]) == EXIT_OK
    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Source,Region,Code,Status,Description,Message"
    assert len(lines) == 14

    json_path = tmp_path / "results.json"
    assert main(["--no-progress", "--export", str(json_path)]) == EXIT_OK
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["summary"]["ok"] is True
    assert payload["summary"]["checks"] == 13
    assert {row["Code"] for row in payload["results"]} >= {"MENU_SECTIONS", "FOOTER_NAV_LINKS"}


def test_unsupported_export_format(tmp_path, capsys):
    assert main(["--no-progress", "--export", str(tmp_path / "results.xlsx")]) == EXIT_FATAL
    assert "Unsupported export format" in capsys.readouterr().out


def test_help_exits_cleanly():
    assert main(["--help"]) == 0
