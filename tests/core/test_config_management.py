# tests/core/test_config_management.py
import json

import pytest
from pydantic import ValidationError

from menu_auditor.controllers.check_controller import CheckController
from menu_auditor.managers.config_manager import ConfigManager
from menu_auditor.utils.path_utils import PathUtils

# A small, predictable configuration for the tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "loader": {
        "require_doctype": False
    },
    "runner": {
        "workers": 1
    },
    "expectations": {
        "max_items_per_section": 5
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Sets up an isolated environment for the ConfigManager:
    - Writes a fake 'settings.json' to a temporary directory.
    - Monkeypatches PathUtils to point at it.
    - Restores the bundled settings afterwards.
    """
    bundled = PathUtils.get_settings_file()
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, 'get_settings_file', lambda: settings_file)

    manager = ConfigManager()
    manager.reset()  # Force a reload from the fake file
    yield manager
    manager.reset(bundled)


def test_config_manager_is_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load(config_env):
    config = config_env.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["runner"]["workers"] == 1


def test_config_manager_get_nested(config_env):
    assert config_env.get_nested("expectations.max_items_per_section") == 5
    assert config_env.get_nested("non.existent.key", "default") == "default"
    assert config_env.get_nested("debug.level.deeper", "x") == "x"


def test_config_manager_set_nested_casts_types(config_env):
    config_env.set_nested("runner.workers", "4")
    assert config_env.get_nested("runner.workers") == 4

    config_env.set_nested("loader.require_doctype", "true")
    assert config_env.get_nested("loader.require_doctype") is True
    config_env.set_nested("loader.require_doctype", "false")
    assert config_env.get_nested("loader.require_doctype") is False

    config_env.set_nested("new_feature.enabled", "yes")
    assert config_env.get_nested("new_feature.enabled") == "yes"


def test_config_manager_set_nested_rejects_non_dict_path(config_env):
    assert config_env.set_nested("debug.level.sub", "x") is False


def test_config_manager_set_nested_rejects_failed_cast(config_env):
    assert config_env.set_nested("runner.workers", "abc") is False
    assert config_env.get_nested("runner.workers") == 1


def test_config_manager_reset(config_env):
    config_env.set_nested("debug.level", "DEBUG")
    assert config_env.get_nested("debug.level") == "DEBUG"

    config_env.reset()
    assert config_env.get_nested("debug.level") == "WARNING"


def test_config_manager_missing_or_broken_file(config_env, tmp_path):
    assert config_env.reset(tmp_path / "absent.json") is False
    assert config_env.get_all() == {}

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert config_env.reset(broken) is False
    assert config_env.get_all() == {}

    assert config_env.reset() is True


def test_controller_reads_expectations_from_config(config_env):
    config_env.set_nested("expectations.max_items_per_section", "4")
    report = CheckController(config_env).run(codes=["MENU_ITEM_COUNT"])
    assert not report.ok
    assert report.results[0].code == "MENU_ITEM_COUNT"


def test_invalid_expectations_are_rejected(config_env):
    config_env.set_nested("expectations.min_items_per_section", 9)
    with pytest.raises(ValidationError):
        CheckController(config_env)

    config_env.reset()
    config_env.set_nested("expectations.unknown_field", "x")
    with pytest.raises(ValidationError):
        CheckController(config_env)


def test_bundled_settings_match_default_expectations():
    from menu_auditor.model import MenuExpectations

    bundled = json.loads(PathUtils.get_settings_file().read_text(encoding="utf-8"))
    assert MenuExpectations(**bundled["expectations"]) == MenuExpectations()
