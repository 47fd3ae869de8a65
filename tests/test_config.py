"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest
import yaml

from ngdp.config import DEFAULT_CONFIG
from ngdp.errors import ConfigError
from ngdp.utils.config_loader import ConfigLoader


@pytest.fixture
def temp_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create the path of a temporary config file, working in its directory."""
    monkeypatch.chdir(tmp_path)
    for env_var in list(os.environ):
        if env_var.startswith("NGDP_"):
            monkeypatch.delenv(env_var)
    return tmp_path / ".ngdp.yml"


def test_default_config_loading(temp_config_file: Path) -> None:
    """Test loading default configuration when no config file exists."""
    config_loader = ConfigLoader(None)

    for key in DEFAULT_CONFIG:
        assert config_loader.config[key] == DEFAULT_CONFIG[key], f"Mismatch in {key} section"


def test_local_config_file_is_found(temp_config_file: Path) -> None:
    """Test that .ngdp.yml in the working directory is used."""
    temp_config_file.write_text(yaml.dump({"order": {"base_path": "app/"}}))

    config_loader = ConfigLoader(None)

    assert config_loader.config_file == Path(".ngdp.yml")
    assert config_loader.get("order.base_path") == "app/"


def test_config_merging(temp_config_file: Path) -> None:
    """Test merging custom config with default config."""
    temp_config_file.write_text(yaml.dump({"order": {"js_prefix": "/js/", "max_workers": 8}}))

    config_loader = ConfigLoader(str(temp_config_file))
    order = config_loader.get_order_config()

    assert order["js_prefix"] == "/js/"
    assert order["max_workers"] == 8
    assert order["style_extensions"] == [".css", ".scss"]
    assert DEFAULT_CONFIG["order"]["js_prefix"] == ""


def test_targets(temp_config_file: Path) -> None:
    """Test that a single source pattern is turned into a list."""
    temp_config_file.write_text(
        yaml.dump(
            {
                "targets": {
                    "app1": {"src": "app1/**/*.*", "dest": "app1/topology.json"},
                    "app2": {"src": ["app2/**/*.js", "lib/*.js"], "dest": "app2/topology.json"},
                }
            }
        )
    )

    targets = ConfigLoader(str(temp_config_file)).get_targets()

    assert targets["app1"] == {"src": ["app1/**/*.*"], "dest": "app1/topology.json"}
    assert targets["app2"]["src"] == ["app2/**/*.js", "lib/*.js"]


@pytest.mark.parametrize(
    ("config", "message"),
    [
        ({"order": {"max_workers": "four"}}, "order.max_workers must be an integer"),
        ({"order": {"max_workers": 0}}, "order.max_workers must be at least 1"),
        ({"order": {"base_path": 12}}, "order.base_path must be a string"),
        ({"order": {"script_extensions": ".js"}}, "order.script_extensions must be a list of strings"),
        ({"order": {"fail_on_syntax_error": "yes"}}, "order.fail_on_syntax_error must be a boolean"),
        ({"targets": ["app"]}, "targets must be a mapping"),
        ({"targets": {"app": {"src": "a/*.js"}}}, "targets.app.dest must be a string"),
        ({"targets": {"app": {"src": 1, "dest": "a.json"}}}, "targets.app.src must be a string or a list of strings"),
    ],
)
def test_config_validation(temp_config_file: Path, config: dict, message: str) -> None:
    """Test configuration validation."""
    temp_config_file.write_text(yaml.dump(config))

    with pytest.raises(ConfigError, match=message):
        ConfigLoader(str(temp_config_file))


def test_invalid_yaml(temp_config_file: Path) -> None:
    """Test that unreadable YAML raises ConfigError."""
    temp_config_file.write_text("order: [unclosed")

    with pytest.raises(ConfigError, match="Error loading configuration"):
        ConfigLoader(str(temp_config_file))


def test_not_a_mapping(temp_config_file: Path) -> None:
    """Test that a configuration file must hold a mapping."""
    temp_config_file.write_text("- order\n- targets\n")

    with pytest.raises(ConfigError, match="must be a mapping"):
        ConfigLoader(str(temp_config_file))


def test_nonexistent_config_file(temp_config_file: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Test that a missing explicit config file falls back to defaults."""
    config_loader = ConfigLoader(str(temp_config_file.parent / "missing.yml"))

    assert config_loader.config["order"] == DEFAULT_CONFIG["order"]
    assert "config file not found" in caplog.text


def test_env_overrides(temp_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test NGDP_SECTION_KEY environment variables."""
    monkeypatch.setenv("NGDP_ORDER_MAX_WORKERS", "1")
    monkeypatch.setenv("NGDP_ORDER_FAIL_ON_SYNTAX_ERROR", "false")
    monkeypatch.setenv("NGDP_ORDER_JS_PREFIX", "/static/js/")
    monkeypatch.setenv("NGDP_UNKNOWN_KEY", "ignored")

    config_loader = ConfigLoader(None)

    assert config_loader.get("order.max_workers") == 1
    assert config_loader.get("order.fail_on_syntax_error") is False
    assert config_loader.get("order.js_prefix") == "/static/js/"
    assert "unknown" not in config_loader.config


def test_get_and_set(temp_config_file: Path) -> None:
    """Test dotted key access."""
    config_loader = ConfigLoader(None)

    assert config_loader.get("order.missing", "default") == "default"
    assert config_loader.get("missing.section") is None

    config_loader.set("order.css_prefix", "/css/")
    config_loader.set("targets.app.dest", "app.json")

    assert config_loader.get("order.css_prefix") == "/css/"
    assert config_loader.get("targets.app") == {"dest": "app.json"}


def test_save(temp_config_file: Path) -> None:
    """Test that a saved configuration loads back."""
    config_loader = ConfigLoader(None)
    config_loader.set("order.base_path", "src/")

    config_loader.save(str(temp_config_file))

    assert ConfigLoader(str(temp_config_file)).get("order.base_path") == "src/"


def test_save_without_file(temp_config_file: Path) -> None:
    """Test that saving requires a destination."""
    config_loader = ConfigLoader(None)

    with pytest.raises(ConfigError, match="No configuration file specified"):
        config_loader.save()


def test_singleton(temp_config_file: Path) -> None:
    """Test that get_instance returns the loaded instance until reloaded."""
    first = ConfigLoader.get_instance()

    assert ConfigLoader.get_instance() is first
    assert ConfigLoader.get_instance(reload=True) is not first
