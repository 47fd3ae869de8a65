"""Tests for the order command CLI."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from ngdp import __version__
from ngdp.cli import app
from tests.base import FileSystemTestBase


@pytest.mark.cli
@pytest.mark.fs
class TestOrderCommand(FileSystemTestBase):
	"""Test cases for the 'order' CLI command."""

	runner: CliRunner

	@pytest.fixture(autouse=True)
	def setup_cli(self, setup_temp_dir: None) -> None:
		"""Set up CLI test environment."""
		self.runner = CliRunner()
		self.create_test_file("app/app.module.js", "angular.module('app', []);")
		self.create_test_file("app/home/home.js", "angular.module('app').controller('HomeController', function() {});")
		self.create_test_file("app/home/home.css", ".home {}")

	@patch("ngdp.cli.order_cmd._order_command_impl")
	def test_order_command_arguments(self, mock_order_command_impl: MagicMock) -> None:
		"""Test that CLI arguments reach the implementation."""
		result = self.runner.invoke(
			app,
			["order", "app/**/*.js", "lib", "-d", "topology.json", "--base-path", "app/", "--js-prefix", "/js/"],
		)

		assert result.exit_code == 0
		mock_order_command_impl.assert_called_once()
		_, kwargs = mock_order_command_impl.call_args
		assert kwargs["sources"] == ["app/**/*.js", "lib"]
		assert str(kwargs["dest"]) == "topology.json"
		assert kwargs["base_path"] == "app/"
		assert kwargs["js_prefix"] == "/js/"
		assert kwargs["css_prefix"] is None
		assert kwargs["config"] is None

	def test_order_sources(self) -> None:
		"""Test ordering sources into a topology file."""
		result = self.runner.invoke(app, ["order", "app", "--dest", "dist/topology.json"])

		assert result.exit_code == 0, result.output
		assert "Ordered 2 scripts and 1 styles" in result.output
		topology = json.loads((self.temp_dir / "dist" / "topology.json").read_text(encoding="utf-8"))
		assert topology == {"css": ["app/home/home.css"], "js": ["app/app.module.js", "app/home/home.js"]}

	def test_order_prefixes(self) -> None:
		"""Test the base path and prefix options."""
		result = self.runner.invoke(
			app,
			["order", "app", "-d", "topology.json", "--base-path", "app/", "--css-prefix", "/css/", "--js-prefix", "/js/"],
		)

		assert result.exit_code == 0, result.output
		topology = json.loads((self.temp_dir / "topology.json").read_text(encoding="utf-8"))
		assert topology == {"css": ["/css/home/home.css"], "js": ["/js/app.module.js", "/js/home/home.js"]}

	def test_order_warnings(self) -> None:
		"""Test that cycles and styles without a script are reported."""
		self.create_test_file("app/a.js", "angular.module('app').factory('A', ['B', function(B) {}]);")
		self.create_test_file("app/b.js", "angular.module('app').factory('B', ['A', function(A) {}]);")
		self.create_test_file("themes/dark.css", "")

		result = self.runner.invoke(app, ["order", "app", "themes", "-d", "topology.json"])

		assert result.exit_code == 0, result.output
		assert "Warning Summary" in result.output
		assert "Circular dependencies between scripts" in result.output
		assert "app/a.js, app/b.js" in result.output
		assert "- themes/dark.css" in result.output
		topology = json.loads((self.temp_dir / "topology.json").read_text(encoding="utf-8"))
		assert topology["css"] == ["app/home/home.css", "themes/dark.css"]

	def test_configured_targets(self) -> None:
		"""Test that configured targets run without sources."""
		config_file = self.create_test_file(
			"ngdp.yml",
			yaml.dump(
				{
					"order": {"js_prefix": "/static/"},
					"targets": {"app": {"src": ["app/**/*.js"], "dest": "build/app.json"}},
				}
			),
		)

		result = self.runner.invoke(app, ["order", "--config", str(config_file)])

		assert result.exit_code == 0, result.output
		topology = json.loads((self.temp_dir / "build" / "app.json").read_text(encoding="utf-8"))
		assert topology["js"] == ["/static/app/app.module.js", "/static/app/home/home.js"]

	def test_missing_destination(self) -> None:
		"""Test that sources require a destination."""
		result = self.runner.invoke(app, ["order", "app"])

		assert result.exit_code == 1
		assert "--dest" in result.output

	def test_nothing_to_order(self) -> None:
		"""Test running without sources nor configured targets."""
		result = self.runner.invoke(app, ["order"])

		assert result.exit_code == 1
		assert "no targets configured" in result.output

	def test_syntax_error(self) -> None:
		"""Test that scripts with syntax errors fail the command."""
		self.create_test_file("app/broken.js", "angular.module('app'.;")

		result = self.runner.invoke(app, ["order", "app", "-d", "topology.json"])

		assert result.exit_code == 1
		assert "Could not parse script" in result.output
		assert not (self.temp_dir / "topology.json").exists()

	def test_lenient_syntax_errors(self, monkeypatch: pytest.MonkeyPatch) -> None:
		"""Test that syntax errors can be tolerated through the environment."""
		monkeypatch.setenv("NGDP_ORDER_FAIL_ON_SYNTAX_ERROR", "false")
		self.create_test_file("app/broken.js", "angular.module('app'.;")

		result = self.runner.invoke(app, ["order", "app", "-d", "topology.json"])

		assert result.exit_code == 0, result.output
		assert (self.temp_dir / "topology.json").exists()

	def test_invalid_config(self) -> None:
		"""Test that invalid configuration fails the command."""
		config_file = self.create_test_file("ngdp.yml", yaml.dump({"order": {"max_workers": "many"}}))

		result = self.runner.invoke(app, ["order", "app", "-d", "topology.json", "-c", str(config_file)])

		assert result.exit_code == 1
		assert "Configuration error" in result.output


@pytest.mark.cli
class TestGlobalOptions:
	"""Test cases for the global CLI options."""

	def test_version(self) -> None:
		"""Test the --version option."""
		result = CliRunner().invoke(app, ["--version"])

		assert result.exit_code == 0
		assert f"ngdp version: {__version__}" in result.output

	def test_help(self) -> None:
		"""Test that both commands are listed."""
		result = CliRunner().invoke(app, ["--help"])

		assert result.exit_code == 0
		assert "order" in result.output
		assert "deps" in result.output
