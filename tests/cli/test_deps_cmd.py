"""Tests for the deps command CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from ngdp.cli import app
from tests.base import FileSystemTestBase


@pytest.mark.cli
@pytest.mark.fs
class TestDepsCommand(FileSystemTestBase):
	"""Test cases for the 'deps' CLI command."""

	runner: CliRunner

	@pytest.fixture(autouse=True)
	def setup_cli(self, setup_temp_dir: None) -> None:
		"""Set up CLI test environment."""
		self.runner = CliRunner()
		self.create_test_file("app/app.js", "angular.module('app', ['ngRoute']);")
		self.create_test_file(
			"app/home.js",
			"angular.module('app').factory('HomeSvc', ['$http', function($http) {}]);",
		)

	def test_summary(self) -> None:
		"""Test the table of definitions and dependencies."""
		result = self.runner.invoke(app, ["deps", "app"])

		assert result.exit_code == 0, result.output
		assert "HomeSvc" in result.output
		assert "ngRoute" in result.output
		assert "$http" in result.output

	def test_edges(self) -> None:
		"""Test the table of dependency edges."""
		result = self.runner.invoke(app, ["deps", "app", "--edges"])

		assert result.exit_code == 0, result.output
		assert "edges" in result.output
		assert "HomeSvc" in result.output
		assert "$http" in result.output

	def test_no_scripts(self) -> None:
		"""Test sources without scripts."""
		self.create_test_file("styles/app.css", "")

		result = self.runner.invoke(app, ["deps", "styles"])

		assert result.exit_code == 0
		assert "No scripts found" in result.output

	def test_syntax_error(self) -> None:
		"""Test that scripts with syntax errors fail the command."""
		self.create_test_file("app/broken.js", "angular.module('app'.;")

		result = self.runner.invoke(app, ["deps", "app"])

		assert result.exit_code == 1
		assert "Could not parse script" in result.output

	def test_sources_are_required(self) -> None:
		"""Test that the command requires sources."""
		result = self.runner.invoke(app, ["deps"])

		assert result.exit_code != 0
