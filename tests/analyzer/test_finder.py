"""Tests for finding AngularJS definitions and dependencies in scripts."""

from __future__ import annotations

import logging

import pytest

from ngdp.analyzer import DependencyEdge, ExpressionKind, find_dependencies

pytestmark = [pytest.mark.unit, pytest.mark.analyzer]

CONTROLLER_SCRIPT = """
angular.module('app.items').controller('ItemsController', [
  '$scope',
  'ItemService',
  function($scope, ItemService) {
    $scope.total = $filter('currency')(ItemService.total());
  }
]);
"""

ROUTES_SCRIPT = """
angular.module('app').config(['$routeProvider', function($routeProvider) {
  $routeProvider
    .when('/items', {
      controller: 'ItemsController',
      resolve: {
        items: ['ItemService', function(ItemService) { return ItemService.all(); }]
      }
    })
    .when('/', {redirectTo: '/items'});
}]);
"""


def test_controller_script(parse) -> None:
    """Test definitions, dependencies and module of a controller script."""
    analysis = find_dependencies(parse(CONTROLLER_SCRIPT))

    assert analysis.definitions == ["ItemsController"]
    assert analysis.dependencies == ["$scope", "ItemService", "app.items", "currency"]
    assert analysis.module == "app.items"
    assert [finding.kind for finding in analysis.findings] == [
        ExpressionKind.CONTROLLER,
        ExpressionKind.MODULE,
        ExpressionKind.FILTER_CALL,
    ]
    assert analysis.findings[0].line == 2


def test_routes_script(parse) -> None:
    """Test configuration blocks and chained routes."""
    analysis = find_dependencies(parse(ROUTES_SCRIPT))

    assert analysis.definitions == ["items"]
    assert analysis.dependencies == ["$routeProvider", "app", "ItemsController", "ItemService"]


def test_module_definitions(parse) -> None:
    """Test a script defining several modules."""
    analysis = find_dependencies(
        parse("angular.module('app', ['app.items', 'ngRoute']);\nangular.module('app.items', []);")
    )

    assert analysis.definitions == ["app", "app.items"]
    assert analysis.dependencies == ["app.items", "ngRoute"]
    assert analysis.module is None


def test_last_retrieved_module(parse) -> None:
    """Test that the module is the last one retrieved."""
    analysis = find_dependencies(parse("angular.module('first');\nangular.module('second');"))

    assert analysis.module == "second"


def test_inject_annotation(parse) -> None:
    """Test that $inject annotations are dependencies."""
    analysis = find_dependencies(
        parse(
            "function ItemsController($scope, ItemService) {}\n"
            "ItemsController.$inject = ['$scope', 'ItemService'];\n"
            "angular.module('app').controller('ItemsController', ItemsController);"
        )
    )

    assert analysis.definitions == ["ItemsController"]
    assert analysis.dependencies == ["$scope", "ItemService", "app"]


def test_invalid_expressions_are_ignored(parse, caplog: pytest.LogCaptureFixture) -> None:
    """Test that malformed AngularJS calls contribute nothing."""
    with caplog.at_level(logging.DEBUG, logger="ngdp.analyzer.finder"):
        analysis = find_dependencies(parse("app.controller('Ctrl');\n$filter(name);\nconsole.log('x');"))

    assert analysis.definitions == []
    assert analysis.dependencies == []
    assert analysis.findings == []
    assert "Ignoring invalid controller expression at line 1" in caplog.text


def test_names_are_not_repeated(parse) -> None:
    """Test that definitions and dependencies are listed once."""
    analysis = find_dependencies(
        parse(
            "app.factory('A', ['B', 'B', function(b) {}]);\n"
            "app.factory('A', ['B', 'C', function(b, c) {}]);"
        )
    )

    assert analysis.definitions == ["A"]
    assert analysis.dependencies == ["B", "C"]


def test_edges(parse) -> None:
    """Test dependency edges between the definitions and dependencies of each expression."""
    analysis = find_dependencies(
        parse(
            "app.factory('A', ['B', 'C', function(b, c) {}]);\n"
            "app.directive('D', function() { return {controller: 'A'}; });\n"
            "app.service('E', ['E', function() {}]);"
        )
    )

    assert analysis.edges == [
        DependencyEdge("A", "B"),
        DependencyEdge("A", "C"),
        DependencyEdge("D", "A"),
    ]


def test_empty_program(parse) -> None:
    """Test a script without AngularJS code."""
    analysis = find_dependencies(parse("var a = 1;"))

    assert analysis.definitions == []
    assert analysis.dependencies == []
    assert analysis.module is None


def test_long_string_concatenation(parse) -> None:
    """Test a template cache script with a deeply nested concatenation."""
    template = " + ".join(f"'<p>{index}</p>'" for index in range(2000))
    source = f"""
angular.module('app').run(['$templateCache', function($templateCache) {{
  $templateCache.put('items.html', {template});
}}]);
"""

    analysis = find_dependencies(parse(source))

    assert analysis.definitions == []
    assert analysis.dependencies == ["$templateCache", "app"]
