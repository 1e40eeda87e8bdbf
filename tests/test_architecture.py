"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters
- Application services don't depend on adapters
- Adapters can depend on domain
- The CLI runs without the web layer
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import any other modules except standard library and domain itself."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("train_board_proxy.domain.models*")
        .should_not_import("train_board_proxy.adapters*")
        .should_not_import("train_board_proxy.application*")
        .should_not_import("train_board_proxy.domain.contracts*")
        .should_not_import("train_board_proxy.domain.ports*")
        .may_import("train_board_proxy.domain.models*")
        .check("train_board_proxy")
    )


def test_domain_contracts_have_no_dependencies() -> None:
    """Domain contracts (protocols/interfaces) should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match("train_board_proxy.domain.contracts*")
        .should_not_import("train_board_proxy.adapters*")
        .should_not_import("train_board_proxy.application*")
        .may_import("train_board_proxy.domain.contracts*")
        .may_import("train_board_proxy.domain.models*")
        .check("train_board_proxy")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("train_board_proxy.domain.ports*")
        .should_not_import("train_board_proxy.adapters*")
        .should_not_import("train_board_proxy.application*")
        .may_import("train_board_proxy.domain.ports*")
        .may_import("train_board_proxy.domain.models*")
        .check("train_board_proxy")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("train_board_proxy.application*")
        .should_not_import("train_board_proxy.adapters*")
        .may_import("train_board_proxy.domain*")
        .may_import("train_board_proxy.application*")
        .check("train_board_proxy")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("train_board_proxy.adapters*")
        .should_not_import("train_board_proxy.application*")
        .may_import("train_board_proxy.domain*")
        .may_import("train_board_proxy.adapters*")
        .check("train_board_proxy", only_direct_imports=True)
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not have circular dependencies."""
    (
        archrule("domain no cycles", comment="Domain layer should not have circular dependencies")
        .match("train_board_proxy.domain*")
        .should_not_import("train_board_proxy.adapters*")
        .should_not_import("train_board_proxy.application*")
        .may_import("train_board_proxy.domain*")
        .check("train_board_proxy", only_direct_imports=True)
    )


def test_formatters_dont_import_web_adapters() -> None:
    """Formatters should not depend on the HTTP server layer."""
    (
        archrule("formatters independence", comment="Formatters should not depend on web adapters")
        .match("train_board_proxy.adapters.formatters*")
        .should_not_import("train_board_proxy.adapters.web*")
        .should_not_import("train_board_proxy.adapters.http*")
        .may_import("train_board_proxy.domain*")
        .may_import("train_board_proxy.adapters.formatters*")
        .check("train_board_proxy")
    )


def test_cli_dont_import_web_adapters() -> None:
    """CLI should not import web adapters to allow running CLI without web server."""
    (
        archrule("CLI independence", comment="CLI should not depend on web adapters")
        .match("train_board_proxy.cli")
        .should_not_import("train_board_proxy.adapters.web*")
        .may_import("train_board_proxy.domain*")
        .may_import("train_board_proxy.adapters.config*")
        .may_import("train_board_proxy.adapters.formatters*")
        .may_import("train_board_proxy.adapters.http*")
        .check("train_board_proxy")
    )
