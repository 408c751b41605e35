"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the mittens DI analysis engine.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "graph"         # Run only graph tests
    pytest tests/ --quick            # Skip slow tests
"""

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mittens.core.models import Component, Dependency, Provider


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Component Fixtures
# =============================================================================

@pytest.fixture
def mutual_pair() -> List[Component]:
    """A -> B -> A"""
    return [
        Component("A", "com.test", dependencies=[Dependency("b", "com.test.B")]),
        Component("B", "com.test", dependencies=[Dependency("a", "com.test.A")]),
    ]


@pytest.fixture
def five_ring() -> List[Component]:
    """A -> B -> C -> D -> E -> A"""
    names = ["A", "B", "C", "D", "E"]
    return [
        Component(name, "com.ring", dependencies=[
            Dependency(names[(i + 1) % 5].lower(), f"com.ring.{names[(i + 1) % 5]}")
        ])
        for i, name in enumerate(names)
    ]


@pytest.fixture
def duplicate_database_providers() -> List[Component]:
    """Two unqualified providers of DatabaseService in different modules."""
    return [
        Component("ModuleA", "com.db", providers=[
            Provider("provideDb", "DatabaseService"),
        ]),
        Component("ModuleB", "com.db", providers=[
            Provider("provideOtherDb", "DatabaseService"),
        ]),
    ]


@pytest.fixture
def clean_project() -> List[Component]:
    """Consumer, repository and provider module with no defects."""
    return [
        Component("UserService", "com.shop", dependencies=[
            Dependency("repo", "com.shop.UserRepository"),
            Dependency("clock", "Clock", is_singleton=True),
        ]),
        Component("UserRepository", "com.shop", dependencies=[
            Dependency("db", "DatabaseService"),
        ]),
        Component("InfraModule", "com.shop.infra", providers=[
            Provider("provideDb", "PostgresDatabase", provides_type="DatabaseService"),
            Provider("provideClock", "Clock", is_singleton=True),
        ]),
    ]


@pytest.fixture
def messy_project() -> List[Component]:
    """One defect of every detected kind."""
    return [
        # cycle
        Component("OrderService", "com.shop", dependencies=[
            Dependency("payments", "com.shop.PaymentService"),
        ]),
        Component("PaymentService", "com.shop", dependencies=[
            Dependency("orders", "com.shop.OrderService"),
        ]),
        # qualifier mismatch
        Component("ReportService", "com.shop.reports", dependencies=[
            Dependency("cache", "Cache", named_qualifier="primery"),
        ]),
        # unresolved
        Component("MailService", "com.shop.mail", dependencies=[
            Dependency("mailer", "Mailer"),
        ]),
        # lifecycle mismatch
        Component("SettingsScreen", "com.shop.ui", dependencies=[
            Dependency("config", "AppConfig", is_singleton=True),
        ]),
        Component("CacheModule", "com.shop.infra", providers=[
            Provider("primaryCache", "Cache", named_qualifier="primary"),
            Provider("secondaryCache", "Cache", named_qualifier="secondary"),
        ]),
        Component("ConfigModule", "com.shop.infra", providers=[
            Provider("provideConfig", "AppConfig"),
        ]),
        # ambiguous
        Component("DbModuleA", "com.shop.db", providers=[
            Provider("provideDb", "DatabaseService"),
        ]),
        Component("DbModuleB", "com.shop.db", providers=[
            Provider("provideDbAgain", "DatabaseService"),
        ]),
    ]
