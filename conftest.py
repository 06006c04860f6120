import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked as integration (requires PostgreSQL via DATABASE_URL).",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: tests that run against a real PostgreSQL backing store"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="needs PostgreSQL (use --run-integration with DATABASE_URL set)"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
