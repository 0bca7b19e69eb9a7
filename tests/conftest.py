import os
from pathlib import Path

import pytest

# Test layer by directory name; integration tests are slow unless marked fast.
LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
    "bdd": pytest.mark.bdd,
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config environment before any domain module is imported.

    The simulated payment gateway answers instantly under test.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("PAYMENT_LATENCY_SECONDS", "0")


def pytest_collection_modifyitems(config, items):
    for item in items:
        layer = next((part for part in Path(item.fspath).parts if part in LAYER_MARKERS), None)
        if layer is None:
            continue

        item.add_marker(LAYER_MARKERS[layer])
        if layer == "integration" and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)
