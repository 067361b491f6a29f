"""
Shared pytest fixtures for TransitionX tests.
These fixtures are available to all test files automatically.
"""

import asyncio
import os

import pytest

from transitionx import StateHistoryManager
from transitionx.core import config as config_module

REST_DELAY_S = 0.05


def pytest_configure(config):
    """Register custom pytest markers for test categorization."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (<100ms, no external dependencies)"
    )
    config.addinivalue_line("markers", "property: mark test as property-based test (hypothesis)")


def pytest_collection_modifyitems(config, items):
    """Add markers to test items based on their directory."""
    for item in items:
        if "unit" in str(item.path):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.path):
            item.add_marker(pytest.mark.property)


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Keep the cached global configuration from leaking between tests."""
    monkeypatch.setattr(config_module, "_config", None)
    for key in [k for k in os.environ if k.startswith("TRANSITIONX_")]:
        monkeypatch.delenv(key)


@pytest.fixture
def initial_state():
    """Starting state used throughout the examples."""
    return {"hunger": "hungry", "energy": "low"}


@pytest.fixture
def transitions():
    """Sync, async, parameterised and failing transitions."""

    def eat(state):
        state["hunger"] = "satisfied"

    async def rest(state):
        await asyncio.sleep(REST_DELAY_S)
        state["energy"] = "high"

    def feed(state, food, amount=1):
        state["last_meal"] = food
        state["meals"] = state.get("meals", 0) + amount

    def overeat(state):
        state["hunger"] = "stuffed"
        raise RuntimeError("too much food")

    return {"eat": eat, "rest": rest, "feed": feed, "overeat": overeat}


@pytest.fixture
def manager(initial_state, transitions):
    """Manager with debug logging disabled."""
    return StateHistoryManager(initial_state, transitions, debug=False)


@pytest.fixture
def debug_manager(initial_state, transitions):
    """Manager with debug logging enabled."""
    return StateHistoryManager(initial_state, transitions, debug=True)
