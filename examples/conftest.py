"""Shared pytest configuration for roost examples.

Provides the ``example_module`` fixture that loads a fresh copy of the
``states.py`` file next to the test, so every test starts with its own
registry.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_module(request: pytest.FixtureRequest):
    """Load a fresh module from the sibling states.py next to the test file."""
    states_path = Path(request.path).parent / "states.py"
    module_name = f"example_{states_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, states_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_registry(example_module):
    return example_module.registry
