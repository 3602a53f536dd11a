"""Shared pytest configuration for courier examples.

Each example directory holds an ``app.py`` exposing ``app``. The
``example_app`` fixture executes that file afresh for every test, so no
state leaks between tests.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest


def _load(app_path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_module(request: pytest.FixtureRequest) -> ModuleType:
    """The freshly executed ``app.py`` beside the requesting test file."""
    return _load(Path(request.path).parent / "app.py")


@pytest.fixture
def example_app(example_module: ModuleType):
    return example_module.app
