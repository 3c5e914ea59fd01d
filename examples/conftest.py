"""Shared pytest configuration for partials examples.

Each example directory holds an ``app.py`` that builds a view and renders at
import time, plus a test reading the results. The ``example_app`` fixture
runs the sibling ``app.py`` fresh for every test, so views, content sections
and path registries never carry over between tests.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Globals of the sibling app.py, as attributes."""
    app_path = Path(request.path).with_name("app.py")
    namespace = runpy.run_path(str(app_path), run_name=f"example_{app_path.parent.name}")
    return SimpleNamespace(**namespace)
