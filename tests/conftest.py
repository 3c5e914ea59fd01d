"""Pytest configuration and fixtures for partials tests."""

from __future__ import annotations

import pytest

from partials import (
    DEFAULT_CONFIG,
    DictLoader,
    LookupContext,
    PartialPathRegistry,
    PartialRenderer,
    ViewContext,
)

from .doubles import RecordingLookup


@pytest.fixture
def registry():
    """A fresh path registry, so memoized paths never leak between tests."""
    return PartialPathRegistry()


@pytest.fixture
def make_view(registry):
    """Build a ViewContext over a RecordingLookup of the given templates."""

    def _make_view(templates, prefixes=("users",)):
        lookup = RecordingLookup(templates, prefixes)
        return ViewContext(lookup, PartialRenderer(lookup, registry))

    return _make_view


@pytest.fixture
def jinja_view(registry):
    """Build a ViewContext rendering Jinja2 templates from a DictLoader."""

    def _jinja_view(templates, prefixes=("users",), **config_changes):
        config = DEFAULT_CONFIG.replace(**config_changes)
        lookup = LookupContext(DictLoader(templates), prefixes, config)
        return ViewContext(lookup, PartialRenderer(lookup, registry, config), config)

    return _jinja_view
