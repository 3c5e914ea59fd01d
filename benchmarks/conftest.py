from __future__ import annotations

import json
import os
import platform
import sys
from collections.abc import Callable
from importlib import metadata as importlib_metadata
from pathlib import Path

import pytest

from partials import (
    DictLoader,
    LookupContext,
    ModelNaming,
    PartialPathRegistry,
    PartialRenderer,
    ViewContext,
)

BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"

TEMPLATES = {
    "posts/_post.html": "<article>{{ post_counter }} {{ post.title }}</article>",
    "comments/_comment.html": "<p>{{ comment_counter }} {{ comment.body }}</p>",
    "authors/_author.html": "<address>{{ author.name }}</address>",
    "feed/_divider.html": "<hr>",
}


class Post(ModelNaming):
    def __init__(self, title: str):
        self.title = title


class Comment(ModelNaming):
    def __init__(self, body: str):
        self.body = body


class Author(ModelNaming):
    def __init__(self, name: str):
        self.name = name


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
        },
        "os": {
            "system": platform.system(),
            "machine": platform.machine(),
        },
        "cpu": {"count": os.cpu_count()},
        "partials": _version("partials"),
        "jinja2": _version("jinja2"),
        "executable": sys.executable,
    }


@pytest.fixture(scope="session", autouse=True)
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture
def view() -> ViewContext:
    """View over the benchmark templates with its own path registry."""
    lookup = LookupContext(DictLoader(TEMPLATES), ["feed"])
    return ViewContext(lookup, PartialRenderer(lookup, PartialPathRegistry()))


@pytest.fixture(scope="session")
def make_collection() -> Callable[[int, bool], list[object]]:
    """Build ``size`` models, all posts or cycling post/comment/author."""

    def _make(size: int, mixed: bool = False) -> list[object]:
        if not mixed:
            return [Post(f"post {i}") for i in range(size)]
        kinds = (Post, Comment, Author)
        return [kinds[i % 3](f"item {i}") for i in range(size)]

    return _make
