"""Render-scoped template cache for heterogeneous collections."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from partials.template import Template


class TemplateCache:
    """Path → template memo that lives for a single render call.

    Used only when collection elements resolve to different partials, so a
    path that repeats (even non-contiguously) is looked up once. A new cache
    is created for every render call; instances are never shared.

    Complexity: O(1) per fetch.

    """

    __slots__ = ("_templates", "_stats")

    def __init__(self, stats: dict[str, int] | None = None):
        self._templates: dict[str, Template] = {}
        self._stats = stats

    def fetch(self, path: str, find: Callable[[str], Template]) -> Template:
        """Return the template for ``path``, calling ``find`` on first use."""
        template = self._templates.get(path)
        if template is not None:
            if self._stats is not None:
                self._stats["hits"] = self._stats.get("hits", 0) + 1
            return template

        if self._stats is not None:
            self._stats["misses"] = self._stats.get("misses", 0) + 1
        template = self._templates[path] = find(path)
        return template

    def __contains__(self, path: object) -> bool:
        return path in self._templates

    def __len__(self) -> int:
        return len(self._templates)
