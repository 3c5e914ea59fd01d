"""Render configuration for partials.

A single frozen dataclass carries every tunable used by the lookup context,
the Jinja2 handler and the partial renderer. Configuration is passed by
constructor injection; there is no global mutable configuration.

Example:
    >>> from partials.config import DEFAULT_CONFIG
    >>> config = DEFAULT_CONFIG.replace(extensions=(".html",), max_partial_depth=10)
    >>> config.partial_prefix
    '_'

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Settings shared by lookup, template handlers and the renderer.

    Attributes:
        extensions: Filename suffixes tried, in order, for every candidate
            template name. ``""`` tries the bare name.
        partial_prefix: Prefix prepended to the base name of a partial
            (``users/account`` is stored as ``users/_account``).
        yield_name: Name under which templates receive the yield callable.
        autoescape: Enable HTML autoescaping in compiled Jinja2 templates.
        strict_undefined: Raise on undefined template variables instead of
            rendering them empty.
        max_partial_depth: Maximum nesting of partial renders before
            ``PartialDepthError`` is raised.
    """

    extensions: tuple[str, ...] = ("", ".html", ".html.jinja", ".jinja")
    partial_prefix: str = "_"
    yield_name: str = "yield_"
    autoescape: bool = True
    strict_undefined: bool = True
    max_partial_depth: int = 50

    def replace(self, **changes: Any) -> RenderConfig:
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = RenderConfig()
