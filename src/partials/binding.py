"""Local variable names a partial's object is bound to.

The default name comes from the last path segment:

    >>> bind("users/_account.html", None, False)
    VariableBinding(name='account', counter_name=None)
    >>> bind("posts/post", None, True)
    VariableBinding(name='post', counter_name='post_counter')
    >>> bind("posts/post", "article", True)
    VariableBinding(name='article', counter_name='article_counter')

"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Trailing word run, skipping a leading underscore and any ".ext" suffixes.
# "foo.bar.baz" binds "foo".
_VARIABLE_RE = re.compile(r"_?(\w+)(\.\w+)*$", re.ASCII)
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

COUNTER_SUFFIX = "_counter"


@dataclass(frozen=True, slots=True)
class VariableBinding:
    """Names under which one element (and its index) reach the template.

    Attributes:
        name: Local variable holding the object
        counter_name: Local variable holding the 0-based index; set only
            when rendering a collection
    """

    name: str
    counter_name: str | None = None


def default_variable_name(path: str) -> str:
    """Variable name derived from a partial path, or ``""`` if none can be."""
    match = _VARIABLE_RE.search(path)
    return match.group(1) if match else ""


def is_valid_identifier(name: str) -> bool:
    """True if ``name`` starts with a letter or underscore and continues with
    letters, digits or underscores (ASCII only)."""
    return _IDENTIFIER_RE.fullmatch(name) is not None


def bind(path: str, explicit_name: str | None, is_collection: bool) -> VariableBinding:
    """Derive the variable binding for ``path``.

    An explicit name (the ``as`` option) takes precedence over the derived
    one. Well-formedness is checked by the options normalizer, not here.
    """
    name = str(explicit_name) if explicit_name is not None else default_variable_name(path)
    counter_name = f"{name}{COUNTER_SUFFIX}" if is_collection else None
    return VariableBinding(name, counter_name)
