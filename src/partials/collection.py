"""Collection detection and expansion.

A collection renders in one of two ways:

- **with template**: every element resolves to the same partial path, so the
  template is looked up once and reused for all elements;
- **without template**: elements resolve to different paths, so each element
  carries its own path and binding (an ``ElementDescriptor``) and templates
  are fetched through the render-scoped template cache.

"""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from partials.binding import VariableBinding, bind


class RenderMode(Enum):
    """How a render request is executed. Decided once per render call."""

    SINGLE = "single"
    COLLECTION_WITH_TEMPLATE = "collection_with_template"
    COLLECTION_WITHOUT_TEMPLATE = "collection_without_template"

    @property
    def is_collection(self) -> bool:
        return self is not RenderMode.SINGLE


@dataclass(frozen=True, slots=True)
class ElementDescriptor:
    """Path and binding of one element of a heterogeneous collection."""

    path: str
    binding: VariableBinding


@dataclass(frozen=True, slots=True)
class Expansion:
    """Result of expanding a collection.

    Attributes:
        mode: COLLECTION_WITH_TEMPLATE or COLLECTION_WITHOUT_TEMPLATE
        path: The shared path, or None when elements differ
        descriptors: One descriptor per element when elements differ
    """

    mode: RenderMode
    path: str | None = None
    descriptors: tuple[ElementDescriptor, ...] = field(default_factory=tuple)


def as_sequence(value: Any) -> list[Any] | None:
    """Convert ``value`` to a list if it is a collection, else return None.

    Objects may opt in explicitly with a ``to_sequence()`` method. Otherwise
    sized, iterable containers count (lists, tuples, ranges, sets,
    query-set-like objects), except strings, bytes and mappings.

    Example:
            >>> as_sequence((1, 2))
            [1, 2]
            >>> as_sequence("abc") is None
            True
            >>> as_sequence({"a": 1}) is None
            True
    """
    to_sequence = getattr(value, "to_sequence", None)
    if callable(to_sequence):
        return list(to_sequence())
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return None
    if isinstance(value, Collection):
        return list(value)
    return None


def expand(
    collection: list[Any],
    resolve: Callable[[Any], str],
    explicit_name: str | None = None,
) -> Expansion:
    """Resolve every element's path and pick the collection render mode.

    Resolution errors propagate; they never downgrade the collection to the
    heterogeneous mode.

    Args:
        collection: Elements in render order
        resolve: Maps one element to its partial path
        explicit_name: The ``as`` override, applied to every element

    Returns:
        Expansion with a shared path, or per-element descriptors
    """
    paths = [resolve(element) for element in collection]

    if len(set(paths)) == 1:
        return Expansion(RenderMode.COLLECTION_WITH_TEMPLATE, path=paths[0])

    descriptors = tuple(
        ElementDescriptor(path, bind(path, explicit_name, True)) for path in paths
    )
    return Expansion(RenderMode.COLLECTION_WITHOUT_TEMPLATE, descriptors=descriptors)
