"""Options normalizer: turns a render options mapping into a RenderRequest.

Recognized options:

- ``partial``: a path string, a single object, or a collection of objects
- ``locals``: mapping of local variables (copied, never mutated)
- ``object``: the object for a string partial
- ``collection``: elements to render against a string partial
- ``as`` (or ``as_``): explicit local variable name
- ``layout``: layout partial wrapping a single render
- ``spacer_template``: partial rendered between collection elements

Unknown options are ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial as bind_prefix
from typing import Any

from partials.binding import VariableBinding, bind, is_valid_identifier
from partials.collection import ElementDescriptor, RenderMode, as_sequence, expand
from partials.exceptions import InvalidIdentifierError
from partials.path_resolver import PartialPathRegistry

Block = Callable[..., Any]


@dataclass(slots=True)
class RenderRequest:
    """Normalized state of one render call.

    Created at the start of a render call and discarded at its end.
    ``path`` is None only for heterogeneous (or empty object-derived)
    collections, in which case ``descriptors`` carries one entry per element.
    """

    mode: RenderMode
    partial: Any
    path: str | None = None
    object: Any = None
    collection: list[Any] | None = None
    locals: dict[str, Any] = field(default_factory=dict)
    binding: VariableBinding | None = None
    descriptors: tuple[ElementDescriptor, ...] = ()
    explicit_variable_name: str | None = None
    layout: Any = None
    spacer_template: str | None = None
    block: Block | None = None

    @property
    def is_collection(self) -> bool:
        return self.mode.is_collection


def normalize(
    options: Mapping[str, Any],
    registry: PartialPathRegistry,
    prefix: str | None = None,
    block: Block | None = None,
) -> RenderRequest:
    """Parse ``options`` into a RenderRequest.

    Args:
        options: Render options (see module docstring)
        registry: Partial path memo used for object-derived paths
        prefix: First search prefix of the lookup context (memo scope)
        block: Optional block a partial may yield to

    Raises:
        TypeError: If no ``partial`` option is given
        InvalidIdentifierError: If a string partial binds an invalid name
        NoPartialPathError: If an object has no naming convention
    """
    if "partial" not in options:
        raise TypeError("render options must include 'partial'")

    partial = options["partial"]
    explicit_name = options.get("as", options.get("as_"))
    request = RenderRequest(
        mode=RenderMode.SINGLE,
        partial=partial,
        locals=dict(options.get("locals") or {}),
        explicit_variable_name=explicit_name,
        layout=options.get("layout"),
        spacer_template=options.get("spacer_template"),
        block=block,
    )
    resolve = bind_prefix(registry.resolve, prefix=prefix)

    if isinstance(partial, str):
        request.path = partial
        request.object = options.get("object")
        request.collection = _collection_option(options)
        if request.collection is not None:
            request.mode = RenderMode.COLLECTION_WITH_TEMPLATE
    else:
        request.object = partial
        collection = as_sequence(partial)
        if collection is None:
            collection = _collection_option(options)

        if collection is not None:
            expansion = expand(collection, resolve, explicit_name)
            request.collection = collection
            request.mode = expansion.mode
            request.path = expansion.path
            request.descriptors = expansion.descriptors
        else:
            request.path = resolve(partial)

    if request.path is not None:
        request.binding = bind(request.path, explicit_name, request.is_collection)

    if isinstance(partial, str) and not is_valid_identifier(request.binding.name):
        raise InvalidIdentifierError(partial, request.binding.name)

    return request


def _collection_option(options: Mapping[str, Any]) -> list[Any] | None:
    # A present but non-collection value (including None) renders nothing.
    if "collection" not in options:
        return None
    return as_sequence(options["collection"]) or []
