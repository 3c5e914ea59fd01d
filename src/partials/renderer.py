"""Partial renderer: executes a normalized render request.

Three modes, decided once by the options normalizer:

- **single**: one template, the object bound under its variable name,
  optionally wrapped in a layout that shares the same locals
- **collection with template**: every element shares one partial, looked up
  once and rendered per element with ``<name>`` and ``<name>_counter``
- **collection without template**: elements resolve to different partials,
  fetched through a render-scoped ``TemplateCache``

Collection segments are joined with the rendered spacer template (if any).
Empty or absent collections render to None without looking anything up.

Example:
        >>> renderer = PartialRenderer(LookupContext(loader, ["posts"]))
        >>> renderer.render(view, {"partial": posts, "spacer_template": "divider"})
        Markup('<article>…</article><hr><article>…</article>')

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from partials.collection import RenderMode
from partials.config import DEFAULT_CONFIG, RenderConfig
from partials.options import Block, RenderRequest, normalize
from partials.path_resolver import PARTIAL_NAMES, PartialPathRegistry
from partials.render_context import render_context
from partials.template_cache import TemplateCache

if TYPE_CHECKING:
    from partials.lookup import TemplateLookup
    from partials.template import Template

logger = logging.getLogger(__name__)


class PartialRenderer:
    """Renders partials, collections of partials and layouts.

    Stateless between calls apart from the shared path registry; one instance
    can serve concurrent render calls.

    Attributes:
        lookup: Finds templates by path and search prefixes
        registry: Process-wide object type → partial path memo
        config: Render configuration (nesting limit)
    """

    __slots__ = ("config", "lookup", "registry")

    def __init__(
        self,
        lookup: TemplateLookup,
        registry: PartialPathRegistry = PARTIAL_NAMES,
        config: RenderConfig = DEFAULT_CONFIG,
    ):
        self.lookup = lookup
        self.registry = registry
        self.config = config

    @property
    def scope(self) -> str | None:
        """Memo scope for object-derived paths: the first search prefix."""
        prefixes = self.lookup.prefixes
        return prefixes[0] if prefixes else None

    def render(
        self, view: Any, options: Mapping[str, Any], block: Block | None = None
    ) -> Markup | None:
        """Render ``options`` (see ``partials.options``) in ``view``.

        Returns:
            Markup for the rendered partial(s), or None for an empty or
            absent collection

        Raises:
            InvalidIdentifierError: String partial binds an invalid name
            NoPartialPathError: An object has no naming convention
            TemplateNotFoundError: A partial, layout or spacer is missing
            PartialDepthError: Partials nest deeper than the configured limit
        """
        request = normalize(options, self.registry, self.scope, block)
        identifier = request.path or "collection"

        with render_context(identifier, self.config.max_partial_depth):
            if request.is_collection:
                return self.render_collection(view, request)
            return self.render_partial(view, request)

    def render_partial(self, view: Any, request: RenderRequest) -> Markup:
        locals, block = request.locals, request.block
        name = request.binding.name

        template = self._find_template(request.path, _required(locals, name))

        layout = None
        if block is None and request.layout is not None:
            layout = self._find_template(request.layout, _required(locals))

        obj = request.object
        locals[name] = obj if obj is not None else locals.get(name)

        content = template.render(view, locals, _yield_to(view, block))
        logger.debug("Rendered partial %s", template.identifier)

        if layout is not None:
            content = layout.render(view, locals, lambda *_: content)
        return content

    def render_collection(self, view: Any, request: RenderRequest) -> Markup | None:
        if not request.collection:
            return None

        spacer = ""
        if request.spacer_template is not None:
            spacer_template = self._find_template(
                request.spacer_template, _required(request.locals)
            )
            spacer = spacer_template.render(view, request.locals)

        if request.mode is RenderMode.COLLECTION_WITH_TEMPLATE:
            segments, identifier = self._collection_with_template(view, request)
        else:
            segments, identifier = self._collection_without_template(view, request)

        logger.debug("Rendered collection %s (%d elements)", identifier, len(request.collection))
        return _join(segments, spacer)

    def _collection_with_template(
        self, view: Any, request: RenderRequest
    ) -> tuple[list[Markup], str]:
        locals, binding = request.locals, request.binding
        name, counter = binding.name, binding.counter_name
        template = self._find_template(request.path, _required(locals, name, counter))
        yield_to = _yield_to(view, request.block)

        segments = []
        for index, obj in enumerate(request.collection):
            scope = {**locals, name: obj, counter: index}
            segments.append(template.render(view, scope, yield_to))
        return segments, template.identifier

    def _collection_without_template(
        self, view: Any, request: RenderRequest
    ) -> tuple[list[Markup], str]:
        locals = request.locals
        stats: dict[str, int] = {}
        cache = TemplateCache(stats)
        yield_to = _yield_to(view, request.block)
        template = None

        segments = []
        for index, (obj, descriptor) in enumerate(
            zip(request.collection, request.descriptors, strict=True)
        ):
            name, counter = descriptor.binding.name, descriptor.binding.counter_name
            template = cache.fetch(
                descriptor.path,
                lambda path: self._find_template(path, _required(locals, name, counter)),
            )
            scope = {**locals, name: obj, counter: index}
            segments.append(template.render(view, scope, yield_to))

        logger.debug(
            "Template cache: %d hits, %d misses",
            stats.get("hits", 0),
            stats.get("misses", 0),
        )
        return segments, template.identifier

    def _find_template(self, path: str, locals: frozenset[str]) -> Template:
        # Paths with a directory address a shared partial directly
        prefixes = () if "/" in path else self.lookup.prefixes
        return self.lookup.find_template(path, prefixes, True, locals)

    def __repr__(self) -> str:
        return f"<PartialRenderer lookup={self.lookup!r}>"


def _required(locals: Mapping[str, Any], *names: str | None) -> frozenset[str]:
    """Local names a template must accept: the caller's plus the bindings."""
    return frozenset(locals).union(name for name in names if name)


def _yield_to(view: Any, block: Block | None) -> Callable[..., Any]:
    """Yield callable that forwards to the view's layout block handling."""
    return lambda *names: view.layout_for(*names, block=block)


def _join(segments: Iterable[Any], separator: Any) -> Markup:
    # Segments are already rendered markup; joining must not escape them again
    return Markup(str(separator).join(str(segment) for segment in segments))
