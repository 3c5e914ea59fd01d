"""View context: the object templates render in.

``ViewContext.render`` accepts the same shapes a template author writes:

    ```python
    view.render("account")                               # users/_account
    view.render("account", {"account": buyer})           # with locals
    view.render(post)                                    # posts/_post
    view.render(posts)                                   # each posts/_post
    view.render({"partial": "ad", "collection": ads, "spacer_template": "ad_divider"})
    view.render({"partial": "user", "layout": "editor", "locals": {"user": editor}})
    view.render(layout="administrator", locals={"user": chief}, block=lambda: "Title")
    ```

Layouts yield back through ``layout_for``: with a block it returns the
block's output, otherwise the content stored under a name via
``content_for``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from markupsafe import Markup

from partials.config import DEFAULT_CONFIG, RenderConfig
from partials.lookup import TemplateLookup
from partials.options import Block
from partials.renderer import PartialRenderer


class ViewContext:
    """Rendering surface handed to every template.

    Attributes:
        lookup: Template lookup for this view (search prefixes, loader)
        renderer: Partial renderer bound to ``lookup``
        config: Render configuration

    Thread-Safety:
        Create one ViewContext per request; ``content_for`` state is not
        shared between views.
    """

    __slots__ = ("_content", "config", "lookup", "renderer")

    def __init__(
        self,
        lookup: TemplateLookup,
        renderer: PartialRenderer | None = None,
        config: RenderConfig = DEFAULT_CONFIG,
    ):
        self.lookup = lookup
        self.config = config
        self.renderer = renderer or PartialRenderer(lookup, config=config)
        self._content: dict[str, Markup] = {}

    def render(
        self,
        options: Any = None,
        locals: Mapping[str, Any] | None = None,
        *,
        block: Block | None = None,
        **kwargs: Any,
    ) -> Markup | None:
        """Render a partial, an object, a collection or a block in a layout.

        Raises:
            TypeError: If options name neither a partial nor a block layout
        """
        if options is not None and not isinstance(options, Mapping):
            shorthand = {"partial": options, "locals": locals or {}, **kwargs}
            return self.renderer.render(self, shorthand, block)

        options = {**(options or {}), **kwargs}
        if locals is not None:
            options["locals"] = locals

        if block is not None and "layout" in options:
            return self.renderer.render(self, {**options, "partial": options["layout"]}, block)
        if "partial" not in options:
            raise TypeError(
                "render() needs a partial (name, object or collection) "
                "or a layout with a block"
            )
        return self.renderer.render(self, options, block)

    def layout_for(self, *args: Any, block: Block | None = None) -> Markup:
        """Content a layout yields to.

        With a block, and unless the first argument names a content section,
        the block is called with ``args``. Otherwise the stored content for
        the name (default ``"layout"``) is returned.
        """
        name = args[0] if args else None
        if block is not None and not isinstance(name, str):
            return Markup(block(*args))
        return self._content.get(name or "layout", Markup(""))

    def content_for(self, name: str, content: Any = None) -> Markup | None:
        """Store or read a named content section.

        With ``content``, append it (escaped unless already Markup) and return
        None so ``{{ content_for("title", post.title) }}`` prints nothing.
        Without, return the section.
        """
        if content is not None:
            self._content[name] = self._content.get(name, Markup("")) + content
            return None
        return self._content.get(name, Markup(""))

    def with_prefixes(self, *prefixes: str) -> ViewContext:
        """View for another controller-like scope, sharing the path registry."""
        lookup = self.lookup.with_prefixes(*prefixes)
        renderer = PartialRenderer(lookup, self.renderer.registry, self.config)
        return ViewContext(lookup, renderer, self.config)

    def __repr__(self) -> str:
        return f"<ViewContext lookup={self.lookup!r}>"
