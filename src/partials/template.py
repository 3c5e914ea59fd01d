"""Templates the partial renderer executes.

The renderer only needs two things from a template: a stable ``identifier``
for diagnostics and ``render(view, locals, block)``. Two implementations are
provided:

- ``JinjaTemplate``: Jinja2 source compiled by a ``JinjaHandler``
- ``CallableTemplate``: a plain Python function, handy for programmatic
  partials and tests

Yielding:
A template receives a yield callable (named ``yield_`` by default). Called
without arguments inside a layout it returns the wrapped content; called with
arguments inside a partial it forwards them to the calling block:

    ```jinja
    {# users/_administrator.html #}
    <div id="administrator">Budget: {{ user.budget }} {{ yield_() }}</div>
    ```

"""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import jinja2
from markupsafe import Markup

from partials.config import DEFAULT_CONFIG, RenderConfig
from partials.exceptions import PartialError, TemplateRuntimeError, TemplateSyntaxError
from partials.render_context import get_render_context

if TYPE_CHECKING:
    from partials.view import ViewContext

Block = Callable[..., Any]


@runtime_checkable
class Template(Protocol):
    """A compiled template as seen by the partial renderer."""

    @property
    def identifier(self) -> str: ...

    def render(
        self, view: Any, locals: dict[str, Any], block: Block | None = None
    ) -> Markup: ...


class CallableTemplate:
    """Template backed by a Python function.

    The function is called as ``func(view, locals, block)`` and its return
    value is marked safe.

    Example:
            >>> card = CallableTemplate("cards/_card", lambda view, l, b: f"<li>{l['card']}</li>")
            >>> card.render(None, {"card": "Ace"})
            Markup('<li>Ace</li>')

    """

    __slots__ = ("_func", "_identifier")

    def __init__(self, identifier: str, func: Callable[[Any, dict[str, Any], Block | None], Any]):
        self._identifier = identifier
        self._func = func

    @property
    def identifier(self) -> str:
        return self._identifier

    def render(self, view: Any, locals: dict[str, Any], block: Block | None = None) -> Markup:
        return Markup(self._func(view, locals, block))

    def __repr__(self) -> str:
        return f"<CallableTemplate {self._identifier}>"


class JinjaTemplate:
    """Jinja2 template adapted to the partial renderer.

    The Jinja2 context holds the view helpers (``view``, ``render``,
    ``content_for``), the yield callable, then the locals; locals win on a
    name clash.
    """

    __slots__ = ("_config", "_identifier", "_template", "locals")

    def __init__(
        self,
        template: jinja2.Template,
        identifier: str,
        config: RenderConfig = DEFAULT_CONFIG,
        locals: Collection[str] = (),
    ):
        self._template = template
        self._identifier = identifier
        self._config = config
        self.locals = frozenset(locals)

    @property
    def identifier(self) -> str:
        return self._identifier

    def render(
        self, view: ViewContext | None, locals: dict[str, Any], block: Block | None = None
    ) -> Markup:
        context: dict[str, Any] = {self._config.yield_name: _yielder(view, block)}
        if view is not None:
            context.update(view=view, render=view.render, content_for=view.content_for)
        context.update(locals)

        try:
            return Markup(self._template.render(context))
        except PartialError:
            raise
        except jinja2.TemplateError as e:
            render_ctx = get_render_context()
            raise TemplateRuntimeError(
                str(e),
                template_name=self._identifier,
                template_stack=render_ctx.template_stack.copy() if render_ctx else None,
                suggestion=_suggestion_for(e, self.locals),
            ) from e

    def __repr__(self) -> str:
        return f"<JinjaTemplate {self._identifier}>"


class JinjaHandler:
    """Compiles template source into ``JinjaTemplate`` objects.

    Owns one ``jinja2.Environment`` configured from ``RenderConfig``
    (autoescape, strict undefined). The environment has no loader: template
    source always comes from the lookup context.
    """

    __slots__ = ("_config", "_env")

    def __init__(self, config: RenderConfig = DEFAULT_CONFIG):
        self._config = config
        self._env = jinja2.Environment(
            autoescape=config.autoescape,
            undefined=jinja2.StrictUndefined if config.strict_undefined else jinja2.Undefined,
            finalize=_finalize,
        )

    @property
    def environment(self) -> jinja2.Environment:
        return self._env

    def __call__(
        self, source: str, identifier: str, locals: Collection[str] = ()
    ) -> JinjaTemplate:
        try:
            template = self._env.from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                e.message or str(e), lineno=e.lineno, name=identifier, source=source
            ) from e
        return JinjaTemplate(template, identifier, self._config, locals)


def _yielder(view: ViewContext | None, block: Block | None) -> Callable[..., Markup]:
    if block is not None:
        return lambda *args: Markup(block(*args))
    if view is not None:
        return view.layout_for
    return lambda *args: Markup("")


def _finalize(value: Any) -> Any:
    # render() of an empty collection returns None and prints nothing
    return "" if value is None else value


def _suggestion_for(error: jinja2.TemplateError, locals: frozenset[str]) -> str | None:
    if not isinstance(error, jinja2.UndefinedError):
        return None
    given = f" (given: {', '.join(sorted(locals))})" if locals else ""
    return f"Pass the variable in locals{given}, or render the partial with an object"
