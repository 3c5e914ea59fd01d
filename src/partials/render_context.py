"""Per-render state for nested partials, isolated per thread and task.

Partials render other partials (a template calls ``render(...)`` again). The
render context tracks how deep that nesting goes and which partials are on the
stack, so runaway recursion stops with a clear error and runtime errors can
show the chain of partials that led to them.

Thread Safety:
    State lives in a ContextVar. Each thread or async task sees its own
    stack; nothing here is shared between concurrent render calls.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field

from partials.exceptions import PartialDepthError


@dataclass
class RenderContext:
    """Stack of partials currently being rendered.

    Attributes:
        depth: Number of enclosing partial renders (0 for the outermost)
        max_depth: Maximum allowed nesting
        template_stack: Identifiers of the partials on the stack, outermost
            first
    """

    depth: int = 0
    max_depth: int = 50
    template_stack: list[str] = field(default_factory=list)

    def check_depth(self, identifier: str) -> None:
        """Raise PartialDepthError if entering ``identifier`` nests too deep."""
        if self.depth >= self.max_depth:
            raise PartialDepthError(
                identifier,
                self.max_depth,
                template_stack=self.template_stack.copy(),
            )

    def child_context(self, identifier: str) -> RenderContext:
        """Context for a partial rendered inside this one."""
        return RenderContext(
            depth=self.depth + 1,
            max_depth=self.max_depth,
            template_stack=[*self.template_stack, identifier],
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "partials_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Current render context, or None outside of a render call."""
    return _render_context.get()


@contextmanager
def render_context(identifier: str, max_depth: int = 50) -> Iterator[RenderContext]:
    """Enter a partial render.

    Nested calls (a partial rendering another partial) extend the parent's
    stack; the outermost call starts a fresh one.

    Raises:
        PartialDepthError: If nesting exceeds ``max_depth``
    """
    parent = _render_context.get()
    if parent is None:
        parent = RenderContext(depth=-1, max_depth=max_depth)
    else:
        parent.check_depth(identifier)

    token = _render_context.set(parent.child_context(identifier))
    try:
        yield _render_context.get()
    finally:
        _render_context.reset(token)
