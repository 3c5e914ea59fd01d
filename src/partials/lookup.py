"""Lookup context: finds and compiles the template for a partial path.

For ``find_template("account", ["users", "application"], partial=True, ...)``
the candidates are, in order::

    users/_account
    users/_account.html
    users/_account.html.jinja
    users/_account.jinja
    application/_account
    ...

The first name the loader knows is compiled and returned. Paths containing a
directory (``"shared/nav"``) are searched without prefixes by the renderer.

"""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Collection, Iterable, Sequence
from typing import Protocol

from partials.config import DEFAULT_CONFIG, RenderConfig
from partials.exceptions import TemplateNotFoundError
from partials.loaders import Loader, suggest_template
from partials.template import JinjaHandler, Template

Compiler = Callable[[str, str, Collection[str]], Template]


class TemplateLookup(Protocol):
    """What the partial renderer needs from a lookup context."""

    @property
    def prefixes(self) -> tuple[str, ...]: ...

    def find_template(
        self,
        path: str,
        prefixes: Sequence[str],
        partial: bool,
        locals: Collection[str],
    ) -> Template: ...


class LookupContext:
    """Searches a loader under ordered prefixes and compiles the hit.

    Attributes:
        loader: Source of template text
        prefixes: Ordered search directories (``("admin/users", "application")``)
        config: Extensions and partial prefix used to build candidate names

    Compiled templates are not cached here; every ``find_template`` call
    compiles the source it finds.

    Example:
            >>> lookup = LookupContext(DictLoader({"users/_user.html": "{{ user }}"}), ["users"])
            >>> lookup.find_template("user", lookup.prefixes, True, {"user"}).identifier
            'users/_user.html'

    """

    __slots__ = ("_compiler", "_prefixes", "config", "loader")

    def __init__(
        self,
        loader: Loader,
        prefixes: Iterable[str] = (),
        config: RenderConfig = DEFAULT_CONFIG,
        compiler: Compiler | None = None,
    ):
        self.loader = loader
        self._prefixes = tuple(prefixes)
        self.config = config
        self._compiler = compiler or JinjaHandler(config)

    @property
    def prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    def with_prefixes(self, *prefixes: str) -> LookupContext:
        """Copy of this context searching ``prefixes`` instead."""
        return LookupContext(self.loader, prefixes, self.config, self._compiler)

    def candidates(self, path: str, prefixes: Sequence[str], partial: bool) -> list[str]:
        """Every template name tried for ``path``, in search order."""
        directory, base = posixpath.split(path)
        if partial:
            base = f"{self.config.partial_prefix}{base}"

        names: list[str] = []
        for prefix in prefixes or ("",):
            stem = posixpath.join(prefix, directory, base) if prefix or directory else base
            names.extend(f"{stem}{extension}" for extension in self.config.extensions)
        return names

    def find_template(
        self,
        path: str,
        prefixes: Sequence[str],
        partial: bool,
        locals: Collection[str],
    ) -> Template:
        """Load and compile the first candidate the loader knows.

        Raises:
            TemplateNotFoundError: If no candidate exists
            TemplateSyntaxError: If the found source does not compile
        """
        searched = self.candidates(path, prefixes, partial)
        for name in searched:
            try:
                source, _ = self.loader.get_source(name)
            except TemplateNotFoundError:
                continue
            return self._compiler(source, name, locals)

        raise self._not_found(path, prefixes, partial, searched)

    def _not_found(
        self, path: str, prefixes: Sequence[str], partial: bool, searched: list[str]
    ) -> TemplateNotFoundError:
        kind = "partial" if partial else "template"
        where = ", ".join(prefixes) if prefixes else "<root>"
        msg = f"Missing {kind} {path} (prefixes: {where}). Searched in: {', '.join(searched)}"
        suggestion = suggest_template(searched[0], self.loader) if searched else None
        if suggestion:
            msg += f". Did you mean '{suggestion}'?"
        return TemplateNotFoundError(msg, path=path, searched=tuple(searched))

    def __repr__(self) -> str:
        return f"<LookupContext prefixes={list(self._prefixes)}>"
