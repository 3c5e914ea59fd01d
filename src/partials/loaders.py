"""Template source loaders.

Loaders hand template source to the lookup context. They implement
`get_source(name)` returning `(source, filename)` and raise
`TemplateNotFoundError` when the name is unknown.

Built-in Loaders:
- `FileSystemLoader`: Load from filesystem directories
- `DictLoader`: Load from an in-memory dictionary (testing/embedded)
- `ChoiceLoader`: Try multiple loaders in order (theme fallback)
- `FunctionLoader`: Wrap a callable as a loader

Names are the full candidate names built by the lookup context, e.g.
``users/_account.html``; loaders never apply partial conventions themselves.

Thread-Safety:
All built-in loaders are safe for concurrent `get_source()` calls.

"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol, runtime_checkable

from partials.exceptions import TemplateNotFoundError


@runtime_checkable
class Loader(Protocol):
    """Anything that returns ``(source, filename)`` for a template name."""

    def get_source(self, name: str) -> tuple[str, str | None]: ...


@runtime_checkable
class ListableLoader(Loader, Protocol):
    """Loader that can enumerate its template names (for "did you mean" hints)."""

    def list_templates(self) -> list[str]: ...


class FileSystemLoader:
    """Load templates from one or more directories.

    Directories are searched in order; the first matching file wins:
        ```python
        loader = FileSystemLoader(["app/views/", "shared/views/"])
        ```

    Example:
            >>> loader = FileSystemLoader("views/")
            >>> source, filename = loader.get_source("users/_user.html")
            >>> filename
            'views/users/_user.html'

    Raises:
        TemplateNotFoundError: If the template is in none of the directories,
            or its name climbs out of them (``..``)

    """

    __slots__ = ("_encoding", "_search_path")

    def __init__(
        self,
        search_path: str | Path | list[str | Path],
        encoding: str = "utf-8",
    ):
        if isinstance(search_path, (str, Path)):
            search_path = [search_path]
        self._search_path = [Path(directory) for directory in search_path]
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        parts = _split_name(name)
        for directory in self._search_path:
            candidate = directory.joinpath(*parts)
            if candidate.is_file():
                return candidate.read_text(self._encoding), str(candidate)

        searched = ", ".join(str(directory) for directory in self._search_path)
        raise TemplateNotFoundError(f"Template '{name}' not found in: {searched}", path=name)

    def list_templates(self) -> list[str]:
        """Every non-hidden file under the search path, as slash-separated names."""
        names = {
            candidate.relative_to(directory).as_posix()
            for directory in self._search_path
            if directory.is_dir()
            for candidate in directory.rglob("*")
            if candidate.is_file() and not candidate.name.startswith(".")
        }
        return sorted(names)


class DictLoader:
    """Load templates from an in-memory mapping of name → source.

    Example:
            >>> loader = DictLoader({
            ...     "users/_user.html": "<li>{{ user.name }}</li>",
            ...     "users/_administrator.html": "<div>{{ yield_() }}</div>",
            ... })
            >>> loader.get_source("users/_user.html")
            ('<li>{{ user.name }}</li>', None)

    Raises:
        TemplateNotFoundError: If the name is not in the mapping

    """

    __slots__ = ("_sources",)

    def __init__(self, sources: Mapping[str, str]):
        self._sources = sources

    def get_source(self, name: str) -> tuple[str, None]:
        try:
            return self._sources[name], None
        except KeyError:
            raise TemplateNotFoundError(f"Template '{name}' not found", path=name) from None

    def list_templates(self) -> list[str]:
        return sorted(self._sources)


class ChoiceLoader:
    """Chain loaders; the first one that knows a name wins.

    Typical use is an application override in front of shared partials:
        ```python
        loader = ChoiceLoader([
            DictLoader({"shared/_nav.html": "<nav>Custom</nav>"}),
            FileSystemLoader("views/"),
        ])
        ```

    Raises:
        TemplateNotFoundError: If no loader can find the template

    """

    __slots__ = ("_chain",)

    def __init__(self, loaders: Iterable[Loader]):
        self._chain = tuple(loaders)

    def get_source(self, name: str) -> tuple[str, str | None]:
        for loader in self._chain:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._chain)} loaders", path=name
        )

    def list_templates(self) -> list[str]:
        """Union of the names every listable loader in the chain knows."""
        names: set[str] = set()
        for loader in self._chain:
            if isinstance(loader, ListableLoader):
                names.update(loader.list_templates())
        return sorted(names)


class FunctionLoader:
    """Adapt a plain callable into a loader.

    The callable receives a candidate name and returns the source, a
    ``(source, filename)`` pair, or None for an unknown name. Useful for
    templates kept in a database or generated on the fly.

    Example:
            >>> def load(name):
            ...     if name == "shared/_greeting.html":
            ...         return "Hello, {{ greeting }}!"
            ...     return None
            >>> FunctionLoader(load).get_source("shared/_greeting.html")
            ('Hello, {{ greeting }}!', '<function>')

    """

    __slots__ = ("_load",)

    def __init__(self, load: Callable[[str], str | tuple[str, str | None] | None]):
        self._load = load

    def get_source(self, name: str) -> tuple[str, str | None]:
        loaded = self._load(name)
        if loaded is None:
            raise TemplateNotFoundError(f"Template '{name}' not found", path=name)
        if isinstance(loaded, str):
            return loaded, "<function>"
        return loaded

    def list_templates(self) -> list[str]:
        # A callable has no way to enumerate what it can load
        return []


def suggest_template(name: str, loader: Loader) -> str | None:
    """Closest known template name to ``name``, if the loader can list them."""
    if not isinstance(loader, ListableLoader):
        return None
    matches = get_close_matches(name, loader.list_templates(), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _split_name(name: str) -> list[str]:
    """Path segments of a template name, refusing names that leave the
    search directory."""
    parts = [part for part in name.split("/") if part and part != "."]
    if not parts or ".." in parts or any(os.sep in part for part in parts):
        raise TemplateNotFoundError(f"Template '{name}' not found", path=name)
    return parts
