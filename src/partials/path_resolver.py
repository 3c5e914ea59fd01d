"""Process-wide memo of object type → partial path.

Resolving the partial for an object goes through its naming convention
(``model_name().partial_path``), optionally after ``to_model()``. The result
depends only on the object's type and on the current search scope, so it is
computed once per (scope, type) and kept for the lifetime of the process.

Thread-Safety:
A lock guards scope creation and writes. Two threads racing on the same
(scope, type) may both compute the path; both compute the same value, so the
race only costs a redundant computation.

"""

from __future__ import annotations

import logging
import posixpath
import threading
from typing import Any

from partials.exceptions import NoPartialPathError
from partials.naming import ModelConvertible, PartialPathProvider

logger = logging.getLogger(__name__)


def type_key(obj: Any) -> str:
    """Memo key for an object's runtime type (``module.QualName``)."""
    klass = type(obj)
    return f"{klass.__module__}.{klass.__qualname__}"


class PartialPathRegistry:
    """Memoized ``resolve(obj, prefix) -> path`` keyed by scope and type.

    The scope is the first search prefix of the current lookup context
    (``None`` when there is none). Within a scope, the first path computed
    for a type name wins.

    Example:
            >>> registry = PartialPathRegistry()
            >>> registry.resolve(Post(), "posts")
            'posts/post'
            >>> registry.resolve(Post(), "admin/posts")
            'admin/posts/post'

    """

    __slots__ = ("_lock", "_scopes")

    def __init__(self) -> None:
        self._scopes: dict[str | None, dict[str, str]] = {}
        self._lock = threading.Lock()

    def resolve(self, obj: Any, prefix: str | None = None) -> str:
        """Return the partial path for ``obj`` within the ``prefix`` scope.

        Raises:
            NoPartialPathError: If the object has no naming convention
        """
        scope = self._scope(prefix)
        key = type_key(obj)
        path = scope.get(key)
        if path is not None:
            return path

        path = self._compute(obj, prefix)
        with self._lock:
            path = scope.setdefault(key, path)
        logger.debug("Memoized partial path %s for %s (scope %s)", path, key, prefix)
        return path

    def _scope(self, prefix: str | None) -> dict[str, str]:
        scope = self._scopes.get(prefix)
        if scope is None:
            with self._lock:
                scope = self._scopes.setdefault(prefix, {})
        return scope

    @staticmethod
    def _compute(obj: Any, prefix: str | None) -> str:
        model = obj.to_model() if isinstance(obj, ModelConvertible) else obj
        if not isinstance(model, PartialPathProvider):
            raise NoPartialPathError(obj)

        path = model.model_name().partial_path
        # Namespaced lookups ("admin/users") resolve into the namespace directory
        if prefix and "/" in path and "/" in prefix:
            path = f"{posixpath.dirname(prefix)}/{path}"
        return path

    def cached(self, prefix: str | None = None) -> dict[str, str]:
        """Snapshot of the memo for one scope."""
        return dict(self._scopes.get(prefix, {}))

    def clear(self) -> None:
        """Forget every memoized path (test isolation only)."""
        with self._lock:
            self._scopes.clear()

    def __len__(self) -> int:
        return sum(len(scope) for scope in self._scopes.values())

    def __repr__(self) -> str:
        return f"<PartialPathRegistry scopes={len(self._scopes)} paths={len(self)}>"


# Shared by every PartialRenderer that is not given its own registry.
PARTIAL_NAMES = PartialPathRegistry()
