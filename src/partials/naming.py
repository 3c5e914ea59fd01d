"""Naming convention that maps a domain class to its default partial.

A class named ``BlogPost`` renders through ``blog_posts/_blog_post``:

    >>> ModelName("BlogPost").partial_path
    'blog_posts/blog_post'
    >>> ModelName("BlogPost", namespace="admin").partial_path
    'admin/blog_posts/blog_post'

Domain classes opt in by providing ``model_name()``, most easily through the
``ModelNaming`` mixin. Wrapper objects (presenters, forms) that should render
like another object implement ``to_model()`` instead.
"""

from __future__ import annotations

from functools import cache
from typing import Any, Protocol, runtime_checkable

import inflection


class ModelName:
    """Inflected names derived from a class name.

    Attributes:
        name: The class name as given (``BlogPost``)
        namespace: Optional namespace (``admin``), or None
        singular: ``admin_blog_post``
        plural: ``admin_blog_posts``
        element: ``blog_post``
        collection: ``admin/blog_posts``
        partial_path: ``admin/blog_posts/blog_post``
        human: ``Blog post``
    """

    __slots__ = (
        "collection",
        "element",
        "human",
        "name",
        "namespace",
        "partial_path",
        "plural",
        "singular",
    )

    def __init__(self, name: str, namespace: str | None = None):
        self.name = name
        self.namespace = namespace or None

        self.element = inflection.underscore(name)
        self.human = inflection.humanize(self.element)

        qualified = f"{self.namespace}/{self.element}" if self.namespace else self.element
        self.singular = qualified.replace("/", "_")
        self.plural = inflection.pluralize(self.singular)
        self.collection = inflection.pluralize(qualified)
        self.partial_path = f"{self.collection}/{self.element}"

    @classmethod
    def for_class(cls, klass: type) -> ModelName:
        """Build the ModelName for a class, honoring ``__model_namespace__``."""
        return _model_name_for(klass)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelName):
            return NotImplemented
        return (self.name, self.namespace) == (other.name, other.namespace)

    def __hash__(self) -> int:
        return hash((self.name, self.namespace))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self.namespace:
            return f"<ModelName {self.namespace}/{self.name}>"
        return f"<ModelName {self.name}>"


@cache
def _model_name_for(klass: type) -> ModelName:
    namespace = getattr(klass, "__model_namespace__", None)
    return ModelName(klass.__name__, namespace=namespace)


@runtime_checkable
class PartialPathProvider(Protocol):
    """Object whose type knows its default partial path."""

    def model_name(self) -> ModelName: ...


@runtime_checkable
class ModelConvertible(Protocol):
    """Object that renders as another object (presenters, form objects)."""

    def to_model(self) -> Any: ...


class ModelNaming:
    """Mixin giving a class the naming convention.

    Example:
            >>> class Post(ModelNaming):
            ...     pass
            >>> Post.model_name().partial_path
            'posts/post'

            >>> class Report(ModelNaming):
            ...     __model_namespace__ = "admin"
            >>> Report().model_name().partial_path
            'admin/reports/report'

    """

    __slots__ = ()

    __model_namespace__: str | None = None

    @classmethod
    def model_name(cls) -> ModelName:
        return ModelName.for_class(cls)
