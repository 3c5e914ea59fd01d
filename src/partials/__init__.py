"""partials: partial rendering on top of Jinja2.

Render sub-templates by name, by object, or over a collection, optionally
separated by a spacer template and wrapped in a layout.

Quickstart:
    >>> from partials import DictLoader, LookupContext, ViewContext
    >>> loader = DictLoader({"posts/_post.html": "<article>{{ post.title }}</article>"})
    >>> view = ViewContext(LookupContext(loader, ["posts"]))
    >>> view.render("post", {"post": {"title": "Hello"}})
    Markup('<article>Hello</article>')

Objects and collections:
    >>> from partials import ModelNaming
    >>> class Post(ModelNaming):
    ...     def __init__(self, title):
    ...         self.title = title
    >>> view.render([Post("A"), Post("B")])
    Markup('<article>A</article><article>B</article>')

Architecture:
options → normalize → (path registry, collection expansion) → variable binding → renderer

1. **Options**: the render call is normalized into one of three modes
   (single, collection with template, collection without template)
2. **Paths**: objects map to partials through their naming convention
   (``BlogPost`` → ``blog_posts/_blog_post``), memoized per type and scope
3. **Bindings**: each element is bound under a variable derived from its path
   plus a ``<name>_counter`` index in collections
4. **Renderer**: homogeneous collections look their template up once;
   heterogeneous ones share a render-scoped template cache

Thread-Safety:
- The path registry is process-wide and lock-guarded
- Template caches and binding scopes are local to one render call
- Nested-partial state lives in a ContextVar

"""

from partials.binding import VariableBinding, bind, is_valid_identifier
from partials.collection import ElementDescriptor, RenderMode, as_sequence
from partials.config import DEFAULT_CONFIG, RenderConfig
from partials.exceptions import (
    ErrorCode,
    InvalidIdentifierError,
    NoPartialPathError,
    PartialDepthError,
    PartialError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from partials.loaders import ChoiceLoader, DictLoader, FileSystemLoader, FunctionLoader
from partials.lookup import LookupContext, TemplateLookup
from partials.naming import ModelConvertible, ModelName, ModelNaming, PartialPathProvider
from partials.options import RenderRequest, normalize
from partials.path_resolver import PARTIAL_NAMES, PartialPathRegistry
from partials.renderer import PartialRenderer
from partials.template import CallableTemplate, JinjaHandler, JinjaTemplate, Template
from partials.view import ViewContext

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "PARTIAL_NAMES",
    "CallableTemplate",
    "ChoiceLoader",
    "DictLoader",
    "ElementDescriptor",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "InvalidIdentifierError",
    "JinjaHandler",
    "JinjaTemplate",
    "LookupContext",
    "ModelConvertible",
    "ModelName",
    "ModelNaming",
    "NoPartialPathError",
    "PartialDepthError",
    "PartialError",
    "PartialPathProvider",
    "PartialPathRegistry",
    "PartialRenderer",
    "RenderConfig",
    "RenderMode",
    "RenderRequest",
    "Template",
    "TemplateLookup",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "VariableBinding",
    "ViewContext",
    "__version__",
    "as_sequence",
    "bind",
    "is_valid_identifier",
    "normalize",
]


def __getattr__(name: str) -> object:
    """Module-level getattr for the free-threading declaration."""
    if name == "_Py_mod_gil":
        # Signal: this module is safe for free-threading
        # 0 = Py_MOD_GIL_NOT_USED
        return 0
    raise AttributeError(f"module 'partials' has no attribute {name!r}")
