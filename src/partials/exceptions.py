"""Exceptions for partial rendering.

Exception Hierarchy:
PartialError (base)
├── InvalidIdentifierError   # Partial name is not a usable local variable name
├── NoPartialPathError       # Object has no naming convention to derive a path
├── TemplateNotFoundError    # Lookup or loader could not locate a template
├── TemplateSyntaxError      # Template source failed to compile
└── TemplateRuntimeError     # Render-time error with partial stack
    └── PartialDepthError    # Nested partials exceeded the depth limit

Every error carries an ``ErrorCode`` so failures are searchable in logs:

    ```
    P-OPT-001: The partial name (123bad) is not a valid Python identifier; ...
    ```

"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Searchable error codes for partial rendering errors.

    Format: P-{CATEGORY}-{NUMBER}
    Categories: OPT (options), PTH (path resolution), TPL (template loading),
    RUN (runtime)
    """

    # Options errors (P-OPT-xxx)
    INVALID_IDENTIFIER = "P-OPT-001"

    # Path resolution errors (P-PTH-xxx)
    NO_PARTIAL_PATH = "P-PTH-001"

    # Template loading errors (P-TPL-xxx)
    TEMPLATE_NOT_FOUND = "P-TPL-001"
    SYNTAX_ERROR = "P-TPL-002"

    # Runtime errors (P-RUN-xxx)
    RUNTIME_ERROR = "P-RUN-001"
    PARTIAL_DEPTH = "P-RUN-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'options', 'path', 'template', 'runtime')."""
        prefix = self.value.split("-")[1]
        return {
            "OPT": "options",
            "PTH": "path",
            "TPL": "template",
            "RUN": "runtime",
        }.get(prefix, "unknown")


def format_partial_stack(stack: list[str] | None) -> str:
    """Format the chain of partials being rendered when an error occurred.

    Example:
        >>> print(format_partial_stack(["users/_user", "users/_avatar"]))
        Partial stack:
          • users/_user
          • users/_avatar
    """
    if not stack:
        return ""
    lines = ["Partial stack:"]
    lines.extend(f"  • {identifier}" for identifier in stack)
    return "\n".join(lines)


class PartialError(Exception):
    """Base exception for all partial rendering errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-line header prefixed with its code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class InvalidIdentifierError(PartialError, ValueError):
    """Partial name cannot be bound as a local variable.

    Raised when a string partial (or its ``as`` override) does not produce a
    name that starts with a letter or underscore followed by letters, digits
    or underscores.

    Example:
            >>> view.render("123bad")
        InvalidIdentifierError: The partial name (123bad) is not a valid Python identifier; ...

    """

    code: ErrorCode | None = ErrorCode.INVALID_IDENTIFIER

    def __init__(self, partial: str, variable: str | None = None):
        self.partial = partial
        self.variable = variable
        super().__init__(
            f"The partial name ({partial}) is not a valid Python identifier; "
            "make sure your partial name starts with a letter or underscore, "
            "and is followed by any combination of letters, numbers, or underscores."
        )


class NoPartialPathError(PartialError, TypeError):
    """Object does not expose the naming convention used to find its partial."""

    code: ErrorCode | None = ErrorCode.NO_PARTIAL_PATH

    def __init__(self, obj: Any):
        self.object = obj
        type_name = type(obj).__name__
        super().__init__(
            f"'{type_name}' object does not provide a partial path. "
            f"Implement model_name() (e.g. subclass ModelNaming) or to_model(), "
            f"or render it with an explicit partial name and object."
        )


class TemplateNotFoundError(PartialError, LookupError):
    """Template not found by the lookup context or a loader.

    Example:
            >>> lookup.find_template("account", ["users"], True, frozenset())
        TemplateNotFoundError: Missing partial users/_account. Searched in: users/_account, ...

    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(self, message: str, *, path: str | None = None, searched: tuple[str, ...] = ()):
        self.path = path
        self.searched = searched
        super().__init__(message)


class TemplateSyntaxError(PartialError):
    """Template source failed to compile.

    When ``source`` and ``lineno`` are provided, the message includes the
    offending line.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location = self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"

        header = f"Syntax Error: {self.message}\n  --> {location}"

        if self.source and self.lineno:
            lines = self.source.splitlines()
            if 0 < self.lineno <= len(lines):
                return header + f"\n   |\n{self.lineno:>3} | {lines[self.lineno - 1]}"

        return header


class TemplateRuntimeError(PartialError):
    """Render-time error with the partial stack that led to it.

    Output Format:
            ```
            Runtime Error: 'user' is undefined
              Location: users/_user.html
            Partial stack:
              • users/_index
              • users/_user.html
              Suggestion: Pass 'user' in locals or render the partial with an object
            ```

    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        template_stack: list[str] | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_stack = template_stack or []
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name:
            parts.append(f"  Location: {self.template_name}")
        if self.template_stack:
            parts.append(format_partial_stack(self.template_stack))
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)


class PartialDepthError(TemplateRuntimeError):
    """Nested partial renders exceeded ``RenderConfig.max_partial_depth``."""

    code: ErrorCode | None = ErrorCode.PARTIAL_DEPTH

    def __init__(self, identifier: str, max_depth: int, **kwargs: Any):
        self.identifier = identifier
        self.max_depth = max_depth
        super().__init__(
            f"Maximum partial depth exceeded ({max_depth}) when rendering '{identifier}'",
            suggestion="Check for partials that render themselves: A → B → A",
            **kwargs,
        )
