"""Custom exception hierarchy for jsonmock.

This module defines the exception classes used throughout jsonmock:
- JsonMockError: Base exception for all jsonmock errors
- TemplateParseError: Raised when template text is not valid JSON5
- ConfigurationError: Raised when generator settings are invalid
- TemplateError: Base for errors found while resolving a template

User-facing messages are safe to display. Technical details passed as
``internal_details`` are logged via structlog and never shown to the user.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

logger = structlog.get_logger(__name__)


class JsonMockError(Exception):
    """Base exception for jsonmock.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging only.

    Example:
        >>> raise JsonMockError(
        ...     "Template invalid",
        ...     internal_details="json5 raised at offset 120",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize JsonMockError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "jsonmock_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class TemplateParseError(JsonMockError):
    """Raised when a template document cannot be parsed as JSON5.

    Attributes:
        source: Name of the parsed source (file path or ``<string>``).
        line: 1-based line of the syntax error, if known.
        column: 1-based column of the syntax error, if known.

    Example:
        >>> raise TemplateParseError("Unexpected '}'", source="t.json5", line=3, column=7)
        # User sees: "Invalid template t.json5 at line 3, column 7: Unexpected '}'"
    """

    def __init__(
        self,
        reason: str,
        *,
        source: str = "<string>",
        line: int | None = None,
        column: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize TemplateParseError with location context.

        Args:
            reason: Description of the syntax problem.
            source: Name of the parsed source.
            line: 1-based line number (optional).
            column: 1-based column number (optional).
            internal_details: Technical details for internal logging only.
        """
        location = ""
        if line is not None:
            location = f" at line {line}"
            if column is not None:
                location += f", column {column}"

        super().__init__(
            f"Invalid template {source}{location}: {reason}",
            internal_details=internal_details,
        )
        self.reason = reason
        self.source = source
        self.line = line
        self.column = column


class ConfigurationError(JsonMockError):
    """Raised when generator settings are invalid.

    Example:
        >>> raise ConfigurationError("Unknown Faker locale 'xx_XX'")
    """

    pass


class TemplateError(JsonMockError):
    """Base class for problems found at a location inside a template.

    Attributes:
        path: JSON path of the template node (e.g. ``$.countries[1].name``).
        detail: Message without the path prefix.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str = "$",
        internal_details: str | None = None,
    ) -> None:
        """Initialize TemplateError.

        Args:
            message: Description of the problem.
            path: JSON path of the offending node.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(f"{path}: {message}", internal_details=internal_details)
        self.detail = message
        self.path = path

    def at(self, path: str) -> TemplateError:
        """Return this error relocated to ``path``.

        Placeholder parsing happens without knowledge of where the string
        lives; the engine attaches the location afterwards.
        """
        self.path = path
        self.user_message = f"{path}: {self.detail}"
        self.args = (self.user_message,)
        return self


class PlaceholderSyntaxError(TemplateError):
    """Raised when a ``{{...}}`` token does not follow the placeholder grammar.

    Attributes:
        text: The text being parsed.
        column: 0-based offset of the problem inside ``text``.

    Example:
        >>> raise PlaceholderSyntaxError("expected ')'", text="{{integer(1, 2}}", column=14)
    """

    def __init__(
        self,
        message: str,
        *,
        text: str,
        column: int,
        path: str = "$",
    ) -> None:
        """Initialize PlaceholderSyntaxError.

        Args:
            message: Description of the syntax problem.
            text: The text being parsed.
            column: 0-based offset of the problem.
            path: JSON path of the string containing the token.
        """
        super().__init__(f"{message} at column {column} in {text!r}", path=path)
        self.text = text
        self.column = column


class UnknownFunctionError(TemplateError):
    """Raised when a placeholder names a function that is not registered.

    Always lists the available functions for actionable feedback.

    Example:
        >>> raise UnknownFunctionError("fistName", ["firstName", "surname"])
        # User sees: "$: Unknown generator function 'fistName'. Available: firstName, surname"
    """

    def __init__(
        self,
        name: str,
        available: Sequence[str],
        *,
        path: str = "$",
    ) -> None:
        """Initialize UnknownFunctionError.

        Args:
            name: The unknown function name.
            available: Names of registered functions.
            path: JSON path of the placeholder.
        """
        available_str = ", ".join(available) if available else "none"
        super().__init__(
            f"Unknown generator function '{name}'. Available: {available_str}",
            path=path,
        )
        self.name = name
        self.available = list(available)


class RepeatBoundsError(TemplateError):
    """Raised when a repeat marker has invalid bounds.

    Use this exception when:
    - A bound is not an integer
    - The minimum is negative
    - The maximum is lower than the minimum
    - The maximum exceeds the configured repeat limit
    """

    pass


class MisplacedRepeatError(TemplateError):
    """Raised when a repeat marker appears anywhere but first in an array."""

    pass


class GeneratorArgumentError(TemplateError):
    """Raised when a generator function receives invalid arguments.

    Attributes:
        function: Name of the generator function.

    Example:
        >>> raise GeneratorArgumentError("integer", "min (5) must be <= max (1)")
        # User sees: "$: integer(): min (5) must be <= max (1)"
    """

    def __init__(self, function: str, message: str, *, path: str = "$") -> None:
        """Initialize GeneratorArgumentError.

        Args:
            function: Name of the generator function.
            message: Description of the argument problem.
            path: JSON path of the placeholder.
        """
        super().__init__(f"{function}(): {message}", path=path)
        self.function = function
