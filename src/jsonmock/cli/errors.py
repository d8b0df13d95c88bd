"""Exit codes and error reporting for the jsonmock CLI.

Problems with the template or the settings exit with 1; problems reaching
the filesystem (missing template, permissions) exit with 2. Every failure
is printed as a single ``✗`` message on stderr.
"""

from __future__ import annotations

from typing import NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from jsonmock.cli.output import error
from jsonmock.errors import JsonMockError

EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2

ENV_PREFIX = "JSONMOCK_"


class CLIError(click.ClickException):
    """A failure reported to the user, with its exit code.

    Attributes:
        message: Text printed after the ✗ marker.
        exit_code: Process exit status (default: EXIT_USER_ERROR).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    @classmethod
    def from_library(cls, err: JsonMockError) -> CLIError:
        """Wrap a library error; only its user-safe message is shown."""
        return cls(err.user_message)

    def show(self, file: object = None) -> None:
        """Print through the rich error console (``file`` is ignored)."""
        error(self.format_message())


def describe_settings_errors(err: PydanticValidationError) -> str:
    """List invalid settings with the environment variable that sets each.

    Example:
        >>> describe_settings_errors(err)
        'Invalid settings:\\n  - max_repeat (JSONMOCK_MAX_REPEAT): Input should be ...'
    """
    lines = ["Invalid settings:"]
    for problem in err.errors():
        field = ".".join(str(part) for part in problem["loc"]) or "settings"
        variable = ENV_PREFIX + field.upper()
        lines.append(f"  - {field} ({variable}): {problem['msg']}")
    return "\n".join(lines)


def invalid_settings(err: PydanticValidationError) -> NoReturn:
    """Abort because GeneratorSettings rejected options or environment."""
    raise CLIError(describe_settings_errors(err))


def missing_template(path: str) -> NoReturn:
    """Abort because the template file does not exist."""
    raise CLIError(f"Template not found: {path}", exit_code=EXIT_SYSTEM_ERROR)


def permission_denied(path: str, operation: str) -> NoReturn:
    """Abort because ``path`` could not be read or written.

    Args:
        path: File that could not be accessed.
        operation: "read" or "write".
    """
    raise CLIError(f"Permission denied: cannot {operation} {path}", exit_code=EXIT_SYSTEM_ERROR)


def write_failed(path: str, err: OSError) -> NoReturn:
    """Abort because the output file could not be created.

    Example:
        >>> write_failed("nodir/out.json", FileNotFoundError(2, "No such file or directory"))
        # User sees: "✗ Could not write nodir/out.json: No such file or directory"
    """
    reason = err.strerror or str(err)
    raise CLIError(f"Could not write {path}: {reason}", exit_code=EXIT_SYSTEM_ERROR)
