"""
Error taxonomy for goco.

Every stage of the commit pipeline raises one of the classified errors
defined here instead of printing or exiting. The CLI is the only place
that turns them into user-facing text and a process exit code, using
:func:`describe_error` and :func:`exit_code_for`.
"""

from __future__ import annotations

from typing import Optional


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_OK = 0
EXIT_ERROR = 1
# Reserved, no failure path produces these yet.
EXIT_CANCEL = 2
EXIT_AUTH = 4
EXIT_PENDING = 8


class GocoError(Exception):
    """Base class for all classified goco errors.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    cause : Exception, optional
        The underlying exception, kept for inspection.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ValidationError(GocoError):
    """Bad flag/argument combination or an unavailable model."""

    def __init__(
        self,
        field: str,
        message: str,
        help: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause)
        self.field = field
        self.help = help

    def __str__(self) -> str:
        if self.help:
            return f"{self.field}: {self.message}\n\nHelp: {self.help}"
        return f"{self.field}: {self.message}"


class ConfigError(GocoError):
    """Malformed persisted configuration."""

    def __init__(self, field: str, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.field = field

    def __str__(self) -> str:
        return f"config error ({self.field}): {self.message}"


class ProviderError(GocoError):
    """Backend construction or backend request failure."""

    def __init__(self, provider: str, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.provider = provider

    def __str__(self) -> str:
        return f"provider error ({self.provider}): {self.message}"


class GitError(GocoError):
    """A git subcommand failed or the repository has nothing to commit."""

    def __init__(self, command: str, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.command = command

    def __str__(self) -> str:
        return f"git error: {self.command} failed: {self.message}"


class APIError(GocoError):
    """The commit message generation call failed."""

    def __str__(self) -> str:
        if self.cause is not None:
            return f"API error: {self.message}: {self.cause}"
        return f"API error: {self.message}"


class EditorError(GocoError):
    """The external editor failed or its output could not be read."""


class SentinelError(GocoError):
    """Condition with a fixed message and dedicated remediation text."""

    default_message = ""
    remediation = ""

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None) -> None:
        super().__init__(message or self.default_message, cause)


class NoEditorError(SentinelError):
    default_message = "no text editor available"
    remediation = (
        "Please set the EDITOR or VISUAL environment variable, or ensure a "
        "text editor (vim, nano, vi) is installed."
    )


class NotARepositoryError(SentinelError):
    default_message = "not a git repository"
    remediation = "Please run this command from within a git repository."


class NoStagedFilesError(SentinelError):
    default_message = "no staged files found"
    remediation = "Stage your changes using 'git add <files>' before running goco."


def describe_error(exc: BaseException) -> str:
    """Return the text shown to the user for ``exc``."""
    if isinstance(exc, SentinelError):
        return f"{exc}\n\n{exc.remediation}"
    return str(exc)


def exit_code_for(exc: Optional[BaseException]) -> int:
    """Map an exception to the process exit code.

    Every classified failure currently maps to :data:`EXIT_ERROR`.
    """
    if exc is None:
        return EXIT_OK
    return EXIT_ERROR
