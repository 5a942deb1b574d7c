"""Custom exception hierarchy for plugkit-core.

This module defines the exception classes used throughout plugkit:
- PlugkitError: Base exception for all plugkit-related errors
- CompilationError: Raised when a build plan cannot be produced
- ConfigurationError: Raised when plugkit.yaml cannot be loaded

User-facing messages are safe to display. Technical details are
logged internally via structlog and never attached to the message.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class PlugkitError(Exception):
    """Base exception for plugkit.

    All plugkit exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never exposed to the user.

    Example:
        >>> raise PlugkitError(
        ...     "Build declarations invalid",
        ...     internal_details="entries.index[0] is not a string",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "plugkit_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class CompilationError(PlugkitError):
    """Raised when compilation of a build plan fails.

    Use this exception when:
    - BuildSpec -> CompiledBuildPlan transformation fails
    - The assembled plan fails contract validation
    """

    pass


class ConfigurationError(PlugkitError):
    """Raised when a configuration file cannot be read or parsed.

    Provides file path and field context for actionable error messages.

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "entries.index").
        line_number: Line number in the file where error occurred (if available).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid YAML",
        ...     file_path="plugkit.yaml",
        ...     line_number=3,
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        line_number: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if line_number:
            context_parts.append(f"line {line_number}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path
        self.line_number = line_number
