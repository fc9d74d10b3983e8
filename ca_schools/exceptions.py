"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses raised by the pipeline stages. Every subclass carries
the ``stage`` it belongs to (``fetch``, ``transform``, ``export``, ``report`` or
``config``) so the command-line entry point can report the failing stage in
a single diagnostic line. None of these errors are retried.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'FETCH_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and may be retried.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.
    transient : bool
        True if the error is transient.
    stage : str
        Pipeline stage the error belongs to.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'}, transient=True)
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    stage: str = "pipeline"

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "stage": self.stage,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    stage = "config"

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class FetchError(AppError):
    """Raised when the raw extract cannot be retrieved or parsed.

    Covers unreachable hosts, HTTP error statuses, missing local files,
    unsupported URL schemes and malformed transfers (empty body, unparsable
    tab-separated content).
    """

    stage = "fetch"

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("FETCH_ERROR", message, context=context, transient=False)


class MalformedRecordError(AppError):
    """Raised when a required field is missing or a CDS code is malformed."""

    stage = "transform"

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "MALFORMED_RECORD_ERROR", message, context=context, transient=False
        )


class EmptyResultError(AppError):
    """Raised when no active rows survive filtering.

    Usually signals an upstream schema or status vocabulary change.
    """

    stage = "transform"

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "EMPTY_RESULT_ERROR", message, context=context, transient=False
        )


class ExportError(AppError):
    """Raised when the canonical table or a report cannot be written."""

    stage = "export"

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("EXPORT_ERROR", message, context=context, transient=False)


class ReportError(AppError):
    """Raised when the canonical table lacks a column the reports read."""

    stage = "report"

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("REPORT_ERROR", message, context=context, transient=False)
