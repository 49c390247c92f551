"""Central installer exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used throughout the installer to represent its
failure modes (configuration, user input, persistence, external services
and resource provisioning). Every ``AppError`` reaching the pipeline
executor is fatal for the run.

``InstallAborted`` is deliberately outside the hierarchy: it signals that
the operator declined to continue, which ends the run cleanly.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all installer errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'PROVISIONING_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary. The installer never retries, so the
        flag is informational only.

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

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'})
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

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
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for an invalid prompt schema or unusable configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class UserInputError(AppError):
    """Raised when operator input ends before a prompt could be answered."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("USER_INPUT_ERROR", message, context=context, transient=False)


class PersistenceError(AppError):
    """Raised when the resolved configuration cannot be written."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("PERSISTENCE_ERROR", message, context=context, transient=False)


class ExternalServiceError(AppError):
    """Raised for failures from the framework source or plugin registry."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = True,
    ) -> None:
        super().__init__(
            "EXTERNAL_SERVICE_ERROR", message, context=context, transient=transient
        )


class ProvisioningError(AppError):
    """Raised when tenant or super-user provisioning fails."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "PROVISIONING_ERROR", message, context=context, transient=False
        )


class InstallAborted(Exception):
    """Raised when the operator declines a confirmation prompt.

    The pipeline treats this as a clean early exit (status code 0) and does
    not run the rollback.
    """

    def __init__(self, message: str = "Exiting install ... ") -> None:
        super().__init__(message)
        self.message = message
