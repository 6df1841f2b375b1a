"""Custom exceptions for olt-scriptgen."""

from __future__ import annotations

from dataclasses import dataclass


class ScriptGenError(Exception):
    """Base exception for all olt-scriptgen errors."""


@dataclass
class ValidationError(ScriptGenError):
    """Raised when operator input is rejected before any output is produced.

    Attributes:
        field: Name of the offending input field (e.g. ``"serial"``).
        message: User-facing description of the problem.
    """

    field: str
    message: str

    def __post_init__(self) -> None:
        super().__init__(self.message)


class VlanRangeError(ValidationError):
    """Raised when a batch VLAN range is missing or has ``start > end``."""


class StoreError(ScriptGenError):
    """Base exception for failures of the remote config store."""


class StoreRequestError(StoreError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class StoreResponseError(StoreError):
    """Raised when the store returns a non-2xx HTTP status code."""

    def __init__(self, status_code: int, url: str, detail: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.detail = detail
        message = f"HTTP {status_code} for {url!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
