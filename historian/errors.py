"""Error types for the Historian capability server.

Defines a small hierarchy of exceptions raised by the registry, the knowledge
store and the external update provider. Every failure a caller can observe is
one of these types, and each carries a human-readable message suitable for
returning to the remote client as-is.

Hierarchy
---------

- ``HistorianError``

  - ``CapabilityError``: ``UnknownCapability``, ``DuplicateCapability``, ``InvalidInput``
  - ``StoreError``: ``StoreUnavailable``, ``CorruptState``, ``InvalidDocument``
  - ``UpstreamError`` and its subclass ``UpstreamProtocolError``
"""

from __future__ import annotations

from typing import Any, Optional


class HistorianError(Exception):
    """Base error for all Historian exceptions."""


class CapabilityError(HistorianError):
    """Base error for registry-level failures."""


class UnknownCapability(CapabilityError):
    """Raised when no capability is registered under the requested name or URI."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown capability: '{name}'")
        self.name = name


class DuplicateCapability(CapabilityError):
    """Raised when a capability name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Capability already registered: '{name}'")
        self.name = name


class InvalidInput(CapabilityError):
    """Raised when raw input does not satisfy a capability's input contract.

    Args:
        capability: Name of the capability being invoked.
        field: Dotted path of the offending field (empty for whole-payload errors).
        reason: Short description of the mismatch.
    """

    def __init__(self, capability: str, field: str, reason: str) -> None:
        where = f" field '{field}'" if field else ""
        super().__init__(f"Invalid input for '{capability}'{where}: {reason}")
        self.capability = capability
        self.field = field
        self.reason = reason


class StoreError(HistorianError):
    """Base error for knowledge store failures."""


class StoreUnavailable(StoreError):
    """Raised when the backing medium cannot be accessed."""


class CorruptState(StoreError):
    """Raised when the persisted record fails parsing or schema validation."""


class InvalidDocument(StoreError):
    """Raised by ``write`` when the document fails validation; storage is untouched."""


class UpstreamError(HistorianError):
    """Raised when the external provider call fails.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code, or ``None`` for transport-level failures.
        details: Response body or other diagnostic payload.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class UpstreamProtocolError(UpstreamError):
    """Raised when a successful provider response lacks the expected result field."""
