from __future__ import annotations

"""Capability model and result types.

A capability is a named, independently invocable unit of server
functionality. Each one has a kind that decides how the transport layer
exposes it:

- ``guidance``: static instruction text (an MCP prompt),
- ``resource``: state addressed by URI (an MCP resource),
- ``action``: a callable operation (an MCP tool).

Handlers receive input that has already been checked against the
capability's ``InputContract`` and return a ``CapabilityResult``. Failures are
raised, never returned.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from .contract import NO_INPUT, InputContract


class CapabilityKind(str, Enum):
    guidance = "guidance"
    resource = "resource"
    action = "action"


@dataclass(frozen=True)
class CapabilityResult:
    """Structured capability output.

    Attributes
    ----------
    text:
        Payload returned to the caller.
    mime_type:
        ``text/plain`` for messages and guidance, ``application/json`` for documents.
    """

    text: str
    mime_type: str = "text/plain"


Handler = Callable[[Dict[str, Any]], Awaitable[CapabilityResult]]


@dataclass(frozen=True)
class Capability:
    """Registry entry. Immutable once registered."""

    name: str
    kind: CapabilityKind
    handler: Handler = field(repr=False, compare=False)
    contract: InputContract = NO_INPUT
    description: str = ""
    uri: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("capability name must be non-empty")
        if self.kind is CapabilityKind.resource and not self.uri:
            raise ValueError(f"resource capability '{self.name}' requires a uri")
