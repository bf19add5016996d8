from __future__ import annotations

"""Capability registry.

The registry maps a capability name to its kind, input contract and handler.
It is constructed once at startup, populated in a fixed order and handed to
the transport adapter, which uses it for both discovery and dispatch.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import DuplicateCapability, UnknownCapability
from .base import Capability, CapabilityKind, CapabilityResult, Handler
from .contract import NO_INPUT, InputContract

logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """
    In-memory, insertion-ordered table of capabilities.

    Notes:
        - Names are unique across all kinds; registering a taken name raises
          ``DuplicateCapability`` and leaves the existing entry in place.
        - ``list`` returns entries in registration order. Discovery order is
          part of the external contract.
        - There is no unregistration.
    """

    def __init__(self) -> None:
        """Initialize an empty capability registry."""
        self._caps: Dict[str, Capability] = {}

    def __len__(self) -> int:
        return len(self._caps)

    def __contains__(self, name: object) -> bool:
        return name in self._caps

    def add(self, cap: Capability) -> Capability:
        """
        Register a pre-built capability.

        Raises:
            DuplicateCapability: If ``cap.name`` is already registered.
        """
        if cap.name in self._caps:
            raise DuplicateCapability(cap.name)
        self._caps[cap.name] = cap
        logger.debug("Registered %s capability %r", cap.kind.value, cap.name)
        return cap

    def register(
        self,
        name: str,
        kind: CapabilityKind,
        contract: InputContract,
        handler: Handler,
        *,
        description: str = "",
        uri: Optional[str] = None,
    ) -> Capability:
        """
        Register a capability.

        Args:
            name: Unique capability name.
            kind: Guidance, resource or action.
            contract: Input contract checked before ``handler`` runs.
            handler: Async callable receiving the validated input.
            description: Human text published during discovery.
            uri: Base URI, required for resources.

        Returns:
            The registered entry.

        Raises:
            DuplicateCapability: If ``name`` is already registered.
        """
        return self.add(
            Capability(
                name=name,
                kind=kind,
                handler=handler,
                contract=contract or NO_INPUT,
                description=description,
                uri=uri,
            )
        )

    def get(self, name: str) -> Capability:
        """
        Retrieve a registered capability by name.

        Raises:
            UnknownCapability: If no capability is registered with the given name.
        """
        try:
            return self._caps[name]
        except KeyError:
            raise UnknownCapability(name) from None

    def has(self, name: str) -> bool:
        return name in self._caps

    def list(self, kind: Optional[CapabilityKind] = None) -> List[Capability]:
        """Return registered capabilities in registration order, optionally of one kind."""
        caps = list(self._caps.values())
        if kind is None:
            return caps
        return [c for c in caps if c.kind is kind]

    def resolve_uri(self, uri: str) -> Capability:
        """
        Find the resource addressed by ``uri``.

        A resource answers for its base URI and any path below it.

        Raises:
            UnknownCapability: If no resource matches.
        """
        for cap in self._caps.values():
            if cap.kind is CapabilityKind.resource and cap.uri and uri.startswith(cap.uri):
                return cap
        raise UnknownCapability(uri)

    async def invoke(self, name: str, raw_input: Optional[Mapping[str, Any]] = None) -> CapabilityResult:
        """
        Validate input and run the named capability.

        The handler's result or exception is propagated unchanged.

        Raises:
            UnknownCapability: If ``name`` is not registered.
            InvalidInput: If ``raw_input`` does not satisfy the contract.
        """
        cap = self.get(name)
        args = cap.contract.validate(name, raw_input)
        logger.debug("Invoking %s capability %r", cap.kind.value, name)
        return await cap.handler(args)
