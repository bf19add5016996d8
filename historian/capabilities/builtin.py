from __future__ import annotations

"""Builtin capability set and registry assembly.

Which capabilities exist is decided once, at startup, by
:func:`available_capabilities` from configuration alone. :func:`build_registry`
then registers them in a fixed order: guidance, resource, then actions.
"""

import logging
from typing import Optional, Tuple

import httpx

from ..info_provider.openrouter import OpenRouterClient
from ..knowledge import KnowledgeStore
from ..server.core.config import OpenRouterConfig
from .base import CapabilityKind
from .contract import NO_INPUT
from .guidance import (
    GUIDANCE_DESCRIPTION,
    GUIDANCE_NAME,
    READ_NAME,
    UPDATES_NAME,
    WRITE_NAME,
    guidance_handler,
)
from .registry import CapabilityRegistry
from .state import RESOURCE_NAME, RESOURCE_URI, WRITE_CONTRACT, ReadStateCapability, WriteStateCapability
from .updates import UPDATES_DESCRIPTION, LatestUpdatesCapability

logger = logging.getLogger(__name__)

CORE_CAPABILITIES: Tuple[str, ...] = (GUIDANCE_NAME, RESOURCE_NAME, READ_NAME, WRITE_NAME)


def available_capabilities(config: OpenRouterConfig) -> Tuple[str, ...]:
    """
    Return the names of the capabilities to register, in registration order.

    The external update action is included only when a non-empty provider
    credential is configured. Its absence is not an error.
    """
    if config.has_credential:
        return CORE_CAPABILITIES + (UPDATES_NAME,)
    return CORE_CAPABILITIES


def build_registry(
    store: KnowledgeStore,
    config: OpenRouterConfig,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
) -> CapabilityRegistry:
    """
    Construct and populate the registry for one server process.

    Args:
        store: Knowledge store shared by the state capabilities.
        config: Provider configuration; decides whether the update action exists.
        http_client: Optional ``httpx.AsyncClient`` for the provider client.

    Raises:
        DuplicateCapability: If two capabilities share a name. Fatal at startup.
    """
    names = available_capabilities(config)
    registry = CapabilityRegistry()
    reader = ReadStateCapability(store)

    registry.register(
        GUIDANCE_NAME,
        CapabilityKind.guidance,
        NO_INPUT,
        guidance_handler,
        description=GUIDANCE_DESCRIPTION,
    )
    registry.register(
        RESOURCE_NAME,
        CapabilityKind.resource,
        NO_INPUT,
        reader.execute,
        description="The user's CSS knowledge memory as a JSON document.",
        uri=RESOURCE_URI,
    )
    registry.register(
        READ_NAME,
        CapabilityKind.action,
        NO_INPUT,
        reader.execute,
        description="Reads the user's current CSS knowledge from memory.",
    )
    registry.register(
        WRITE_NAME,
        CapabilityKind.action,
        WRITE_CONTRACT,
        WriteStateCapability(store).execute,
        description="Updates the user's CSS knowledge memory for a specific concept.",
    )

    if UPDATES_NAME in names:
        client = OpenRouterClient(
            config.api_key or "",
            model=config.model,
            base_url=config.base_url,
            client=http_client,
        )
        registry.register(
            UPDATES_NAME,
            CapabilityKind.action,
            NO_INPUT,
            LatestUpdatesCapability(client).execute,
            description=UPDATES_DESCRIPTION,
        )
    else:
        logger.warning("OPENROUTER_API_KEY not configured; '%s' will not be available.", UPDATES_NAME)

    logger.info("Registered capabilities: %s", ", ".join(c.name for c in registry.list()))
    return registry
