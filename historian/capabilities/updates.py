from __future__ import annotations

"""External update action.

Asks the configured provider for a summary of recent CSS developments and
returns the text unmodified. The action is only registered when a provider
credential is configured; see :func:`historian.capabilities.builtin.available_capabilities`.
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..info_provider.openrouter import OpenRouterClient
from .base import CapabilityResult

UPDATES_DESCRIPTION = "Fetches recent news and updates about CSS features using Perplexity Sonar via OpenRouter."

SYSTEM_INSTRUCTION = (
    "You are an AI assistant specialized in finding the latest CSS news and updates. "
    "Summarize the key recent developments."
)
USER_QUERY = (
    "What are the most important recent updates or newly released features in CSS? "
    "Focus on things developers should be aware of in the last few months."
)


@dataclass(frozen=True)
class LatestUpdatesCapability:
    """
    Fetch the latest CSS updates from the provider.

    One request per invocation. ``UpstreamError`` and ``UpstreamProtocolError``
    from the client propagate to the caller.
    """

    client: OpenRouterClient

    async def execute(self, args: Dict[str, Any]) -> CapabilityResult:  # noqa: ARG002
        text = await self.client.complete(system=SYSTEM_INSTRUCTION, user=USER_QUERY)
        return CapabilityResult(text=text)
