"""OpenRouter integration used by the external update action."""

from .client import DEFAULT_BASE_URL, DEFAULT_MODEL, OpenRouterClient, extract_message_content

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "OpenRouterClient",
    "extract_message_content",
]
