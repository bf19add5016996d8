"""OpenRouter chat completions client

Overview
--------
Thin HTTP client for the one provider call the server makes: a single
chat-completion request that asks a search-backed model for recent CSS news.

The client issues exactly one request per call. It applies no timeout, no
retry and no cancellation; a hung upstream blocks the calling invocation.

Errors
------
- Non-2xx responses raise ``UpstreamError`` with ``status_code`` and the
  response body in ``details``.
- Transport failures (DNS, connection refused) raise ``UpstreamError`` with
  ``status_code=None``.
- 2xx responses that are not JSON or lack a non-empty
  ``choices[0].message.content`` string raise ``UpstreamProtocolError``.

Usage
-----
>>> client = OpenRouterClient("sk-or-...", model="perplexity/sonar-pro")
>>> text = await client.complete(system="...", user="...")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...errors import UpstreamError, UpstreamProtocolError

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "perplexity/sonar-pro"


def extract_message_content(payload: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` when it is a non-empty string, else ``None``."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content:
        return None
    return content


class OpenRouterClient:
    """Async client for OpenRouter's ``/chat/completions`` endpoint.

    Args:
        api_key: Provider credential, sent as ``Authorization: Bearer <api_key>``.
        model: Model identifier placed in the request body.
        base_url: API root; the request goes to ``<base_url>/chat/completions``.
        client: Optional preconfigured ``httpx.AsyncClient``. When omitted one is
            created with timeouts disabled.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=None)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _body(self, system: str, user: str) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        return {"model": self.model, "messages": messages}

    async def complete(self, *, system: str, user: str) -> str:
        """
        Send one system/user exchange and return the assistant's text verbatim.

        Raises:
            UpstreamError: On transport failure or a non-success status.
            UpstreamProtocolError: On a success response without message content.
        """
        url = f"{self.base_url}/chat/completions"
        self._logger.debug("POST %s model=%s", url, self.model)
        try:
            resp = await self._client.post(url, headers=self._headers(), json=self._body(system, user))
        except httpx.HTTPError as exc:
            self._logger.error("OpenRouter request failed: %s", exc)
            raise UpstreamError(f"OpenRouter API request failed: {exc}") from exc

        if not resp.is_success:
            body = resp.text
            self._logger.error("OpenRouter returned HTTP %s: %s", resp.status_code, body)
            raise UpstreamError(
                f"OpenRouter API request failed: {resp.status_code} {resp.reason_phrase} - {body}",
                status_code=resp.status_code,
                details=body,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamProtocolError(
                "OpenRouter response is not valid JSON", status_code=resp.status_code, details=resp.text
            ) from exc

        content = extract_message_content(payload)
        if content is None:
            self._logger.error("Invalid response structure from OpenRouter: %s", payload)
            raise UpstreamProtocolError(
                "Could not extract assistant message from OpenRouter response.",
                status_code=resp.status_code,
                details=payload,
            )
        return content

    async def aclose(self) -> None:
        await self._client.aclose()
