"""LLM client: HTTP connection to an OpenAI-compatible chat backend.

The hint provider takes an LLM callable matching the protocol:

    async def __call__(self, messages: list[dict[str, str]]) -> str: ...

`messages` is a chat transcript of {"role", "content"} dicts, system prompt
first. Production code constructs an HttpLLM from config (Groq's
https://api.groq.com/openai/v1 endpoint by default). Tests use AsyncMock
stubs or patch httpx instead.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol: every LLM implementation must match this signature
# ---------------------------------------------------------------------------

class LLM(Protocol):
    async def __call__(self, messages: list[dict[str, str]]) -> str: ...


# ---------------------------------------------------------------------------
# HttpLLM: connects to a real backend
# ---------------------------------------------------------------------------

class HttpLLM:
    """Async HTTP client for chat-completion backends.

    POST {provider_url}/chat/completions
        {"model": ..., "messages": [...], "temperature": ..., "max_tokens": ...}
    Response: {"choices": [{"message": {"content": "..."}}]}

    Args:
        provider_url: Base URL of the backend, e.g. "https://api.groq.com/openai/v1".
        api_key:      Bearer token, or empty string if not required.
        model:        Model identifier sent with every request.
        timeout:      HTTP timeout in seconds. Defaults to 30.
        temperature:  Kept very low so the same request picks the same file.
        max_tokens:   Reply length cap.
    """

    def __init__(
        self,
        provider_url: str,
        api_key: str = "",
        model: str = "",
        timeout: float = 30.0,
        temperature: float = 0.05,
        max_tokens: int = 300,
    ) -> None:
        self._base_url = provider_url.rstrip("/")
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._temperature = temperature
        self._max_tokens = max_tokens

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_request(self, messages: list[dict[str, str]]) -> tuple[str, dict]:
        """Return (url, body) for a chat completion."""
        body: dict = {
            "messages": messages,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "stream": False,
        }
        if self._model:
            body["model"] = self._model
        return f"{self._base_url}/chat/completions", body

    def _parse_response(self, data: dict) -> str:
        """Extract the assistant message text from the response body."""
        choices = data.get("choices") if isinstance(data, dict) else None
        first = choices[0] if isinstance(choices, list) and choices else None
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise LLMError("Unexpected response format from chat backend")
        return content

    async def __call__(self, messages: list[dict[str, str]]) -> str:
        url, body = self._build_request(messages)
        logger.debug("llm call url=%s messages=%d", url, len(messages))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise LLMError(f"Cannot connect to LLM backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise LLMError(
                f"LLM backend returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise LLMError(f"LLM backend timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise LLMError(f"LLM request to {self._base_url} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMError("LLM backend returned a non-JSON body") from e
        text = self._parse_response(data)
        logger.debug("llm response len=%d", len(text))
        return text


# ---------------------------------------------------------------------------
# LLMError: raised by HttpLLM for all connection and protocol failures
# ---------------------------------------------------------------------------

class LLMError(RuntimeError):
    """Raised when the LLM backend cannot be reached or returns an error."""
