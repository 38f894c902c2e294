"""LLM client — HTTP connection to the chat-completion backend.

The chat route calls an LLM matching the protocol:

    async def __call__(self, prompt: str, system: str = "") -> str: ...

Two implementations are provided:

    HttpLLM   — real HTTP client, supports OpenAI-compatible chat completions
                 (Groq by default) and KoboldCpp. Selected by provider_format.
    EchoLLM   — returns the prompt back unchanged. Useful for running the API
                 without a model or an API key.

Every transport or protocol failure surfaces as LLMError so the caller can
report it without losing the game-state changes already made for the turn.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol — every LLM implementation must match this signature
# ---------------------------------------------------------------------------

class LLM(Protocol):
    async def __call__(self, prompt: str, system: str = "") -> str: ...


# ---------------------------------------------------------------------------
# HttpLLM — connects to a real backend
# ---------------------------------------------------------------------------

ProviderFormat = Literal["openai", "koboldcpp"]


class HttpLLM:
    """Async HTTP client for text-generation backends.

    Supported formats:
      "openai"     — POST /v1/chat/completions  {"model": ..., "messages": [...]}
                     Response: {"choices": [{"message": {"content": "..."}}]}
      "koboldcpp"  — POST /api/v1/generate  {"prompt": ...}
                     Response: {"results": [{"text": "..."}]}

    Args:
        provider_url:    Base URL of the backend, e.g. "https://api.groq.com/openai".
        api_key:         Bearer token, or empty string if not required.
        provider_format: Wire format to use. Defaults to "openai".
        model:           Model identifier, used only by the openai format.
        timeout:         HTTP timeout in seconds. Defaults to 30.
        max_tokens:      Completion length cap sent to the backend.
    """

    def __init__(
        self,
        provider_url: str,
        api_key: str = "",
        provider_format: ProviderFormat = "openai",
        model: str = "",
        timeout: float = 30.0,
        max_tokens: int = 1000,
    ) -> None:
        self._base_url = provider_url.rstrip("/")
        self._api_key = api_key
        self._format = provider_format
        self._model = model
        self._timeout = timeout
        self._max_tokens = max_tokens

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_request(self, prompt: str, system: str) -> tuple[str, dict]:
        """Return (url, body) for the configured format."""
        if self._format == "koboldcpp":
            url = f"{self._base_url}/api/v1/generate"
            text = f"{system}\n\n{prompt}" if system else prompt
            return url, {"prompt": text, "max_length": self._max_tokens}

        # openai (default)
        url = f"{self._base_url}/v1/chat/completions"
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        body: dict = {"messages": messages, "max_tokens": self._max_tokens}
        if self._model:
            body["model"] = self._model
        return url, body

    def _parse_response(self, data: Any) -> str:
        """Extract the reply text from the response body.

        Any body that is not shaped like the configured format raises LLMError.
        """
        if self._format == "koboldcpp":
            results = data.get("results") if isinstance(data, dict) else None
            first = results[0] if isinstance(results, list) and results else None
            text = first.get("text") if isinstance(first, dict) else None
            if not isinstance(text, str):
                raise LLMError("Unexpected response format from KoboldCpp backend")
            return text

        choices = data.get("choices") if isinstance(data, dict) else None
        first = choices[0] if isinstance(choices, list) and choices else None
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise LLMError("Unexpected response format from OpenAI-compatible backend")
        return content

    async def __call__(self, prompt: str, system: str = "") -> str:
        url, body = self._build_request(prompt, system)
        logger.debug("llm call url=%s prompt_len=%d", url, len(prompt))

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
            raise LLMError(f"LLM request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMError("LLM backend returned invalid JSON") from e
        text = self._parse_response(data)
        logger.debug("llm response len=%d", len(text))
        return text


# ---------------------------------------------------------------------------
# EchoLLM — returns the prompt unchanged; no network access
# ---------------------------------------------------------------------------

class EchoLLM:
    """Returns the prompt text as-is. No network calls.

    Lets you exercise the chat route end-to-end (progression, prompt
    rendering, response shape) without a running model.
    """

    async def __call__(self, prompt: str, system: str = "") -> str:
        logger.debug("EchoLLM prompt_len=%d", len(prompt))
        return prompt


# ---------------------------------------------------------------------------
# LLMError — raised by HttpLLM for all connection and protocol failures
# ---------------------------------------------------------------------------

class LLMError(RuntimeError):
    """Raised when the LLM backend cannot be reached or returns an error."""
