"""OpenAI-compatible chat-completion provider."""

from __future__ import annotations

import http.client
import json
from dataclasses import dataclass
from typing import Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import AnalysisSettings
from ..errors import ProviderError
from ..logging import get_logger
from ..prompting.builder import PromptMessage
from .base import ChatProvider

logger = get_logger("llm")


@dataclass(frozen=True)
class ChatRequest:
    """Represents a single chat-completion call."""

    endpoint: str
    model: str
    messages: tuple[PromptMessage, ...]
    temperature: float
    max_tokens: int
    api_key: str
    request_timeout: Optional[float]

    def payload(self) -> dict[str, object]:
        return {
            "model": self.model,
            "messages": [
                {"role": message.role, "content": message.content} for message in self.messages
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


class OpenAIChatProvider(ChatProvider):
    """Posts the conversation to the OpenAI chat completions endpoint."""

    name = "openai"
    FALLBACK_ERROR = "Unknown error"

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        self.settings = settings or AnalysisSettings()
        self.endpoint = f"{self.settings.base_url.rstrip('/')}/chat/completions"

    def complete(self, messages: Sequence[PromptMessage], credential: str) -> str:
        request = ChatRequest(
            endpoint=self.endpoint,
            model=self.settings.model,
            messages=tuple(messages),
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            api_key=credential,
            request_timeout=self.settings.request_timeout,
        )
        return self._send(request)

    def _send(self, request: ChatRequest) -> str:
        data = json.dumps(request.payload()).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {request.api_key}",
        }
        http_request = Request(request.endpoint, data=data, headers=headers, method="POST")
        logger.debug("POST %s (model=%s)", request.endpoint, request.model)

        try:
            if request.request_timeout is None:
                response = urlopen(http_request)
            else:
                response = urlopen(http_request, timeout=request.request_timeout)
            with response:
                raw = response.read()
        except HTTPError as exc:
            message = self._error_message(exc)
            raise ProviderError(f"OpenAI API Error: {message}", status=exc.code) from exc
        except URLError as exc:
            raise ProviderError(f"OpenAI API request failed: {exc.reason}") from exc
        except (OSError, http.client.HTTPException) as exc:
            raise ProviderError(f"OpenAI API request failed: {exc}") from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ProviderError("OpenAI API returned invalid JSON") from exc

        content = self._extract_content(payload)
        if content is None:
            raise ProviderError("OpenAI API returned a response without choices")
        return content

    @classmethod
    def _error_message(cls, exc: HTTPError) -> str:
        try:
            body = exc.read()
        except OSError:
            return cls.FALLBACK_ERROR
        if not body:
            return cls.FALLBACK_ERROR
        try:
            payload = json.loads(body.decode("utf-8", errors="ignore"))
        except json.JSONDecodeError:
            return cls.FALLBACK_ERROR
        if not isinstance(payload, dict):
            return cls.FALLBACK_ERROR
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
        return cls.FALLBACK_ERROR

    @staticmethod
    def _extract_content(payload: object) -> Optional[str]:
        if not isinstance(payload, dict):
            return None
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        if not isinstance(first, dict):
            return None
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        return None


__all__ = ["ChatRequest", "OpenAIChatProvider"]
