"""Base agent with shared LLM calling logic."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import httpx
import openai

from aocgen.config import Config
from aocgen.errors import GenerationError, ResponseShapeError

OPENAI_PREFIX = "gpt-"
OLLAMA_PREFIX = "ollama/"

_CODE_FENCE = re.compile(r"```(?:[^\n`]*\n)?(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class SimpleResponse:
    """``{"response": "..."}`` as returned by Ollama's generate endpoint."""

    content: str


@dataclass(frozen=True)
class ChatCompletionResponse:
    """``{"choices": [{"message": {"content": "..."}}]}``."""

    content: str


def decode_response(data: Any) -> SimpleResponse | ChatCompletionResponse:
    """Decode a provider JSON body into one of the known shapes."""
    if not isinstance(data, dict):
        raise ResponseShapeError(f"unexpected response format: {type(data).__name__}")
    if isinstance(data.get("response"), str):
        return SimpleResponse(data["response"])

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ResponseShapeError("unexpected response format: 'choices' field not found or empty")
    first = choices[0]
    if not isinstance(first, dict):
        raise ResponseShapeError("unexpected response format: first choice is not an object")
    message = first.get("message")
    if not isinstance(message, dict):
        raise ResponseShapeError("unexpected response format: 'message' field not found in first choice")
    content = message.get("content")
    if not isinstance(content, str):
        raise ResponseShapeError("unexpected response format: 'content' field not found or not a string")
    return ChatCompletionResponse(content)


def extract_code_block(text: str) -> str:
    """Return the body of the first fenced code block in *text*."""
    match = _CODE_FENCE.search(text)
    if not match:
        raise GenerationError("no code found in the response")
    code = match.group(1).strip()
    if not code:
        raise GenerationError("extracted code is empty")
    return code


class BaseAgent:
    def __init__(self, config: Config, http_client: httpx.Client | None = None) -> None:
        self.config = config
        self._http = http_client
        self._openai: openai.OpenAI | None = None

    def _call_llm(self, system: str, user: str, model: str | None = None) -> str:
        model = model or self.config.model
        if model.startswith(OPENAI_PREFIX):
            return self._call_openai(model, system, user)
        if model.startswith(OLLAMA_PREFIX):
            return self._call_ollama(model[len(OLLAMA_PREFIX):], system, user)
        raise GenerationError(f"unsupported model provider: {model}")

    def _call_openai(self, model: str, system: str, user: str) -> str:
        if self._openai is None:
            self._openai = self.config.create_openai_client()
        try:
            response = self._openai.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except openai.OpenAIError as e:
            raise GenerationError(f"API error: {e}") from e
        return response.choices[0].message.content or ""

    def _call_ollama(self, model: str, system: str, user: str) -> str:
        if not self.config.model_api:
            raise GenerationError("model API endpoint is required for ollama models")
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "stream": False,
        }
        client = self._http or httpx.Client(timeout=self.config.request_timeout)
        try:
            resp = client.post(self.config.model_api, json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise GenerationError(f"API error: {e}") from e
        except ValueError as e:
            raise ResponseShapeError(f"error decoding response: {e}") from e
        finally:
            if self._http is None:
                client.close()
        return decode_response(data).content
