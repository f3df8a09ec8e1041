import httpx
import json
import re
from typing import Optional, Dict, Any, List
from loguru import logger

from sfpulse.config import settings
from sfpulse.errors import (
    ConfigurationError,
    LLMResponseError,
    UpstreamError,
    UpstreamUnavailableError,
    upstream_error_for_status,
)

_THINK_BLOCK = re.compile(r"<think>[\s\S]*?</think>")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) fence"""
    text = re.sub(r'^```(?:json)?\s*', '', text.strip())
    return re.sub(r'\s*```$', '', text).strip()


def strip_thinking(text: str) -> str:
    """Drop <think>...</think> blocks emitted by reasoning models"""
    return _THINK_BLOCK.sub("", text).strip()


class ChatCompletionService:
    """Service for an OpenAI-compatible chat completions API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.base_url = (base_url or settings.LLM_BASE_URL).rstrip("/")
        self.model = model or settings.LLM_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT
        self.transport = transport

    async def check_health(self) -> bool:
        """Check if the LLM API is reachable with the configured key"""
        if not self.api_key:
            return False
        try:
            async with httpx.AsyncClient(timeout=5.0, transport=self.transport) as client:
                response = await client.get(
                    f"{self.base_url}/models",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"LLM health check failed: {e}")
            return False

    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        json_mode: bool = False,
    ) -> str:
        """
        Run one chat completion and return the assistant message content

        Args:
            messages: Chat messages ({role, content})
            model: Model name (default from config)
            temperature: Sampling temperature
            max_tokens: Completion token limit
            json_mode: Ask the provider for a JSON object response

        Raises:
            ConfigurationError: No API key configured
            UpstreamError: Transport failure, non-2xx, or no choices
        """
        if not self.api_key:
            raise ConfigurationError("LLM_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableError(f"LLM API request timed out: {e}", code="TIMEOUT_ERROR") from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(f"LLM API request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"LLM API error: {response.status_code} - {response.text[:500]}")
            raise upstream_error_for_status("LLM", response.status_code, response.text)

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError(f"No usable response from LLM API: {e}") from e

    async def complete_json(self, messages: List[Dict[str, str]], **kwargs) -> Any:
        """
        Chat completion parsed as JSON

        Raises:
            LLMResponseError: The content is not valid JSON, even after fence stripping
        """
        content = await self.complete(messages, json_mode=True, **kwargs)
        cleaned = strip_code_fences(content)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM response as JSON: {content[:500]}")
            raise LLMResponseError(f"LLM response is not valid JSON: {e}") from e


# Singleton instance
llm_service = ChatCompletionService()
