"""Chat completion proxy for the assistant."""

import logging
from typing import Optional

import httpx

from yieldpilot.errors import ConfigurationError, UpstreamError
from yieldpilot.web.contracts.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

OPENAI_API = "https://api.openai.com/v1"
DEFAULT_TEMPERATURE = 0.7


class ChatService:
    """Forwards single-turn prompts to the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = OPENAI_API,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _post(self, payload: dict) -> httpx.Response:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self._client is not None:
            return await self._client.post(url, headers=headers, json=payload, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(url, headers=headers, json=payload)

    async def complete(self, request: ChatRequest) -> ChatResponse:
        """Get a completion for one user message.

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: If OpenAI fails (status passed through)
        """
        if not self.api_key:
            raise ConfigurationError("OpenAI API key not configured")

        payload = {
            "model": request.model,
            "messages": [{"role": "user", "content": request.message}],
            "max_tokens": request.max_tokens,
            "temperature": DEFAULT_TEMPERATURE,
        }

        try:
            response = await self._post(payload)
        except httpx.TimeoutException:
            logger.warning("OpenAI request timed out")
            raise UpstreamError("OpenAI request timed out", status_code=504)
        except httpx.HTTPError as e:
            logger.error(f"OpenAI transport error: {e}")
            raise UpstreamError("Failed to get response from OpenAI")

        if not response.is_success:
            logger.error(f"OpenAI API error: {response.status_code} - {response.text}")
            raise UpstreamError(
                "Failed to get response from OpenAI", status_code=response.status_code
            )

        data = response.json()
        choices = data.get("choices") or []
        content = None
        if choices:
            content = (choices[0].get("message") or {}).get("content")

        return ChatResponse(
            message=content or "No response",
            usage=data.get("usage"),
            model=data.get("model"),
        )
