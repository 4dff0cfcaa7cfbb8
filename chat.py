"""
Chat proxy: forwards a user message plus a snapshot of the student list to
an OpenAI-compatible chat completions API (OpenRouter by default) and returns
the reply text.

One request per message. No retries, streaming or caching.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from errors import ConfigurationError, MissingFieldError, TransportError, UpstreamError
from settings import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an assistant for a Student Information System. Use this data:\n"


def build_system_prompt(students: List[dict]) -> str:
    return SYSTEM_PROMPT + json.dumps(students)


def _extract_content(data: Any) -> str:
    """Return the stripped reply text, or "" when there is none.

    Raises ValueError when the body is not shaped like a chat completion.
    """
    if not isinstance(data, dict):
        raise ValueError("completion body is not a JSON object")
    choices = data.get("choices")
    if choices is None:
        return ""
    if not isinstance(choices, list):
        raise ValueError("completion 'choices' is not a list")
    if not choices:
        return ""
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if message is None:
        return ""
    if not isinstance(message, dict):
        raise ValueError("completion message is not an object")
    content = message.get("content")
    return content.strip() if isinstance(content, str) else ""


def _extract_error(data: Any) -> Optional[str]:
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        return message if isinstance(message, str) else None
    return None


class ChatProxy:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def _build_request(self, message: str, students: List[dict]) -> Dict[str, Any]:
        return {
            "model": self.settings.chat_model,
            "messages": [
                {"role": "system", "content": build_system_prompt(students)},
                {"role": "user", "content": message},
            ],
            "temperature": self.settings.chat_temperature,
        }

    async def ask(self, message: Optional[str], students: List[dict]) -> str:
        """
        Send *message* to the completion API with *students* as context.

        Raises:
            MissingFieldError: message is empty.
            ConfigurationError: no API key configured.
            UpstreamError: non-2xx status or no reply content.
            TransportError: network failure or unreadable response body.
        """
        if not message:
            logger.warning("Chat rejected: no message received")
            raise MissingFieldError("Message required.")

        api_key = self.settings.openrouter_api_key
        if not api_key:
            logger.error("Chat rejected: OPENROUTER_API_KEY is not set")
            raise ConfigurationError("OPENROUTER_API_KEY is not set.")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.chat_referer,
            "X-Title": self.settings.chat_title,
        }
        payload = self._build_request(message, students)

        logger.info(
            "Sending chat request: model=%s students=%d message_len=%d",
            self.settings.chat_model,
            len(students),
            len(message),
        )
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(self.settings.chat_api_url, headers=headers, json=payload)
            data = response.json()
            content = _extract_content(data) if response.is_success else ""
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Chat request failed: %s", e)
            raise TransportError("Server error communicating with AI.") from e

        if not response.is_success or not content:
            status_code = response.status_code if not response.is_success else 502
            logger.warning("AI returned empty or error response (status: %d)", response.status_code)
            raise UpstreamError(_extract_error(data) or "AI returned no response.", status_code=status_code)

        logger.info("Chat reply received: %d chars", len(content))
        return content
