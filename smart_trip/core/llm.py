"""Thin async wrapper around the chat-completion model."""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_groq import ChatGroq

from smart_trip.core.config import ApiSettings
from smart_trip.core.errors import LLMError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompletionProfile:
    """Sampling parameters used by one feature."""

    temperature: float
    max_tokens: int


GENERATE = CompletionProfile(temperature=0.5, max_tokens=3000)
WEATHER = CompletionProfile(temperature=0.7, max_tokens=3000)
HOTELS = CompletionProfile(temperature=0.8, max_tokens=1500)
FOOD = CompletionProfile(temperature=0.7, max_tokens=1500)
CROWD = CompletionProfile(temperature=0.3, max_tokens=700)
EMERGENCY = CompletionProfile(temperature=0.1, max_tokens=500)
NOTIFICATIONS = CompletionProfile(temperature=0.7, max_tokens=1500)
VOICE = CompletionProfile(temperature=0.3, max_tokens=500)
VISION = CompletionProfile(temperature=0.2, max_tokens=1000)
CAPTION_LOCATION = CompletionProfile(temperature=0.1, max_tokens=400)
CHAT = CompletionProfile(temperature=0.5, max_tokens=1000)


def _content_to_text(content: Any) -> str:
    """Flatten LangChain message content (str or content blocks) into text."""

    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                chunks.append(chunk)
        return "\n".join(chunks)
    if content is None:
        return ""
    return str(content)


class LLMClient:
    """Issue single-shot chat completions with per-feature sampling settings."""

    def __init__(self, model: BaseChatModel, *, vision_model: Optional[BaseChatModel] = None) -> None:
        self.model = model
        self.vision_model = vision_model or model

    @property
    def model_name(self) -> str:
        return getattr(self.model, "model_name", None) or type(self.model).__name__

    async def _invoke(
        self,
        model: BaseChatModel,
        messages: List[BaseMessage],
        profile: CompletionProfile,
    ) -> str:
        bound = model.bind(temperature=profile.temperature, max_tokens=profile.max_tokens)
        try:
            response = await bound.ainvoke(messages)
        except Exception as exc:
            logger.error("LLM call failed: %s", exc, exc_info=True)
            raise LLMError(f"LLM request failed: {exc}") from exc

        text = _content_to_text(getattr(response, "content", response))
        logger.debug("Raw LLM output: %s", text)
        if not text.strip():
            raise LLMError("LLM returned an empty response")
        return text

    async def complete(
        self,
        prompt: str,
        *,
        profile: CompletionProfile,
        system: Optional[str] = None,
    ) -> str:
        """Return the text of one chat completion for ``prompt``."""

        messages: List[BaseMessage] = []
        if system:
            messages.append(SystemMessage(content=system))
        messages.append(HumanMessage(content=prompt))
        return await self._invoke(self.model, messages, profile)

    async def complete_with_image(
        self,
        prompt: str,
        image: bytes,
        content_type: str,
        *,
        profile: CompletionProfile = VISION,
    ) -> str:
        """Send ``prompt`` together with an inline image to the vision model."""

        encoded = base64.b64encode(image).decode("ascii")
        message = HumanMessage(
            content=[
                {"type": "text", "text": prompt},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{content_type};base64,{encoded}"},
                },
            ]
        )
        return await self._invoke(self.vision_model, [message], profile)


def create_llm_client(settings: ApiSettings) -> LLMClient:
    """Build the Groq-backed client from project configuration."""

    api_key = settings.ensure("groq_api_key")
    model = ChatGroq(model=settings.llm_model, temperature=0.5, api_key=api_key)
    vision_model = ChatGroq(model=settings.vision_model, temperature=0.2, api_key=api_key)
    return LLMClient(model, vision_model=vision_model)
