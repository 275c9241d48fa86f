"""Speech-to-text through the Deepgram pre-recorded audio API."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from smart_trip.core.config import ApiSettings
from smart_trip.core.errors import TranscriptionError

logger = logging.getLogger(__name__)

LANGUAGE_CODES = {"hindi": "hi", "english": "en"}


def language_code(language: Optional[str]) -> str:
    """Map the assistant language name to a Deepgram language code."""

    return LANGUAGE_CODES.get((language or "hindi").lower(), "en")


def _first_transcript(payload: Dict[str, Any]) -> str:
    channels = (payload.get("results") or {}).get("channels") or []
    if not channels:
        return ""
    alternatives = channels[0].get("alternatives") or []
    if not alternatives:
        return ""
    return alternatives[0].get("transcript") or ""


class DeepgramClient:
    """Thin async wrapper around ``POST /v1/listen``."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.deepgram.com/v1",
        model: str = "nova-2",
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.model = model
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Token {api_key}"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def transcribe(
        self,
        audio: bytes,
        *,
        content_type: str = "audio/webm",
        language: Optional[str] = "hindi",
    ) -> str:
        """Return the best transcript for ``audio`` (empty string when silent).

        Raises:
            TranscriptionError: when the request fails or Deepgram rejects it.
        """

        params = {"language": language_code(language), "punctuate": "true", "model": self.model}
        try:
            response = await self._client.post(
                "/listen",
                params=params,
                content=audio,
                headers={"Content-Type": content_type or "audio/webm"},
            )
        except httpx.HTTPError as exc:
            raise TranscriptionError(f"Deepgram request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error:
            message = payload.get("err_msg") if isinstance(payload, dict) else None
            logger.error("Deepgram returned %s: %s", response.status_code, message)
            raise TranscriptionError(message or "Deepgram API error")

        transcript = _first_transcript(payload if isinstance(payload, dict) else {})
        logger.info("Transcribed %s bytes of audio (%s chars)", len(audio), len(transcript))
        return transcript


def create_deepgram_client(settings: ApiSettings) -> DeepgramClient:
    """Instantiate the Deepgram client using project configuration."""

    return DeepgramClient(api_key=settings.ensure("deepgram_api_key"))
