"""Image captioning through the Hugging Face inference API (BLIP)."""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from smart_trip.core.config import ApiSettings
from smart_trip.core.errors import CaptioningError

logger = logging.getLogger(__name__)

BLIP_MODEL = "Salesforce/blip-image-captioning-large"


class CaptionClient:
    """Describe an image in one sentence."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api-inference.huggingface.co/models",
        model: str = BLIP_MODEL,
        timeout_s: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.model = model
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def caption(self, image: bytes, *, content_type: str = "image/jpeg") -> str:
        """Return the generated caption.

        Raises:
            CaptioningError: on cold starts (503), a rejected token (401), other
                HTTP failures, or an empty caption.
        """

        try:
            response = await self._client.post(
                f"/{self.model}",
                content=image,
                headers={"Content-Type": content_type or "image/jpeg"},
            )
        except httpx.HTTPError as exc:
            raise CaptioningError(f"Captioning request failed: {exc}") from exc

        if response.status_code == 503:
            raise CaptioningError(
                "Captioning model is warming up (cold start). Please wait 20-30 seconds and try again."
            )
        if response.status_code == 401:
            raise CaptioningError("Invalid Hugging Face token. Check HF_TOKEN.")
        if response.is_error:
            raise CaptioningError(f"Captioning API error {response.status_code}: {response.text[:200]}")

        payload = response.json()
        logger.debug("Caption payload: %s", payload)
        caption = ""
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            caption = payload[0].get("generated_text") or ""
        elif isinstance(payload, dict):
            caption = payload.get("generated_text") or ""

        if not caption.strip():
            raise CaptioningError("Empty caption. Try a clearer photo with a visible landmark.")
        return caption.strip()


def create_caption_client(settings: ApiSettings) -> CaptionClient:
    """Instantiate the captioning client using project configuration."""

    return CaptionClient(token=settings.ensure("hf_token"))
