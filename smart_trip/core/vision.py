"""Identify the place shown in a photo.

Two pipelines are offered:

- vision: the multimodal model inspects the image directly; coordinates it
  cannot provide are looked up with Geoapify.
- caption: a captioning model describes the image, the chat model names the
  landmark from that caption, and Nominatim geocodes it through a cascade of
  progressively coarser queries.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from smart_trip.core import llm as profiles
from smart_trip.core.errors import GeocodingError
from smart_trip.core.fallbacks import fallback_caption_location, fallback_vision_result
from smart_trip.core.llm import LLMClient
from smart_trip.core.post_processing import parse_json_or_default
from smart_trip.core.prompts import caption_location_prompt, vision_prompt
from smart_trip.core.schemas import CaptionResult, VisionResult
from smart_trip.services.captioning import CaptionClient
from smart_trip.services.geocoding import GeoapifyClient, geocode_nominatim

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def _number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def normalise_vision_result(raw: Dict[str, Any]) -> VisionResult:
    """Fill missing fields and drop values of the wrong type."""

    landmarks = raw.get("landmarks")
    return VisionResult(
        location=raw.get("location") or UNKNOWN,
        city=raw.get("city") or UNKNOWN,
        country=raw.get("country") or UNKNOWN,
        confidence=raw.get("confidence") or "Low",
        reasoning=raw.get("reasoning") or "Analysis completed",
        landmarks=[str(item) for item in landmarks] if isinstance(landmarks, list) else [],
        lat=_number_or_none(raw.get("lat")),
        lng=_number_or_none(raw.get("lng")),
        category=raw.get("category") or UNKNOWN,
    )


async def identify_with_vision(
    llm: LLMClient,
    image: bytes,
    content_type: str,
    *,
    geocoder: Optional[GeoapifyClient] = None,
) -> VisionResult:
    """Ask the vision model where the photo was taken."""

    logger.info("Analysing %s byte image with the vision model", len(image))
    text = await llm.complete_with_image(vision_prompt, image, content_type, profile=profiles.VISION)
    raw = parse_json_or_default(text, fallback_vision_result(), expect=dict)
    result = normalise_vision_result(raw)

    if result.location != UNKNOWN and result.lat is None and result.lng is None and geocoder is not None:
        query = ", ".join(part for part in (result.location, result.city, result.country) if part and part != UNKNOWN)
        try:
            match = await geocoder.search_one(query)
        except GeocodingError as exc:
            logger.warning("Geocoding failed for %r: %s", query, exc)
            match = None
        if match is not None:
            result = result.model_copy(update={"lat": match.lat, "lng": match.lng})
            logger.info("Geocoded coordinates: %s, %s", match.lat, match.lng)

    return result


async def identify_with_caption(
    llm: LLMClient,
    captioner: CaptionClient,
    image: bytes,
    content_type: str = "image/jpeg",
) -> CaptionResult:
    """Caption the image, name the landmark, then geocode it.

    Raises:
        CaptioningError: when the captioning hop fails.
        LLMError: when the landmark extraction call fails.
    """

    caption = await captioner.caption(image, content_type=content_type)
    logger.info("Caption: %s", caption)

    text = await llm.complete(
        caption_location_prompt.format(caption=caption),
        profile=profiles.CAPTION_LOCATION,
    )
    place = parse_json_or_default(text, fallback_caption_location(), expect=dict)

    landmark = str(place.get("landmark") or "")
    city = str(place.get("city") or "")
    country = str(place.get("country") or "")
    location = await geocode_nominatim(
        [landmark, f"{landmark} {city} {country}", f"{city} {country}", city]
    )

    return CaptionResult(
        caption=caption,
        name=str(place.get("name") or "Unknown Location"),
        city=city,
        country=country,
        landmark=landmark,
        description=str(place.get("description") or ""),
        confidence=str(place.get("confidence") or "low").lower(),
        lat=location.lat if location else None,
        lng=location.lng if location else None,
        display_name=location.display_name if location else None,
    )
