"""External service integrations for trip planning.

This package provides async clients for the services the planner chains
together around the language model:

- Geocoding: Geoapify search / autocomplete / reverse, Nominatim fallback
- Speech: Deepgram speech-to-text for the voice assistant
- Captioning: Hugging Face BLIP captions for the photo location finder

Each service module exports:
    - a client class wrapping one ``httpx.AsyncClient``
    - create_*_client: factory building the client from ``ApiSettings``

Example Usage:
    >>> from smart_trip.services.geocoding import create_geoapify_client
    >>> from smart_trip.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> client = create_geoapify_client(settings)
    >>> location = await client.search_one("Jaipur")
"""

# Geocoding
from smart_trip.services.geocoding import (
    GeoapifyClient,
    create_geoapify_client,
    geocode_nominatim,
)

# Speech-to-text
from smart_trip.services.speech import (
    DeepgramClient,
    create_deepgram_client,
    language_code,
)

# Image captioning
from smart_trip.services.captioning import (
    CaptionClient,
    create_caption_client,
)

__all__ = [
    # Geocoding
    "GeoapifyClient",
    "create_geoapify_client",
    "geocode_nominatim",
    # Speech
    "DeepgramClient",
    "create_deepgram_client",
    "language_code",
    # Captioning
    "CaptionClient",
    "create_caption_client",
]
