"""Image captioning used by the photo-based location finder.

Public API:
    - CaptionClient: async BLIP captioning client
    - create_caption_client: factory using project configuration
"""
from smart_trip.services.captioning.client import CaptionClient, create_caption_client

__all__ = [
    "CaptionClient",
    "create_caption_client",
]
