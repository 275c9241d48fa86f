"""Speech-to-text for the voice assistant.

Public API:
    - DeepgramClient: async client transcribing recorded audio
    - create_deepgram_client: factory using project configuration
    - language_code: assistant language name to Deepgram language code
"""
from smart_trip.services.speech.client import DeepgramClient, create_deepgram_client, language_code

__all__ = [
    "DeepgramClient",
    "create_deepgram_client",
    "language_code",
]
