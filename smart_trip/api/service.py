from smart_trip.core.config import ApiSettings
from smart_trip.core.errors import ServiceUnavailableError
from smart_trip.core.llm import LLMClient, create_llm_client
from smart_trip.core.voice import VoiceAssistant
from smart_trip.services import (
    CaptionClient,
    DeepgramClient,
    GeoapifyClient,
    create_caption_client,
    create_deepgram_client,
    create_geoapify_client,
)
from smart_trip.storage import create_db_engine, create_session_factory, init_db
from sqlalchemy import Engine
from typing import Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = ["groq_api_key"]


def _ensure_configuration(settings: ApiSettings) -> None:
    missing = [field for field in REQUIRED_SETTINGS if not getattr(settings, field)]
    if missing:
        joined = ", ".join(missing)
        raise RuntimeError(f"Missing required environment variables for the planner: {joined}")


def _optional_client(factory: Callable[[ApiSettings], Any], settings: ApiSettings, field: str) -> Any:
    if not getattr(settings, field):
        logger.warning("%s is not set; the dependent endpoints are disabled", field.upper())
        return None
    return factory(settings)


class TravelServices:
    """Container for the model client, HTTP service clients and the database.

    Everything is created once per process; clients whose credentials are
    missing stay ``None`` and the endpoints that need them answer with 500.

    Attributes:
        settings: configuration with the external service credentials
        llm: chat-completion client shared by every feature
        geocoder: Geoapify client (optional)
        speech: Deepgram client (optional)
        captioner: Hugging Face captioning client (optional)
        voice: voice assistant wired to the clients above
        engine / session_factory: SQLAlchemy database access
    """

    def __init__(
        self,
        settings: ApiSettings,
        *,
        llm: Optional[LLMClient] = None,
        geocoder: Optional[GeoapifyClient] = None,
        speech: Optional[DeepgramClient] = None,
        captioner: Optional[CaptionClient] = None,
        engine: Optional[Engine] = None,
    ) -> None:
        self.settings = settings
        if llm is None:
            _ensure_configuration(settings)
            llm = create_llm_client(settings)
        self.llm = llm

        if geocoder is None:
            geocoder = _optional_client(create_geoapify_client, settings, "geoapify_api_key")
        if speech is None:
            speech = _optional_client(create_deepgram_client, settings, "deepgram_api_key")
        if captioner is None:
            captioner = _optional_client(create_caption_client, settings, "hf_token")
        self.geocoder = geocoder
        self.speech = speech
        self.captioner = captioner
        self.voice = VoiceAssistant(self.llm, geocoder=self.geocoder, speech=self.speech)

        self.engine = engine or create_db_engine(settings.database_url)
        init_db(self.engine)
        self.session_factory = create_session_factory(self.engine)

    def __repr__(self) -> str:
        return (
            f"TravelServices(llm='{self.llm.model_name}', "
            f"geocoder={type(self.geocoder).__name__}, "
            f"speech={type(self.speech).__name__}, "
            f"captioner={type(self.captioner).__name__}, "
            f"database='{self.engine.url.render_as_string(hide_password=True)}')"
        )

    def require_geocoder(self) -> GeoapifyClient:
        if self.geocoder is None:
            raise ServiceUnavailableError("Geocoding is not configured (GEOAPIFY_API_KEY)")
        return self.geocoder

    def require_speech(self) -> DeepgramClient:
        if self.speech is None:
            raise ServiceUnavailableError("Speech-to-text is not configured (DEEPGRAM_API_KEY)")
        return self.speech

    def require_captioner(self) -> CaptionClient:
        if self.captioner is None:
            raise ServiceUnavailableError("Image captioning is not configured (HF_TOKEN)")
        return self.captioner

    async def close(self) -> None:
        """Close the HTTP clients and dispose of the connection pool."""

        for client in (self.geocoder, self.speech, self.captioner):
            if client is not None:
                await client.aclose()
        self.engine.dispose()
