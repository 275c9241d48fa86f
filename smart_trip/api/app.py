"""FastAPI surface for the smart trip planner."""
from __future__ import annotations

import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import json
import logging
from datetime import date
from typing import Any, Dict, Optional

import sentry_sdk
from fastapi import Depends, FastAPI, File, Form, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from smart_trip.api.dependencies import get_services, lifespan
from smart_trip.api.response_builder import failure, success
from smart_trip.api.schemas import (
    ChatRequest,
    CrowdRequest,
    DestinationRequest,
    FoodRequest,
    GenerateRequest,
    HotelsRequest,
    ItineraryRequest,
    NotificationsRequest,
    RailwaysRequest,
    TripInsightsRequest,
    VoiceResolveRequest,
    VoiceTurnRequest,
    WeatherRequest,
)
from smart_trip.api.service import TravelServices
from smart_trip.api.trips import router as trips_router
from smart_trip.core import insights, planner, vision
from smart_trip.core.config import configure_logging
from smart_trip.core.errors import (
    ItineraryParseError,
    SmartTripError,
    TripNotFoundError,
    UnauthorizedError,
    UserNotFoundError,
)
from smart_trip.core.fallbacks import (
    fallback_crowd_prediction,
    fallback_emergency_contacts,
    fallback_notifications,
    fallback_weather,
)
from smart_trip.core.pilgrimage import all_religions, places_by_religion
from smart_trip.core.types import IdentifyMode
from smart_trip.core.voice import apology

configure_logging()
logger = logging.getLogger(__name__)

if os.getenv("SENTRY_DSN"):  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        send_default_pii=False,
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
    )

CHAT_APOLOGY = "Sorry, I encountered an error. Please try again."

app = FastAPI(title="Smart Trip Planner API", version="0.1.0", lifespan=lifespan)

origins = [
    "http://localhost:3000",
    "http://localhost:3001",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trips_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> Any:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.info("Rejected %s %s: %s", request.method, request.url.path, messages)
    return failure(400, "; ".join(messages) or "Invalid request")


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> Any:
    return failure(401, exc)


@app.exception_handler(UserNotFoundError)
@app.exception_handler(TripNotFoundError)
async def not_found_handler(request: Request, exc: SmartTripError) -> Any:
    return failure(404, exc)


async def _read_upload(upload: Optional[UploadFile]) -> bytes:
    if upload is None:
        return b""
    return await upload.read()


# Itinerary

@app.post("/api/generate")
async def generate(payload: GenerateRequest, services: TravelServices = Depends(get_services)) -> Any:
    """Answer an arbitrary prompt in JSON-only mode and return the cleaned text."""

    try:
        data = await planner.generate_raw(services.llm, payload.prompt)
    except Exception as exc:
        logger.error("Generate error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(data=data)


@app.post("/api/itinerary")
async def itinerary(payload: ItineraryRequest, services: TravelServices = Depends(get_services)) -> Any:
    """Build the complete trip: day plan, weather, hotels and trains.

    Example JSON payload:
        ```json
        {
            "startLocation": {"name": "Delhi", "lat": 28.61, "lng": 77.21},
            "destination": {"name": "Jaipur", "lat": 26.91, "lng": 75.79},
            "startDate": "2025-11-10",
            "endDate": "2025-11-12",
            "travelers": "Duo",
            "budget": "Moderate",
            "transport": "Train"
        }
        ```
    """

    try:
        payload.require_locations()
    except ValueError as exc:
        return failure(400, exc)

    logger.info(
        "Planning %s -> %s from %s to %s",
        payload.start_location.name,
        payload.destination.name,
        payload.start_date,
        payload.end_date,
    )
    try:
        result = await planner.generate_complete_itinerary(services.llm, payload)
    except ItineraryParseError as exc:
        logger.error("Itinerary parse error: %s", exc)
        return failure(500, exc)
    except Exception as exc:
        logger.error("Unexpected error during itinerary generation: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(**result)


@app.post("/api/weather")
async def weather(payload: WeatherRequest, services: TravelServices = Depends(get_services)) -> Any:
    """Trip forecast; always answers 200, with a generated fallback when needed."""

    days = payload.days or planner.trip_days(payload.start_date, payload.end_date)
    try:
        forecast = await planner.generate_weather(
            services.llm,
            destination=payload.destination,
            start=payload.start_date,
            end=payload.end_date,
            lat=payload.lat,
            lng=payload.lng,
            days=days,
        )
    except Exception as exc:
        logger.error("Weather API error: %s", exc, exc_info=True)
        forecast = fallback_weather(payload.destination, payload.start_date, days)
    return success(weather=forecast)


@app.post("/api/hotels")
async def hotels(payload: HotelsRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        result = await planner.generate_hotels(
            services.llm,
            destination=payload.destination,
            check_in=payload.check_in,
            check_out=payload.check_out,
            budget=payload.budget,
        )
    except Exception as exc:
        logger.error("Hotels API error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(hotels=result)


@app.post("/api/railways")
async def railways(payload: RailwaysRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        result = await planner.generate_railways(
            services.llm,
            start_location=payload.start_location,
            destination=payload.destination,
            budget=payload.budget,
        )
    except Exception as exc:
        logger.error("Railways API error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(railways=result)


@app.post("/api/transport")
async def transport(payload: ItineraryRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        result = await planner.generate_transport(services.llm, payload)
    except ValueError as exc:
        return failure(400, exc)
    except Exception as exc:
        logger.error("Transport API error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(transport=result)


# Destination insights

@app.post("/api/food-suggestions")
async def food_suggestions(payload: FoodRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        suggestions = await insights.food_suggestions(services.llm, payload.destination, payload.budget)
    except Exception as exc:
        logger.error("Food suggestions error: %s", exc, exc_info=True)
        return failure(500, exc, suggestions=[])
    return success(suggestions=suggestions)


@app.post("/api/emergency-info")
async def emergency_info(payload: DestinationRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        contacts = await insights.emergency_contacts(services.llm, payload.destination)
    except Exception as exc:
        logger.error("Emergency info error: %s", exc, exc_info=True)
        return failure(500, exc, contacts=fallback_emergency_contacts())
    return success(contacts=contacts)


@app.post("/api/crowd-prediction")
async def crowd_prediction(payload: CrowdRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        prediction = await insights.crowd_prediction(
            services.llm, payload.destination, payload.start_date, payload.end_date
        )
    except Exception as exc:
        logger.error("Crowd prediction error: %s", exc, exc_info=True)
        return failure(500, exc, prediction=fallback_crowd_prediction())
    return success(prediction=prediction)


@app.post("/api/trip-insights")
async def trip_insights(payload: TripInsightsRequest, services: TravelServices = Depends(get_services)) -> Any:
    """Emergency contacts, crowd outlook and food ideas in one parallel round-trip."""

    result = await insights.trip_insights(
        services.llm,
        destination=payload.destination,
        start=payload.start_date,
        end=payload.end_date,
        budget=payload.budget,
    )
    return success(**result)


@app.post("/api/notifications")
async def notifications(payload: NotificationsRequest, services: TravelServices = Depends(get_services)) -> Any:
    """Seasonal travel suggestions; falls back to a generic tip with status 200."""

    today = date.today()
    try:
        items = await insights.notifications(services.llm, payload.user_location, today)
    except Exception as exc:
        logger.error("Notifications error: %s", exc, exc_info=True)
        items = fallback_notifications(today)
    return success(notifications=items)


@app.post("/api/chat")
async def chat(payload: ChatRequest, services: TravelServices = Depends(get_services)) -> Any:
    try:
        reply = await insights.chat_reply(
            services.llm, payload.message, itinerary=payload.itinerary, weather=payload.weather
        )
    except Exception as exc:
        logger.error("Chat error: %s", exc, exc_info=True)
        return failure(500, exc, response=CHAT_APOLOGY)
    return success(response=reply)


# Voice

@app.post("/api/speech-to-text")
async def speech_to_text(
    audio: Optional[UploadFile] = File(default=None),
    language: str = Form(default="hindi"),
    services: TravelServices = Depends(get_services),
) -> Any:
    data = await _read_upload(audio)
    if not data:
        return failure(400, "No audio file provided")

    try:
        transcript = await services.require_speech().transcribe(
            data,
            content_type=audio.content_type or "audio/webm",
            language=language,
        )
    except Exception as exc:
        logger.error("Speech-to-text error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(transcript=transcript)


@app.post("/api/voice-assistant")
async def voice_assistant(payload: VoiceTurnRequest, services: TravelServices = Depends(get_services)) -> Any:
    """Extract the slot for the current stage and ask the next question."""

    try:
        turn = await services.voice.process_turn(
            payload.user_input,
            stage=payload.stage,
            collected=payload.collected_data,
            language=payload.language,
        )
    except Exception as exc:
        logger.error("Voice assistant error: %s", exc, exc_info=True)
        return failure(500, exc, response=apology(payload.language))
    return success(**turn)


@app.post("/api/voice-assistant/resolve")
async def voice_assistant_resolve(
    payload: VoiceResolveRequest,
    services: TravelServices = Depends(get_services),
) -> Any:
    """Geocode the collected places into planning-form data."""

    try:
        resolution = await services.voice.resolve_locations(payload.collected_data)
    except Exception as exc:
        logger.error("Voice resolution error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(**resolution)


@app.post("/api/voice-assistant/audio")
async def voice_assistant_audio(
    audio: Optional[UploadFile] = File(default=None),
    stage: int = Form(default=0, ge=0, le=5),
    collected_data: str = Form(default="{}", alias="collectedData"),
    language: str = Form(default="hindi"),
    services: TravelServices = Depends(get_services),
) -> Any:
    """One spoken turn: transcription, slot extraction and, when complete, geocoding."""

    data = await _read_upload(audio)
    if not data:
        return failure(400, "No audio file provided", stage="transcription")
    try:
        collected = json.loads(collected_data or "{}")
    except json.JSONDecodeError:
        return failure(400, "collectedData must be a JSON object", stage="extraction")
    if not isinstance(collected, dict):
        return failure(400, "collectedData must be a JSON object", stage="extraction")

    result = await services.voice.process_audio_turn(
        data,
        content_type=audio.content_type or "audio/webm",
        stage=stage,
        collected=collected,
        language=language,
    )
    if not result["success"]:
        extra: Dict[str, Any] = {key: value for key, value in result.items() if key not in ("success", "error")}
        return failure(500, result["error"], **extra)
    return result


# Locations

@app.post("/api/identify-location")
async def identify_location(
    image: Optional[UploadFile] = File(default=None),
    mode: IdentifyMode = Form(default="vision"),
    services: TravelServices = Depends(get_services),
) -> Any:
    """Name the place shown in an uploaded photo."""

    data = await _read_upload(image)
    if not data:
        return failure(400, "No image provided")

    content_type = image.content_type or "image/jpeg"
    try:
        if mode == "caption":
            result = await vision.identify_with_caption(
                services.llm, services.require_captioner(), data, content_type
            )
        else:
            result = await vision.identify_with_vision(
                services.llm, data, content_type, geocoder=services.geocoder
            )
    except Exception as exc:
        logger.error("Location identification error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(result=result.model_dump(by_alias=True))


@app.get("/api/locations/search")
async def search_locations(
    q: str = Query(min_length=1),
    limit: int = Query(default=5, ge=1, le=10),
    autocomplete: bool = Query(default=True),
    services: TravelServices = Depends(get_services),
) -> Any:
    try:
        geocoder = services.require_geocoder()
        if autocomplete:
            locations = await geocoder.autocomplete(q, limit=limit)
        else:
            locations = await geocoder.search(q, limit=limit)
    except Exception as exc:
        logger.error("Location search error: %s", exc, exc_info=True)
        return failure(500, exc)
    return success(locations=[location.model_dump(by_alias=True) for location in locations])


@app.get("/api/locations/reverse")
async def reverse_location(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    services: TravelServices = Depends(get_services),
) -> Any:
    try:
        location = await services.require_geocoder().reverse(lat, lng)
    except Exception as exc:
        logger.error("Reverse geocoding error: %s", exc, exc_info=True)
        return failure(500, exc)
    if location is None:
        return failure(404, "No place found at these coordinates")
    return success(location=location.model_dump(by_alias=True))


@app.get("/api/pilgrimages")
async def pilgrimages(religion: Optional[str] = Query(default=None)) -> Dict[str, Any]:
    places = places_by_religion(religion)
    return success(
        places=[place.model_dump(by_alias=True) for place in places],
        religions=all_religions(),
    )


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "smart-trip-planner-api"}
