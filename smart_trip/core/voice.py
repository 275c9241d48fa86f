"""Voice assistant: staged slot filling over speech, the model and geocoding.

A conversation walks six stages (start, destination, dates, travellers,
budget, transport). Each turn sends what the user said to the model, merges
the extracted slot into the collected data and asks the next question.
Once complete, the two place names are geocoded into ``Location`` objects
that the planning form can use directly.
"""
from __future__ import annotations

import asyncio
import json
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from smart_trip.core import llm as profiles
from smart_trip.core.errors import GeocodingError, JSONRecoveryError, LLMError, TranscriptionError
from smart_trip.core.llm import LLMClient
from smart_trip.core.post_processing import extract_json
from smart_trip.core.prompts import voice_extraction_prompt, voice_system_prompt
from smart_trip.core.schemas import Location
from smart_trip.services.geocoding import GeoapifyClient
from smart_trip.services.speech import DeepgramClient

logger = logging.getLogger(__name__)

LAST_STAGE = 5
SLOT_FIELDS = ("startLocation", "destination", "startDate", "endDate", "travelers", "budget", "transport")
LANGUAGE_NAMES = {"hindi": "Hindi", "english": "English"}

STAGE_QUESTIONS: Dict[str, Dict[int, str]] = {
    "hindi": {
        0: "कृपया मुझे बताएं कि आप कहाँ से यात्रा शुरू करना चाहते हैं?",
        1: "बहुत अच्छा! अब मुझे बताएं कि आप कहाँ जाना चाहते हैं?",
        2: "शानदार! अब मुझे यात्रा की तारीख बताएं। आप कब जाना चाहते हैं?",
        3: "अच्छा! कितने लोग यात्रा कर रहे हैं? अकेले, दो लोग, या समूह में?",
        4: "ठीक है! आपका बजट क्या है? कम, मध्यम, या उच्च?",
        5: "बढ़िया! आप किस परिवहन से यात्रा करना चाहते हैं? बस या ट्रेन?",
    },
    "english": {
        0: "Where would you like to start your journey from?",
        1: "Great! Where would you like to go?",
        2: "Wonderful! When are you travelling? Tell me the dates.",
        3: "How many people are travelling? Solo, two people, or a group?",
        4: "Okay! What is your budget? Low, moderate, or high?",
        5: "Nice! Would you like to travel by bus or train?",
    },
}

COMPLETION_MESSAGES = {
    "hindi": "धन्यवाद! अब मैं आपके लिए यात्रा योजना तैयार कर रहा हूँ...",
    "english": "Thank you! I am preparing your travel plan now...",
}

APOLOGY_MESSAGES = {
    "hindi": "क्षमा करें, मुझे समझने में कुछ समस्या हुई। कृपया फिर से कोशिश करें।",
    "english": "Sorry, I had trouble understanding that. Please try again.",
}


def _language(language: Optional[str]) -> str:
    key = (language or "hindi").lower()
    return key if key in STAGE_QUESTIONS else "hindi"


def stage_question(stage: int, language: Optional[str] = "hindi") -> Optional[str]:
    return STAGE_QUESTIONS[_language(language)].get(stage)


def apology(language: Optional[str] = "hindi") -> str:
    return APOLOGY_MESSAGES[_language(language)]


def _failure(stage: str, error: Exception, language: str) -> Dict[str, Any]:
    return {"success": False, "stage": stage, "error": str(error), "response": apology(language)}


class VoiceAssistant:
    """Runs voice turns and resolves the collected places."""

    def __init__(
        self,
        llm: LLMClient,
        *,
        geocoder: Optional[GeoapifyClient] = None,
        speech: Optional[DeepgramClient] = None,
    ) -> None:
        self.llm = llm
        self.geocoder = geocoder
        self.speech = speech

    async def process_turn(
        self,
        user_input: str,
        *,
        stage: int,
        collected: Optional[Mapping[str, Any]] = None,
        language: Optional[str] = "hindi",
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        """Extract the slot for ``stage`` from ``user_input``.

        Raises:
            LLMError: when the model call fails.
            JSONRecoveryError: when the model reply holds no JSON object.
        """

        lang = _language(language)
        collected = dict(collected or {})
        logger.info("Stage %s: processing input %r", stage, user_input)

        prompt = voice_extraction_prompt.format(
            stage=stage,
            today=(today or date.today()).isoformat(),
            language_name=LANGUAGE_NAMES[lang],
            user_input=user_input,
            collected=json.dumps(collected, ensure_ascii=False),
            next_stage=stage + 1,
            complete="true" if stage >= LAST_STAGE else "false",
        )
        text = await self.llm.complete(
            prompt,
            profile=profiles.VOICE,
            system=voice_system_prompt.format(language_name=LANGUAGE_NAMES[lang]),
        )
        parsed = extract_json(text, expect=dict)
        if not isinstance(parsed, dict):
            raise JSONRecoveryError("Voice assistant reply is not a JSON object")

        raw_extracted = parsed.get("extractedData")
        extracted = {
            key: value
            for key, value in (raw_extracted.items() if isinstance(raw_extracted, dict) else [])
            if key in SLOT_FIELDS and value not in (None, "")
        }

        next_stage = parsed.get("nextStage")
        if not isinstance(next_stage, int) or isinstance(next_stage, bool):
            next_stage = stage + 1
        complete = parsed.get("complete") is True or stage >= LAST_STAGE

        reply = str(parsed.get("response") or "").strip()
        question = stage_question(next_stage, lang)
        if complete:
            reply = f"{reply} {COMPLETION_MESSAGES[lang]}".strip()
        elif question:
            reply = f"{reply} {question}".strip()

        return {
            "response": reply,
            "extractedData": extracted,
            "nextStage": next_stage,
            "complete": complete,
            "collectedData": {**collected, **extracted},
        }

    async def _geocode_slot(self, label: str, query: Any, errors: List[str]) -> Optional[Location]:
        if not query:
            return None
        if self.geocoder is None:
            errors.append(f"Geocoding is not configured; could not locate {label} '{query}'")
            return None
        try:
            location = await self.geocoder.search_one(str(query))
        except GeocodingError as exc:
            logger.warning("Geocoding %s %r failed: %s", label, query, exc)
            errors.append(f"Could not locate {label} '{query}': {exc}")
            return None
        if location is None:
            errors.append(f"No match found for {label} '{query}'")
        return location

    async def resolve_locations(self, collected: Mapping[str, Any]) -> Dict[str, Any]:
        """Turn collected voice slots into planning-form data."""

        errors: List[str] = []
        start, destination = await asyncio.gather(
            self._geocode_slot("start location", collected.get("startLocation"), errors),
            self._geocode_slot("destination", collected.get("destination"), errors),
        )

        trip_data: Dict[str, Any] = {
            "startLocation": start.model_dump(by_alias=True) if start else None,
            "destination": destination.model_dump(by_alias=True) if destination else None,
        }
        for key in ("startDate", "endDate", "travelers", "budget", "transport"):
            if collected.get(key):
                trip_data[key] = collected[key]

        ready = bool(start and destination and collected.get("startDate") and collected.get("endDate"))
        return {"tripData": trip_data, "ready": ready, "errors": errors}

    async def process_audio_turn(
        self,
        audio: bytes,
        *,
        content_type: str = "audio/webm",
        stage: int,
        collected: Optional[Mapping[str, Any]] = None,
        language: Optional[str] = "hindi",
    ) -> Dict[str, Any]:
        """Full pipeline: speech-to-text, slot extraction, then geocoding when done.

        A failing hop never raises; the result names the hop that failed.
        """

        lang = _language(language)
        if self.speech is None:
            return _failure("transcription", TranscriptionError("Speech-to-text is not configured"), lang)

        try:
            transcript = await self.speech.transcribe(audio, content_type=content_type, language=lang)
        except TranscriptionError as exc:
            logger.error("Transcription failed: %s", exc)
            return _failure("transcription", exc, lang)
        if not transcript.strip():
            return _failure("transcription", TranscriptionError("No speech detected"), lang)

        try:
            turn = await self.process_turn(transcript, stage=stage, collected=collected, language=lang)
        except (LLMError, JSONRecoveryError) as exc:
            logger.error("Slot extraction failed: %s", exc)
            failure = _failure("extraction", exc, lang)
            failure["transcript"] = transcript
            return failure

        result: Dict[str, Any] = {"success": True, "transcript": transcript, **turn}
        if turn["complete"]:
            result["resolution"] = await self.resolve_locations(turn["collectedData"])
        return result
