"""Tests for the staged voice assistant."""
from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock

import httpx
import pytest

from smart_trip.core import voice
from smart_trip.core.errors import GeocodingError, JSONRecoveryError, TranscriptionError
from smart_trip.core.voice import VoiceAssistant
from smart_trip.services.geocoding import GeoapifyClient
from smart_trip.services.speech import DeepgramClient


def _reply(extracted, response="ठीक है", next_stage=None, complete=False):
    payload = {"extractedData": extracted, "response": response, "complete": complete}
    if next_stage is not None:
        payload["nextStage"] = next_stage
    return json.dumps(payload, ensure_ascii=False)


def test_stage_question_defaults_to_hindi():
    assert voice.stage_question(1) == voice.STAGE_QUESTIONS["hindi"][1]
    assert voice.stage_question(1, "ENGLISH") == "Great! Where would you like to go?"
    assert voice.stage_question(6, "english") is None
    assert voice.apology("french") == voice.APOLOGY_MESSAGES["hindi"]


async def test_process_turn_merges_slot_and_asks_next_question(make_llm):
    llm, model = make_llm([_reply({"startLocation": "Delhi", "unknownField": "x", "budget": ""}, next_stage=1)])
    assistant = VoiceAssistant(llm)

    turn = await assistant.process_turn(
        "मैं दिल्ली से जाना चाहता हूँ",
        stage=0,
        collected={"language": "hi"},
        today=date(2025, 11, 1),
    )

    assert turn["extractedData"] == {"startLocation": "Delhi"}
    assert turn["collectedData"] == {"language": "hi", "startLocation": "Delhi"}
    assert turn["nextStage"] == 1
    assert turn["complete"] is False
    assert turn["response"].endswith(voice.STAGE_QUESTIONS["hindi"][1])
    assert "2025-11-01" in model.prompts()[0]
    assert model.bindings == [{"temperature": 0.3, "max_tokens": 500}]


async def test_process_turn_defaults_next_stage(make_llm):
    llm, _ = make_llm(['{"extractedData": {"destination": "Goa"}, "response": "Nice"}'])
    turn = await VoiceAssistant(llm).process_turn("Goa", stage=1, language="english")
    assert turn["nextStage"] == 2
    assert turn["response"] == "Nice " + voice.STAGE_QUESTIONS["english"][2]


async def test_process_turn_completes_at_last_stage(make_llm):
    llm, _ = make_llm([_reply({"transport": "Train"}, response="Train it is.", next_stage=6)])
    turn = await VoiceAssistant(llm).process_turn("by train", stage=5, language="english")
    assert turn["complete"] is True
    assert turn["response"] == "Train it is. " + voice.COMPLETION_MESSAGES["english"]


async def test_process_turn_raises_without_json(make_llm):
    llm, _ = make_llm(["I did not understand."])
    with pytest.raises(JSONRecoveryError):
        await VoiceAssistant(llm).process_turn("???", stage=0)


async def test_resolve_locations_geocodes_both_places(make_llm, delhi, jaipur):
    llm, _ = make_llm([])
    geocoder = AsyncMock(spec=GeoapifyClient)
    geocoder.search_one.side_effect = lambda query: {"Delhi": delhi, "Jaipur": jaipur}[query]
    assistant = VoiceAssistant(llm, geocoder=geocoder)

    result = await assistant.resolve_locations(
        {
            "startLocation": "Delhi",
            "destination": "Jaipur",
            "startDate": "2025-11-10",
            "endDate": "2025-11-12",
            "travelers": "Duo",
        }
    )

    assert result["ready"] is True
    assert result["errors"] == []
    assert result["tripData"]["startLocation"]["name"] == "Delhi"
    assert result["tripData"]["destination"]["displayName"] == "Jaipur, Rajasthan, India"
    assert result["tripData"]["travelers"] == "Duo"
    assert "budget" not in result["tripData"]


async def test_resolve_locations_reports_failures(make_llm, delhi):
    llm, _ = make_llm([])
    geocoder = AsyncMock(spec=GeoapifyClient)

    async def _search(query):
        if query == "Atlantis":
            return None
        if query == "Nowhere":
            raise GeocodingError("quota exceeded")
        return delhi

    geocoder.search_one.side_effect = _search
    assistant = VoiceAssistant(llm, geocoder=geocoder)

    result = await assistant.resolve_locations({"startLocation": "Nowhere", "destination": "Atlantis"})

    assert result["ready"] is False
    assert result["tripData"]["startLocation"] is None
    assert len(result["errors"]) == 2
    assert any("quota exceeded" in error for error in result["errors"])


async def test_resolve_locations_without_geocoder(make_llm):
    llm, _ = make_llm([])
    result = await VoiceAssistant(llm).resolve_locations({"startLocation": "Delhi"})
    assert result["ready"] is False
    assert result["errors"] == ["Geocoding is not configured; could not locate start location 'Delhi'"]


async def test_process_audio_turn_reports_transcription_stage(make_llm):
    llm, _ = make_llm([])
    speech = AsyncMock(spec=DeepgramClient)
    speech.transcribe.side_effect = TranscriptionError("Deepgram API error")

    result = await VoiceAssistant(llm, speech=speech).process_audio_turn(b"audio", stage=0, language="english")

    assert result == {
        "success": False,
        "stage": "transcription",
        "error": "Deepgram API error",
        "response": voice.APOLOGY_MESSAGES["english"],
    }


async def test_process_audio_turn_without_speech_client(make_llm):
    llm, _ = make_llm([])
    result = await VoiceAssistant(llm).process_audio_turn(b"audio", stage=0)
    assert result["success"] is False
    assert result["stage"] == "transcription"


async def test_process_audio_turn_reports_extraction_stage(make_llm):
    llm, _ = make_llm(["not json"])
    speech = AsyncMock(spec=DeepgramClient)
    speech.transcribe.return_value = "Jaipur"

    result = await VoiceAssistant(llm, speech=speech).process_audio_turn(b"audio", stage=1)

    assert result["success"] is False
    assert result["stage"] == "extraction"
    assert result["transcript"] == "Jaipur"


async def test_process_audio_turn_resolves_when_complete(make_llm, delhi, jaipur):
    llm, _ = make_llm([_reply({"transport": "Bus"}, complete=True)])
    speech = AsyncMock(spec=DeepgramClient)
    speech.transcribe.return_value = "बस से"
    geocoder = AsyncMock(spec=GeoapifyClient)
    geocoder.search_one.side_effect = [delhi, jaipur]
    assistant = VoiceAssistant(llm, geocoder=geocoder, speech=speech)

    result = await assistant.process_audio_turn(
        b"audio",
        content_type="audio/ogg",
        stage=5,
        collected={
            "startLocation": "Delhi",
            "destination": "Jaipur",
            "startDate": "2025-11-10",
            "endDate": "2025-11-12",
        },
    )

    assert result["success"] is True
    assert result["transcript"] == "बस से"
    assert result["complete"] is True
    assert result["collectedData"]["transport"] == "Bus"
    assert result["resolution"]["ready"] is True
    assert result["resolution"]["tripData"]["transport"] == "Bus"
    speech.transcribe.assert_awaited_once_with(b"audio", content_type="audio/ogg", language="hindi")


async def test_process_audio_turn_survives_non_json_geocoder_body(make_llm):
    llm, _ = make_llm([_reply({"transport": "Train"}, complete=True)])
    speech = AsyncMock(spec=DeepgramClient)
    speech.transcribe.return_value = "by train"
    geocoder = GeoapifyClient(
        "geo-key", transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>rate limited</html>"))
    )
    assistant = VoiceAssistant(llm, geocoder=geocoder, speech=speech)

    try:
        result = await assistant.process_audio_turn(
            b"audio",
            stage=5,
            collected={"startLocation": "Delhi", "destination": "Jaipur", "startDate": "2025-11-10", "endDate": "2025-11-12"},
            language="english",
        )
    finally:
        await geocoder.aclose()

    assert result["success"] is True
    assert result["resolution"]["ready"] is False
    assert len(result["resolution"]["errors"]) == 2
    assert all("non-JSON" in error for error in result["resolution"]["errors"])
