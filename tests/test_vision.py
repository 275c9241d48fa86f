"""Tests for photo location identification."""
from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from smart_trip.core import vision
from smart_trip.core.errors import CaptioningError, GeocodingError
from smart_trip.core.schemas import Location
from smart_trip.services.captioning import CaptionClient
from smart_trip.services.geocoding import GeoapifyClient

HAWA_MAHAL = {
    "location": "Hawa Mahal",
    "city": "Jaipur",
    "country": "India",
    "confidence": "High",
    "reasoning": "Pink sandstone facade with latticed windows.",
    "landmarks": ["Hawa Mahal"],
    "lat": None,
    "lng": None,
    "category": "Historical Site",
}


def test_normalise_vision_result_drops_bad_values():
    result = vision.normalise_vision_result({"location": "", "lat": "26.9", "lng": True, "landmarks": "Fort"})
    assert result.location == "Unknown"
    assert result.lat is None
    assert result.lng is None
    assert result.landmarks == []
    assert result.reasoning == "Analysis completed"


async def test_identify_with_vision_geocodes_missing_coordinates(make_llm, jaipur):
    llm, model = make_llm([json.dumps(HAWA_MAHAL)])
    geocoder = AsyncMock(spec=GeoapifyClient)
    geocoder.search_one.return_value = jaipur

    result = await vision.identify_with_vision(llm, b"\xff\xd8jpeg", "image/jpeg", geocoder=geocoder)

    assert result.location == "Hawa Mahal"
    assert (result.lat, result.lng) == (jaipur.lat, jaipur.lng)
    geocoder.search_one.assert_awaited_once_with("Hawa Mahal, Jaipur, India")

    content = model.calls[0][-1].content
    assert content[1]["image_url"]["url"].startswith("data:image/jpeg;base64,")
    assert model.bindings == [{"temperature": 0.2, "max_tokens": 1000}]


async def test_identify_with_vision_keeps_model_coordinates(make_llm):
    llm, _ = make_llm([json.dumps({**HAWA_MAHAL, "lat": 26.9239, "lng": 75.8267})])
    geocoder = AsyncMock(spec=GeoapifyClient)

    result = await vision.identify_with_vision(llm, b"img", "image/png", geocoder=geocoder)

    assert result.lat == pytest.approx(26.9239)
    geocoder.search_one.assert_not_awaited()


async def test_identify_with_vision_survives_geocoding_errors(make_llm):
    llm, _ = make_llm([json.dumps(HAWA_MAHAL)])
    geocoder = AsyncMock(spec=GeoapifyClient)
    geocoder.search_one.side_effect = GeocodingError("down")

    result = await vision.identify_with_vision(llm, b"img", "image/png", geocoder=geocoder)

    assert result.city == "Jaipur"
    assert result.lat is None


async def test_identify_with_vision_falls_back_on_prose(make_llm):
    llm, _ = make_llm(["I am not sure where this is."])
    geocoder = AsyncMock(spec=GeoapifyClient)

    result = await vision.identify_with_vision(llm, b"img", "image/png", geocoder=geocoder)

    assert result.location == "Unknown"
    assert result.confidence == "Low"
    geocoder.search_one.assert_not_awaited()


async def test_identify_with_caption_runs_the_cascade(make_llm, monkeypatch):
    llm, _ = make_llm(
        [
            '{"name": "Taj Mahal", "city": "Agra", "country": "India", '
            '"landmark": "Taj Mahal Agra India", "description": "Marble mausoleum.", "confidence": "High"}'
        ]
    )
    captioner = AsyncMock(spec=CaptionClient)
    captioner.caption.return_value = "a large white marble building with a dome"
    geocode = AsyncMock(
        return_value=Location(name="Agra", display_name="Taj Mahal, Agra, India", lat=27.1751, lng=78.0421)
    )
    monkeypatch.setattr(vision, "geocode_nominatim", geocode)

    result = await vision.identify_with_caption(llm, captioner, b"img", "image/jpeg")

    assert result.name == "Taj Mahal"
    assert result.confidence == "high"
    assert result.lat == pytest.approx(27.1751)
    assert result.display_name == "Taj Mahal, Agra, India"
    geocode.assert_awaited_once_with(
        ["Taj Mahal Agra India", "Taj Mahal Agra India Agra India", "Agra India", "Agra"]
    )


async def test_identify_with_caption_without_match(make_llm, monkeypatch):
    llm, _ = make_llm(["nothing recognisable"])
    captioner = AsyncMock(spec=CaptionClient)
    captioner.caption.return_value = "a blurry photo"
    monkeypatch.setattr(vision, "geocode_nominatim", AsyncMock(return_value=None))

    result = await vision.identify_with_caption(llm, captioner, b"img")

    assert result.name == "Unknown Location"
    assert result.lat is None
    assert result.caption == "a blurry photo"


async def test_identify_with_caption_propagates_caption_errors(make_llm):
    llm, _ = make_llm([])
    captioner = AsyncMock(spec=CaptionClient)
    captioner.caption.side_effect = CaptioningError("warming up")

    with pytest.raises(CaptioningError):
        await vision.identify_with_caption(llm, captioner, b"img")
