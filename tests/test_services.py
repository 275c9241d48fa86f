"""Tests for service modules."""
from __future__ import annotations

import json

import httpx
import pytest

from smart_trip.core.errors import CaptioningError, GeocodingError, TranscriptionError
from smart_trip.services.captioning import CaptionClient
from smart_trip.services.geocoding import GeoapifyClient, geocode_nominatim
from smart_trip.services.speech import DeepgramClient, language_code

JAIPUR_RESULT = {
    "city": "Jaipur",
    "country": "India",
    "formatted": "Jaipur, Rajasthan, India",
    "lat": 26.9124,
    "lon": 75.7873,
}


async def test_geoapify_search_builds_authenticated_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"results": [JAIPUR_RESULT, {"name": "no coordinates"}]})

    client = GeoapifyClient("geo-key", transport=httpx.MockTransport(handler))
    try:
        locations = await client.search("  Jaipur ", limit=3)
    finally:
        await client.aclose()

    assert seen["path"] == "/v1/geocode/search"
    assert seen["params"] == {"text": "Jaipur", "limit": "3", "apiKey": "geo-key", "format": "json"}
    assert len(locations) == 1
    assert locations[0].name == "Jaipur"
    assert locations[0].display_name == "Jaipur, Rajasthan, India"
    assert locations[0].lng == pytest.approx(75.7873)


async def test_geoapify_autocomplete_skips_short_queries():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = GeoapifyClient("geo-key", transport=httpx.MockTransport(handler))
    try:
        assert await client.autocomplete("J") == []
        assert await client.search("   ") == []
    finally:
        await client.aclose()


async def test_geoapify_autocomplete_filters_to_cities():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/geocode/autocomplete"
        assert request.url.params["type"] == "city"
        return httpx.Response(200, json={"results": [JAIPUR_RESULT]})

    client = GeoapifyClient("geo-key", transport=httpx.MockTransport(handler))
    try:
        locations = await client.autocomplete("Jai")
    finally:
        await client.aclose()

    assert [location.name for location in locations] == ["Jaipur"]


async def test_geoapify_reverse_keeps_requested_coordinates():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["lat"] == "26.9"
        return httpx.Response(200, json={"results": [JAIPUR_RESULT]})

    client = GeoapifyClient("geo-key", transport=httpx.MockTransport(handler))
    try:
        location = await client.reverse(26.9, 75.8)
    finally:
        await client.aclose()

    assert location.name == "Jaipur"
    assert (location.lat, location.lng) == (26.9, 75.8)


async def test_geoapify_reverse_without_match():
    client = GeoapifyClient(
        "geo-key", transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"results": []}))
    )
    try:
        assert await client.reverse(0.0, 0.0) is None
    finally:
        await client.aclose()


async def test_geoapify_http_error_raises_geocoding_error():
    client = GeoapifyClient(
        "bad-key", transport=httpx.MockTransport(lambda request: httpx.Response(401, json={"message": "Invalid"}))
    )
    try:
        with pytest.raises(GeocodingError):
            await client.search_one("Jaipur")
    finally:
        await client.aclose()


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>rate limited</html>"),
        httpx.Response(200, json=[{"lat": 1, "lon": 2}]),
        httpx.Response(200, json={"results": "none"}),
    ],
)
async def test_geoapify_unexpected_body_raises_geocoding_error(response):
    client = GeoapifyClient("geo-key", transport=httpx.MockTransport(lambda request: response))
    try:
        with pytest.raises(GeocodingError):
            await client.search_one("Jaipur")
    finally:
        await client.aclose()


async def test_geocode_nominatim_tries_queries_in_order():
    queries = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = request.url.params["q"]
        queries.append(query)
        if query == "Agra India":
            return httpx.Response(
                200,
                json=[
                    {
                        "lat": "27.1751",
                        "lon": "78.0421",
                        "display_name": "Taj Mahal, Agra, India",
                        "name": "Taj Mahal",
                        "address": {"city": "Agra", "country": "India"},
                    }
                ],
            )
        if query == "Taj Mahal":
            return httpx.Response(500)
        return httpx.Response(200, json=[])

    location = await geocode_nominatim(
        ["Taj Mahal", "x", "", "Mahal Agra", "Agra India", "Agra"],
        transport=httpx.MockTransport(handler),
    )

    assert queries == ["Taj Mahal", "Mahal Agra", "Agra India"]
    assert location.name == "Agra"
    assert location.lat == pytest.approx(27.1751)
    assert location.display_name == "Taj Mahal, Agra, India"


async def test_geocode_nominatim_returns_none_without_usable_queries():
    assert await geocode_nominatim(["", " ", "a"]) is None


@pytest.mark.parametrize("language, code", [("hindi", "hi"), ("English", "en"), (None, "hi"), ("tamil", "en")])
def test_language_code(language, code):
    assert language_code(language) == code


async def test_deepgram_transcribe_returns_best_alternative():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers["Authorization"]
        seen["content_type"] = request.headers["Content-Type"]
        seen["body"] = request.content
        return httpx.Response(
            200,
            json={"results": {"channels": [{"alternatives": [{"transcript": "मुझे जयपुर जाना है"}]}]}},
        )

    client = DeepgramClient("dg-key", transport=httpx.MockTransport(handler))
    try:
        transcript = await client.transcribe(b"RIFF", content_type="audio/wav", language="hindi")
    finally:
        await client.aclose()

    assert transcript == "मुझे जयपुर जाना है"
    assert seen["path"] == "/v1/listen"
    assert seen["params"] == {"language": "hi", "punctuate": "true", "model": "nova-2"}
    assert seen["auth"] == "Token dg-key"
    assert seen["content_type"] == "audio/wav"
    assert seen["body"] == b"RIFF"


async def test_deepgram_silence_gives_empty_transcript():
    client = DeepgramClient(
        "dg-key",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"results": {"channels": []}})),
    )
    try:
        assert await client.transcribe(b"...") == ""
    finally:
        await client.aclose()


async def test_deepgram_error_uses_provider_message():
    client = DeepgramClient(
        "dg-key",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(400, json={"err_msg": "Unsupported audio format"})
        ),
    )
    try:
        with pytest.raises(TranscriptionError, match="Unsupported audio format"):
            await client.transcribe(b"...")
    finally:
        await client.aclose()


async def test_deepgram_error_without_body():
    client = DeepgramClient(
        "dg-key", transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
    )
    try:
        with pytest.raises(TranscriptionError, match="Deepgram API error"):
            await client.transcribe(b"...")
    finally:
        await client.aclose()


async def test_caption_client_reads_generated_text():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/models/Salesforce/blip-image-captioning-large"
        assert request.headers["Authorization"] == "Bearer hf-token"
        return httpx.Response(200, content=json.dumps([{"generated_text": " a view of the taj mahal "}]))

    client = CaptionClient("hf-token", transport=httpx.MockTransport(handler))
    try:
        assert await client.caption(b"img") == "a view of the taj mahal"
    finally:
        await client.aclose()


@pytest.mark.parametrize(
    "status, body, message",
    [
        (503, {"error": "loading"}, "warming up"),
        (401, {"error": "unauthorized"}, "Invalid Hugging Face token"),
        (500, {"error": "boom"}, "Captioning API error 500"),
        (200, [{"generated_text": "   "}], "Empty caption"),
    ],
)
async def test_caption_client_errors(status, body, message):
    client = CaptionClient(
        "hf-token", transport=httpx.MockTransport(lambda request: httpx.Response(status, json=body))
    )
    try:
        with pytest.raises(CaptioningError, match=message):
            await client.caption(b"img")
    finally:
        await client.aclose()
