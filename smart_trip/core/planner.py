"""Itinerary features: weather, hotels, trains, transport and the day plan."""
from __future__ import annotations

import asyncio
import logging
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from smart_trip.core import llm as profiles
from smart_trip.core.errors import ItineraryParseError, JSONRecoveryError, LLMError
from smart_trip.core.fallbacks import default_day_activities, fallback_hotels, fallback_weather
from smart_trip.core.llm import LLMClient
from smart_trip.core.post_processing import clean_llm_text, extract_json, parse_json_or_default
from smart_trip.core.prompts import (
    hotels_prompt,
    itinerary_prompt,
    json_only_system_prompt,
    railways_prompt,
    transport_prompt,
    weather_prompt,
    weather_system_prompt,
)
from smart_trip.core.schemas import TripData

logger = logging.getLogger(__name__)

ACTIVITY_DEFAULTS = {"time": "09:00 AM", "activity": "Activity", "cost": "₹0"}


def trip_days(start: date, end: date) -> int:
    """Inclusive number of days between ``start`` and ``end``."""

    return (end - start).days + 1


def season_for(month: int) -> str:
    """Northern-hemisphere season for a 1-based month number."""

    if 3 <= month <= 5:
        return "Spring"
    if 6 <= month <= 8:
        return "Summer"
    if 9 <= month <= 11:
        return "Autumn"
    return "Winter"


async def generate_raw(llm: LLMClient, prompt: str) -> str:
    """Run a caller-supplied prompt in JSON-only mode and return cleaned text."""

    text = await llm.complete(prompt, profile=profiles.GENERATE, system=json_only_system_prompt)
    cleaned = clean_llm_text(text)
    logger.debug("Cleaned response: %s", cleaned)
    return cleaned


def _pad_forecast(weather: Dict[str, Any], start: date, days: int) -> Dict[str, Any]:
    forecast = weather.get("forecast")
    if not isinstance(forecast, list) or not forecast:
        return weather

    if len(forecast) < days:
        logger.warning("Weather only has %s days, generating %s more", len(forecast), days - len(forecast))
    while len(forecast) < days:
        last = forecast[-1] if isinstance(forecast[-1], dict) else {}
        temp = last.get("temp")
        forecast.append(
            {
                "date": (start + timedelta(days=len(forecast))).isoformat(),
                "temp": temp + random.randint(-3, 2) if isinstance(temp, (int, float)) else temp,
                "minTemp": last.get("minTemp"),
                "maxTemp": last.get("maxTemp"),
                "condition": last.get("condition"),
                "humidity": last.get("humidity"),
                "description": "Continued conditions",
            }
        )
    return weather


async def generate_weather(
    llm: LLMClient,
    *,
    destination: str,
    start: date,
    end: date,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    days: Optional[int] = None,
) -> Dict[str, Any]:
    """Forecast for the whole trip; never fails, degrading to a fallback forecast."""

    days = days or trip_days(start, end)
    prompt = weather_prompt.format(
        destination=destination,
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        days=days,
        lat=lat,
        lng=lng,
        month=start.strftime("%B"),
        season=season_for(start.month),
    )
    try:
        text = await llm.complete(prompt, profile=profiles.WEATHER, system=weather_system_prompt)
    except LLMError as exc:
        logger.error("Weather generation failed, serving fallback: %s", exc)
        return fallback_weather(destination, start, days)

    weather = parse_json_or_default(text, None, expect=dict)
    if weather is None:
        logger.error("Failed to parse weather JSON for %s", destination)
        return fallback_weather(destination, start, days)
    return _pad_forecast(weather, start, days)


async def generate_hotels(
    llm: LLMClient,
    *,
    destination: str,
    check_in: date,
    check_out: date,
    budget: str,
) -> List[Dict[str, Any]]:
    """Three hotel suggestions; unparseable output yields the fallback list."""

    prompt = hotels_prompt.format(
        destination=destination,
        check_in=check_in.isoformat(),
        check_out=check_out.isoformat(),
        budget=budget,
    )
    text = await llm.complete(prompt, profile=profiles.HOTELS)
    hotels = parse_json_or_default(
        text,
        fallback_hotels(destination, budget),
        expect=list,
        collection_keys=("hotels",),
    )
    logger.info("Generated %s hotels for %s", len(hotels), destination)
    return hotels


async def generate_railways(
    llm: LLMClient,
    *,
    start_location: str,
    destination: str,
    budget: str,
) -> List[Dict[str, Any]]:
    """Train suggestions; anything but a JSON array becomes an empty list."""

    prompt = railways_prompt.format(start_location=start_location, destination=destination, budget=budget)
    text = await llm.complete(prompt, profile=profiles.GENERATE, system=json_only_system_prompt)
    railways = parse_json_or_default(text, [], expect=list, collection_keys=("trains", "railways"))
    logger.info("Railways parsed: %s trains", len(railways))
    return railways


async def generate_transport(llm: LLMClient, trip: TripData) -> Dict[str, Any]:
    """Journey details for the chosen transport mode.

    Raises:
        JSONRecoveryError: when the model output holds no JSON object.
    """

    start, destination = trip.require_locations()
    prompt = transport_prompt.format(
        start_location=start.name,
        destination=destination.name,
        mode=trip.transport,
        budget=trip.budget,
        travelers=trip.travelers,
    )
    text = await llm.complete(prompt, profile=profiles.GENERATE, system=json_only_system_prompt)
    details = extract_json(text, expect=dict)
    if not isinstance(details, dict):
        raise JSONRecoveryError("Transport details are not a JSON object")
    return details


def normalise_day_plan(
    plan: List[Any],
    *,
    days: int,
    start: date,
    destination: str,
) -> List[Dict[str, Any]]:
    """Force the recovered plan to exactly ``days`` well-formed day entries."""

    normalised: List[Dict[str, Any]] = []
    for index, raw_day in enumerate(plan[:days]):
        day = dict(raw_day) if isinstance(raw_day, dict) else {}
        if not day.get("day"):
            day["day"] = index + 1
        if not day.get("date"):
            day["date"] = (start + timedelta(days=index)).isoformat()

        activities = day.get("activities")
        if not isinstance(activities, list) or not activities:
            logger.warning("Day %s has no activities, adding defaults", day["day"])
            activities = default_day_activities(destination)

        day["activities"] = [
            {
                **ACTIVITY_DEFAULTS,
                **{key: value for key, value in (item if isinstance(item, dict) else {}).items() if value},
            }
            for item in activities
        ]
        normalised.append(day)

    while len(normalised) < days:
        index = len(normalised)
        logger.warning("Adding missing day %s", index + 1)
        normalised.append(
            {
                "day": index + 1,
                "date": (start + timedelta(days=index)).isoformat(),
                "activities": default_day_activities(destination),
            }
        )
    return normalised


async def generate_daily_itinerary(llm: LLMClient, trip: TripData, *, days: int) -> List[Dict[str, Any]]:
    """Day-by-day plan for the trip.

    Raises:
        ItineraryParseError: when the reply is not a JSON array of days (or
            an object wrapping one under ``days``).
    """

    _, destination = trip.require_locations()
    logger.info("Generating %s-day itinerary for %s", days, destination.name)
    prompt = itinerary_prompt.format(
        destination=destination.name,
        days=days,
        travelers=trip.travelers,
        budget=trip.budget,
        start_date=trip.start_date.isoformat(),
        end_date=trip.end_date.isoformat(),
    )
    text = await llm.complete(prompt, profile=profiles.GENERATE, system=json_only_system_prompt)

    try:
        plan = extract_json(text)
    except JSONRecoveryError as exc:
        logger.error("Failed to parse itinerary: %s", exc)
        raise ItineraryParseError(f"Failed to parse itinerary: {exc}") from exc

    if isinstance(plan, dict) and isinstance(plan.get("days"), list):
        plan = plan["days"]
    if not isinstance(plan, list):
        raise ItineraryParseError("Itinerary is not an array")

    logger.info("Parsed %s days from model output", len(plan))
    result = normalise_day_plan(plan, days=days, start=trip.start_date, destination=destination.name)
    logger.info("Final validated itinerary: %s days", len(result))
    return result


async def _no_railways() -> List[Dict[str, Any]]:
    return []


async def generate_complete_itinerary(llm: LLMClient, trip: TripData) -> Dict[str, Any]:
    """Assemble itinerary, weather, hotels and trains for a trip.

    The five model calls are independent and run concurrently; the first
    failure (other than weather, which degrades) propagates.
    """

    start, destination = trip.require_locations()
    days = trip_days(trip.start_date, trip.end_date)
    logger.info("Trip duration: %s days from %s to %s", days, trip.start_date, trip.end_date)

    railways_call = (
        generate_railways(llm, start_location=start.name, destination=destination.name, budget=trip.budget)
        if trip.transport == "Train"
        else _no_railways()
    )
    weather, transport, railways, day_plan, hotels = await asyncio.gather(
        generate_weather(
            llm,
            destination=destination.name,
            start=trip.start_date,
            end=trip.end_date,
            lat=destination.lat,
            lng=destination.lng,
            days=days,
        ),
        generate_transport(llm, trip),
        railways_call,
        generate_daily_itinerary(llm, trip, days=days),
        generate_hotels(
            llm,
            destination=destination.name,
            check_in=trip.start_date,
            check_out=trip.end_date,
            budget=trip.budget,
        ),
    )

    itinerary = {
        "startLocation": start.name,
        "destination": destination.name,
        "dates": f"{trip.start_date.isoformat()} to {trip.end_date.isoformat()}",
        "travelers": trip.travelers,
        "budget": trip.budget,
        "transport": {"mode": trip.transport, **transport},
        "days": day_plan,
    }
    return {"itinerary": itinerary, "weather": weather, "hotels": hotels, "railways": railways}
