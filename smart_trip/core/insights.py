"""Destination enrichment: emergency contacts, crowds, food, notifications, chat."""
from __future__ import annotations

import asyncio
import calendar
import json
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from smart_trip.core import llm as profiles
from smart_trip.core.errors import JSONRecoveryError
from smart_trip.core.fallbacks import fallback_crowd_prediction, fallback_emergency_contacts
from smart_trip.core.llm import LLMClient
from smart_trip.core.post_processing import extract_json, parse_json_or_default
from smart_trip.core.prompts import (
    chat_prompt,
    crowd_prompt,
    crowd_system_prompt,
    emergency_prompt,
    emergency_system_prompt,
    food_prompt,
    food_system_prompt,
    notifications_prompt,
    notifications_system_prompt,
)

logger = logging.getLogger(__name__)


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _expect_object(text: str, what: str) -> Dict[str, Any]:
    value = extract_json(text, expect=dict)
    if not isinstance(value, dict):
        raise JSONRecoveryError(f"{what} is not a JSON object")
    return value


def _expect_array(text: str, what: str, *keys: str) -> List[Any]:
    value = parse_json_or_default(text, None, expect=list, collection_keys=keys)
    if not isinstance(value, list):
        raise JSONRecoveryError(f"{what} is not a JSON array")
    return value


async def emergency_contacts(llm: LLMClient, destination: str) -> Dict[str, Any]:
    logger.info("Fetching emergency contacts for %s", destination)
    text = await llm.complete(
        emergency_prompt.format(destination=destination),
        profile=profiles.EMERGENCY,
        system=emergency_system_prompt,
    )
    return _expect_object(text, "Emergency contacts")


async def crowd_prediction(llm: LLMClient, destination: str, start: date, end: date) -> Dict[str, Any]:
    logger.info("Predicting crowd for %s from %s to %s", destination, start, end)
    text = await llm.complete(
        crowd_prompt.format(destination=destination, start_date=start.isoformat(), end_date=end.isoformat()),
        profile=profiles.CROWD,
        system=crowd_system_prompt,
    )
    return _expect_object(text, "Crowd prediction")


async def food_suggestions(llm: LLMClient, destination: str, budget: str) -> List[Any]:
    logger.info("Generating food suggestions for %s", destination)
    text = await llm.complete(
        food_prompt.format(destination=destination, budget=budget),
        profile=profiles.FOOD,
        system=food_system_prompt,
    )
    return _expect_array(text, "Food suggestions", "suggestions", "food")


async def notifications(llm: LLMClient, user_location: Optional[str], today: date) -> List[Any]:
    """Festival and seasonal travel suggestions for the next three months."""

    logger.info("Generating notifications for location: %s", user_location)
    text = await llm.complete(
        notifications_prompt.format(
            today=today.isoformat(),
            until=_add_months(today, 3).isoformat(),
            user_location=user_location or "India",
        ),
        profile=profiles.NOTIFICATIONS,
        system=notifications_system_prompt,
    )
    return _expect_array(text, "Notifications", "notifications")


async def trip_insights(
    llm: LLMClient,
    *,
    destination: str,
    start: date,
    end: date,
    budget: str,
) -> Dict[str, Any]:
    """Emergency contacts, crowd outlook and food ideas fetched in parallel.

    Each part degrades to its own fallback; one failure never hides the others.
    """

    contacts, prediction, suggestions = await asyncio.gather(
        emergency_contacts(llm, destination),
        crowd_prediction(llm, destination, start, end),
        food_suggestions(llm, destination, budget),
        return_exceptions=True,
    )
    if isinstance(contacts, BaseException):
        logger.warning("Emergency contacts unavailable: %s", contacts)
        contacts = fallback_emergency_contacts()
    if isinstance(prediction, BaseException):
        logger.warning("Crowd prediction unavailable: %s", prediction)
        prediction = fallback_crowd_prediction()
    if isinstance(suggestions, BaseException):
        logger.warning("Food suggestions unavailable: %s", suggestions)
        suggestions = []
    return {"contacts": contacts, "prediction": prediction, "suggestions": suggestions}


def _trip_context(itinerary: Optional[Mapping[str, Any]], weather: Optional[Mapping[str, Any]]) -> str:
    if not itinerary:
        return "No trip planned yet."

    weather_line = "Not loaded"
    current = (weather or {}).get("current") if weather else None
    if isinstance(current, Mapping):
        weather_line = f"{current.get('temp')}°C, {current.get('condition')}"
    return (
        f"Current trip: {itinerary.get('startLocation')} to {itinerary.get('destination')}, "
        f"{itinerary.get('dates')}, Budget: {itinerary.get('budget')}\n"
        f"Weather: {weather_line}"
    )


def _unwrap_chat_json(text: str) -> str:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text
    if not isinstance(parsed, dict):
        return text
    if parsed.get("message"):
        return str(parsed["message"])
    if parsed.get("greeting"):
        return f"{parsed['greeting']}. How can I help you?"
    return text


async def chat_reply(
    llm: LLMClient,
    message: str,
    *,
    itinerary: Optional[Mapping[str, Any]] = None,
    weather: Optional[Mapping[str, Any]] = None,
) -> str:
    """Plain-text answer to a traveller question about the current trip."""

    prompt = chat_prompt.format(context=_trip_context(itinerary, weather), message=message)
    text = await llm.complete(prompt, profile=profiles.CHAT)
    return _unwrap_chat_json(text.strip())
