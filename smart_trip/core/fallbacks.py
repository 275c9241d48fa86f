"""Static payloads served when the model output cannot be used.

Every builder returns a fresh object so callers may mutate the result.
"""
from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Any, Dict, List

FALLBACK_BASE_TEMP = 25
FALLBACK_CONDITIONS = ("Sunny", "Partly Cloudy", "Cloudy")
HOTEL_PRICE_BY_BUDGET = {
    "High": "₹6,500/night",
    "Moderate": "₹2,800/night",
    "Low": "₹1,200/night",
}


def fallback_weather(destination: str, start: date, days: int) -> Dict[str, Any]:
    base = FALLBACK_BASE_TEMP
    return {
        "current": {
            "temp": base,
            "feelsLike": base + 2,
            "condition": "Partly Cloudy",
            "description": f"Pleasant weather in {destination}",
            "humidity": 65,
            "windSpeed": 12,
            "icon": "02d",
        },
        "forecast": [
            {
                "date": (start + timedelta(days=offset)).isoformat(),
                "temp": base + random.randint(-3, 2),
                "minTemp": base - 5,
                "maxTemp": base + 5,
                "condition": random.choice(FALLBACK_CONDITIONS),
                "humidity": 60 + random.randint(0, 19),
                "description": "Pleasant day",
            }
            for offset in range(max(days, 0))
        ],
    }


def fallback_hotels(destination: str, budget: str) -> List[Dict[str, Any]]:
    return [
        {
            "name": f"The Grand {destination} Hotel",
            "price": HOTEL_PRICE_BY_BUDGET.get(budget, HOTEL_PRICE_BY_BUDGET["Low"]),
            "rating": "4.5",
            "address": f"{destination} City Center",
            "amenities": "WiFi, Pool, Restaurant, Gym",
        }
    ]


def fallback_emergency_contacts() -> Dict[str, str]:
    return {
        "police": "100",
        "ambulance": "108",
        "fire": "101",
        "tourist": "1363",
        "helpline": "1363",
    }


def fallback_crowd_prediction() -> Dict[str, Any]:
    return {
        "level": "🟡 Moderate",
        "description": "Tourist season with moderate crowds",
        "tips": "Book accommodations in advance",
        "festivals": [],
        "bestTimeToVisit": "Early morning or late evening",
    }


def fallback_notifications(today: date) -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Upcoming Festivals",
            "message": "Plan your trip around upcoming Indian festivals for unique cultural experiences",
            "destination": "India",
            "date": today.isoformat(),
            "icon": "🎉",
            "category": "festival",
        }
    ]


def fallback_vision_result() -> Dict[str, Any]:
    return {
        "location": "Unknown",
        "city": "Unknown",
        "country": "Unknown",
        "confidence": "Low",
        "reasoning": (
            "Unable to identify location from image. Image may not contain clear "
            "landmarks or identifiable features."
        ),
        "landmarks": [],
        "lat": None,
        "lng": None,
        "category": "Unknown",
    }


def fallback_caption_location() -> Dict[str, str]:
    return {
        "name": "Unknown Location",
        "city": "",
        "country": "",
        "landmark": "",
        "description": "Could not identify a specific location from this image.",
        "confidence": "low",
    }


def default_day_activities(destination: str) -> List[Dict[str, str]]:
    """Five-slot day used when the model leaves a day empty."""

    return [
        {"time": "09:00 AM", "activity": f"Morning in {destination}", "cost": "₹300"},
        {"time": "11:00 AM", "activity": "Sightseeing", "cost": "₹500"},
        {"time": "02:00 PM", "activity": "Lunch", "cost": "₹400"},
        {"time": "04:00 PM", "activity": "Explore", "cost": "₹200"},
        {"time": "07:00 PM", "activity": "Dinner", "cost": "₹600"},
    ]
