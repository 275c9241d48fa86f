"""Pydantic data models shared by the planner features.

Model output is kept as plain JSON (dicts / lists) wherever it is persisted or
echoed back verbatim; the models below cover the values the application
itself constructs or validates:

- Location: a geocoded place as returned by the geocoding services
- TripData: the form state used to build every itinerary prompt
- VisionResult / CaptionResult: normalised landmark identification output
- PilgrimagePlace: entries of the static pilgrimage catalogue
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from smart_trip.core.types import BudgetLevel, Lat, Lon, TransportMode, Travelers


class ApiModel(BaseModel):
    """Base model exposing camelCase aliases to the front-end."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(ApiModel):
    """A geocoded place."""

    name: str = Field(description="Short place name, usually the city")
    display_name: Optional[str] = Field(default=None, description="Provider formatted address")
    lat: Lat
    lng: Lon
    country: Optional[str] = None


class TripData(ApiModel):
    """Trip parameters collected from the planning form or the voice assistant."""

    start_location: Optional[Location] = None
    destination: Optional[Location] = None
    start_date: date
    end_date: date
    travelers: Travelers = "Solo"
    budget: BudgetLevel = "Moderate"
    transport: TransportMode = "Train"

    @model_validator(mode="after")
    def _check_dates(self) -> "TripData":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

    def require_locations(self) -> tuple[Location, Location]:
        """Return start and destination, failing when either is missing."""

        if self.start_location is None or self.destination is None:
            raise ValueError("startLocation and destination are required")
        return self.start_location, self.destination


class VisionResult(ApiModel):
    """Landmark analysis produced by the vision model."""

    location: str = "Unknown"
    city: str = "Unknown"
    country: str = "Unknown"
    confidence: str = "Low"
    reasoning: str = "Analysis completed"
    landmarks: List[str] = Field(default_factory=list)
    lat: Optional[float] = None
    lng: Optional[float] = None
    category: str = "Unknown"


class CaptionResult(ApiModel):
    """Landmark extracted from an image caption and geocoded."""

    caption: str
    name: str = "Unknown Location"
    city: str = ""
    country: str = ""
    landmark: str = ""
    description: str = ""
    confidence: str = "low"
    lat: Optional[float] = None
    lng: Optional[float] = None
    display_name: Optional[str] = None


class PilgrimagePlace(ApiModel):
    """A sacred site in the pilgrimage catalogue."""

    id: str
    name: str
    location: str
    religion: str
    description: str
    image: str = "/"
    lat: Lat
    lng: Lon
    significance: str
    best_time_to_visit: str
