from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import Field, model_validator
from smart_trip.core.schemas import ApiModel, TripData
from smart_trip.core.types import BudgetLevel, VoiceLanguage


class GenerateRequest(ApiModel):
    """Free-form prompt answered in JSON-only mode."""

    prompt: str = Field(min_length=1)


class ItineraryRequest(TripData):
    """Planning form state used to build the full itinerary."""
    pass


class WeatherRequest(ApiModel):
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    lat: Optional[float] = None
    lng: Optional[float] = None
    days: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_dates(self) -> "WeatherRequest":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class HotelsRequest(ApiModel):
    destination: str = Field(min_length=1)
    check_in: date
    check_out: date
    budget: BudgetLevel = "Moderate"

    @model_validator(mode="after")
    def _check_dates(self) -> "HotelsRequest":
        if self.check_out < self.check_in:
            raise ValueError("checkOut must not be before checkIn")
        return self


class RailwaysRequest(ApiModel):
    start_location: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    budget: BudgetLevel = "Moderate"


class DestinationRequest(ApiModel):
    destination: str = Field(min_length=1)


class FoodRequest(DestinationRequest):
    budget: BudgetLevel = "Moderate"


class CrowdRequest(DestinationRequest):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _check_dates(self) -> "CrowdRequest":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class TripInsightsRequest(CrowdRequest):
    budget: BudgetLevel = "Moderate"


class NotificationsRequest(ApiModel):
    user_location: Optional[str] = None


class ChatRequest(ApiModel):
    message: str = Field(min_length=1)
    itinerary: Optional[Dict[str, Any]] = None
    weather: Optional[Dict[str, Any]] = None


class VoiceTurnRequest(ApiModel):
    """One utterance of the staged voice conversation."""

    user_input: str = Field(alias="input", min_length=1)
    stage: int = Field(default=0, ge=0, le=5)
    collected_data: Dict[str, Any] = Field(default_factory=dict)
    language: VoiceLanguage = "hindi"


class VoiceResolveRequest(ApiModel):
    collected_data: Dict[str, Any] = Field(default_factory=dict)


class UserSyncRequest(ApiModel):
    """Profile fields forwarded by the front-end after sign-in."""

    name: Optional[str] = None
    image: Optional[str] = None


class SaveTripRequest(ApiModel):
    """A generated trip stored verbatim."""

    itinerary: Dict[str, Any]
    weather: Optional[Dict[str, Any]] = None
    hotels: Optional[List[Any]] = None
    railways: Optional[List[Any]] = None
