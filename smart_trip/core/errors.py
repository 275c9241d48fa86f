"""Exceptions raised by the planner features and service clients."""
from __future__ import annotations


class SmartTripError(Exception):
    """Base class for all application errors."""


class LLMError(SmartTripError):
    """The language model call failed or produced no content."""


class JSONRecoveryError(SmartTripError):
    """No JSON value could be recovered from the model output."""


class ItineraryParseError(SmartTripError):
    """The day-by-day plan could not be recovered from the model output."""


class GeocodingError(SmartTripError):
    """The geocoding provider rejected the request."""


class TranscriptionError(SmartTripError):
    """Speech-to-text failed."""


class CaptioningError(SmartTripError):
    """Image captioning failed."""


class UserNotFoundError(SmartTripError):
    """No user row exists for the authenticated email."""


class TripNotFoundError(SmartTripError):
    """The trip does not exist or belongs to another user."""


class UnauthorizedError(SmartTripError):
    """The request carries no valid bearer token."""


class ServiceUnavailableError(SmartTripError):
    """A feature needs a service whose credentials are not configured."""
