"""User sync and saved-trip endpoints."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smart_trip.api.dependencies import get_current_email, get_session
from smart_trip.api.response_builder import failure, success
from smart_trip.api.schemas import SaveTripRequest, UserSyncRequest
from smart_trip.storage import TripRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trips"])


@router.post("/users/sync")
def sync_user(
    payload: UserSyncRequest,
    email: str = Depends(get_current_email),
    session: Session = Depends(get_session),
) -> Any:
    """Create or refresh the signed-in user's profile row."""

    try:
        user = TripRepository(session).save_user(email, name=payload.name, image=payload.image)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Error saving user %s: %s", email, exc, exc_info=True)
        return failure(500, "Failed to save user")
    return success(user=user.to_dict())


@router.get("/trips")
def list_trips(
    email: str = Depends(get_current_email),
    session: Session = Depends(get_session),
) -> Any:
    repository = TripRepository(session)
    user = repository.require_user(email)
    try:
        trips = repository.list_trips(user)
    except SQLAlchemyError as exc:
        logger.error("Error fetching trips for %s: %s", email, exc, exc_info=True)
        return failure(500, "Failed to fetch trips")
    return success(trips=[trip.to_dict() for trip in trips])


@router.post("/trips/save")
def save_trip(
    payload: SaveTripRequest,
    email: str = Depends(get_current_email),
    session: Session = Depends(get_session),
) -> Any:
    repository = TripRepository(session)
    user = repository.require_user(email)
    try:
        trip = repository.save_trip(
            user,
            itinerary=payload.itinerary,
            weather=payload.weather,
            hotels=payload.hotels,
            railways=payload.railways,
        )
    except ValueError as exc:
        return failure(400, exc)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Error saving trip for %s: %s", email, exc, exc_info=True)
        return failure(500, "Failed to save trip")
    return success(trip=trip.to_dict())


@router.delete("/trips/delete")
def delete_trip(
    trip_id: Optional[str] = Query(default=None, alias="id"),
    email: str = Depends(get_current_email),
    session: Session = Depends(get_session),
) -> Any:
    """Delete one of the caller's trips; other users' trips are reported as not found."""

    if not trip_id:
        return failure(400, "Trip ID required")

    repository = TripRepository(session)
    user = repository.require_user(email)
    try:
        repository.delete_trip(user, trip_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Error deleting trip %s: %s", trip_id, exc, exc_info=True)
        return failure(500, "Failed to delete trip")
    return success()
