"""Persistence operations for users and saved trips."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from smart_trip.core.errors import TripNotFoundError, UserNotFoundError
from smart_trip.storage.models import Trip, User, _now

logger = logging.getLogger(__name__)


def _split_dates(dates: Any) -> tuple[str, str]:
    parts = str(dates or "").split(" to ")
    start = parts[0].strip() if parts else ""
    end = parts[1].strip() if len(parts) > 1 else start
    return start, end


class TripRepository:
    """User and trip queries bound to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.session.scalar(select(User).where(User.email == email))

    def require_user(self, email: str) -> User:
        user = self.get_user_by_email(email)
        if user is None:
            raise UserNotFoundError("User not found")
        return user

    def save_user(self, email: str, name: Optional[str] = None, image: Optional[str] = None) -> User:
        """Create the user on first sign-in, refresh name and image afterwards."""

        user = self.get_user_by_email(email)
        if user is None:
            user = User(email=email, name=name, image=image, email_verified=_now())
            self.session.add(user)
            logger.info("New user created: %s", email)
        else:
            user.name = name
            user.image = image
            logger.info("User updated: %s", email)
        self.session.commit()
        return user

    def list_trips(self, user: User) -> List[Trip]:
        """The user's trips, newest first."""

        stmt = select(Trip).where(Trip.user_id == user.id).order_by(Trip.created_at.desc())
        return list(self.session.scalars(stmt))

    def save_trip(
        self,
        user: User,
        *,
        itinerary: Mapping[str, Any],
        weather: Optional[Any] = None,
        hotels: Optional[Any] = None,
        railways: Optional[Any] = None,
    ) -> Trip:
        """Persist a generated trip verbatim alongside its summary columns.

        Raises:
            ValueError: when ``itinerary`` lacks the summary fields.
        """

        missing = [key for key in ("startLocation", "destination", "dates") if not itinerary.get(key)]
        if missing:
            raise ValueError(f"Itinerary is missing required fields: {', '.join(missing)}")

        start_date, end_date = _split_dates(itinerary.get("dates"))
        transport = itinerary.get("transport")
        mode = transport.get("mode") if isinstance(transport, Mapping) else transport

        trip = Trip(
            user_id=user.id,
            start_location=str(itinerary["startLocation"]),
            destination=str(itinerary["destination"]),
            start_date=start_date,
            end_date=end_date,
            travelers=str(itinerary.get("travelers") or ""),
            budget=str(itinerary.get("budget") or ""),
            transport=str(mode or ""),
            itinerary=dict(itinerary),
            weather=weather or None,
            hotels=hotels or None,
            railways=railways or None,
        )
        self.session.add(trip)
        self.session.commit()
        logger.info("Saved trip %s for %s", trip.id, user.email)
        return trip

    def delete_trip(self, user: User, trip_id: str) -> None:
        """Delete ``trip_id`` when it belongs to ``user``.

        Raises:
            TripNotFoundError: when the trip is missing or owned by someone else.
        """

        trip = self.session.scalar(select(Trip).where(Trip.id == trip_id, Trip.user_id == user.id))
        if trip is None:
            raise TripNotFoundError("Trip not found or unauthorized")
        self.session.delete(trip)
        self.session.commit()
        logger.info("Deleted trip %s for %s", trip_id, user.email)
