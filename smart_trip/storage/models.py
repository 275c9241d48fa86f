"""SQLAlchemy models for users and their saved trips."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    image: Mapped[Optional[str]] = mapped_column(String(1024))
    email_verified: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    trips: Mapped[List["Trip"]] = relationship(back_populates="user", cascade="all, delete-orphan")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "image": self.image,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Trip(Base):
    __tablename__ = "trips"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    start_location: Mapped[str] = mapped_column(String(255))
    destination: Mapped[str] = mapped_column(String(255))
    start_date: Mapped[str] = mapped_column(String(32))
    end_date: Mapped[str] = mapped_column(String(32))
    travelers: Mapped[str] = mapped_column(String(32))
    budget: Mapped[str] = mapped_column(String(32))
    transport: Mapped[str] = mapped_column(String(32))
    itinerary: Mapped[Dict[str, Any]] = mapped_column(JSON)
    weather: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    hotels: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True)
    railways: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    user: Mapped[User] = relationship(back_populates="trips")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "startLocation": self.start_location,
            "destination": self.destination,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "travelers": self.travelers,
            "budget": self.budget,
            "transport": self.transport,
            "itinerary": self.itinerary,
            "weather": self.weather,
            "hotels": self.hotels,
            "railways": self.railways,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
