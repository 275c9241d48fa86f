"""Relational persistence for users and saved trips.

Public API:
    - User, Trip: SQLAlchemy models
    - TripRepository: queries bound to one session
    - create_db_engine, create_session_factory, init_db: engine helpers
"""
from smart_trip.storage.database import create_db_engine, create_session_factory, init_db
from smart_trip.storage.models import Base, Trip, User
from smart_trip.storage.repository import TripRepository

__all__ = [
    "Base",
    "Trip",
    "User",
    "TripRepository",
    "create_db_engine",
    "create_session_factory",
    "init_db",
]
