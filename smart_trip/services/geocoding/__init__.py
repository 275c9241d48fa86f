"""Geocoding and location resolution services.

This module provides forward, reverse and autocomplete geocoding through the
Geoapify API, plus a Nominatim (OpenStreetMap) lookup that walks a cascade of
increasingly coarse queries.

Public API:
    - GeoapifyClient: async client for search / autocomplete / reverse
    - create_geoapify_client: factory using project configuration
    - geocode_nominatim: first hit over a list of queries
"""
from smart_trip.services.geocoding.client import (
    GeoapifyClient,
    create_geoapify_client,
    geocode_nominatim,
)

__all__ = [
    "GeoapifyClient",
    "create_geoapify_client",
    "geocode_nominatim",
]
