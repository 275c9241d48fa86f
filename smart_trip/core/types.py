"""Shared type aliases used across the planner modules."""
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

Lat = Annotated[float, Field(ge=-90, le=90)]
Lon = Annotated[float, Field(ge=-180, le=180)]
Travelers = Literal["Solo", "Duo", "Group"]
BudgetLevel = Literal["Low", "Moderate", "High"]
TransportMode = Literal["Bus", "Train"]
VoiceLanguage = Literal["hindi", "english"]
IdentifyMode = Literal["vision", "caption"]
