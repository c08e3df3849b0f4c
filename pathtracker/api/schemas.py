"""Request body models for the HTTP boundary."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StartSessionRequest(BaseModel):
    """Body of POST /api/session/start."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    duration: float = Field(gt=0, description="Planned duration in minutes")


class LocationUpdateRequest(BaseModel):
    """Body of POST /api/location/update."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    timestamp: Optional[datetime] = None
