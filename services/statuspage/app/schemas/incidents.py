"""
Pydantic schemas for incident and incident update endpoints.

Status codes follow the incident status enum:
0 scheduled, 1 investigating, 2 identified, 3 watching, 4 fixed.
"""

from datetime import datetime

from pydantic import BaseModel, Field, validator


def _strip(v):
    if isinstance(v, str):
        return v.strip()
    return v


class IncidentCreateRequest(BaseModel):
    """Request schema for creating an incident."""

    name: str = Field(..., min_length=1, max_length=255, description="Incident name")
    status: int = Field(..., ge=0, le=4, description="Incident status code")
    message: str = Field("", max_length=10000, description="Markdown message")
    visible: bool = Field(True, description="Show on the public status page")
    stickied: bool = Field(False, description="Pin to the top of the status page")
    scheduled_at: datetime | None = Field(
        None, description="Start of scheduled maintenance"
    )

    @validator("name", pre=True)
    def validate_name(cls, v):
        return _strip(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Elevated API error rates",
                "status": 1,
                "message": "We are investigating increased **5xx** responses.",
                "visible": True,
            }
        }


class IncidentResponse(BaseModel):
    """Response schema for incident data."""

    id: int
    name: str
    status: int
    message: str
    visible: bool
    stickied: bool
    scheduled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class IncidentUpdateCreateRequest(BaseModel):
    """Request schema for posting an update to an incident."""

    status: int = Field(..., ge=0, le=4, description="New incident status code")
    message: str = Field(..., min_length=1, max_length=10000, description="Markdown message")

    @validator("message", pre=True)
    def validate_message(cls, v):
        """Whitespace-only messages are rejected by min_length."""
        return _strip(v)

    class Config:
        json_schema_extra = {
            "example": {
                "status": 2,
                "message": "The cause has been identified as a failing cache node.",
            }
        }


class IncidentUpdateEditRequest(BaseModel):
    """Request schema for editing an incident update."""

    status: int | None = Field(None, ge=0, le=4)
    message: str | None = Field(None, min_length=1, max_length=10000)

    @validator("message", pre=True)
    def validate_message(cls, v):
        return _strip(v)


class IncidentUpdateResponse(BaseModel):
    """An incident update as presented to API clients."""

    id: int = Field(..., description="Update ID")
    incident_id: int = Field(..., description="Parent incident ID")
    status: int = Field(..., description="Status code")
    message: str = Field(..., description="Markdown message")
    human_status: str = Field(..., description="Localized status label")
    permalink: str = Field(..., description="Link to the update on the incident page")
    created_at: str | None = Field(None, description="Display timezone, YYYY-MM-DD HH:MM:SS")
    updated_at: str | None = Field(None, description="Display timezone, YYYY-MM-DD HH:MM:SS")

    class Config:
        json_schema_extra = {
            "example": {
                "id": 42,
                "incident_id": 7,
                "status": 4,
                "message": "Resolved.",
                "human_status": "Fixed",
                "permalink": "https://status.example.com/incidents/7#update-42",
                "created_at": "2026-10-19 14:30:00",
                "updated_at": "2026-10-19 14:30:00",
            }
        }


class DeletedResponse(BaseModel):
    ok: bool = True
    id: int
