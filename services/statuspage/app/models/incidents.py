from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db import Base
from .mixins import SerializableMixin, SoftDeleteMixin, TimestampMixin


class IncidentStatus(IntEnum):
    SCHEDULED = 0
    INVESTIGATING = 1
    IDENTIFIED = 2
    WATCHING = 3
    FIXED = 4


class Incident(SerializableMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "incidents"
    __table_args__ = (
        # Public page lists visible incidents, stickied first
        Index("ix_incidents_visible_stickied", "visible", "stickied"),
        Index("ix_incidents_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(IncidentStatus.INVESTIGATING)
    )
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    stickied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    updates: Mapped[list[IncidentUpdate]] = relationship(
        "IncidentUpdate", back_populates="incident", cascade="all, delete-orphan"
    )

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_at is not None


class IncidentUpdate(SerializableMixin, TimestampMixin, Base):
    """A status change posted against an incident."""

    __tablename__ = "incident_updates"
    __table_args__ = (
        # Timeline for one incident, newest first
        Index("ix_incident_updates_incident_created", "incident_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    incident_id: Mapped[int] = mapped_column(
        ForeignKey("incidents.id"), nullable=False, index=True
    )
    status: Mapped[int] = mapped_column(Integer, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    incident: Mapped[Incident] = relationship("Incident", back_populates="updates")

    @property
    def scheduled_at(self) -> Optional[datetime]:
        return self.incident.scheduled_at if self.incident is not None else None

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_at is not None
