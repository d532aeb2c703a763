"""Column mixins shared by the status page models."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, inspect
from sqlalchemy.orm import Mapped, mapped_column

from ..core.dates import app_now


class SerializableMixin:
    """Expose a model's own mapped columns as a plain dict.

    Relationships and computed properties are left out; presenters add the
    display fields on top of this.
    """

    def to_dict(self) -> dict[str, Any]:
        mapper = inspect(self).mapper
        return {attr.key: getattr(self, attr.key) for attr in mapper.column_attrs}


class TimestampMixin:
    """created_at / updated_at maintained on insert and update."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=app_now,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=app_now,
        onupdate=app_now,
    )


class SoftDeleteMixin:
    """
    Records hidden from the status page keep their row with deleted_at set.

    Queries for public data filter on ``Model.deleted_at.is_(None)``.
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None, index=True
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        if not self.is_deleted:
            self.deleted_at = app_now()

    def restore(self) -> None:
        self.deleted_at = None
