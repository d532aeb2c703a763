from typing import Optional


class TimestampsMixin:
    """Standard record timestamps as ``YYYY-MM-DD HH:MM:SS`` in the display timezone."""

    def _date_time_string(self, value) -> Optional[str]:
        date = self.dates.make(value)
        return date.to_date_time_string() if date is not None else None

    @property
    def created_at(self) -> Optional[str]:
        return self._date_time_string(self.wrapped_object.created_at)

    @property
    def updated_at(self) -> Optional[str]:
        return self._date_time_string(self.wrapped_object.updated_at)

    @property
    def deleted_at(self) -> Optional[str]:
        return self._date_time_string(getattr(self.wrapped_object, "deleted_at", None))

    def incident_date_format(self) -> str:
        return self.dates.incident_date_format
