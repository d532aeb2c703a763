from typing import Any, Optional

from ..core.dates import DATETIMEPICKER_FORMAT
from .base import BasePresenter
from .timestamps import TimestampsMixin


def _ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


class IncidentUpdatePresenter(TimestampsMixin, BasePresenter):
    """
    Display fields for an incident update.

    Used by the incident page template and as the JSON body of the incident
    update API.
    """

    icons = {
        0: "icon ion-android-calendar",  # Scheduled
        1: "icon ion-alert-circled",  # Investigating
        2: "icon ion-bug",  # Identified
        3: "icon ion-eye",  # Watching
        4: "icon ion-checkmark-circled greens",  # Fixed
    }

    @property
    def formatted_message(self) -> str:
        """The message rendered from Markdown into HTML."""
        return self.markdown.convert_to_html(self.wrapped_object.message)

    @property
    def raw_message(self) -> str:
        """The message as plain text, without Markdown or HTML."""
        return self.markdown.strip_tags(self.formatted_message)

    @property
    def created_at_diff(self) -> str:
        return self.dates.make(self.wrapped_object.created_at).diff_for_humans()

    @property
    def created_at_formatted(self) -> str:
        return _ucfirst(
            self.dates.make(self.wrapped_object.created_at).format(self.incident_date_format())
        )

    @property
    def created_at_datetimepicker(self) -> str:
        """created_at in the format the admin datetime picker expects."""
        return self.dates.make(self.wrapped_object.created_at).strftime(DATETIMEPICKER_FORMAT)

    @property
    def created_at_iso(self) -> str:
        return self.dates.make(self.wrapped_object.created_at).to_iso8601_string()

    @property
    def scheduled_at_formatted(self) -> Optional[str]:
        date = self.dates.make(self.wrapped_object.scheduled_at)
        if date is None:
            return None
        return _ucfirst(date.format(self.incident_date_format()))

    @property
    def scheduled_at_iso(self) -> Optional[str]:
        date = self.dates.make(self.wrapped_object.scheduled_at)
        return date.to_iso8601_string() if date is not None else None

    @property
    def timestamp_formatted(self) -> str:
        """Timestamp shown in the timeline: the schedule for planned work, else relative."""
        if self.wrapped_object.is_scheduled:
            return self.scheduled_at_formatted
        return self.created_at_diff

    @property
    def timestamp_iso(self) -> str:
        if self.wrapped_object.is_scheduled:
            return self.scheduled_at_iso
        return self.created_at_iso

    @property
    def icon(self) -> Optional[str]:
        return self.icons.get(self.wrapped_object.status)

    @property
    def human_status(self) -> str:
        return self.translator.trans(f"incidents.status.{self.wrapped_object.status}")

    @property
    def permalink(self) -> str:
        url = self.url_for("incident", incident_id=self.wrapped_object.incident_id)
        return f"{url}#update-{self.wrapped_object.id}"

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.wrapped_object.to_dict(),
            "human_status": self.human_status,
            "permalink": self.permalink,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
