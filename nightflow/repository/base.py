"""Repository interface for events and their performance entries.

Implementations must be swappable and return schema (domain) models. The
report calculator and the HTTP layer only ever see this interface.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from nightflow.schemas.entry import EventEntry, EventEntryCreate, EventEntryUpdate
from nightflow.schemas.event import DayOfWeek, Event, EventCreate, EventUpdate
from nightflow.services import partners as split


def new_event_id() -> str:
    return f"evt-{uuid.uuid4().hex[:12]}"


def new_entry_id() -> str:
    return f"entry-{uuid.uuid4().hex[:12]}"


def merge_event_update(current: Event, body: EventUpdate) -> Dict[str, Any]:
    """Fields to write for a partial update, keeping the house row and rumba_percentage in step.

    Raises ``InvalidPartnerSplitError`` when rebalancing for a new house share
    rounds the split away from 100.
    """
    data = body.model_dump(exclude_unset=True)
    data = {k: v for k, v in data.items() if v is not None}
    if "date" in data and "day_of_week" not in data:
        data["day_of_week"] = DayOfWeek.for_date(data["date"])
    if "partners" in data:
        data["partners"] = body.partners
    elif "rumba_percentage" in data:
        # a house-only edit rebalances the others, then must still total 100
        data["partners"] = split.set_house_percentage(current.partners, data["rumba_percentage"])
        split.validate_split(data["partners"])
    return data


_NULLABLE_ENTRY_FIELDS = ("door_revenue", "total_night_revenue", "notes")


def entry_update_data(body: EventEntryUpdate) -> Dict[str, Any]:
    """Fields to write for a partial entry update; explicit nulls only clear nullable columns."""
    data = body.model_dump(exclude_unset=True)
    data = {k: v for k, v in data.items() if v is not None or k in _NULLABLE_ENTRY_FIELDS}
    if "promoters" in data:
        data["promoters"] = body.promoters
    if "staff" in data:
        data["staff"] = body.staff
    return data


class EventRepository(ABC):
    """Interface for event and entry persistence."""

    @abstractmethod
    def list_events(self) -> List[Event]:
        """Return all events ordered by date descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def create_event(self, body: EventCreate) -> Event:
        ...

    @abstractmethod
    def update_event(self, event_id: str, body: EventUpdate) -> Optional[Event]:
        """Apply the fields set on ``body``; None if the event does not exist."""
        ...

    @abstractmethod
    def delete_event(self, event_id: str) -> bool:
        """Delete an event and every entry that references it."""
        ...

    @abstractmethod
    def list_entries(self, event_id: Optional[str] = None) -> List[EventEntry]:
        """Return entries (optionally for one event), newest date first."""
        ...

    @abstractmethod
    def get_entry(self, entry_id: str) -> Optional[EventEntry]:
        ...

    @abstractmethod
    def create_entry(self, event_id: str, body: EventEntryCreate) -> EventEntry:
        ...

    @abstractmethod
    def update_entry(self, entry_id: str, body: EventEntryUpdate) -> Optional[EventEntry]:
        ...

    @abstractmethod
    def delete_entry(self, entry_id: str) -> bool:
        ...
