"""Dict-backed repository. Contents live for the process lifetime only."""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from nightflow.repository.base import (
    EventRepository,
    entry_update_data,
    merge_event_update,
    new_entry_id,
    new_event_id,
)
from nightflow.schemas.entry import EventEntry, EventEntryCreate, EventEntryUpdate
from nightflow.schemas.event import Event, EventCreate, EventUpdate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryEventRepository(EventRepository):
    def __init__(self) -> None:
        self._events: Dict[str, Event] = {}
        self._entries: Dict[str, EventEntry] = {}

    def clear(self) -> None:
        self._events.clear()
        self._entries.clear()

    # ---------- events ----------
    def list_events(self) -> List[Event]:
        return sorted(self._events.values(), key=lambda e: (e.date, e.created_at), reverse=True)

    def get_event(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def create_event(self, body: EventCreate) -> Event:
        event = Event(id=new_event_id(), created_at=_now(), **body.model_dump())
        self._events[event.id] = event
        logger.info("event created: %s (%s)", event.id, event.name)
        return event

    def update_event(self, event_id: str, body: EventUpdate) -> Optional[Event]:
        current = self._events.get(event_id)
        if current is None:
            return None
        updated = current.model_copy(update=merge_event_update(current, body))
        self._events[event_id] = updated
        logger.info("event updated: %s", event_id)
        return updated

    def delete_event(self, event_id: str) -> bool:
        if self._events.pop(event_id, None) is None:
            return False
        dropped = [k for k, e in self._entries.items() if e.event_id == event_id]
        for k in dropped:
            del self._entries[k]
        logger.info("event deleted: %s (%d entries)", event_id, len(dropped))
        return True

    # ---------- entries ----------
    def list_entries(self, event_id: Optional[str] = None) -> List[EventEntry]:
        rows = [e for e in self._entries.values() if event_id is None or e.event_id == event_id]
        return sorted(rows, key=lambda e: (e.date, e.created_at), reverse=True)

    def get_entry(self, entry_id: str) -> Optional[EventEntry]:
        return self._entries.get(entry_id)

    def create_entry(self, event_id: str, body: EventEntryCreate) -> EventEntry:
        entry = EventEntry(id=new_entry_id(), event_id=event_id, created_at=_now(), **body.model_dump())
        self._entries[entry.id] = entry
        logger.info("entry created: %s for event %s", entry.id, event_id)
        return entry

    def update_entry(self, entry_id: str, body: EventEntryUpdate) -> Optional[EventEntry]:
        current = self._entries.get(entry_id)
        if current is None:
            return None
        updated = current.model_copy(update=entry_update_data(body))
        self._entries[entry_id] = updated
        logger.info("entry updated: %s", entry_id)
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        if self._entries.pop(entry_id, None) is None:
            return False
        logger.info("entry deleted: %s", entry_id)
        return True
