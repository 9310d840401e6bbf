"""SQLAlchemy-backed repository (one instance per request session)."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from nightflow.crud.entry import entry_crud
from nightflow.crud.event import event_crud
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


class SqlEventRepository(EventRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------- events ----------
    def list_events(self) -> List[Event]:
        return [Event.model_validate(e) for e in event_crud.list_ordered(self.db)]

    def get_event(self, event_id: str) -> Optional[Event]:
        e = event_crud.get(self.db, event_id)
        return Event.model_validate(e) if e else None

    def create_event(self, body: EventCreate) -> Event:
        e = event_crud.create(self.db, body, extra={"id": new_event_id()})
        logger.info("event created: %s (%s)", e.id, e.name)
        return Event.model_validate(e)

    def update_event(self, event_id: str, body: EventUpdate) -> Optional[Event]:
        e = event_crud.get(self.db, event_id)
        if not e:
            return None
        data = merge_event_update(Event.model_validate(e), body)
        e = event_crud.update(self.db, e, data)
        logger.info("event updated: %s", event_id)
        return Event.model_validate(e)

    def delete_event(self, event_id: str) -> bool:
        e = event_crud.remove(self.db, event_id)
        if e is None:
            return False
        logger.info("event deleted: %s", event_id)
        return True

    # ---------- entries ----------
    def list_entries(self, event_id: Optional[str] = None) -> List[EventEntry]:
        return [EventEntry.model_validate(x) for x in entry_crud.list_for_event(self.db, event_id)]

    def get_entry(self, entry_id: str) -> Optional[EventEntry]:
        x = entry_crud.get(self.db, entry_id)
        return EventEntry.model_validate(x) if x else None

    def create_entry(self, event_id: str, body: EventEntryCreate) -> EventEntry:
        x = entry_crud.create(self.db, body, extra={"id": new_entry_id(), "event_id": event_id})
        logger.info("entry created: %s for event %s", x.id, event_id)
        return EventEntry.model_validate(x)

    def update_entry(self, entry_id: str, body: EventEntryUpdate) -> Optional[EventEntry]:
        x = entry_crud.get(self.db, entry_id)
        if not x:
            return None
        x = entry_crud.update(self.db, x, entry_update_data(body))
        logger.info("entry updated: %s", entry_id)
        return EventEntry.model_validate(x)

    def delete_entry(self, entry_id: str) -> bool:
        if entry_crud.remove(self.db, entry_id) is None:
            return False
        logger.info("entry deleted: %s", entry_id)
        return True
