from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from nightflow.api.deps import get_current_user, get_repository
from nightflow.core.errors import EventNotFoundError, ReportNotFoundError
from nightflow.repository.base import EventRepository
from nightflow.schemas.entry import EventEntry, EventEntryCreate
from nightflow.schemas.event import Event, EventCreate, EventUpdate
from nightflow.schemas.report import EventReport
from nightflow.services.reports import calculate_report

router = APIRouter()


def _matches(event: Event, q: str) -> bool:
    q = q.lower()
    return any(q in (field or "").lower() for field in (event.name, event.venue_name, event.location))


def _get_or_404(repo: EventRepository, event_id: str) -> Event:
    event = repo.get_event(event_id)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


@router.get("", response_model=List[Event])
def list_events(
    q: Optional[str] = Query(default=None, description="search on name, venue and location"),
    repo: EventRepository = Depends(get_repository),
    _=Depends(get_current_user),
):
    events = repo.list_events()
    if q and q.strip():
        events = [e for e in events if _matches(e, q.strip())]
    return events


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_event(body: EventCreate, repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    return repo.create_event(body)


@router.get("/{event_id}", response_model=Event)
def get_event(event_id: str, repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    return _get_or_404(repo, event_id)


@router.put("/{event_id}", response_model=Event)
def update_event(
    event_id: str,
    body: EventUpdate,
    repo: EventRepository = Depends(get_repository),
    _=Depends(get_current_user),
):
    event = repo.update_event(event_id, body)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    if not repo.delete_event(event_id):
        raise EventNotFoundError(event_id)


# ---- entries of one event ----

@router.get("/{event_id}/entries", response_model=List[EventEntry])
def list_event_entries(event_id: str, repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    _get_or_404(repo, event_id)
    return repo.list_entries(event_id)


@router.post("/{event_id}/entries", response_model=EventEntry, status_code=status.HTTP_201_CREATED)
def create_event_entry(
    event_id: str,
    body: EventEntryCreate,
    repo: EventRepository = Depends(get_repository),
    _=Depends(get_current_user),
):
    event = _get_or_404(repo, event_id)
    return repo.create_entry(event_id, body.for_deal_type(event.deal_type))


@router.get("/{event_id}/report", response_model=EventReport)
def get_event_report(
    event_id: str,
    entry_id: Optional[str] = None,
    repo: EventRepository = Depends(get_repository),
    _=Depends(get_current_user),
):
    _get_or_404(repo, event_id)
    report = calculate_report(repo, event_id, entry_id)
    if report is None:
        raise ReportNotFoundError(event_id)
    return report
