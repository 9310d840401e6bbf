from typing import List

from fastapi import APIRouter, Depends, status

from nightflow.api.deps import get_current_user, get_repository
from nightflow.core.errors import EntryNotFoundError, EventNotFoundError
from nightflow.repository.base import EventRepository
from nightflow.schemas.entry import EventEntry, EventEntryUpdate

router = APIRouter()


@router.get("", response_model=List[EventEntry])
def list_entries(repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    return repo.list_entries()


@router.get("/{entry_id}", response_model=EventEntry)
def get_entry(entry_id: str, repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    entry = repo.get_entry(entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return entry


@router.put("/{entry_id}", response_model=EventEntry)
def update_entry(
    entry_id: str,
    body: EventEntryUpdate,
    repo: EventRepository = Depends(get_repository),
    _=Depends(get_current_user),
):
    entry = repo.get_entry(entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    event = repo.get_event(entry.event_id)
    if event is None:
        raise EventNotFoundError(entry.event_id)
    return repo.update_entry(entry_id, body.for_deal_type(event.deal_type))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(entry_id: str, repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    if not repo.delete_entry(entry_id):
        raise EntryNotFoundError(entry_id)
