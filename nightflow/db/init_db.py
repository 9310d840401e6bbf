# nightflow/db/init_db.py
import logging

from sqlalchemy.orm import Session

from nightflow.db.demo_data import demo_data
from nightflow.repository.base import EventRepository
from nightflow.repository.sql import SqlEventRepository

logger = logging.getLogger(__name__)


def seed_demo_data(repo: EventRepository) -> int:
    """Load the demo events into an empty store; returns how many were created."""
    if repo.list_events():
        return 0
    created = 0
    for event_in, entry_in in demo_data():
        event = repo.create_event(event_in)
        repo.create_entry(event.id, entry_in)
        created += 1
    logger.info("seeded %d demo events", created)
    return created


def init_db(db: Session) -> None:
    seed_demo_data(SqlEventRepository(db))
