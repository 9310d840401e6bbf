"""Tests for the demo seed.

Run with: pytest tests/test_demo_data.py -v
"""

import datetime as dt

from nightflow.db.demo_data import DEMO_EVENTS, demo_data
from nightflow.db.init_db import init_db, seed_demo_data
from nightflow.repository.sql import SqlEventRepository
from nightflow.schemas.event import DealType
from nightflow.services.reports import calculate_report


class TestDemoData:
    """Tests for the generated demo events."""

    def test_weekly_events_alternating_deals(self):
        """Events are a week apart with alternating deal types and rising house share."""
        today = dt.date(2024, 6, 14)
        rows = demo_data(today)

        assert len(rows) == DEMO_EVENTS
        assert [e.date for e, _ in rows] == [today - dt.timedelta(days=7 * i) for i in range(DEMO_EVENTS)]
        assert [e.deal_type for e, _ in rows][:2] == [DealType.revenue_share, DealType.entrance_deal]
        assert [e.rumba_percentage for e, _ in rows] == [50, 55, 60, 65, 70]

    def test_entries_match_deal_type(self):
        """Each demo entry only carries its event's revenue field."""
        for event, entry in demo_data(dt.date(2024, 6, 14)):
            if event.deal_type == DealType.entrance_deal:
                assert entry.door_revenue is not None and entry.total_night_revenue is None
            else:
                assert entry.total_night_revenue is not None and entry.door_revenue is None


class TestSeed:
    """Tests for seeding a store."""

    def test_seed_empty_store_once(self, memory_repo):
        """Seeding fills an empty store and is skipped afterwards."""
        assert seed_demo_data(memory_repo) == DEMO_EVENTS
        assert seed_demo_data(memory_repo) == 0
        assert len(memory_repo.list_events()) == DEMO_EVENTS
        assert len(memory_repo.list_entries()) == DEMO_EVENTS

    def test_seeded_events_report(self, memory_repo):
        """Every seeded event has a report."""
        seed_demo_data(memory_repo)

        for event in memory_repo.list_events():
            assert calculate_report(memory_repo, event.id) is not None

    def test_init_db_seeds_sql(self, db_session):
        """init_db seeds through the SQL repository."""
        init_db(db_session)

        assert len(SqlEventRepository(db_session).list_events()) == DEMO_EVENTS
