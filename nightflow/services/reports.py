# nightflow/services/reports.py
"""Event profit/loss reports.

Reports are derived on demand from one event and one entry and are never
stored. Expenses are charged entirely against the house share: profit is
``rumba_share - total_expenses``, not revenue minus expenses.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional

from nightflow.repository.base import EventRepository
from nightflow.schemas.entry import EventEntry
from nightflow.schemas.event import DealType, Event
from nightflow.schemas.report import DashboardSummary, EventReport, EventReportRow

logger = logging.getLogger(__name__)

RECENT_ENTRIES = 5
UPCOMING_EVENTS = 3


def revenue_for(event: Event, entry: EventEntry) -> float:
    if event.deal_type == DealType.entrance_deal:
        return entry.door_revenue or 0.0
    if event.deal_type == DealType.revenue_share:
        return entry.total_night_revenue or 0.0
    return 0.0


def build_report(event: Event, entry: EventEntry) -> EventReport:
    promoter_commissions = sum(p.commission for p in entry.promoters)
    staff_payments = sum(s.payment for s in entry.staff)
    total_commissions = (
        promoter_commissions + staff_payments + entry.table_commissions + entry.vip_girls_commissions
    )
    total_expenses = entry.ad_spend + total_commissions

    total_revenue = revenue_for(event, entry)
    rumba_share = total_revenue * (event.rumba_percentage / 100)

    return EventReport(
        total_revenue=total_revenue,
        rumba_share=rumba_share,
        total_attendance=entry.attendance,
        tables_from_rumba=entry.tables_from_rumba,
        total_commissions=total_commissions,
        total_expenses=total_expenses,
        profit=rumba_share - total_expenses,
        days_until_paid=entry.days_until_paid,
    )


def calculate_report(
    repository: EventRepository, event_id: str, entry_id: Optional[str] = None
) -> Optional[EventReport]:
    """Report for one entry of an event, or None when there is nothing to report.

    Without ``entry_id`` only the newest entry is used; entries are not
    aggregated. An ``entry_id`` that belongs to a different event gives None
    rather than reporting that entry against this event's deal.
    """
    event = repository.get_event(event_id)
    if event is None:
        logger.info("report: event %s not found", event_id)
        return None

    if entry_id is not None:
        entry = repository.get_entry(entry_id)
        if entry is not None and entry.event_id != event_id:
            entry = None
    else:
        entries = repository.list_entries(event_id)
        entry = entries[0] if entries else None

    if entry is None:
        logger.info("report: no entries for event %s", event_id)
        return None

    report = build_report(event, entry)
    logger.debug("report for %s/%s: %s", event_id, entry.id, report)
    return report


def event_reports(repository: EventRepository) -> List[EventReportRow]:
    return [
        EventReportRow(event=event, report=calculate_report(repository, event.id))
        for event in repository.list_events()
    ]


def dashboard_summary(repository: EventRepository, today: Optional[dt.date] = None) -> DashboardSummary:
    today = today or dt.date.today()
    events = repository.list_events()
    entries = repository.list_entries()
    by_id: Dict[str, Event] = {e.id: e for e in events}

    total_revenue = 0.0
    total_profit = 0.0
    total_attendance = 0
    for entry in entries:
        event = by_id.get(entry.event_id)
        if event is None:
            continue
        report = build_report(event, entry)
        total_revenue += report.total_revenue
        total_profit += report.profit
        total_attendance += entry.attendance

    upcoming = sorted((e for e in events if e.date >= today), key=lambda e: e.date)

    return DashboardSummary(
        total_events=len(events),
        total_revenue=total_revenue,
        total_profit=total_profit,
        avg_attendance=total_attendance / len(entries) if entries else 0.0,
        recent_entries=entries[:RECENT_ENTRIES],
        upcoming_events=upcoming[:UPCOMING_EVENTS],
    )
