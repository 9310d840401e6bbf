from typing import List, Optional

from pydantic import BaseModel

from nightflow.schemas.entry import EventEntry
from nightflow.schemas.event import Event


class EventReport(BaseModel):
    total_revenue: float
    rumba_share: float
    total_attendance: int
    tables_from_rumba: int
    total_commissions: float
    total_expenses: float
    profit: float
    days_until_paid: int


class EventReportRow(BaseModel):
    event: Event
    report: Optional[EventReport] = None


class DashboardSummary(BaseModel):
    total_events: int
    total_revenue: float
    total_profit: float
    avg_attendance: float
    recent_entries: List[EventEntry] = []
    upcoming_events: List[Event] = []
