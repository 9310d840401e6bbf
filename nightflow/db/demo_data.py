# nightflow/db/demo_data.py
"""Demo events for a fresh database: one night a week going back from today."""
import datetime as dt
from typing import List, Optional, Tuple

from nightflow.core.config import settings
from nightflow.schemas.entry import EventEntryCreate, Promoter, Staff
from nightflow.schemas.event import DealType, EventCreate
from nightflow.schemas.partner import Partner

VENUES = ["Skyline Lounge", "Pulse Nightclub", "Echo Bar", "Mirage Club", "Velvet Room"]
LOCATIONS = ["Downtown", "Westside", "Marina District", "Old Town", "Uptown"]
DEAL_TYPES = [DealType.revenue_share, DealType.entrance_deal]
DEMO_EVENTS = 5


def demo_event(i: int, today: dt.date) -> EventCreate:
    house_pct = 50 + i * 5
    return EventCreate(
        name=f"Night Fever {i + 1}",
        date=today - dt.timedelta(days=7 * i),
        time="22:00",
        venue_name=VENUES[i % len(VENUES)],
        location=LOCATIONS[i % len(LOCATIONS)],
        deal_type=DEAL_TYPES[i % len(DEAL_TYPES)],
        rumba_percentage=house_pct,
        payment_terms="50% upfront, weekly payments",
        partners=[
            Partner(name=settings.HOUSE_PARTNER_NAME, percentage=house_pct),
            Partner(name="Local Partner", percentage=100 - house_pct),
        ],
    )


def demo_entry(i: int, event: EventCreate) -> EventEntryCreate:
    entry = EventEntryCreate(
        date=event.date,
        promoters=[
            Promoter(id=f"promo-{i}-1", name="John Promoter", commission=500),
            Promoter(id=f"promo-{i}-2", name="Sarah Promoter", commission=350),
        ],
        staff=[
            Staff(id=f"staff-{i}-1", role="Hostess", name="Alice", payment=200),
            Staff(id=f"staff-{i}-2", role="Photographer", name="Bob", payment=150),
        ],
        table_commissions=800,
        vip_girls_commissions=300,
        ad_spend=400,
        ad_reach=5000 + i * 1000,
        ad_clicks=300 + i * 50,
        ad_leads=50 + i * 10,
        leads_collected=30 + i * 5,
        door_revenue=4000 + i * 500,
        total_night_revenue=10000 + i * 1000,
        attendance=200 + i * 25,
        tables_from_rumba=3 + i % 3,
        days_until_paid=7 + i * 2,
    )
    return entry.for_deal_type(event.deal_type)


def demo_data(today: Optional[dt.date] = None) -> List[Tuple[EventCreate, EventEntryCreate]]:
    today = today or dt.date.today()
    rows = []
    for i in range(DEMO_EVENTS):
        event = demo_event(i, today)
        rows.append((event, demo_entry(i, event)))
    return rows
