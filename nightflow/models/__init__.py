from nightflow.models.event import Event, EventPartner
from nightflow.models.entry import EventEntry, EntryPromoter, EntryStaff
from nightflow.models.tokens import RefreshToken

__all__ = [
    "Event",
    "EventPartner",
    "EventEntry",
    "EntryPromoter",
    "EntryStaff",
    "RefreshToken",
]
