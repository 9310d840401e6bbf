from __future__ import annotations

import datetime as dt
import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from nightflow.schemas.event import DealType


def _line_id() -> str:
    return uuid.uuid4().hex


class Promoter(BaseModel):
    id: str = Field(default_factory=_line_id)
    name: str = ""
    commission: float = Field(0, ge=0)

    model_config = {"from_attributes": True}


class Staff(BaseModel):
    id: str = Field(default_factory=_line_id)
    role: str = ""
    name: str = ""
    payment: float = Field(0, ge=0)

    model_config = {"from_attributes": True}


class EventEntryBase(BaseModel):
    date: dt.date
    promoters: List[Promoter] = Field(default_factory=list)
    staff: List[Staff] = Field(default_factory=list)
    table_commissions: float = Field(0, ge=0)
    vip_girls_commissions: float = Field(0, ge=0)
    ad_spend: float = Field(0, ge=0)
    ad_reach: int = Field(0, ge=0)
    ad_clicks: int = Field(0, ge=0)
    ad_leads: int = Field(0, ge=0)
    leads_collected: int = Field(0, ge=0)
    door_revenue: Optional[float] = Field(None, ge=0)
    total_night_revenue: Optional[float] = Field(None, ge=0)
    attendance: int = Field(ge=0)
    tables_from_rumba: int = Field(ge=0)
    days_until_paid: int = Field(7, ge=0)
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class EventEntryCreate(EventEntryBase):
    def for_deal_type(self, deal_type: DealType) -> EventEntryCreate:
        """Keep only the revenue field the parent event's deal type uses."""
        if deal_type == DealType.entrance_deal:
            return self.model_copy(update={"door_revenue": self.door_revenue or 0.0, "total_night_revenue": None})
        return self.model_copy(update={"door_revenue": None, "total_night_revenue": self.total_night_revenue or 0.0})


class EventEntryUpdate(BaseModel):
    date: dt.date | None = None
    promoters: List[Promoter] | None = None
    staff: List[Staff] | None = None
    table_commissions: float | None = Field(default=None, ge=0)
    vip_girls_commissions: float | None = Field(default=None, ge=0)
    ad_spend: float | None = Field(default=None, ge=0)
    ad_reach: int | None = Field(default=None, ge=0)
    ad_clicks: int | None = Field(default=None, ge=0)
    ad_leads: int | None = Field(default=None, ge=0)
    leads_collected: int | None = Field(default=None, ge=0)
    door_revenue: float | None = Field(default=None, ge=0)
    total_night_revenue: float | None = Field(default=None, ge=0)
    attendance: int | None = Field(default=None, ge=0)
    tables_from_rumba: int | None = Field(default=None, ge=0)
    days_until_paid: int | None = Field(default=None, ge=0)
    notes: str | None = None

    def for_deal_type(self, deal_type: DealType) -> EventEntryUpdate:
        if deal_type == DealType.entrance_deal:
            active, inactive = "door_revenue", "total_night_revenue"
        else:
            active, inactive = "total_night_revenue", "door_revenue"
        update = {inactive: None}
        if active in self.model_fields_set and getattr(self, active) is None:
            update[active] = 0.0
        return self.model_copy(update=update)


class EventEntry(EventEntryBase):
    id: str
    event_id: str
    created_at: dt.datetime
