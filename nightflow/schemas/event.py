import datetime as dt
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nightflow.schemas.partner import Partner
from nightflow.services import partners as split

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class DayOfWeek(str, Enum):
    sunday = "Sunday"
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"

    @classmethod
    def for_date(cls, value: dt.date) -> "DayOfWeek":
        # date.weekday(): Monday == 0
        order = [cls.monday, cls.tuesday, cls.wednesday, cls.thursday, cls.friday, cls.saturday, cls.sunday]
        return order[value.weekday()]


class DealType(str, Enum):
    revenue_share = "Revenue Share"
    entrance_deal = "Entrance Deal"


# ---------------------------
# Event Schemas
# ---------------------------

class EventBase(BaseModel):
    name: str
    day_of_week: Optional[DayOfWeek] = None
    date: dt.date
    time: str
    venue_name: str
    location: str = ""
    deal_type: DealType
    rumba_percentage: int = 50
    payment_terms: str = ""
    partners: List[Partner] = Field(default_factory=list)

    model_config = {"from_attributes": True}


def _check_split(partners: List[Partner], rumba_percentage: int) -> None:
    for p in partners:
        if not p.name.strip():
            raise ValueError("partner name is required")
        if not 0 <= p.percentage <= 100:
            raise ValueError(f"partner percentage out of range: {p.name}")
    house = split.find_house(partners)
    if house is not None and partners[house].percentage != rumba_percentage:
        raise ValueError("house partner percentage must match rumba_percentage")
    total = split.split_total(partners)
    if total != 100:
        raise ValueError(f"Partner percentages must add up to 100% (currently {total}%).")


class EventCreate(EventBase):
    """Submitted event form; required fields and the partner split are checked here."""

    rumba_percentage: int = Field(50, ge=0, le=100)

    @field_validator("name", "venue_name")
    @classmethod
    def _required_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("field is required")
        return v.strip()

    @field_validator("time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        v = (v or "").strip()
        if not _TIME_RE.match(v):
            raise ValueError("time must be HH:MM")
        return v

    @model_validator(mode="after")
    def _complete(self):
        if self.day_of_week is None:
            self.day_of_week = DayOfWeek.for_date(self.date)
        if split.find_house(self.partners) is None:
            self.partners = split.sync_house_partner(self.partners, self.rumba_percentage)
        _check_split(self.partners, self.rumba_percentage)
        return self


class EventUpdate(BaseModel):
    name: str | None = None
    day_of_week: DayOfWeek | None = None
    date: dt.date | None = None
    time: str | None = None
    venue_name: str | None = None
    location: str | None = None
    deal_type: DealType | None = None
    rumba_percentage: int | None = Field(default=None, ge=0, le=100)
    payment_terms: str | None = None
    partners: List[Partner] | None = None

    model_config = {"from_attributes": True}

    @field_validator("name", "venue_name")
    @classmethod
    def _required_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("field is required")
        return v.strip()

    @field_validator("time")
    @classmethod
    def _check_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _TIME_RE.match(v.strip()):
            raise ValueError("time must be HH:MM")
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def _check_partners(self):
        if self.partners is None:
            return self
        house = split.find_house(self.partners)
        if self.rumba_percentage is None and house is not None:
            self.rumba_percentage = self.partners[house].percentage
        if self.rumba_percentage is not None and house is None:
            self.partners = split.sync_house_partner(self.partners, self.rumba_percentage)
        if split.find_house(self.partners) is None:
            raise ValueError(f"the {split.house_name()} partner is required")
        _check_split(self.partners, self.rumba_percentage)
        return self


class Event(EventBase):
    id: str
    day_of_week: DayOfWeek
    created_at: dt.datetime
