import datetime as dt
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Integer, Numeric, ForeignKey, Date, DateTime
from nightflow.db.base import Base

# amounts come back as float; the report math is plain float arithmetic
Money = Numeric(12, 2, asdecimal=False)


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class EventEntry(Base):
    __tablename__ = "event_entries"
    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)

    table_commissions: Mapped[float] = mapped_column(Money, default=0)
    vip_girls_commissions: Mapped[float] = mapped_column(Money, default=0)
    ad_spend: Mapped[float] = mapped_column(Money, default=0)
    ad_reach: Mapped[int] = mapped_column(Integer, default=0)
    ad_clicks: Mapped[int] = mapped_column(Integer, default=0)
    ad_leads: Mapped[int] = mapped_column(Integer, default=0)
    leads_collected: Mapped[int] = mapped_column(Integer, default=0)

    # exactly one is set, depending on the event's deal type at creation
    door_revenue: Mapped[Optional[float]] = mapped_column(Money, nullable=True)
    total_night_revenue: Mapped[Optional[float]] = mapped_column(Money, nullable=True)

    attendance: Mapped[int] = mapped_column(Integer, default=0)
    tables_from_rumba: Mapped[int] = mapped_column(Integer, default=0)
    days_until_paid: Mapped[int] = mapped_column(Integer, default=7)
    notes: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_now)

    event = relationship("Event", back_populates="entries")
    promoters = relationship(
        "EntryPromoter",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="EntryPromoter.position",
    )
    staff = relationship(
        "EntryStaff",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="EntryStaff.position",
    )


class EntryPromoter(Base):
    __tablename__ = "entry_promoters"
    entry_id: Mapped[str] = mapped_column(ForeignKey("event_entries.id", ondelete="CASCADE"), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    name: Mapped[str] = mapped_column(String(120), default="")
    commission: Mapped[float] = mapped_column(Money, default=0)

    entry = relationship("EventEntry", back_populates="promoters")


class EntryStaff(Base):
    __tablename__ = "entry_staff"
    entry_id: Mapped[str] = mapped_column(ForeignKey("event_entries.id", ondelete="CASCADE"), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    role: Mapped[str] = mapped_column(String(80), default="")
    name: Mapped[str] = mapped_column(String(120), default="")
    payment: Mapped[float] = mapped_column(Money, default=0)

    entry = relationship("EventEntry", back_populates="staff")
