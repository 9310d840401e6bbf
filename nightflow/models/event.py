import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Integer, ForeignKey, Date, DateTime
from nightflow.db.base import Base


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Event(Base):
    __tablename__ = "events"
    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    day_of_week: Mapped[str] = mapped_column(String(10))
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    time: Mapped[str] = mapped_column(String(5))
    venue_name: Mapped[str] = mapped_column(String(160))
    location: Mapped[str] = mapped_column(String(160), default="")
    deal_type: Mapped[str] = mapped_column(String(20))
    rumba_percentage: Mapped[int] = mapped_column(Integer, default=50)
    payment_terms: Mapped[str] = mapped_column(Text(), default="")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_now)

    partners = relationship(
        "EventPartner",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventPartner.position",
    )
    entries = relationship("EventEntry", back_populates="event", cascade="all, delete-orphan")


class EventPartner(Base):
    __tablename__ = "event_partners"
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    percentage: Mapped[int] = mapped_column(Integer, default=0)

    event = relationship("Event", back_populates="partners")
