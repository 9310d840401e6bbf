from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from nightflow.crud.base import CRUDBase
from nightflow.models.entry import EventEntry, EntryPromoter, EntryStaff
from nightflow.schemas.entry import EventEntryCreate, EventEntryUpdate, Promoter, Staff

class CRUDEntry(CRUDBase[EventEntry, EventEntryCreate, EventEntryUpdate]):
    nested = ("promoters", "staff")

    def list_for_event(self, db: Session, event_id: Optional[str] = None) -> List[EventEntry]:
        stmt = select(EventEntry)
        if event_id is not None:
            stmt = stmt.where(EventEntry.event_id == event_id)
        stmt = stmt.order_by(EventEntry.date.desc(), EventEntry.created_at.desc())
        return list(db.scalars(stmt).all())

    def set_nested(self, db: Session, db_obj: EventEntry, children: Dict[str, Any]) -> None:
        flushed = False
        if "promoters" in children and db_obj.promoters:
            db_obj.promoters.clear(); flushed = True
        if "staff" in children and db_obj.staff:
            db_obj.staff.clear(); flushed = True
        if flushed:
            db.flush()
        if "promoters" in children:
            promoters = [Promoter.model_validate(p) for p in children["promoters"]]
            db_obj.promoters = [
                EntryPromoter(id=p.id, position=pos, name=p.name, commission=p.commission)
                for pos, p in enumerate(promoters)
            ]
        if "staff" in children:
            staff = [Staff.model_validate(s) for s in children["staff"]]
            db_obj.staff = [
                EntryStaff(id=s.id, position=pos, role=s.role, name=s.name, payment=s.payment)
                for pos, s in enumerate(staff)
            ]

entry_crud = CRUDEntry(EventEntry)
