from typing import Any, Dict, List
from sqlalchemy.orm import Session
from nightflow.crud.base import CRUDBase
from nightflow.models.event import Event, EventPartner
from nightflow.schemas.event import EventCreate, EventUpdate
from nightflow.schemas.partner import Partner

def _partner_rows(partners) -> List[EventPartner]:
    rows = []
    for pos, raw in enumerate(partners):
        p = Partner.model_validate(raw)
        rows.append(EventPartner(position=pos, name=p.name, percentage=p.percentage))
    return rows

class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    nested = ("partners",)

    def list_ordered(self, db: Session) -> List[Event]:
        return self.get_multi(db, order_by=(Event.date.desc(), Event.created_at.desc()))

    def set_nested(self, db: Session, db_obj: Event, children: Dict[str, Any]) -> None:
        if "partners" not in children:
            return
        if db_obj.partners:
            # old rows share (event_id, position) keys with the new ones
            db_obj.partners.clear()
            db.flush()
        db_obj.partners = _partner_rows(children["partners"])

event_crud = CRUDEvent(Event)
