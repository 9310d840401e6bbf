from enum import Enum
from typing import TypeVar, Generic, Type, Any, Optional, List, Dict
from sqlalchemy import select
from sqlalchemy.orm import Session
from pydantic import BaseModel
from nightflow.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)

def plain(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in data.items()}

class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    # child collections; written through set_nested instead of setattr
    nested: tuple = ()

    def __init__(self, model: Type[ModelType]): self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def get_multi(self, db: Session, skip=0, limit=None, order_by=None) -> List[ModelType]:
        stmt = select(self.model)
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(db.scalars(stmt).all())

    def set_nested(self, db: Session, db_obj: ModelType, children: Dict[str, Any]) -> None:
        pass

    def _split(self, data: Dict[str, Any]):
        scalars = plain({k: v for k, v in data.items() if k not in self.nested})
        children = {k: v for k, v in data.items() if k in self.nested}
        return scalars, children

    def create(self, db: Session, obj_in: CreateSchema, extra: Dict[str, Any] | None=None) -> ModelType:
        data, children = self._split(obj_in.model_dump())
        if extra: data.update(extra)
        obj = self.model(**data)
        self.set_nested(db, obj, children)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        data, children = self._split(obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True))
        for f,v in data.items(): setattr(db_obj, f, v)
        if children: self.set_nested(db, db_obj, children)
        db.add(db_obj); db.commit(); db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, id: Any) -> Optional[ModelType]:
        obj = self.get(db, id)
        if not obj: return None
        db.delete(obj); db.commit(); return obj
