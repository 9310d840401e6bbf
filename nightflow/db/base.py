# nightflow/db/base.py
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import MetaData

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=naming_convention)

# Register every table on Base.metadata (alembic autogenerate, create_all in tests)
import nightflow.models.event    # noqa: E402,F401
import nightflow.models.entry    # noqa: E402,F401
import nightflow.models.tokens   # noqa: E402,F401
