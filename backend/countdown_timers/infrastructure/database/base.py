"""SQLAlchemy ORM base for the timer store."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic index/constraint names so SQLite and PostgreSQL schemas match
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for the timer ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
