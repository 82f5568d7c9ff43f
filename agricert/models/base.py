"""ORM base class: all ledger models inherit from Base."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base: shared MetaData registry for all models."""

    pass
