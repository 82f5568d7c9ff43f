"""Sequence counters backing monotonic id assignment."""

from __future__ import annotations

from sqlalchemy import Enum, Integer
from sqlalchemy.orm import Mapped, mapped_column

from agricert.models.base import Base
from agricert.models.enums import CounterNameEnum


class LedgerCounter(Base):
    """Next id to hand out for one sequence.  Advanced only by committed writes."""

    __tablename__ = "ledger_counters"

    name: Mapped[CounterNameEnum] = mapped_column(
        Enum(
            CounterNameEnum,
            name="counter_name",
            create_constraint=False,
            native_enum=True,
        ),
        primary_key=True,
    )
    next_value: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<LedgerCounter name={self.name} next={self.next_value}>"
