"""Assessment and FarmMetrics ORM models: Assessment Engine state.

Assessments are immutable once written.  A farm's assessment history is the
set of rows sharing its ``farm_id``, ordered by id.
"""

from __future__ import annotations

from sqlalchemy import Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from agricert.models.base import Base
from agricert.models.enums import CertificationTierEnum
from agricert.models.types import Uint128

# ═══════════════════════════════════════════════════════════════════════════
# Assessment
# ═══════════════════════════════════════════════════════════════════════════


class Assessment(Base):
    """A scored sustainability assessment of one farm at one point in time."""

    __tablename__ = "assessments"
    __table_args__ = (Index("ix_assessments_farm_id", "farm_id", "id"),)

    id: Mapped[int] = mapped_column(Uint128, primary_key=True, autoincrement=False)
    farm_id: Mapped[int] = mapped_column(Uint128, nullable=False)
    assessment_date: Mapped[int] = mapped_column(Uint128, nullable=False)
    water_efficiency_score: Mapped[int] = mapped_column(Integer, nullable=False)
    energy_efficiency_score: Mapped[int] = mapped_column(Integer, nullable=False)
    chemical_reduction_score: Mapped[int] = mapped_column(Integer, nullable=False)
    organic_practices_score: Mapped[int] = mapped_column(Integer, nullable=False)
    biodiversity_score: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_score: Mapped[int] = mapped_column(Integer, nullable=False)
    certification_level: Mapped[CertificationTierEnum] = mapped_column(
        Enum(
            CertificationTierEnum,
            name="certification_tier",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    assessor: Mapped[str] = mapped_column(String(128), nullable=False)
    valid_until: Mapped[int] = mapped_column(Uint128, nullable=False)

    def is_valid_at(self, now: int) -> bool:
        return self.valid_until > now

    def __repr__(self) -> str:
        return (
            f"<Assessment id={self.id} farm={self.farm_id} "
            f"score={self.overall_score} level={self.certification_level}>"
        )


# ═══════════════════════════════════════════════════════════════════════════
# FarmMetrics
# ═══════════════════════════════════════════════════════════════════════════


class FarmMetrics(Base):
    """Raw usage totals for a farm, overwritten on every update."""

    __tablename__ = "farm_metrics"

    farm_id: Mapped[int] = mapped_column(Uint128, primary_key=True, autoincrement=False)
    total_water_usage: Mapped[int] = mapped_column(Uint128, nullable=False)
    total_energy_usage: Mapped[int] = mapped_column(Uint128, nullable=False)
    total_chemical_usage: Mapped[int] = mapped_column(Uint128, nullable=False)
    organic_practices_count: Mapped[int] = mapped_column(Uint128, nullable=False)
    total_practices_count: Mapped[int] = mapped_column(Uint128, nullable=False)
    farm_size: Mapped[int] = mapped_column(Uint128, nullable=False)

    def __repr__(self) -> str:
        return f"<FarmMetrics farm={self.farm_id} size={self.farm_size}>"
