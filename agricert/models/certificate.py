"""Certificate, CertificateMetadata, CertificateOwner ORM models.

The three tables share the certificate id as primary key.  Ownership lives
in its own table so that transfer touches nothing but the owner row.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String, false, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agricert.models.base import Base
from agricert.models.enums import CertificationTierEnum
from agricert.models.types import Uint128

# ═══════════════════════════════════════════════════════════════════════════
# Certificate
# ═══════════════════════════════════════════════════════════════════════════


class Certificate(Base):
    """A time-bound certification token referencing one assessment.

    ``revoked`` only ever moves from false to true.  Renewal rewrites
    ``assessment_id``, ``issue_date`` and ``expiry_date`` in place.
    """

    __tablename__ = "certificates"
    __table_args__ = (Index("ix_certificates_farm_id", "farm_id", "id"),)

    id: Mapped[int] = mapped_column(Uint128, primary_key=True, autoincrement=False)
    farm_id: Mapped[int] = mapped_column(Uint128, nullable=False)
    assessment_id: Mapped[int] = mapped_column(Uint128, nullable=False)
    certification_level: Mapped[CertificationTierEnum] = mapped_column(
        Enum(
            CertificationTierEnum,
            name="certification_tier",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    issue_date: Mapped[int] = mapped_column(Uint128, nullable=False)
    expiry_date: Mapped[int] = mapped_column(Uint128, nullable=False)
    issuer: Mapped[str] = mapped_column(String(128), nullable=False)
    metadata_uri: Mapped[str] = mapped_column(String(256), nullable=False)
    renewable: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=true(),
        nullable=False,
    )
    revoked: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )

    # ── Relationships ────────────────────────────────────────────────────
    details: Mapped[CertificateMetadata] = relationship(
        back_populates="certificate",
        cascade="all, delete-orphan",
        uselist=False,
    )
    owner: Mapped[CertificateOwner] = relationship(
        back_populates="certificate",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def is_valid_at(self, now: int) -> bool:
        return self.expiry_date > now and not self.revoked

    def __repr__(self) -> str:
        return (
            f"<Certificate id={self.id} farm={self.farm_id} "
            f"level={self.certification_level} revoked={self.revoked}>"
        )


# ═══════════════════════════════════════════════════════════════════════════
# CertificateMetadata
# ═══════════════════════════════════════════════════════════════════════════


class CertificateMetadata(Base):
    """Display snapshot captured at issuance.  Never consulted by lifecycle checks."""

    __tablename__ = "certificate_metadata"

    certificate_id: Mapped[int] = mapped_column(
        Uint128,
        ForeignKey("certificates.id", ondelete="CASCADE"),
        primary_key=True,
    )
    farm_name: Mapped[str] = mapped_column(String(100), nullable=False)
    certification_level: Mapped[CertificationTierEnum] = mapped_column(
        Enum(
            CertificationTierEnum,
            name="certification_tier",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    sustainability_score: Mapped[int] = mapped_column(Uint128, nullable=False)
    practices_verified: Mapped[int] = mapped_column(Uint128, nullable=False)
    carbon_footprint: Mapped[int] = mapped_column(Uint128, nullable=False)
    water_efficiency: Mapped[int] = mapped_column(Uint128, nullable=False)

    certificate: Mapped[Certificate] = relationship(back_populates="details")

    def __repr__(self) -> str:
        return f"<CertificateMetadata certificate={self.certificate_id} farm={self.farm_name!r}>"


# ═══════════════════════════════════════════════════════════════════════════
# CertificateOwner
# ═══════════════════════════════════════════════════════════════════════════


class CertificateOwner(Base):
    """Current holder of a certificate token (initially the issuer)."""

    __tablename__ = "certificate_owners"

    certificate_id: Mapped[int] = mapped_column(
        Uint128,
        ForeignKey("certificates.id", ondelete="CASCADE"),
        primary_key=True,
    )
    owner: Mapped[str] = mapped_column(String(128), nullable=False)

    certificate: Mapped[Certificate] = relationship(back_populates="owner")

    def __repr__(self) -> str:
        return f"<CertificateOwner certificate={self.certificate_id} owner={self.owner!r}>"
