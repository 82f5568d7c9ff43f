"""ORM model registry: importing this module registers every table on Base.metadata.

``agricert.database.init_db`` imports ``Base`` from here (not from
``base.py``) so that ``create_all`` sees all tables.  Application code can
also do::

    from agricert.models import Assessment, Certificate, ...
"""

# ── Base ────────────────────────────────────────────────────────────────────
# ── Assessment engine models ────────────────────────────────────────────────
from agricert.models.assessment import Assessment, FarmMetrics
from agricert.models.base import Base

# ── Certification registry models ───────────────────────────────────────────
from agricert.models.certificate import (
    Certificate,
    CertificateMetadata,
    CertificateOwner,
)

# ── Enums ───────────────────────────────────────────────────────────────────
from agricert.models.enums import CertificationTierEnum, CounterNameEnum

# ── Sequences ───────────────────────────────────────────────────────────────
from agricert.models.ledger import LedgerCounter

__all__ = [
    # Assessment engine
    "Assessment",
    # Base
    "Base",
    # Certification registry
    "Certificate",
    "CertificateMetadata",
    "CertificateOwner",
    # Enums
    "CertificationTierEnum",
    "CounterNameEnum",
    "FarmMetrics",
    # Sequences
    "LedgerCounter",
    # Column types
    "UINT128_MAX",
    "Uint128",
]
