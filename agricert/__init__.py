"""Sustainability assessment scoring and certificate lifecycle ledger."""

from agricert.config import Settings, get_settings
from agricert.errors import LedgerError, LedgerErrorCode
from agricert.ledger import SustainabilityLedger
from agricert.logging_config import configure_structured_logging
from agricert.models.enums import CertificationTierEnum
from agricert.schemas.certificate import CertificateIssueRequest
from agricert.schemas.result import LedgerResult

__all__ = [
    "CertificateIssueRequest",
    "CertificationTierEnum",
    "LedgerError",
    "LedgerErrorCode",
    "LedgerResult",
    "Settings",
    "SustainabilityLedger",
    "configure_structured_logging",
    "get_settings",
]
