"""Enum types shared by ORM models and schemas."""

from enum import StrEnum

# ── Certification enums ─────────────────────────────────────────────────────


class CertificationTierEnum(StrEnum):
    """Certification tier derived from an overall sustainability score.

    Declared lowest-first; ``TIER_THRESHOLDS`` in the scoring service holds
    the minimum score for each tier.
    """

    basic = "basic"
    bronze = "bronze"
    silver = "silver"
    gold = "gold"
    platinum = "platinum"


# ── Ledger enums ────────────────────────────────────────────────────────────


class CounterNameEnum(StrEnum):
    """Sequences held in the ``ledger_counters`` table."""

    assessment = "assessment"
    certificate = "certificate"
