"""Deterministic sustainability scoring and tier classification.

All functions here are pure: integer arithmetic with floor division, so
that scores match the on-chain contract exactly.
"""

from __future__ import annotations

from agricert.errors import LedgerError, LedgerErrorCode
from agricert.models.assessment import FarmMetrics
from agricert.models.enums import CertificationTierEnum
from agricert.schemas.assessment import SubScores

MIN_SCORE = 0
MAX_SCORE = 100

# Weights for water, energy, chemical, organic, biodiversity; they sum to 100.
SCORE_WEIGHTS: tuple[int, int, int, int, int] = (25, 25, 20, 20, 10)

# Evaluated highest-first; anything below the last threshold is basic.
TIER_THRESHOLDS: tuple[tuple[int, CertificationTierEnum], ...] = (
	(90, CertificationTierEnum.platinum),
	(80, CertificationTierEnum.gold),
	(70, CertificationTierEnum.silver),
	(60, CertificationTierEnum.bronze),
)

# (maximum usage per unit of farm area, score) steps, lowest intensity first.
WATER_USAGE_STEPS: tuple[tuple[int, int], ...] = ((1000, 100), (2500, 80), (5000, 60))
ENERGY_USAGE_STEPS: tuple[tuple[int, int], ...] = ((200, 100), (500, 80), (1000, 60))
CHEMICAL_USAGE_STEPS: tuple[tuple[int, int], ...] = ((5, 100), (15, 80), (30, 60))
HIGH_USAGE_SCORE = 40


def validate_sub_scores(scores: SubScores) -> None:
	for name, value in scores.model_dump().items():
		if not MIN_SCORE <= value <= MAX_SCORE:
			raise LedgerError(
				code=LedgerErrorCode.invalid_score,
				detail=f"{name} score {value} is outside [{MIN_SCORE}, {MAX_SCORE}]",
			)


def calculate_overall_score(scores: SubScores) -> int:
	weighted = sum(
		value * weight for value, weight in zip(scores.as_tuple(), SCORE_WEIGHTS, strict=True)
	)
	return weighted // 100


def determine_certification_level(score: int) -> CertificationTierEnum:
	for minimum, tier in TIER_THRESHOLDS:
		if score >= minimum:
			return tier
	return CertificationTierEnum.basic


def usage_intensity(total_usage: int, farm_size: int) -> int:
	"""Usage per unit of area; a zero-size farm is treated as one unit."""
	return total_usage // max(farm_size, 1)


def score_usage(intensity: int, steps: tuple[tuple[int, int], ...]) -> int:
	for maximum, score in steps:
		if intensity <= maximum:
			return score
	return HIGH_USAGE_SCORE


def organic_practices_score(organic_count: int, total_count: int) -> int:
	if total_count == 0:
		return 0
	return organic_count * 100 // total_count


def derive_sub_scores(metrics: FarmMetrics, biodiversity_score: int) -> SubScores:
	"""Sub-scores for an automated assessment built from recorded farm metrics."""
	size = metrics.farm_size
	return SubScores(
		water_efficiency=score_usage(
			usage_intensity(metrics.total_water_usage, size), WATER_USAGE_STEPS
		),
		energy_efficiency=score_usage(
			usage_intensity(metrics.total_energy_usage, size), ENERGY_USAGE_STEPS
		),
		chemical_reduction=score_usage(
			usage_intensity(metrics.total_chemical_usage, size), CHEMICAL_USAGE_STEPS
		),
		organic_practices=organic_practices_score(
			metrics.organic_practices_count, metrics.total_practices_count
		),
		biodiversity=biodiversity_score,
	)
