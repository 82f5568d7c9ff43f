from __future__ import annotations

import pytest

from agricert.errors import LedgerError, LedgerErrorCode
from agricert.models.assessment import FarmMetrics
from agricert.models.enums import CertificationTierEnum
from agricert.schemas.assessment import SubScores
from agricert.services import scoring


def _scores(water: int, energy: int, chemical: int, organic: int, biodiversity: int) -> SubScores:
    return SubScores(
        water_efficiency=water,
        energy_efficiency=energy,
        chemical_reduction=chemical,
        organic_practices=organic,
        biodiversity=biodiversity,
    )


def _metrics(**overrides: int) -> FarmMetrics:
    values = {
        "farm_id": 1,
        "total_water_usage": 5000,
        "total_energy_usage": 2000,
        "total_chemical_usage": 100,
        "organic_practices_count": 8,
        "total_practices_count": 10,
        "farm_size": 100,
    }
    values.update(overrides)
    return FarmMetrics(**values)


def test_weights_sum_to_one_hundred() -> None:
    assert sum(scoring.SCORE_WEIGHTS) == 100


def test_worked_example_is_81_gold() -> None:
    overall = scoring.calculate_overall_score(_scores(80, 90, 70, 85, 75))
    assert overall == 81
    assert scoring.determine_certification_level(overall) == CertificationTierEnum.gold


@pytest.mark.parametrize(
    ("sub_scores", "expected_score", "expected_level"),
    [
        ((95, 95, 90, 90, 85), 92, CertificationTierEnum.platinum),
        ((85, 85, 80, 80, 75), 82, CertificationTierEnum.gold),
        ((75, 75, 70, 70, 65), 72, CertificationTierEnum.silver),
        ((65, 65, 60, 60, 55), 62, CertificationTierEnum.bronze),
        ((50, 50, 45, 45, 40), 47, CertificationTierEnum.basic),
    ],
)
def test_overall_score_and_level(
    sub_scores: tuple[int, int, int, int, int],
    expected_score: int,
    expected_level: CertificationTierEnum,
) -> None:
    overall = scoring.calculate_overall_score(_scores(*sub_scores))
    assert overall == expected_score
    assert scoring.determine_certification_level(overall) == expected_level


def test_overall_score_uses_floor_division() -> None:
    # 81*25 + 80*25 + 80*20 + 80*20 + 80*10 = 8025
    assert scoring.calculate_overall_score(_scores(81, 80, 80, 80, 80)) == 80
    # 3*25 + 1*10 = 85
    assert scoring.calculate_overall_score(_scores(3, 0, 0, 0, 1)) == 0
    # 99*100 - 1*10 = 9890
    assert scoring.calculate_overall_score(_scores(99, 99, 99, 99, 98)) == 98
    assert scoring.calculate_overall_score(_scores(100, 100, 100, 100, 100)) == 100
    assert scoring.calculate_overall_score(_scores(0, 0, 0, 0, 0)) == 0


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (100, CertificationTierEnum.platinum),
        (90, CertificationTierEnum.platinum),
        (89, CertificationTierEnum.gold),
        (80, CertificationTierEnum.gold),
        (79, CertificationTierEnum.silver),
        (70, CertificationTierEnum.silver),
        (69, CertificationTierEnum.bronze),
        (60, CertificationTierEnum.bronze),
        (59, CertificationTierEnum.basic),
        (0, CertificationTierEnum.basic),
    ],
)
def test_tier_threshold_boundaries(score: int, expected: CertificationTierEnum) -> None:
    assert scoring.determine_certification_level(score) == expected


def test_validate_sub_scores_accepts_range_edges() -> None:
    scoring.validate_sub_scores(_scores(0, 100, 0, 100, 0))


@pytest.mark.parametrize("bad", [101, 150, -1])
def test_validate_sub_scores_rejects_out_of_range(bad: int) -> None:
    with pytest.raises(LedgerError) as excinfo:
        scoring.validate_sub_scores(_scores(80, 80, bad, 80, 80))
    assert excinfo.value.code == LedgerErrorCode.invalid_score
    assert "chemical_reduction" in excinfo.value.detail


def test_organic_practices_score() -> None:
    assert scoring.organic_practices_score(8, 10) == 80
    assert scoring.organic_practices_score(1, 3) == 33
    assert scoring.organic_practices_score(5, 0) == 0


def test_usage_scores_never_increase_with_intensity() -> None:
    for steps in (
        scoring.WATER_USAGE_STEPS,
        scoring.ENERGY_USAGE_STEPS,
        scoring.CHEMICAL_USAGE_STEPS,
    ):
        scores = [scoring.score_usage(intensity, steps) for intensity in range(0, 7000, 5)]
        assert all(later <= earlier for earlier, later in zip(scores, scores[1:]))
        assert scores[0] == 100
        assert scores[-1] == scoring.HIGH_USAGE_SCORE


def test_derive_sub_scores_from_metrics() -> None:
    scores = scoring.derive_sub_scores(_metrics(), biodiversity_score=70)
    assert scores == _scores(100, 100, 100, 80, 70)


def test_derive_sub_scores_for_heavy_usage() -> None:
    scores = scoring.derive_sub_scores(
        _metrics(
            total_water_usage=600_000,
            total_energy_usage=70_000,
            total_chemical_usage=2_000,
            organic_practices_count=0,
            total_practices_count=0,
        ),
        biodiversity_score=55,
    )
    # per-unit intensities: water 6000, energy 700, chemical 20
    assert scores == _scores(40, 60, 60, 0, 55)


def test_zero_farm_size_counts_as_one_unit() -> None:
    assert scoring.usage_intensity(500, 0) == 500
    scores = scoring.derive_sub_scores(_metrics(total_water_usage=900, farm_size=0), biodiversity_score=70)
    assert scores.water_efficiency == 100
