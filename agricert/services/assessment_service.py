"""Assessment engine: scored assessments and the farm metrics behind automated ones."""

from __future__ import annotations

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from agricert.config import Settings
from agricert.errors import LedgerError, LedgerErrorCode
from agricert.models.assessment import Assessment, FarmMetrics
from agricert.models.enums import CounterNameEnum
from agricert.schemas.assessment import FarmMetricsUpdate, SubScores
from agricert.services import scoring
from agricert.services.bounds import deadline_after, require_uint128
from agricert.services.sequence_service import SequenceService

logger = structlog.get_logger("agricert.assessments")


class AssessmentService:
	"""Owns Assessment and FarmMetrics rows.  Assessments are never updated."""

	def __init__(self, db: Session, settings: Settings):
		self.db = db
		self.settings = settings

	def submit_assessment(
		self,
		farm_id: int,
		scores: SubScores,
		now: int,
		assessor: str,
	) -> Assessment:
		scoring.validate_sub_scores(scores)
		require_uint128("farm_id", farm_id)
		valid_until = deadline_after(now, self.settings.validity_period)
		self._check_history_capacity(farm_id)

		overall_score = scoring.calculate_overall_score(scores)
		level = scoring.determine_certification_level(overall_score)
		assessment = Assessment(
			id=SequenceService(self.db).allocate(CounterNameEnum.assessment),
			farm_id=farm_id,
			assessment_date=now,
			water_efficiency_score=scores.water_efficiency,
			energy_efficiency_score=scores.energy_efficiency,
			chemical_reduction_score=scores.chemical_reduction,
			organic_practices_score=scores.organic_practices,
			biodiversity_score=scores.biodiversity,
			overall_score=overall_score,
			certification_level=level,
			assessor=assessor,
			valid_until=valid_until,
		)
		self.db.add(assessment)
		self.db.flush()
		logger.info(
			"assessment_submitted",
			assessment_id=assessment.id,
			farm_id=farm_id,
			overall_score=overall_score,
			certification_level=level.value,
		)
		return assessment

	def update_farm_metrics(self, farm_id: int, payload: FarmMetricsUpdate) -> FarmMetrics:
		require_uint128("farm_id", farm_id)
		metrics = self.db.get(FarmMetrics, farm_id)
		if metrics is None:
			metrics = FarmMetrics(farm_id=farm_id)
			self.db.add(metrics)
		for key, value in payload.model_dump().items():
			setattr(metrics, key, value)
		self.db.flush()
		logger.info("farm_metrics_updated", farm_id=farm_id)
		return metrics

	def derive_automated_assessment(self, farm_id: int, now: int, assessor: str) -> Assessment:
		metrics = self.get_farm_metrics(farm_id)
		if metrics is None:
			raise LedgerError(
				code=LedgerErrorCode.farm_not_found,
				detail=f"No metrics recorded for farm {farm_id}",
			)
		scores = scoring.derive_sub_scores(metrics, self.settings.automated_biodiversity_score)
		return self.submit_assessment(farm_id, scores, now, assessor)

	def get_assessment(self, assessment_id: int) -> Assessment | None:
		return self.db.get(Assessment, assessment_id)

	def require_assessment(self, assessment_id: int) -> Assessment:
		assessment = self.get_assessment(assessment_id)
		if assessment is None:
			raise LedgerError(
				code=LedgerErrorCode.assessment_not_found,
				detail=f"Assessment {assessment_id} not found",
			)
		return assessment

	def get_assessment_ids_by_farm(self, farm_id: int) -> list[int]:
		stmt = select(Assessment.id).where(Assessment.farm_id == farm_id).order_by(Assessment.id.asc())
		return list(self.db.scalars(stmt).all())

	def get_latest_assessment(self, farm_id: int) -> Assessment | None:
		stmt = (
			select(Assessment)
			.where(Assessment.farm_id == farm_id)
			.order_by(Assessment.id.desc())
			.limit(1)
		)
		return self.db.scalars(stmt).first()

	def is_assessment_valid(self, assessment_id: int, now: int) -> bool:
		assessment = self.get_assessment(assessment_id)
		return assessment is not None and assessment.is_valid_at(now)

	def get_farm_metrics(self, farm_id: int) -> FarmMetrics | None:
		return self.db.get(FarmMetrics, farm_id)

	def next_assessment_id(self) -> int:
		return SequenceService(self.db).peek(CounterNameEnum.assessment)

	def _check_history_capacity(self, farm_id: int) -> None:
		stmt = select(func.count()).select_from(Assessment).where(Assessment.farm_id == farm_id)
		count = self.db.scalar(stmt) or 0
		if count >= self.settings.max_assessments_per_farm:
			raise LedgerError(
				code=LedgerErrorCode.assessment_history_full,
				detail=(
					f"Farm {farm_id} already holds "
					f"{self.settings.max_assessments_per_farm} assessments"
				),
			)
