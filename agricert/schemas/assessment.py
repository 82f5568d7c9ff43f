"""Pydantic schemas for assessments and farm metrics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from agricert.models.enums import CertificationTierEnum
from agricert.schemas.fields import Uint128


class SubScores(BaseModel):
	"""The five weighted inputs of an overall score.  Range is checked by the engine."""

	water_efficiency: int
	energy_efficiency: int
	chemical_reduction: int
	organic_practices: int
	biodiversity: int

	def as_tuple(self) -> tuple[int, int, int, int, int]:
		return (
			self.water_efficiency,
			self.energy_efficiency,
			self.chemical_reduction,
			self.organic_practices,
			self.biodiversity,
		)


class AssessmentRead(BaseModel):
	model_config = ConfigDict(from_attributes=True, frozen=True)

	id: int
	farm_id: int
	assessment_date: int
	water_efficiency_score: int
	energy_efficiency_score: int
	chemical_reduction_score: int
	organic_practices_score: int
	biodiversity_score: int
	overall_score: int
	certification_level: CertificationTierEnum
	assessor: str
	valid_until: int


class FarmMetricsUpdate(BaseModel):
	total_water_usage: Uint128
	total_energy_usage: Uint128
	total_chemical_usage: Uint128
	organic_practices_count: Uint128
	total_practices_count: Uint128
	farm_size: Uint128


class FarmMetricsRead(FarmMetricsUpdate):
	model_config = ConfigDict(from_attributes=True, frozen=True)

	farm_id: int
