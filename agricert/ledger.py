"""In-process facade over the assessment engine and certification registry.

Every operation runs under one re-entrant lock inside its own transaction:
id allocation, history append and record writes commit together or not at
all.  Neither ``LedgerError`` nor an input outside the unsigned 128-bit
range escapes a mutating call; both are logged and returned as a failed
``LedgerResult``.  Logging output is configured by the host process through
``agricert.logging_config``, never by the ledger itself.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

import structlog
from pydantic import ValidationError
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from agricert.config import Settings, get_settings
from agricert.database import create_ledger_engine, create_session_factory, init_db
from agricert.errors import LedgerError, LedgerErrorCode
from agricert.schemas.assessment import (
	AssessmentRead,
	FarmMetricsRead,
	FarmMetricsUpdate,
	SubScores,
)
from agricert.schemas.certificate import (
	CertificateIssueRequest,
	CertificateMetadataRead,
	CertificateRead,
)
from agricert.schemas.result import LedgerResult
from agricert.services.assessment_service import AssessmentService
from agricert.services.certificate_service import CertificateService

T = TypeVar("T")

logger = structlog.get_logger("agricert.ledger")


class SustainabilityLedger:
	def __init__(self, settings: Settings | None = None, engine: Engine | None = None):
		self.settings = settings or get_settings()
		self.engine = engine or create_ledger_engine(self.settings)
		init_db(self.engine)
		self._session_factory = create_session_factory(self.engine)
		self._lock = threading.RLock()

	def close(self) -> None:
		self.engine.dispose()

	# ── Assessment engine ───────────────────────────────────────────────────

	def submit_assessment(
		self,
		farm_id: int,
		water_score: int,
		energy_score: int,
		chemical_score: int,
		organic_score: int,
		biodiversity_score: int,
		now: int,
		assessor: str,
	) -> LedgerResult[int]:
		def operation(db: Session) -> int:
			scores = SubScores(
				water_efficiency=water_score,
				energy_efficiency=energy_score,
				chemical_reduction=chemical_score,
				organic_practices=organic_score,
				biodiversity=biodiversity_score,
			)
			return self._assessments(db).submit_assessment(farm_id, scores, now, assessor).id

		return self._execute("submit_assessment", operation)

	def update_farm_metrics(
		self,
		farm_id: int,
		total_water: int,
		total_energy: int,
		total_chemical: int,
		organic_count: int,
		total_count: int,
		farm_size: int,
	) -> LedgerResult[bool]:
		def operation(db: Session) -> bool:
			payload = FarmMetricsUpdate(
				total_water_usage=total_water,
				total_energy_usage=total_energy,
				total_chemical_usage=total_chemical,
				organic_practices_count=organic_count,
				total_practices_count=total_count,
				farm_size=farm_size,
			)
			self._assessments(db).update_farm_metrics(farm_id, payload)
			return True

		return self._execute("update_farm_metrics", operation)

	def derive_automated_assessment(self, farm_id: int, now: int, assessor: str) -> LedgerResult[int]:
		return self._execute(
			"derive_automated_assessment",
			lambda db: self._assessments(db).derive_automated_assessment(farm_id, now, assessor).id,
		)

	def get_assessment(self, assessment_id: int) -> AssessmentRead | None:
		def query(db: Session) -> AssessmentRead | None:
			assessment = self._assessments(db).get_assessment(assessment_id)
			return None if assessment is None else AssessmentRead.model_validate(assessment)

		return self._read(query)

	def get_latest_assessment(self, farm_id: int) -> AssessmentRead | None:
		def query(db: Session) -> AssessmentRead | None:
			assessment = self._assessments(db).get_latest_assessment(farm_id)
			return None if assessment is None else AssessmentRead.model_validate(assessment)

		return self._read(query)

	def get_assessment_ids_by_farm(self, farm_id: int) -> list[int]:
		return self._read(lambda db: self._assessments(db).get_assessment_ids_by_farm(farm_id))

	def is_assessment_valid(self, assessment_id: int, now: int) -> bool:
		return self._read(lambda db: self._assessments(db).is_assessment_valid(assessment_id, now))

	def get_farm_metrics(self, farm_id: int) -> FarmMetricsRead | None:
		def query(db: Session) -> FarmMetricsRead | None:
			metrics = self._assessments(db).get_farm_metrics(farm_id)
			return None if metrics is None else FarmMetricsRead.model_validate(metrics)

		return self._read(query)

	def next_assessment_id(self) -> int:
		return self._read(lambda db: self._assessments(db).next_assessment_id())

	# ── Certification registry ──────────────────────────────────────────────

	def issue_certificate(
		self,
		farm_id: int,
		assessment_id: int,
		certification_level: str,
		metadata_uri: str,
		farm_name: str,
		sustainability_score: int,
		practices_verified: int,
		carbon_footprint: int,
		water_efficiency: int,
		caller: str,
		now: int,
	) -> LedgerResult[int]:
		try:
			request = CertificateIssueRequest(
				farm_id=farm_id,
				assessment_id=assessment_id,
				certification_level=certification_level,
				metadata_uri=metadata_uri,
				farm_name=farm_name,
				sustainability_score=sustainability_score,
				practices_verified=practices_verified,
				carbon_footprint=carbon_footprint,
				water_efficiency=water_efficiency,
			)
		except ValidationError as exc:
			return self._reject("issue_certificate", LedgerError.from_validation(exc))
		return self._issue(request, caller, now)

	def issue_certificate_for_assessment(
		self,
		assessment_id: int,
		metadata_uri: str,
		farm_name: str,
		practices_verified: int,
		carbon_footprint: int,
		water_efficiency: int,
		caller: str,
		now: int,
	) -> LedgerResult[int]:
		def operation(db: Session) -> int:
			certificate = self._certificates(db).issue_for_assessment(
				assessment_id,
				metadata_uri,
				farm_name,
				practices_verified,
				carbon_footprint,
				water_efficiency,
				caller,
				now,
			)
			return certificate.id

		return self._execute("issue_certificate_for_assessment", operation)

	def batch_issue_certificates(
		self,
		requests: Sequence[CertificateIssueRequest],
		caller: str,
		now: int,
	) -> LedgerResult[list[LedgerResult[int]]]:
		"""Issue each request in order, each in its own transaction.

		A failed request does not undo the ones before it.
		"""
		if len(requests) > self.settings.max_batch_size:
			return self._reject(
				"batch_issue_certificates",
				LedgerError(
					code=LedgerErrorCode.batch_too_large,
					detail=f"Batch of {len(requests)} exceeds {self.settings.max_batch_size} requests",
				),
			)
		with self._lock:
			results = [self._issue(request, caller, now) for request in requests]
		return LedgerResult.success(results)

	def transfer_certificate(self, certificate_id: int, new_owner: str, caller: str) -> LedgerResult[bool]:
		def operation(db: Session) -> bool:
			self._certificates(db).transfer_certificate(certificate_id, new_owner, caller)
			return True

		return self._execute("transfer_certificate", operation)

	def renew_certificate(
		self,
		certificate_id: int,
		new_assessment_id: int,
		caller: str,
		now: int,
	) -> LedgerResult[bool]:
		def operation(db: Session) -> bool:
			self._certificates(db).renew_certificate(certificate_id, new_assessment_id, caller, now)
			return True

		return self._execute("renew_certificate", operation)

	def revoke_certificate(self, certificate_id: int, caller: str) -> LedgerResult[bool]:
		def operation(db: Session) -> bool:
			self._certificates(db).revoke_certificate(certificate_id, caller)
			return True

		return self._execute("revoke_certificate", operation)

	def is_certificate_valid(self, certificate_id: int, now: int) -> bool:
		return self._read(lambda db: self._certificates(db).is_certificate_valid(certificate_id, now))

	def get_active_certificates(self, farm_id: int, now: int) -> list[int]:
		return self._read(lambda db: self._certificates(db).get_active_certificates(farm_id, now))

	def get_certificate(self, certificate_id: int) -> CertificateRead | None:
		def query(db: Session) -> CertificateRead | None:
			certificate = self._certificates(db).get_certificate(certificate_id)
			return None if certificate is None else CertificateRead.model_validate(certificate)

		return self._read(query)

	def get_certificate_metadata(self, certificate_id: int) -> CertificateMetadataRead | None:
		def query(db: Session) -> CertificateMetadataRead | None:
			metadata = self._certificates(db).get_certificate_metadata(certificate_id)
			return None if metadata is None else CertificateMetadataRead.model_validate(metadata)

		return self._read(query)

	def get_certificate_owner(self, certificate_id: int) -> str | None:
		return self._read(lambda db: self._certificates(db).get_certificate_owner(certificate_id))

	def get_certificate_ids_by_farm(self, farm_id: int) -> list[int]:
		return self._read(lambda db: self._certificates(db).get_certificate_ids_by_farm(farm_id))

	def next_certificate_id(self) -> int:
		return self._read(lambda db: self._certificates(db).next_certificate_id())

	# ── Internals ───────────────────────────────────────────────────────────

	def _issue(self, request: CertificateIssueRequest, caller: str, now: int) -> LedgerResult[int]:
		return self._execute(
			"issue_certificate",
			lambda db: self._certificates(db).issue_certificate(request, caller, now).id,
		)

	def _assessments(self, db: Session) -> AssessmentService:
		return AssessmentService(db, self.settings)

	def _certificates(self, db: Session) -> CertificateService:
		return CertificateService(db, self.settings)

	@contextmanager
	def _transaction(self) -> Iterator[Session]:
		with self._lock, self._session_factory.begin() as session:
			yield session

	def _execute(self, operation: str, fn: Callable[[Session], T]) -> LedgerResult[T]:
		try:
			with self._transaction() as session:
				value = fn(session)
		except LedgerError as exc:
			return self._reject(operation, exc)
		except ValidationError as exc:
			return self._reject(operation, LedgerError.from_validation(exc))
		return LedgerResult.success(value)

	def _read(self, fn: Callable[[Session], T]) -> T:
		with self._transaction() as session:
			return fn(session)

	@staticmethod
	def _reject(operation: str, exc: LedgerError) -> LedgerResult[T]:
		logger.warning(
			"ledger_operation_rejected",
			operation=operation,
			error=exc.code.name,
			code=int(exc.code),
			detail=exc.detail,
		)
		return LedgerResult.failure(exc)
