"""Certification registry: issuance, transfer, renewal, revocation."""

from __future__ import annotations

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from agricert.auth.policy import require_identity
from agricert.config import Settings
from agricert.errors import LedgerError, LedgerErrorCode
from agricert.models.certificate import Certificate, CertificateMetadata, CertificateOwner
from agricert.models.enums import CertificationTierEnum, CounterNameEnum
from agricert.schemas.certificate import CertificateIssueRequest
from agricert.services.assessment_service import AssessmentService
from agricert.services.bounds import deadline_after, require_uint128
from agricert.services.sequence_service import SequenceService

logger = structlog.get_logger("agricert.certificates")


class CertificateService:
	"""Owns Certificate, CertificateMetadata and CertificateOwner rows."""

	def __init__(self, db: Session, settings: Settings):
		self.db = db
		self.settings = settings

	def issue_certificate(
		self,
		request: CertificateIssueRequest,
		caller: str,
		now: int,
	) -> Certificate:
		require_identity(self.settings.registry_owner, caller, "issue certificates")
		level = self._parse_level(request.certification_level)
		expiry_date = deadline_after(now, self.settings.validity_period)
		self._check_history_capacity(request.farm_id)

		certificate = Certificate(
			id=SequenceService(self.db).allocate(CounterNameEnum.certificate),
			farm_id=request.farm_id,
			assessment_id=request.assessment_id,
			certification_level=level,
			issue_date=now,
			expiry_date=expiry_date,
			issuer=caller,
			metadata_uri=request.metadata_uri,
			renewable=True,
			revoked=False,
		)
		certificate.details = CertificateMetadata(
			farm_name=request.farm_name,
			certification_level=level,
			sustainability_score=request.sustainability_score,
			practices_verified=request.practices_verified,
			carbon_footprint=request.carbon_footprint,
			water_efficiency=request.water_efficiency,
		)
		certificate.owner = CertificateOwner(owner=caller)
		self.db.add(certificate)
		self.db.flush()
		logger.info(
			"certificate_issued",
			certificate_id=certificate.id,
			farm_id=certificate.farm_id,
			assessment_id=certificate.assessment_id,
			certification_level=level.value,
		)
		return certificate

	def issue_for_assessment(
		self,
		assessment_id: int,
		metadata_uri: str,
		farm_name: str,
		practices_verified: int,
		carbon_footprint: int,
		water_efficiency: int,
		caller: str,
		now: int,
	) -> Certificate:
		require_identity(self.settings.registry_owner, caller, "issue certificates")
		assessment = AssessmentService(self.db, self.settings).require_assessment(assessment_id)
		request = CertificateIssueRequest(
			farm_id=assessment.farm_id,
			assessment_id=assessment.id,
			certification_level=assessment.certification_level.value,
			metadata_uri=metadata_uri,
			farm_name=farm_name,
			sustainability_score=assessment.overall_score,
			practices_verified=practices_verified,
			carbon_footprint=carbon_footprint,
			water_efficiency=water_efficiency,
		)
		return self.issue_certificate(request, caller, now)

	def transfer_certificate(self, certificate_id: int, new_owner: str, caller: str) -> CertificateOwner:
		# Validity is not consulted: expired and revoked tokens stay transferable.
		ownership = self.db.get(CertificateOwner, certificate_id)
		if ownership is None:
			raise self._not_found(certificate_id)
		require_identity(ownership.owner, caller, f"transfer certificate {certificate_id}")

		previous_owner = ownership.owner
		ownership.owner = new_owner
		self.db.flush()
		logger.info(
			"certificate_transferred",
			certificate_id=certificate_id,
			previous_owner=previous_owner,
			new_owner=new_owner,
		)
		return ownership

	def renew_certificate(
		self,
		certificate_id: int,
		new_assessment_id: int,
		caller: str,
		now: int,
	) -> Certificate:
		require_identity(self.settings.registry_owner, caller, "renew certificates")
		require_uint128("assessment_id", new_assessment_id)
		expiry_date = deadline_after(now, self.settings.validity_period)
		certificate = self.require_certificate(certificate_id)
		if not certificate.renewable:
			raise LedgerError(
				code=LedgerErrorCode.unauthorized,
				detail=f"Certificate {certificate_id} is not renewable",
			)
		if certificate.revoked:
			raise LedgerError(
				code=LedgerErrorCode.unauthorized,
				detail=f"Certificate {certificate_id} has been revoked",
			)

		certificate.assessment_id = new_assessment_id
		certificate.issue_date = now
		certificate.expiry_date = expiry_date
		self.db.flush()
		logger.info(
			"certificate_renewed",
			certificate_id=certificate_id,
			assessment_id=new_assessment_id,
			expiry_date=certificate.expiry_date,
		)
		return certificate

	def revoke_certificate(self, certificate_id: int, caller: str) -> Certificate:
		require_identity(self.settings.registry_owner, caller, "revoke certificates")
		certificate = self.require_certificate(certificate_id)
		certificate.revoked = True
		self.db.flush()
		logger.info("certificate_revoked", certificate_id=certificate_id)
		return certificate

	def get_certificate(self, certificate_id: int) -> Certificate | None:
		return self.db.get(Certificate, certificate_id)

	def require_certificate(self, certificate_id: int) -> Certificate:
		certificate = self.get_certificate(certificate_id)
		if certificate is None:
			raise self._not_found(certificate_id)
		return certificate

	def get_certificate_metadata(self, certificate_id: int) -> CertificateMetadata | None:
		return self.db.get(CertificateMetadata, certificate_id)

	def get_certificate_owner(self, certificate_id: int) -> str | None:
		ownership = self.db.get(CertificateOwner, certificate_id)
		return None if ownership is None else ownership.owner

	def get_certificate_ids_by_farm(self, farm_id: int) -> list[int]:
		stmt = select(Certificate.id).where(Certificate.farm_id == farm_id).order_by(Certificate.id.asc())
		return list(self.db.scalars(stmt).all())

	def is_certificate_valid(self, certificate_id: int, now: int) -> bool:
		certificate = self.get_certificate(certificate_id)
		return certificate is not None and certificate.is_valid_at(now)

	def get_active_certificates(self, farm_id: int, now: int) -> list[int]:
		return [
			certificate_id
			for certificate_id in self.get_certificate_ids_by_farm(farm_id)
			if self.is_certificate_valid(certificate_id, now)
		]

	def next_certificate_id(self) -> int:
		return SequenceService(self.db).peek(CounterNameEnum.certificate)

	def _check_history_capacity(self, farm_id: int) -> None:
		stmt = select(func.count()).select_from(Certificate).where(Certificate.farm_id == farm_id)
		count = self.db.scalar(stmt) or 0
		if count >= self.settings.max_certificates_per_farm:
			raise LedgerError(
				code=LedgerErrorCode.certificate_history_full,
				detail=(
					f"Farm {farm_id} already holds "
					f"{self.settings.max_certificates_per_farm} certificates"
				),
			)

	@staticmethod
	def _parse_level(raw: str) -> CertificationTierEnum:
		try:
			return CertificationTierEnum(raw.strip().lower())
		except ValueError as exc:
			raise LedgerError(
				code=LedgerErrorCode.invalid_tier,
				detail=f"Unknown certification level: {raw}",
			) from exc

	@staticmethod
	def _not_found(certificate_id: int) -> LedgerError:
		return LedgerError(
			code=LedgerErrorCode.certificate_not_found,
			detail=f"Certificate {certificate_id} not found",
		)
