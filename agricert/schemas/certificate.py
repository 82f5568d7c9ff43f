"""Pydantic schemas for certificate issuance and lookups."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from agricert.models.enums import CertificationTierEnum
from agricert.schemas.fields import Uint128


class CertificateIssueRequest(BaseModel):
	"""One issuance; ``certification_level`` is checked against the tier enum by the registry."""

	farm_id: Uint128
	assessment_id: Uint128
	certification_level: str
	metadata_uri: str
	farm_name: str
	sustainability_score: Uint128
	practices_verified: Uint128
	carbon_footprint: Uint128
	water_efficiency: Uint128


class CertificateRead(BaseModel):
	model_config = ConfigDict(from_attributes=True, frozen=True)

	id: int
	farm_id: int
	assessment_id: int
	certification_level: CertificationTierEnum
	issue_date: int
	expiry_date: int
	issuer: str
	metadata_uri: str
	renewable: bool
	revoked: bool


class CertificateMetadataRead(BaseModel):
	model_config = ConfigDict(from_attributes=True, frozen=True)

	farm_name: str
	certification_level: CertificationTierEnum
	sustainability_score: int
	practices_verified: int
	carbon_footprint: int
	water_efficiency: int
