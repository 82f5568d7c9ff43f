"""Shared pytest fixtures: fresh in-memory ledger, identities and clock value."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from agricert.config import Settings
from agricert.ledger import SustainabilityLedger
from agricert.schemas.certificate import CertificateIssueRequest

OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
OUTSIDER = "ST2DIFFERENT_ADDRESS"
START_HEIGHT = 12345
VALIDITY = 52560


def make_settings(**overrides: Any) -> Settings:
	values: dict[str, Any] = {
		"database_url": "sqlite+pysqlite:///:memory:",
		"registry_owner": OWNER,
		"validity_period": VALIDITY,
		"log_format": "console",
		"log_level": "warning",
	}
	values.update(overrides)
	return Settings(_env_file=None, **values)


@pytest.fixture
def ledger_factory() -> Generator[Callable[..., SustainabilityLedger], None, None]:
	"""Build ledgers with setting overrides; all are disposed after the test."""
	created: list[SustainabilityLedger] = []

	def factory(**overrides: Any) -> SustainabilityLedger:
		ledger = SustainabilityLedger(make_settings(**overrides))
		created.append(ledger)
		return ledger

	yield factory

	for ledger in created:
		ledger.close()


@pytest.fixture
def ledger(ledger_factory: Callable[..., SustainabilityLedger]) -> SustainabilityLedger:
	return ledger_factory()


@pytest.fixture
def owner() -> str:
	return OWNER


@pytest.fixture
def outsider() -> str:
	return OUTSIDER


@pytest.fixture
def now() -> int:
	return START_HEIGHT


@pytest.fixture
def issue_request() -> Callable[..., CertificateIssueRequest]:
	def build(farm_id: int = 1, assessment_id: int = 1, level: str = "gold", **overrides: Any) -> CertificateIssueRequest:
		values: dict[str, Any] = {
			"farm_id": farm_id,
			"assessment_id": assessment_id,
			"certification_level": level,
			"metadata_uri": "uri",
			"farm_name": f"Farm {farm_id}",
			"sustainability_score": 85,
			"practices_verified": 10,
			"carbon_footprint": 500,
			"water_efficiency": 90,
		}
		values.update(overrides)
		return CertificateIssueRequest(**values)

	return build
