"""Ledger error codes and the exception carrying them to the call boundary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pydantic import ValidationError


class LedgerErrorCode(IntEnum):
	"""Typed failure kinds.  Numeric values match the on-chain contract codes."""

	# Assessment engine
	assessment_not_found = 301
	farm_not_found = 302
	invalid_score = 303
	assessment_history_full = 304

	# Certification registry
	unauthorized = 400
	certificate_not_found = 401
	invalid_tier = 402
	certificate_history_full = 403
	batch_too_large = 404

	# Shared
	value_out_of_range = 500


@dataclass(slots=True)
class LedgerError(Exception):
	"""Validation or authorization failure; the enclosing transaction rolls back."""

	code: LedgerErrorCode
	detail: str

	def __str__(self) -> str:
		return f"{self.code.name}: {self.detail}"

	@classmethod
	def from_validation(cls, exc: ValidationError) -> LedgerError:
		fields = ", ".join(
			f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
			for error in exc.errors(include_url=False)
		)
		return cls(code=LedgerErrorCode.value_out_of_range, detail=fields)
