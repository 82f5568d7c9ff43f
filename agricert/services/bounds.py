"""Range checks for caller-supplied clock values and ids."""

from __future__ import annotations

from agricert.errors import LedgerError, LedgerErrorCode
from agricert.models.types import UINT128_MAX


def require_uint128(name: str, value: int) -> int:
	if not 0 <= value <= UINT128_MAX:
		raise LedgerError(
			code=LedgerErrorCode.value_out_of_range,
			detail=f"{name} {value} is outside [0, 2**128 - 1]",
		)
	return value


def deadline_after(now: int, validity_period: int) -> int:
	"""``now + validity_period``, rejected when either end leaves the unsigned range."""
	require_uint128("now", now)
	return require_uint128("deadline", now + validity_period)
