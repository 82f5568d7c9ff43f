"""Identity checks for registry operations.

Callers are opaque principal strings supplied by the surrounding service;
authorization is plain equality against the required identity.
"""

from __future__ import annotations

from agricert.errors import LedgerError, LedgerErrorCode


def is_authorized(required: str, caller: str) -> bool:
	return caller == required


def require_identity(required: str, caller: str, action: str) -> None:
	if not is_authorized(required, caller):
		raise LedgerError(
			code=LedgerErrorCode.unauthorized,
			detail=f"{caller} is not permitted to {action}",
		)
