"""Call-boundary result type: a success value or one typed failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from agricert.errors import LedgerError, LedgerErrorCode

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class LedgerResult(Generic[T]):
	value: T | None = None
	error: LedgerErrorCode | None = None
	detail: str | None = None

	@property
	def ok(self) -> bool:
		return self.error is None

	@classmethod
	def success(cls, value: T) -> LedgerResult[T]:
		return cls(value=value)

	@classmethod
	def failure(cls, exc: LedgerError) -> LedgerResult[T]:
		return cls(error=exc.code, detail=exc.detail)

	def unwrap(self) -> T:
		"""Return the value, re-raising the failure as ``LedgerError``."""
		if self.error is not None:
			raise LedgerError(code=self.error, detail=self.detail or "")
		return self.value  # type: ignore[return-value]
