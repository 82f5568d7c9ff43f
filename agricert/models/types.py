"""Column types for the ledger's unsigned 128-bit quantities."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

UINT128_MAX = 2**128 - 1
UINT128_DIGITS = len(str(UINT128_MAX))


class Uint128(TypeDecorator[int]):
    """Unsigned 128-bit integer stored as fixed-width decimal text.

    Zero padding keeps the lexical order of stored values equal to their
    numeric order, so ``ORDER BY`` and equality lookups work on every
    backend.  Range is enforced before values reach the session.
    """

    impl = String
    cache_ok = True

    def __init__(self) -> None:
        super().__init__(length=UINT128_DIGITS)

    def process_bind_param(self, value: int | None, dialect: Any) -> str | None:
        if value is None:
            return None
        return f"{int(value):0{UINT128_DIGITS}d}"

    def process_result_value(self, value: str | None, dialect: Any) -> int | None:
        if value is None:
            return None
        return int(value)
