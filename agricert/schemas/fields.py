"""Constrained field types shared by the ledger schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from agricert.models.types import UINT128_MAX

Uint128 = Annotated[int, Field(ge=0, le=UINT128_MAX)]
