"""Monotonic id allocation backed by the ``ledger_counters`` table."""

from __future__ import annotations

from sqlalchemy.orm import Session

from agricert.models.enums import CounterNameEnum
from agricert.models.ledger import LedgerCounter


class SequenceService:
	def __init__(self, db: Session):
		self.db = db

	def peek(self, name: CounterNameEnum) -> int:
		counter = self.db.get(LedgerCounter, name)
		return 1 if counter is None else counter.next_value

	def allocate(self, name: CounterNameEnum) -> int:
		"""Hand out the next id.  The increment rolls back with the caller's transaction."""
		counter = self.db.get(LedgerCounter, name)
		if counter is None:
			counter = LedgerCounter(name=name, next_value=1)
			self.db.add(counter)
		allocated = counter.next_value
		counter.next_value = allocated + 1
		self.db.flush()
		return allocated
