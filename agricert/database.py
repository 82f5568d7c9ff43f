"""Engine and session factory for the ledger store."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from agricert.config import Settings, get_settings
from agricert.models import Base


def create_ledger_engine(settings: Settings | None = None) -> Engine:
	"""Build the engine for ``settings.database_url``.

	In-memory SQLite needs a single shared connection, otherwise every
	pooled connection would see its own empty database.
	"""
	settings = settings or get_settings()
	url = settings.database_url
	if url.startswith("sqlite") and ":memory:" in url:
		return create_engine(
			url,
			echo=settings.database_echo,
			connect_args={"check_same_thread": False},
			poolclass=StaticPool,
		)
	return create_engine(url, echo=settings.database_echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
	return sessionmaker(bind=engine, expire_on_commit=False, autoflush=True)


def init_db(engine: Engine) -> None:
	"""Create every ledger table that does not exist yet."""
	Base.metadata.create_all(engine)
