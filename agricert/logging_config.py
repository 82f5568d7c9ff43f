"""Structured logging bootstrap for processes that embed the ledger.

The ledger only emits events through ``structlog.get_logger``.  Output is
configured by the host process at startup with
:func:`configure_structured_logging`; calling it again applies the new
settings to every ledger logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from agricert.config import LogFormat, Settings, get_settings


def _renderers(log_format: LogFormat) -> list[Any]:
	if log_format == LogFormat.json:
		return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
	# ConsoleRenderer formats exceptions itself.
	return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_structured_logging(settings: Settings | None = None, *, stream: TextIO | None = None) -> None:
	"""Route stdlib logging and structlog events to ``stream`` (stderr by default)."""
	settings = settings or get_settings()
	stream = stream or sys.stderr
	log_level = logging.getLevelName(settings.log_level.upper())
	if not isinstance(log_level, int):
		log_level = logging.INFO

	logging.basicConfig(stream=stream, format="%(message)s")
	logging.getLogger().setLevel(log_level)

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			*_renderers(settings.log_format),
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(file=stream),
		cache_logger_on_first_use=False,
	)
