"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from create_farm_app.exceptions import EnvironmentError

_LOG_FORMAT = "%(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def escape_markup(text: object) -> str:
	"""Escape *text* so square brackets are not read as Rich markup."""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return str(text)
	return escape(str(text))


def configure_logging(verbose: bool = False) -> None:
	"""Route package log records to stderr.

	DEBUG records are shown with ``--verbose``; otherwise only warnings.
	Rich's handler is used when available.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler: logging.Handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter(f"%(levelname)s {_LOG_FORMAT}"))
	else:
		handler = RichHandler(
			console=get_rich_console(),
			show_time=False,
			show_path=False,
			markup=False,
		)
		handler.setFormatter(logging.Formatter(_LOG_FORMAT))

	package_logger = logging.getLogger("create_farm_app")
	for existing in list(package_logger.handlers):
		package_logger.removeHandler(existing)
	package_logger.addHandler(handler)
	package_logger.setLevel(level)
	package_logger.propagate = False
