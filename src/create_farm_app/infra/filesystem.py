"""Local-disk implementation of :class:`~create_farm_app.core.protocols.FileSystem`.

All ``OSError`` / ``shutil.Error`` instances raised while copying are
caught here and re-raised as
:class:`~create_farm_app.exceptions.CopyFailedError`.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from create_farm_app.exceptions import CopyFailedError

logger = logging.getLogger(__name__)

_IGNORED = shutil.ignore_patterns("__pycache__", "*.pyc", "*.pyo")
"""Build artefacts an installed template may carry; never scaffolded."""


def _copy_unless_exists(source: str, destination: str) -> str:
    """``copytree`` copy function that never overwrites a file."""
    if os.path.lexists(destination):
        logger.debug("Keeping existing file %s", destination)
        return destination
    return shutil.copy2(source, destination)


class LocalFileSystem:
    """Concrete :class:`FileSystem` backed by :mod:`shutil`.

    This class satisfies the protocol structurally, with no explicit
    inheritance required.
    """

    def is_readable(self, path: Path) -> bool:
        return path.is_dir() and os.access(path, os.R_OK | os.X_OK)

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Copy *source* into *destination* without clobbering.

        Existing directories are merged into; existing files are kept.
        Python bytecode caches in *source* are not copied.

        Raises
        ------
        CopyFailedError
            For any error raised while walking or copying the tree.
        """
        logger.debug("Copying %s -> %s", source, destination)
        try:
            shutil.copytree(
                source,
                destination,
                ignore=_IGNORED,
                copy_function=_copy_unless_exists,
                dirs_exist_ok=True,
            )
        except shutil.Error as exc:
            # copytree collects per-file errors as (src, dst, reason) tuples.
            failures = exc.args[0] if exc.args and isinstance(exc.args[0], list) else []
            lines = [f"{src} -> {dst}: {reason}" for src, dst, reason in failures[:5]]
            raise CopyFailedError(
                f"Failed to copy project files to {destination}",
                hint="\n".join(lines) or str(exc),
            ) from exc
        except OSError as exc:
            raise CopyFailedError(
                f"Failed to copy project files to {destination}: {exc}",
                hint="Check that the parent directory exists and is writable.",
            ) from exc
