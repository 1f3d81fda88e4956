"""
Formatting context logger.

Loguru wrappers that tag every message with the [format] prefix. Formatting
modules log through these helpers instead of importing utils.logger.
"""

import os
from pathlib import Path
from typing import List, Sequence

from dotenv import load_dotenv
from loguru import logger

from scribe.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[format]"

# Maximum number of staged files listed individually
INTERMEDIATES_LIST_LIMIT = 10


def setup_formatting_logger(log_dir: Path) -> Path:
    """
    Setup logger for a formatting session.

    Args:
        log_dir: Directory for this formatting session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="format",
        log_dir=log_dir,
        extra_provenance={
            "Pandoc": os.getenv("PANDOC_PATH") or os.getenv("PYPANDOC_PANDOC") or "pandoc (PATH)"
        },
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# Formatting-specific helpers


def log_resolved_args(args: Sequence[str], pandoc_version: tuple) -> None:
    """Log the resolved pandoc arguments, one per line at debug level."""
    version = ".".join(str(part) for part in pandoc_version)
    _log_debug(f"Resolved {len(args)} pandoc arguments for pandoc {version}")
    for arg in args:
        _log_debug(f"  {arg}")


def log_pre_process_result(input_file: Path, args: Sequence[str]) -> None:
    """Log the arguments contributed by the pre-processor."""
    if not args:
        _log_debug(f"Pre-processor added no arguments for {input_file.name}")
        return

    _log_info(f"Pre-processor added {len(args)} arguments for {input_file.name}")
    for arg in args:
        _log_debug(f"  {arg}")


def log_intermediates(intermediates_dir: Path, files: List[Path]) -> None:
    """Log the staged render intermediates, listing at most INTERMEDIATES_LIST_LIMIT."""
    _log_success(f"Staged {len(files)} intermediate files in {intermediates_dir}")
    for path in files[:INTERMEDIATES_LIST_LIMIT]:
        _log_debug(f"  {path}")
    if len(files) > INTERMEDIATES_LIST_LIMIT:
        _log_debug(f"  ... and {len(files) - INTERMEDIATES_LIST_LIMIT} more")
