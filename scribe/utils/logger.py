"""
Logger setup shared by all contexts.

Each session writes a full DEBUG log to <log_dir>/<context>.log and echoes
INFO and above to stderr, so stdout stays free for command output (e.g.,
resolved pandoc arguments). Context-specific prefix wrappers live in
contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from scribe import __version__

load_dotenv()

CONSOLE_LOG_LEVEL = os.getenv("SCRIBE_CONSOLE_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: str = CONSOLE_LOG_LEVEL,
) -> Path:
    """
    Replace loguru's default sink with a session log file and a stderr sink.

    Args:
        context_name: Context identifier, used as the log file name (e.g., "format")
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level echoed to stderr

    Returns:
        Path to log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    """
    Write the session header (command, working directory, versions) to the log file.

    Logged at DEBUG so the console only shows it when console_level is DEBUG.
    """
    logger.debug("-" * 60)
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")
    logger.debug(f"SCRIBE: {__version__}")

    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")

    logger.debug("-" * 60)
