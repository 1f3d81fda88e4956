"""
Pandoc Probing and Argument Helpers

Locates the installed pandoc through pypandoc, reads its version, and builds
the small argument groups (table of contents, highlighting, LaTeX engine,
includes) that the resolver assembles into a full command line.
"""

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import pypandoc
from dotenv import load_dotenv

from scribe.contexts.formatting.exceptions import MissingToolchainError
from scribe.contexts.formatting.logger import _log_debug
from scribe.contexts.formatting.patterns import PandocFlags

load_dotenv()

# pypandoc looks up its binary in PYPANDOC_PANDOC when it first searches for pandoc
PANDOC_PATH = os.getenv("PANDOC_PATH")
if PANDOC_PATH:
    os.environ.setdefault("PYPANDOC_PANDOC", PANDOC_PATH)

INSTALL_HINT = "Install pandoc (https://pandoc.org/installing.html) or set PANDOC_PATH."

# pandoc 2.0 renamed --latex-engine to --pdf-engine
PDF_ENGINE_FLAG_VERSION = (2, 0)

# Highlight style used when the caller asks for "default"
DEFAULT_HIGHLIGHT_STYLE = "tango"

INPUT_DIALECT = "markdown+autolink_bare_uris+ascii_identifiers+tex_math_single_backslash"

Version = Tuple[int, ...]


def parse_version(version: Union[str, Iterable[int]]) -> Version:
    """
    Parse a dotted version string into a comparable tuple of integers.

    Args:
        version: Version string (e.g., "1.17.0.2") or an already-parsed tuple

    Returns:
        Tuple of integers (e.g., (1, 17, 0, 2))

    Raises:
        ValueError: If the string is not a dotted sequence of integers
    """
    if not isinstance(version, str):
        return tuple(int(part) for part in version)

    version = version.strip()
    if not re.fullmatch(r"\d+(?:\.\d+)*", version):
        raise ValueError(f"Not a dotted version string: {version!r}")

    return tuple(int(part) for part in version.split("."))


def version_at_least(version: Union[str, Version], minimum: Union[str, Version]) -> bool:
    """Compare versions component-wise; a shorter version sorts first (1.17 < 1.17.0.2)."""
    return parse_version(version) >= parse_version(minimum)


def pandoc_available(error: bool = False) -> bool:
    """
    Check whether pypandoc can find a pandoc binary.

    Args:
        error: Raise MissingToolchainError instead of returning False

    Returns:
        True if pandoc was found
    """
    try:
        pypandoc.get_pandoc_path()
    except OSError as e:
        if error:
            raise MissingToolchainError("pandoc", INSTALL_HINT) from e
        return False
    return True


@lru_cache(maxsize=None)
def pandoc_version() -> Version:
    """
    Query the installed pandoc for its version.

    The result is cached for the lifetime of the process.

    Returns:
        Parsed version tuple

    Raises:
        MissingToolchainError: If pandoc is missing or reports an unreadable version
    """
    try:
        version_string = pypandoc.get_pandoc_version()
    except OSError as e:
        raise MissingToolchainError("pandoc", INSTALL_HINT) from e

    try:
        version = parse_version(version_string)
    except ValueError as e:
        raise MissingToolchainError(
            "pandoc", f"Could not read a version from pandoc output: {version_string!r}"
        ) from e

    _log_debug(f"Detected pandoc {version_string} at {pypandoc.get_pandoc_path()}")
    return version


def pandoc_path_arg(path: Union[str, Path]) -> str:
    """Format a file path for the pandoc command line (user expansion, forward slashes)."""
    return Path(os.path.expanduser(str(path))).as_posix()


def pandoc_toc_args(toc: bool, toc_depth: int = 2) -> List[str]:
    """Table of contents arguments."""
    if not toc:
        return []
    return [PandocFlags.TOC, PandocFlags.TOC_DEPTH, str(toc_depth)]


def pandoc_highlight_args(highlight: Optional[str], default: str = DEFAULT_HIGHLIGHT_STYLE) -> List[str]:
    """
    Syntax highlighting arguments.

    None disables highlighting; "default" is replaced by the given default style.
    """
    if highlight is None:
        return [PandocFlags.NO_HIGHLIGHT]
    if highlight == "default":
        highlight = default
    return [PandocFlags.HIGHLIGHT_STYLE, highlight]


def pandoc_latex_engine_args(latex_engine: str, version: Version) -> List[str]:
    """LaTeX engine selection, using the flag name the given pandoc version understands."""
    if version_at_least(version, PDF_ENGINE_FLAG_VERSION):
        flag = PandocFlags.PDF_ENGINE
    else:
        flag = PandocFlags.LATEX_ENGINE
    return [flag, latex_engine]


def includes_to_pandoc_args(includes) -> List[str]:
    """
    Content inclusion arguments.

    Args:
        includes: Includes record (or None) with in_header, before_body and after_body paths

    Returns:
        One flag/path pair per included file, grouped by position
    """
    if includes is None:
        return []

    args = []
    for flag, paths in (
        (PandocFlags.INCLUDE_IN_HEADER, includes.in_header),
        (PandocFlags.INCLUDE_BEFORE_BODY, includes.before_body),
        (PandocFlags.INCLUDE_AFTER_BODY, includes.after_body),
    ):
        for path in paths:
            args.extend([flag, pandoc_path_arg(path)])
    return args


def input_dialect(fig_caption: bool = True, md_extensions: Optional[str] = None) -> str:
    """
    Build the pandoc input format name for Markdown sources.

    Figure captions rely on implicit_figures, so it is switched off when
    captions are disabled.
    """
    dialect = INPUT_DIALECT
    if not fig_caption:
        dialect += "-implicit_figures"
    if md_extensions:
        dialect += "".join(md_extensions.split())
    return dialect
