"""
Bundled LaTeX Templates

Pandoc's template variables changed across releases, so the package ships one
LaTeX template per compatible range of pandoc versions. Selection scans an
ordered table of (minimum version, file) pairs for the newest satisfied
threshold.
"""

from pathlib import Path
from typing import Tuple, Union

from scribe.contexts.formatting.pandoc import Version, parse_version, version_at_least

RESOURCES_PATH = Path(__file__).parent / "resources"
LATEX_TEMPLATES_PATH = RESOURCES_PATH / "latex"
FRAGMENT_TEMPLATE_PATH = RESOURCES_PATH / "fragment" / "default.tex"

# Newest first; the final entry has no threshold and catches everything older
LATEX_TEMPLATE_TIERS: Tuple[Tuple[Version, str], ...] = (
    ((1, 17, 0, 2), "default-1.17.0.2.tex"),
    ((1, 15, 2), "default-1.15.2.tex"),
    ((1, 14), "default-1.14.tex"),
    ((), "default.tex"),
)


def select_latex_template(pandoc_version: Union[str, Version]) -> str:
    """
    Pick the bundled template file name for a pandoc version.

    Args:
        pandoc_version: Installed pandoc version (e.g., "2.0" or (1, 15, 2))

    Returns:
        Template file name (e.g., "default-1.17.0.2.tex")
    """
    version = parse_version(pandoc_version)
    for minimum, template_name in LATEX_TEMPLATE_TIERS:
        if version_at_least(version, minimum):
            return template_name

    # Unreachable: the empty threshold matches every version
    return LATEX_TEMPLATE_TIERS[-1][1]


def latex_template_path(pandoc_version: Union[str, Version]) -> Path:
    """Absolute path to the bundled template matching a pandoc version."""
    return LATEX_TEMPLATES_PATH / select_latex_template(pandoc_version)


def fragment_template_path() -> Path:
    """Absolute path to the bundled body-only template."""
    return FRAGMENT_TEMPLATE_PATH
