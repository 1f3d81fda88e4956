"""
Pattern Constants

Centralized regex patterns and flag strings used for option resolution and
document scanning. Organized into frozen dataclasses by category.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PandocFlags:
    """
    Pandoc command-line flags emitted during option resolution.
    """
    TOC: str = "--table-of-contents"
    TOC_DEPTH: str = "--toc-depth"
    TEMPLATE: str = "--template"
    SELF_CONTAINED: str = "--self-contained"
    NUMBER_SECTIONS: str = "--number-sections"
    HIGHLIGHT_STYLE: str = "--highlight-style"
    NO_HIGHLIGHT: str = "--no-highlight"
    VARIABLE: str = "--variable"

    # Renamed in pandoc 2.0
    PDF_ENGINE: str = "--pdf-engine"
    LATEX_ENGINE: str = "--latex-engine"

    INCLUDE_IN_HEADER: str = "--include-in-header"
    INCLUDE_BEFORE_BODY: str = "--include-before-body"
    INCLUDE_AFTER_BODY: str = "--include-after-body"


@dataclass(frozen=True)
class TemplateVariables:
    """
    Template variables set through --variable.
    """
    GRAPHICS: str = "graphics=yes"
    DEFAULT_GEOMETRY: str = "geometry:margin=1in"
    COMPACT_TITLE: str = "compact-title:yes"


@dataclass(frozen=True)
class FrontMatterKeys:
    """
    Front matter keys inspected by the pre-processor.
    """
    GEOMETRY: str = "geometry"
    DOCUMENTCLASS: str = "documentclass"
    COMPACT_TITLE: str = "compact-title"
    HEADER_INCLUDES: str = "header-includes"


def yaml_key_regex(key: str) -> str:
    """Line-anchored regex matching a top-level YAML key (key may be an alternation)."""
    return rf"^(?:{key})\s*:.*$"
