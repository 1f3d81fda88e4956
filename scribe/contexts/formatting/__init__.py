"""
Formatting Context

Responsibilities:
- Validates conversion options (closed sets of engines, styles, citation packages)
- Resolves options into pandoc arguments for LaTeX/PDF output
- Selects the bundled LaTeX template matching the installed pandoc
- Provides the pre-processing and intermediate staging hooks run around a conversion

Owns: pandoc argument assembly, bundled templates, LaTeX dependency headers
Never: Runs pandoc or a LaTeX engine to convert documents
"""

from scribe.contexts.formatting.dependencies import (
    LatexDependency,
    latex_dependencies,
    latex_dependency,
)
from scribe.contexts.formatting.exceptions import (
    FileSystemError,
    InvalidOptionError,
    MissingToolchainError,
)
from scribe.contexts.formatting.hooks import RenderContext, generate_intermediates, pre_process
from scribe.contexts.formatting.options import (
    CitationPackage,
    ConversionOptions,
    HighlightStyle,
    Includes,
    LatexEngine,
    TemplateMode,
    load_conversion_options,
)
from scribe.contexts.formatting.output_format import (
    OutputFormat,
    latex_document,
    latex_fragment,
    pdf_document,
)
from scribe.contexts.formatting.resolver import resolve_pandoc_args

__all__ = [
    # Output formats
    "pdf_document",
    "latex_document",
    "latex_fragment",
    "OutputFormat",
    # Options
    "ConversionOptions",
    "Includes",
    "HighlightStyle",
    "LatexEngine",
    "CitationPackage",
    "TemplateMode",
    "load_conversion_options",
    "LatexDependency",
    "latex_dependency",
    "latex_dependencies",
    # Resolution and hooks
    "resolve_pandoc_args",
    "RenderContext",
    "pre_process",
    "generate_intermediates",
    # Errors
    "InvalidOptionError",
    "MissingToolchainError",
    "FileSystemError",
]
