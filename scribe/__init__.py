"""
SCRIBE - Source Conversion Rules for Intermediate-Backed Exports

Resolves the command-line options that turn a Markdown document into a PDF
through pandoc and a LaTeX engine.

Architecture:
- Formatting Context: option validation, pandoc flag resolution, render-time hooks
- Utils: logging setup, front matter reading, render intermediate staging
"""

__version__ = "0.1.0"
