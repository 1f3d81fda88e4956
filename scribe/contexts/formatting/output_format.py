"""
PDF and LaTeX Output Formats

Builds the output format descriptor a rendering pipeline consumes: the
resolved pandoc options, figure settings, cleanup flags and the two render
hooks bound to the options they were built from.

Examples:
    # Default PDF output
    >>> output = pdf_document()

    # Table of contents, XeLaTeX, extra pandoc argument
    >>> output = pdf_document(toc=True, latex_engine="xelatex", pandoc_args=["--listings"])

    # Keep the .tex source only
    >>> output = latex_document()
"""

from dataclasses import dataclass, field, replace
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Union

from scribe.contexts.formatting.hooks import RenderContext, generate_intermediates, pre_process
from scribe.contexts.formatting.options import ConversionOptions, conversion_options_from_dict
from scribe.contexts.formatting.pandoc import Version, input_dialect
from scribe.contexts.formatting.resolver import resolve_pandoc_args
from scribe.contexts.formatting.templates import fragment_template_path

PreProcessor = Callable[[RenderContext], List[str]]
IntermediatesGenerator = Callable[[RenderContext, Union[str, Path], str, Union[str, Path]], List[Path]]


@dataclass(frozen=True)
class PandocOptions:
    """
    How the pipeline should invoke pandoc.

    Attributes:
        to: Output format including extensions (e.g., "latex-smart")
        from_: Input format including extensions
        args: Resolved pandoc arguments
        latex_engine: LaTeX engine name
        keep_tex: Keep the intermediate .tex file
        ext: Output file extension; None lets the pipeline use ".pdf"
    """

    to: str
    from_: str
    args: List[str] = field(default_factory=list)
    latex_engine: str = "pdflatex"
    keep_tex: bool = False
    ext: Optional[str] = None


@dataclass(frozen=True)
class FigureOptions:
    """Figure defaults for code chunk output."""

    fig_width: float = 6.5
    fig_height: float = 4.5
    fig_crop: bool = True
    dev: str = "pdf"


@dataclass(frozen=True)
class OutputFormat:
    """
    Output format descriptor handed to the rendering pipeline.

    Attributes:
        pandoc: Pandoc invocation options
        figures: Figure defaults
        keep_md: Keep the intermediate Markdown file
        clean_supporting: Delete supporting files after conversion (False when keeping .tex)
        df_print: Data frame print mode
        pre_processor: Called with the RenderContext before pandoc runs
        intermediates_generator: Called after pre_processor to stage files for pandoc
        options: Options the format was built from
    """

    pandoc: PandocOptions
    figures: FigureOptions
    keep_md: bool
    clean_supporting: bool
    df_print: str
    pre_processor: PreProcessor
    intermediates_generator: IntermediatesGenerator
    options: ConversionOptions


def pdf_document(pandoc_version: Optional[Union[str, Version]] = None, **options) -> OutputFormat:
    """
    Output format converting Markdown to PDF through LaTeX.

    Args:
        pandoc_version: Pandoc version to resolve arguments for; queried from
            the installed pandoc when None
        **options: ConversionOptions fields (e.g., toc=True, latex_engine="xelatex")

    Returns:
        OutputFormat descriptor

    Raises:
        InvalidOptionError: If an option is unknown or has an invalid value
        MissingToolchainError: If pandoc must be queried and is not installed
    """
    conversion_options = conversion_options_from_dict(options)
    return output_format_for(conversion_options, pandoc_version)


def output_format_for(
    options: ConversionOptions,
    pandoc_version: Optional[Union[str, Version]] = None,
) -> OutputFormat:
    """Build the PDF output format for an existing ConversionOptions record."""
    args = resolve_pandoc_args(options, pandoc_version)

    pandoc = PandocOptions(
        to="".join(["latex", *options.output_extensions]),
        from_=input_dialect(options.fig_caption, options.md_extensions),
        args=args,
        latex_engine=options.latex_engine.value,
        keep_tex=options.keep_tex,
    )

    figures = FigureOptions(
        fig_width=options.fig_width,
        fig_height=options.fig_height,
        fig_crop=options.fig_crop,
        dev=options.dev,
    )

    return OutputFormat(
        pandoc=pandoc,
        figures=figures,
        keep_md=options.keep_md,
        clean_supporting=not options.keep_tex,
        df_print=options.df_print.value,
        pre_processor=partial(pre_process, options),
        intermediates_generator=generate_intermediates,
        options=options,
    )


def latex_document(pandoc_version: Optional[Union[str, Version]] = None, **options) -> OutputFormat:
    """
    Output format producing the LaTeX source instead of a PDF.

    Same as pdf_document with keep_tex forced on and a .tex output extension.
    """
    output = pdf_document(pandoc_version, **{**options, "keep_tex": True})
    return replace(output, pandoc=replace(output.pandoc, ext=".tex"))


def latex_fragment(pandoc_version: Optional[Union[str, Version]] = None, **options) -> OutputFormat:
    """
    Output format producing a LaTeX body without a preamble.

    Same as latex_document with the bundled fragment template.
    """
    return latex_document(pandoc_version, **{**options, "template": str(fragment_template_path())})
