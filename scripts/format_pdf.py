#!/usr/bin/env python3
"""
PDF Formatting CLI

Shows the pandoc arguments SCRIBE resolves for a Markdown to PDF conversion.

Commands:
    flags      - Print the pandoc arguments for a set of options
    preprocess - Print the arguments the pre-processor adds for a document

Examples:\n

    format_pdf.py flags --toc --engine xelatex                # Options on the command line

    format_pdf.py flags --config _output.yml --section pdf_document

    format_pdf.py flags --pandoc-version 2.0                  # Skip querying pandoc

    format_pdf.py preprocess report.md                        # Geometry and header defaults
"""

import os
import shlex
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from scribe.contexts.formatting import (
    ConversionOptions,
    RenderContext,
    load_conversion_options,
    pre_process,
    resolve_pandoc_args,
)
from scribe.contexts.formatting.logger import setup_formatting_logger
from scribe.utils.front_matter import read_front_matter

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

# Command-line spelling for "disable" on options that accept None
DISABLED = "none"


app = typer.Typer(
    help="Resolve pandoc arguments for Markdown to PDF conversion",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="YAML file with conversion options", exists=True, dir_okay=False),
]
SectionOption = Annotated[
    Optional[str],
    typer.Option("--section", "-s", help="Top-level key of the config file to read (e.g., pdf_document)"),
]
TocOption = Annotated[
    Optional[bool], typer.Option("--toc/--no-toc", help="Include a table of contents")
]
TocDepthOption = Annotated[
    Optional[int], typer.Option("--toc-depth", help="Table of contents depth", min=1)
]
NumberSectionsOption = Annotated[
    Optional[bool], typer.Option("--number-sections/--no-number-sections", help="Number sections")
]
HighlightOption = Annotated[
    Optional[str],
    typer.Option("--highlight", help=f"Highlight style, or '{DISABLED}' to disable highlighting"),
]
TemplateOption = Annotated[
    Optional[str],
    typer.Option(
        "--template",
        help=f"'default' (bundled), a template path, or '{DISABLED}' for pandoc's built-in template",
    ),
]
EngineOption = Annotated[
    Optional[str], typer.Option("--engine", "-e", help="LaTeX engine (pdflatex, lualatex, xelatex)")
]
CitationOption = Annotated[
    Optional[str],
    typer.Option("--citation-package", help="Citation package (none, natbib, biblatex)"),
]
PandocArgOption = Annotated[
    Optional[List[str]],
    typer.Option("--pandoc-arg", "-a", help="Extra pandoc argument (repeatable)"),
]
VersionOption = Annotated[
    Optional[str],
    typer.Option("--pandoc-version", help="Pandoc version to resolve for (default: query pandoc)"),
]


def build_options(
    config: Optional[Path],
    section: Optional[str],
    toc: Optional[bool],
    toc_depth: Optional[int],
    number_sections: Optional[bool],
    highlight: Optional[str],
    template: Optional[str],
    engine: Optional[str],
    citation_package: Optional[str],
    pandoc_args: Optional[List[str]],
) -> ConversionOptions:
    """Load options from the config file (if any) and apply command-line overrides."""
    options = load_conversion_options(config, section) if config else ConversionOptions()

    overrides = {
        "toc": toc,
        "toc_depth": toc_depth,
        "number_sections": number_sections,
        "latex_engine": engine,
        "citation_package": citation_package,
    }
    overrides = {name: value for name, value in overrides.items() if value is not None}

    if highlight is not None:
        overrides["highlight"] = None if highlight == DISABLED else highlight
    if template is not None:
        overrides["template"] = None if template == DISABLED else template
    if pandoc_args:
        overrides["pandoc_args"] = list(options.pandoc_args) + list(pandoc_args)

    return replace(options, **overrides)


def start_logging() -> Path:
    """Log to a timestamped directory under LOGS_PATH."""
    log_dir = LOGS_PATH / f"format_{datetime.now():%Y%m%d_%H%M%S}"
    return setup_formatting_logger(log_dir)


@app.command("flags")
def flags_command(
    config: ConfigOption = None,
    section: SectionOption = None,
    toc: TocOption = None,
    toc_depth: TocDepthOption = None,
    number_sections: NumberSectionsOption = None,
    highlight: HighlightOption = None,
    template: TemplateOption = None,
    engine: EngineOption = None,
    citation_package: CitationOption = None,
    pandoc_arg: PandocArgOption = None,
    pandoc_version: VersionOption = None,
):
    """
    Print the pandoc arguments for a set of conversion options.

    Examples:\n

        $ format_pdf.py flags --toc --toc-depth 3

        $ format_pdf.py flags --highlight none --template none
    """
    start_logging()

    try:
        options = build_options(
            config, section, toc, toc_depth, number_sections,
            highlight, template, engine, citation_package, pandoc_arg,
        )
        args = resolve_pandoc_args(options, pandoc_version)
    except (ValueError, RuntimeError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(shlex.join(args))


@app.command("preprocess")
def preprocess_command(
    input_file: Annotated[
        Path,
        typer.Argument(help="Markdown document", exists=True, dir_okay=False),
    ],
    files_dir: Annotated[
        Optional[Path],
        typer.Option("--files-dir", help="Supporting files directory (default: <input>_files)"),
    ] = None,
    config: ConfigOption = None,
    section: SectionOption = None,
    template: TemplateOption = None,
):
    """
    Print the arguments the pre-processor adds for a document.

    Examples:\n

        $ format_pdf.py preprocess report.md

        $ format_pdf.py preprocess report.md --config _output.yml --section pdf_document
    """
    start_logging()

    if files_dir is None:
        files_dir = input_file.parent / f"{input_file.stem}_files"

    try:
        options = build_options(
            config, section, None, None, None, None, template, None, None, None,
        )
        context = RenderContext(
            front_matter=read_front_matter(input_file),
            input_file=input_file,
            files_dir=files_dir,
            output_dir=input_file.parent,
        )
        args = pre_process(options, context)
    except (ValueError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(shlex.join(args))


if __name__ == "__main__":
    app()
