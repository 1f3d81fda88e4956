"""
Integration tests for the PDF and LaTeX output format descriptors.
"""

import pytest

from scribe.contexts.formatting import latex_document, latex_fragment, pdf_document
from scribe.contexts.formatting.exceptions import InvalidOptionError
from scribe.contexts.formatting.hooks import RenderContext, generate_intermediates
from scribe.contexts.formatting.options import TemplateMode
from scribe.contexts.formatting.pandoc import INPUT_DIALECT
from scribe.contexts.formatting.templates import fragment_template_path


@pytest.mark.integration
def test_pdf_document_defaults():
    """Test the default PDF output format."""
    output = pdf_document(pandoc_version="2.0")

    assert output.pandoc.to == "latex"
    assert output.pandoc.from_ == INPUT_DIALECT
    assert output.pandoc.latex_engine == "pdflatex"
    assert output.pandoc.keep_tex is False
    assert output.pandoc.ext is None
    assert output.pandoc.args[-2:] == ["--pdf-engine", "pdflatex"]
    assert output.clean_supporting is True
    assert output.keep_md is False
    assert output.df_print == "default"
    assert output.figures.fig_width == 6.5
    assert output.figures.fig_height == 4.5
    assert output.figures.dev == "pdf"


@pytest.mark.integration
def test_pdf_document_options():
    """Test that options flow into the descriptor."""
    output = pdf_document(
        pandoc_version="2.0",
        toc=True,
        latex_engine="xelatex",
        keep_tex=True,
        fig_caption=False,
        md_extensions="+emoji",
        output_extensions=["-smart"],
        df_print="kable",
        fig_width=5,
        pandoc_args=["--listings"],
    )

    assert output.pandoc.to == "latex-smart"
    assert output.pandoc.from_ == INPUT_DIALECT + "-implicit_figures+emoji"
    assert output.pandoc.latex_engine == "xelatex"
    assert output.pandoc.args[0] == "--table-of-contents"
    assert output.pandoc.args[-1] == "--listings"
    assert output.clean_supporting is False
    assert output.df_print == "kable"
    assert output.figures.fig_width == 5


@pytest.mark.integration
@pytest.mark.parametrize(
    "options",
    [
        {"latex_engine": "tectonic"},
        {"highlight": "solarized"},
        {"table_of_contents": True},
    ],
)
def test_pdf_document_invalid_options(options):
    """Test that invalid or unknown options are rejected."""
    with pytest.raises(InvalidOptionError):
        pdf_document(pandoc_version="2.0", **options)


@pytest.mark.integration
def test_latex_document():
    """Test that the LaTeX output keeps the .tex file as the result."""
    output = latex_document(pandoc_version="2.0", toc=True)

    assert output.pandoc.ext == ".tex"
    assert output.pandoc.keep_tex is True
    assert output.clean_supporting is False
    assert output.options.toc is True


@pytest.mark.integration
def test_latex_fragment():
    """Test that the fragment output uses the body-only template."""
    output = latex_fragment(pandoc_version="2.0")

    assert output.options.template_mode is TemplateMode.CUSTOM
    template = output.pandoc.args[output.pandoc.args.index("--template") + 1]
    assert template == fragment_template_path().as_posix()
    assert "graphics=yes" not in output.pandoc.args
    assert output.pandoc.ext == ".tex"


@pytest.mark.integration
def test_hooks_bound_to_options(tmp_path):
    """Test that the descriptor's hooks run with the options it was built from."""
    document = tmp_path / "report.md"
    document.write_text("---\ntitle: Report\n---\n\nBody\n", encoding="utf-8")
    files_dir = tmp_path / "report_files"
    files_dir.mkdir()
    (files_dir / "plot.pdf").write_bytes(b"%PDF")

    output = pdf_document(pandoc_version="2.0", template=None)
    context = RenderContext(front_matter={"title": "Report"}, input_file=document, files_dir=files_dir)

    assert output.pre_processor(context) == []
    assert output.intermediates_generator is generate_intermediates

    intermediates_dir = tmp_path / "intermediates"
    intermediates_dir.mkdir()
    staged = output.intermediates_generator(context, document, "utf-8", intermediates_dir)

    assert staged == [intermediates_dir / "report_files" / "plot.pdf"]


@pytest.mark.integration
def test_end_to_end_defaults(tmp_path):
    """Test default resolution and pre-processing for a document without layout keys."""
    document = tmp_path / "report.md"
    document.write_text("---\ntitle: Report\n---\n\nBody\n", encoding="utf-8")

    output = pdf_document(pandoc_version="2.0")
    args = output.pandoc.args

    positions = [
        args.index("--template"),
        args.index("graphics=yes"),
        args.index("--highlight-style"),
        args.index("--pdf-engine"),
    ]
    assert positions == sorted(positions)
    assert args[args.index("--template") + 1].endswith("default-1.17.0.2.tex")
    assert args[args.index("--highlight-style") + 1] == "tango"
    assert "--natbib" not in args and "--biblatex" not in args

    context = RenderContext(front_matter={"title": "Report"}, input_file=document)
    assert output.pre_processor(context) == [
        "--variable", "geometry:margin=1in",
        "--variable", "compact-title:yes",
    ]
