"""Unit tests for LaTeX dependency normalization and rendering."""

import pytest

from scribe.contexts.formatting.dependencies import (
    DependencyRenderer,
    LatexDependency,
    flatten_latex_dependencies,
    latex_dependencies,
    latex_dependencies_as_string,
    latex_dependency,
)
from scribe.contexts.formatting.exceptions import InvalidOptionError


@pytest.mark.unit
def test_latex_dependency_normalizes_options():
    """Test that a single option string becomes a one-element tuple."""
    dependency = latex_dependency("hyperref", "unicode=true")

    assert dependency.options == ("unicode=true",)
    assert dependency.extra_lines == ()


@pytest.mark.unit
@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_latex_dependency_requires_name(name):
    """Test that a dependency needs a non-empty package name."""
    with pytest.raises(InvalidOptionError):
        LatexDependency(name)


@pytest.mark.unit
@pytest.mark.parametrize(
    "spec, expected",
    [
        (None, []),
        ("framed", [LatexDependency("framed")]),
        (LatexDependency("xcolor", ("table",)), [LatexDependency("xcolor", ("table",))]),
        (
            ["framed", latex_dependency("hyperref", ["unicode=true"])],
            [LatexDependency("framed"), LatexDependency("hyperref", ("unicode=true",))],
        ),
        (
            {"hyperref": ["unicode=true", "breaklinks=true"], "lmodern": None},
            [
                LatexDependency("hyperref", ("unicode=true", "breaklinks=true")),
                LatexDependency("lmodern"),
            ],
        ),
        (
            [{"name": "tikz", "extra_lines": ["\\usetikzlibrary{arrows}"]}],
            [LatexDependency("tikz", (), ("\\usetikzlibrary{arrows}",))],
        ),
    ],
)
def test_latex_dependencies_spec_forms(spec, expected):
    """Test every accepted spec form."""
    assert latex_dependencies(spec) == expected


@pytest.mark.unit
@pytest.mark.parametrize("spec", [42, [3.5], [{"options": ["x"]}]])
def test_latex_dependencies_rejects_unsupported(spec):
    """Test that unsupported spec types raise InvalidOptionError."""
    with pytest.raises(InvalidOptionError):
        latex_dependencies(spec)


@pytest.mark.unit
def test_flatten_collected_metadata():
    """Test that dependencies are found in nested metadata and other objects ignored."""
    framed = LatexDependency("framed")
    xcolor = LatexDependency("xcolor")
    tikz = LatexDependency("tikz")
    collected = [framed, "html-dependency", [xcolor, {"not": "latex"}, (tikz,)], None]

    assert flatten_latex_dependencies(collected) == [framed, xcolor, tikz]


@pytest.mark.unit
@pytest.mark.parametrize("collected", [None, [], ["text", {"a": 1}]])
def test_no_collected_dependencies(collected):
    """Test that metadata without LaTeX dependencies yields nothing."""
    assert flatten_latex_dependencies(collected) == []


@pytest.mark.unit
def test_render_usepackage_lines():
    """Test \\usepackage rendering with and without options."""
    rendered = latex_dependencies_as_string(
        [
            LatexDependency("framed"),
            LatexDependency("hyperref", ("unicode=true", "breaklinks=true")),
        ]
    )

    assert rendered == "\\usepackage{framed}\n\\usepackage[unicode=true,breaklinks=true]{hyperref}\n"


@pytest.mark.unit
def test_render_extra_lines_follow_package():
    """Test that extra lines are emitted right after their package."""
    rendered = latex_dependencies_as_string(
        [
            LatexDependency("tikz", extra_lines=("\\usetikzlibrary{arrows}",)),
            LatexDependency("amsmath"),
        ]
    )

    assert rendered.splitlines() == [
        "\\usepackage{tikz}",
        "\\usetikzlibrary{arrows}",
        "\\usepackage{amsmath}",
    ]


@pytest.mark.unit
def test_render_keeps_duplicates_in_order():
    """Test that repeated declarations are concatenated, not merged."""
    rendered = latex_dependencies_as_string(
        [LatexDependency("xcolor"), LatexDependency("framed"), LatexDependency("xcolor")]
    )

    assert rendered.count("\\usepackage{xcolor}") == 2
    assert rendered.index("{framed}") < rendered.rindex("{xcolor}")


@pytest.mark.unit
def test_render_empty():
    """Test that no dependencies render to an empty string."""
    assert DependencyRenderer().render([]) == ""
