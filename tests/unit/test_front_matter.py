"""Unit tests for front matter parsing."""

import pytest

from scribe.contexts.formatting.hooks import has_yaml_parameter
from scribe.utils.front_matter import parse_front_matter, read_front_matter, split_front_matter


@pytest.mark.unit
def test_split_front_matter():
    """Test splitting the YAML block from the body."""
    text = "---\ntitle: Report\n---\n\n# Introduction\n"

    block, body = split_front_matter(text)

    assert block == "title: Report"
    assert body == "\n# Introduction\n"


@pytest.mark.unit
def test_split_without_front_matter():
    """Test that documents without a block are returned unchanged."""
    text = "# Introduction\n\n---\n\nA horizontal rule above.\n"

    assert split_front_matter(text) == ("", text)


@pytest.mark.unit
def test_parse_front_matter():
    """Test parsing keys, lists and dotted terminators."""
    text = (
        "---\n"
        "title: Report\n"
        "geometry: margin=2cm\n"
        "header-includes:\n"
        "  - \\usepackage{booktabs}\n"
        "  - \\newcommand{\\R}{\\mathbb{R}}\n"
        "...\n"
        "Body\n"
    )

    front_matter = parse_front_matter(text)

    assert front_matter["title"] == "Report"
    assert front_matter["geometry"] == "margin=2cm"
    assert front_matter["header-includes"] == [
        "\\usepackage{booktabs}",
        "\\newcommand{\\R}{\\mathbb{R}}",
    ]


@pytest.mark.unit
def test_parse_keeps_interpolation_syntax():
    """Test that ${...} in values is kept verbatim."""
    front_matter = parse_front_matter("---\nsubtitle: costs in ${currency}\n---\n")

    assert front_matter["subtitle"] == "costs in ${currency}"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["No front matter\n", "---\n\n---\nBody\n"])
def test_parse_empty(text):
    """Test that missing or empty blocks parse to an empty dict."""
    assert parse_front_matter(text) == {}


@pytest.mark.unit
def test_parse_non_mapping():
    """Test that a YAML list is not accepted as front matter."""
    with pytest.raises(ValueError):
        parse_front_matter("---\n- a\n- b\n---\n")


@pytest.mark.unit
def test_read_front_matter(tmp_path):
    """Test reading front matter from a file."""
    document = tmp_path / "report.md"
    document.write_text("---\ntitle: Report\n---\nBody\n", encoding="utf-8")

    assert read_front_matter(document) == {"title": "Report"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, parameter, expected",
    [
        ("---\ngeometry: margin=2cm\n---\n", "geometry", True),
        ("---\ndocumentclass: book\n---\n", "geometry|documentclass", True),
        ("---\ntitle: x\n---\n", "geometry|documentclass", False),
        ("---\ncompact-title: no\n---\n", "compact-title", True),
        ("---\ntitle: x\n---\nSee geometry: in the body\n", "geometry", False),
        ("---\ngeometry : a4paper\n---\n", "geometry", True),
    ],
)
def test_has_yaml_parameter(text, parameter, expected):
    """Test line-anchored YAML key detection."""
    assert has_yaml_parameter(text, parameter) is expected
