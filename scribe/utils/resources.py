"""
Render intermediate staging.

Finds the local files a Markdown document refers to (figures, bibliographies)
and copies them next to the intermediate files, so the LaTeX engine can
resolve the same relative paths the author wrote.

This module does not log; the calling context logs what was staged.
"""

import re
import shutil
from pathlib import Path, PurePosixPath
from typing import List, Union

from scribe.utils.front_matter import parse_front_matter

# Markdown image: ![alt](path "title")
MARKDOWN_IMAGE_REGEX = re.compile(r"!\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+[\"'][^\"']*[\"'])?\s*\)")

# HTML image: <img src="path">
HTML_IMAGE_REGEX = re.compile(r"<img\s[^>]*?src\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)

# LaTeX figure: \includegraphics[opts]{path}
INCLUDEGRAPHICS_REGEX = re.compile(r"\\includegraphics(?:\[[^\]]*\])?\{([^}]+)\}")

# URLs (scheme://...), protocol-relative URLs and data URIs
REMOTE_REGEX = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*:)?//|^data:")


def _is_local_relative(reference: str) -> bool:
    if REMOTE_REGEX.match(reference):
        return False
    if reference.startswith(("#", "~")):
        return False
    path = PurePosixPath(reference)
    if path.is_absolute() or Path(reference).is_absolute():
        return False
    # Stay inside the document directory
    return ".." not in path.parts


def find_external_resources(input_file: Union[str, Path], encoding: str = "utf-8") -> List[Path]:
    """
    Find local files referenced by a document.

    Scans Markdown images, HTML <img> tags, \\includegraphics commands and the
    bibliography front matter entry. Remote URLs, absolute paths and paths
    leaving the document directory are ignored, as are references to files
    that do not exist.

    Args:
        input_file: Markdown document
        encoding: Encoding used to read the document

    Returns:
        Paths relative to the document directory, in order of first reference
    """
    input_file = Path(input_file)
    text = input_file.read_text(encoding=encoding)
    base_dir = input_file.parent

    references: List[str] = []
    for regex in (MARKDOWN_IMAGE_REGEX, HTML_IMAGE_REGEX, INCLUDEGRAPHICS_REGEX):
        references.extend(match.group(1).strip() for match in regex.finditer(text))

    bibliography = parse_front_matter(text).get("bibliography")
    if isinstance(bibliography, str):
        references.append(bibliography)
    elif isinstance(bibliography, list):
        references.extend(str(entry) for entry in bibliography)

    resources: List[Path] = []
    for reference in dict.fromkeys(references):
        if not _is_local_relative(reference):
            continue
        relative = Path(reference)
        if not (base_dir / relative).is_file():
            continue
        resources.append(relative)

    return resources


def copy_render_intermediates(
    original_input: Union[str, Path],
    encoding: str,
    intermediates_dir: Union[str, Path],
) -> List[Path]:
    """
    Copy the files a document refers to into the intermediates directory.

    Each resource keeps its path relative to the document, so references in
    the converted output still resolve.

    Args:
        original_input: Markdown document being rendered
        encoding: Encoding used to read the document
        intermediates_dir: Directory the conversion runs in

    Returns:
        Paths of the copied files under intermediates_dir
    """
    original_input = Path(original_input)
    intermediates_dir = Path(intermediates_dir)
    base_dir = original_input.parent

    copied: List[Path] = []
    for relative in find_external_resources(original_input, encoding):
        source = base_dir / relative
        target = intermediates_dir / relative

        if source.resolve() != target.resolve():
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)

        copied.append(target)

    return copied
