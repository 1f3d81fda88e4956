"""Front matter extraction for Markdown documents."""

import re
from pathlib import Path
from typing import Any, Dict, Tuple

from omegaconf import DictConfig, OmegaConf

# YAML block delimited by --- (closed by --- or ...) at the top of the document
FRONT_MATTER_REGEX = re.compile(r"\A\ufeff?---[ \t]*\n(.*?)\n(?:---|\.\.\.)[ \t]*(?:\n|\Z)", re.DOTALL)


def split_front_matter(text: str) -> Tuple[str, str]:
    """
    Split document text into its front matter block and body.

    Returns:
        Tuple of (front matter YAML, body); the YAML is empty when there is no block
    """
    match = FRONT_MATTER_REGEX.match(text)
    if match is None:
        return "", text
    return match.group(1), text[match.end():]


def parse_front_matter(text: str) -> Dict[str, Any]:
    """
    Parse the front matter of a document into a dict.

    Interpolations are left unresolved, so LaTeX such as ${x} in header-includes
    survives untouched.

    Returns:
        Front matter mapping, or an empty dict if the document has none

    Raises:
        ValueError: If the front matter is not a YAML mapping
    """
    block, _ = split_front_matter(text)
    if not block.strip():
        return {}

    config = OmegaConf.create(block)
    if not isinstance(config, DictConfig):
        raise ValueError("Front matter must be a YAML mapping")

    return OmegaConf.to_container(config, resolve=False)


def read_front_matter(input_file: Path, encoding: str = "utf-8") -> Dict[str, Any]:
    """Read and parse the front matter of a document on disk."""
    return parse_front_matter(Path(input_file).read_text(encoding=encoding))
