"""
Render-Time Hooks

The host pipeline calls two hooks around each conversion, in this order:

1. pre_process(options, context): before pandoc runs. Adds geometry and
   compact title defaults for the bundled template, writes the extra LaTeX
   dependencies to a header file, and records the supporting files directory.
2. generate_intermediates(context, ...): collects the files pandoc needs in
   its working directory, including the supporting files (figures) recorded
   by pre_process.

All per-conversion state lives on the RenderContext, so concurrent
conversions never share anything.
"""

import re
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from scribe.contexts.formatting.dependencies import (
    flatten_latex_dependencies,
    latex_dependencies_as_string,
)
from scribe.contexts.formatting.exceptions import FileSystemError
from scribe.contexts.formatting.logger import (
    _log_debug,
    _log_info,
    log_intermediates,
    log_pre_process_result,
)
from scribe.contexts.formatting.options import ConversionOptions, Includes, TemplateMode
from scribe.contexts.formatting.pandoc import includes_to_pandoc_args
from scribe.contexts.formatting.patterns import (
    FrontMatterKeys,
    PandocFlags,
    TemplateVariables,
    yaml_key_regex,
)
from scribe.utils.resources import copy_render_intermediates


@dataclass
class RenderContext:
    """
    State of a single conversion, created by the host pipeline.

    Attributes:
        front_matter: Parsed front matter of the input document
        input_file: Document handed to pandoc
        runtime: Execution mode (e.g., "static" or "interactive")
        collected_metadata: Objects collected by an earlier rendering pass
            (LatexDependency entries among them are loaded in the preamble)
        files_dir: Directory of supporting files (figures) generated earlier
        output_dir: Destination directory of the output
        saved_files_dir: files_dir as recorded by pre_process, read by generate_intermediates
    """

    front_matter: Dict[str, Any]
    input_file: Path
    runtime: str = "static"
    collected_metadata: List[Any] = field(default_factory=list)
    files_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    saved_files_dir: Optional[Path] = None

    def __post_init__(self):
        self.input_file = Path(self.input_file)
        if self.files_dir is not None:
            self.files_dir = Path(self.files_dir)
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)


def has_yaml_parameter(text: str, parameter: str) -> bool:
    """
    Check whether any line of the raw document text sets a YAML key.

    Args:
        text: Raw document text
        parameter: Key name, or an alternation such as "geometry|documentclass"
    """
    return re.search(yaml_key_regex(parameter), text, re.MULTILINE) is not None


def _header_includes_lines(front_matter: Dict[str, Any]) -> Optional[List[str]]:
    if FrontMatterKeys.HEADER_INCLUDES not in front_matter:
        return None
    value = front_matter[FrontMatterKeys.HEADER_INCLUDES]
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(line) for line in value]
    return [str(value)]


def write_dependency_header(content: str) -> Path:
    """
    Write preamble content to a temporary .tex file.

    Raises:
        FileSystemError: If the file cannot be written
    """
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            prefix="scribe-header-",
            suffix=".tex",
            delete=False,
        ) as f:
            f.write(content)
    except OSError as e:
        raise FileSystemError(
            "Could not write LaTeX dependency header",
            path=Path(tempfile.gettempdir()),
            operation="write",
            original_error=e,
        ) from e

    return Path(f.name)


def pre_process(options: ConversionOptions, context: RenderContext) -> List[str]:
    """
    Compute the extra pandoc arguments for one conversion.

    Args:
        options: Options the output format was built from
        context: Conversion state; saved_files_dir is set from files_dir

    Returns:
        Additional pandoc arguments

    Raises:
        FileSystemError: If the input cannot be read or the header file cannot be written
    """
    context.saved_files_dir = context.files_dir

    args: List[str] = []

    # Custom and pandoc built-in templates manage their own geometry
    if options.template_mode is TemplateMode.BUNDLED:
        try:
            input_text = context.input_file.read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(
                "Could not read input document",
                path=context.input_file,
                operation="read",
                original_error=e,
            ) from e

        # 1in margins unless the author chose a geometry or document class
        geometry_keys = f"{FrontMatterKeys.GEOMETRY}|{FrontMatterKeys.DOCUMENTCLASS}"
        if not has_yaml_parameter(input_text, geometry_keys):
            args.extend([PandocFlags.VARIABLE, TemplateVariables.DEFAULT_GEOMETRY])

        if not has_yaml_parameter(input_text, FrontMatterKeys.COMPACT_TITLE):
            args.extend([PandocFlags.VARIABLE, TemplateVariables.COMPACT_TITLE])

    collected = flatten_latex_dependencies(context.collected_metadata)
    if options.extra_dependencies or collected:
        # Configured first, then collected; duplicates are kept
        dependencies = list(options.extra_dependencies) + collected
        content = latex_dependencies_as_string(dependencies)

        header_includes = _header_includes_lines(context.front_matter)
        if header_includes is not None:
            content += "\n" + "".join(f"{line}\n" for line in header_includes)

        header_file = write_dependency_header(content)
        _log_info(f"Wrote {len(dependencies)} LaTeX dependencies to {header_file}")

        args.extend(includes_to_pandoc_args(Includes(in_header=[header_file])))

    log_pre_process_result(context.input_file, args)
    return args


def generate_intermediates(
    context: RenderContext,
    original_input: Union[str, Path],
    encoding: str,
    intermediates_dir: Union[str, Path],
) -> List[Path]:
    """
    Stage the files pandoc needs in the intermediates directory.

    Starts from the resources the document refers to, then copies the
    supporting files directory recorded by pre_process (if it exists) into
    intermediates_dir, keeping its base name, and adds every file beneath the
    copy. Re-running with an unchanged directory yields the same list.

    Args:
        context: Conversion state written by pre_process
        original_input: Document the conversion started from
        encoding: Encoding of the document
        intermediates_dir: Directory pandoc runs in

    Returns:
        Staged file paths in insertion order, without duplicates

    Raises:
        FileSystemError: If copying fails
    """
    intermediates_dir = Path(intermediates_dir)

    try:
        intermediates = copy_render_intermediates(original_input, encoding, intermediates_dir)
    except OSError as e:
        raise FileSystemError(
            "Could not copy render intermediates",
            path=Path(original_input),
            operation="copy",
            original_error=e,
        ) from e

    files_dir = context.saved_files_dir
    if files_dir is not None and Path(files_dir).is_dir():
        files_dir = Path(files_dir)
        target = intermediates_dir / files_dir.name

        if files_dir.resolve() != target.resolve():
            try:
                shutil.copytree(files_dir, target, dirs_exist_ok=True)
            except OSError as e:
                raise FileSystemError(
                    "Could not copy supporting files",
                    path=files_dir,
                    operation="copy",
                    original_error=e,
                ) from e
            _log_debug(f"Copied supporting files {files_dir} -> {target}")

        intermediates.extend(sorted(path for path in target.rglob("*") if path.is_file()))

    intermediates = list(dict.fromkeys(intermediates))
    log_intermediates(intermediates_dir, intermediates)
    return intermediates
