"""
Pandoc Argument Resolution

Translates ConversionOptions into the ordered pandoc command line for LaTeX/PDF
output. The only side effect is querying the installed pandoc for its version
when the caller does not supply one.
"""

from typing import List, Optional, Union

from scribe.contexts.formatting.logger import _log_debug, _log_warning, log_resolved_args
from scribe.contexts.formatting.options import (
    CitationPackage,
    ConversionOptions,
    TemplateMode,
)
from scribe.contexts.formatting.pandoc import (
    Version,
    includes_to_pandoc_args,
    pandoc_highlight_args,
    pandoc_latex_engine_args,
    pandoc_path_arg,
    pandoc_toc_args,
    pandoc_version,
    parse_version,
)
from scribe.contexts.formatting.patterns import PandocFlags, TemplateVariables
from scribe.contexts.formatting.templates import LATEX_TEMPLATE_TIERS, latex_template_path

LEGACY_TEMPLATE = LATEX_TEMPLATE_TIERS[-1][1]


def resolve_pandoc_args(
    options: ConversionOptions,
    version: Optional[Union[str, Version]] = None,
) -> List[str]:
    """
    Resolve conversion options into pandoc arguments.

    Order: table of contents, template (plus the graphics variable for the
    bundled template), section numbering, highlighting, LaTeX engine, citation
    package, includes, then the caller's pandoc_args verbatim so they can
    override anything generated before them.

    Args:
        options: Validated conversion options
        version: Pandoc version; queried from the installed pandoc when None

    Returns:
        Ordered list of pandoc arguments

    Raises:
        MissingToolchainError: If the version must be queried and pandoc is not installed
    """
    version = pandoc_version() if version is None else parse_version(version)

    args: List[str] = []

    args.extend(pandoc_toc_args(options.toc, options.toc_depth))

    mode = options.template_mode
    if mode is TemplateMode.BUNDLED:
        template = latex_template_path(version)
        _log_debug(f"Using bundled template {template.name}")
        if template.name == LEGACY_TEMPLATE:
            _log_warning(
                f"pandoc {'.'.join(map(str, version))} predates the versioned templates; "
                f"falling back to {LEGACY_TEMPLATE}"
            )
        args.extend([PandocFlags.TEMPLATE, pandoc_path_arg(template)])
        # Bundled templates only load graphicx when asked to
        args.extend([PandocFlags.VARIABLE, TemplateVariables.GRAPHICS])
    elif mode is TemplateMode.CUSTOM:
        args.extend([PandocFlags.TEMPLATE, pandoc_path_arg(options.template)])
    else:
        args.append(PandocFlags.SELF_CONTAINED)

    if options.number_sections:
        args.append(PandocFlags.NUMBER_SECTIONS)

    highlight = options.highlight.value if options.highlight is not None else None
    args.extend(pandoc_highlight_args(highlight))

    args.extend(pandoc_latex_engine_args(options.latex_engine.value, version))

    if options.citation_package is not CitationPackage.NONE:
        args.append(f"--{options.citation_package.value}")

    args.extend(includes_to_pandoc_args(options.includes))

    args.extend(options.pandoc_args)

    log_resolved_args(args, version)
    return args
