"""
LaTeX package dependencies.

Normalizes the many ways a caller can name extra LaTeX packages into
LatexDependency records, collects dependencies reported by earlier rendering
passes, and renders them as \\usepackage declarations through a Jinja2
template.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from scribe.contexts.formatting.exceptions import InvalidOptionError

RESOURCES_PATH = Path(__file__).parent / "resources"
DEPENDENCIES_TEMPLATE = "dependencies.tex.jinja"


@dataclass(frozen=True)
class LatexDependency:
    """
    A LaTeX package to load in the document preamble.

    Attributes:
        name: Package name (e.g., 'hyperref')
        options: Package options (e.g., ('unicode=true', 'breaklinks=true'))
        extra_lines: Raw LaTeX lines emitted right after the \\usepackage line
    """

    name: str
    options: Tuple[str, ...] = field(default_factory=tuple)
    extra_lines: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidOptionError("extra_dependencies", self.name)
        object.__setattr__(self, "options", _as_str_tuple(self.options))
        object.__setattr__(self, "extra_lines", _as_str_tuple(self.extra_lines))


def _as_str_tuple(value) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def latex_dependency(name: str, options=None, extra_lines=None) -> LatexDependency:
    """Create a LatexDependency, accepting a string or a list for options and extra lines."""
    return LatexDependency(name=name, options=options, extra_lines=extra_lines)


def latex_dependencies(spec: Any) -> List[LatexDependency]:
    """
    Normalize a dependency spec into a list of LatexDependency.

    Accepted specs:
        - None: no dependencies
        - "framed": a single package name
        - LatexDependency: a single dependency
        - ["framed", latex_dependency("hyperref", "unicode=true")]: names and dependencies mixed
        - {"hyperref": ["unicode=true"], "lmodern": None}: package name to options

    Args:
        spec: Dependency spec in any of the forms above

    Returns:
        List of dependencies in declaration order

    Raises:
        InvalidOptionError: If the spec (or an element of it) has an unsupported type
    """
    if spec is None:
        return []
    if isinstance(spec, (str, LatexDependency)):
        spec = [spec]

    if isinstance(spec, Mapping):
        return [LatexDependency(name=name, options=options) for name, options in spec.items()]

    if not isinstance(spec, Iterable):
        raise InvalidOptionError("extra_dependencies", spec)

    dependencies = []
    for item in spec:
        if isinstance(item, LatexDependency):
            dependencies.append(item)
        elif isinstance(item, str):
            dependencies.append(LatexDependency(name=item))
        elif isinstance(item, Mapping) and "name" in item:
            # Record form, as written in YAML option files
            dependencies.append(
                LatexDependency(
                    name=item["name"],
                    options=item.get("options"),
                    extra_lines=item.get("extra_lines"),
                )
            )
        else:
            raise InvalidOptionError("extra_dependencies", item)

    return dependencies


def flatten_latex_dependencies(collected_metadata: Optional[Iterable]) -> List[LatexDependency]:
    """
    Extract every LatexDependency from metadata collected by a prior rendering pass.

    Nested lists and tuples are searched recursively; other objects are ignored.
    """
    if not collected_metadata:
        return []

    dependencies = []
    for item in collected_metadata:
        if isinstance(item, LatexDependency):
            dependencies.append(item)
        elif isinstance(item, (list, tuple)):
            dependencies.extend(flatten_latex_dependencies(item))

    return dependencies


class DependencyRenderer:
    """
    Renders LaTeX dependencies with a Jinja2 template.

    The template lives in resources/dependencies.tex.jinja and uses custom
    delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    """

    def __init__(self, resources_path: Path = None):
        if resources_path is None:
            resources_path = RESOURCES_PATH

        self.resources_path = resources_path
        self._template: Optional[Template] = None

        self.env = Environment(
            loader=FileSystemLoader(str(resources_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
        )

    @property
    def template(self) -> Template:
        if self._template is None:
            self._template = self.env.get_template(DEPENDENCIES_TEMPLATE)
        return self._template

    def render(self, dependencies: Iterable[LatexDependency]) -> str:
        """
        Render dependencies as preamble lines.

        Declarations are emitted in the given order without deduplication.

        Returns:
            One \\usepackage line per dependency (plus its extra lines), newline-terminated
        """
        context: Dict[str, Any] = {"dependencies": list(dependencies)}
        return self.template.render(context)


def latex_dependencies_as_string(dependencies: Iterable[LatexDependency]) -> str:
    """Render dependencies with the bundled template."""
    return DependencyRenderer().render(dependencies)
