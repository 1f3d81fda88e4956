"""
Conversion Options

Immutable record of everything a caller can configure about a PDF conversion.
Enumerated options are closed Enum types validated at construction time, so an
unknown highlight style, engine, citation package or data frame print mode is
rejected before any pandoc flag is produced.

Examples:
    >>> options = ConversionOptions(toc=True, latex_engine="xelatex")
    >>> options.latex_engine
    <LatexEngine.XELATEX: 'xelatex'>

    >>> options = load_conversion_options(Path("_output.yml"), section="pdf_document")
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from omegaconf import DictConfig, OmegaConf

from scribe.contexts.formatting.dependencies import LatexDependency, latex_dependencies
from scribe.contexts.formatting.exceptions import InvalidOptionError

# Sentinel selecting the bundled, version-matched template
DEFAULT_TEMPLATE = "default"


class HighlightStyle(str, Enum):
    """Syntax highlighting styles understood by pandoc."""

    DEFAULT = "default"
    TANGO = "tango"
    PYGMENTS = "pygments"
    KATE = "kate"
    MONOCHROME = "monochrome"
    ESPRESSO = "espresso"
    ZENBURN = "zenburn"
    HADDOCK = "haddock"


class LatexEngine(str, Enum):
    """LaTeX engines pandoc can drive to produce PDF output."""

    PDFLATEX = "pdflatex"
    LUALATEX = "lualatex"
    XELATEX = "xelatex"


class CitationPackage(str, Enum):
    """LaTeX package that processes citations (NONE leaves citations to pandoc)."""

    NONE = "none"
    NATBIB = "natbib"
    BIBLATEX = "biblatex"


class DataFramePrint(str, Enum):
    """How data frames are printed in code chunk output."""

    DEFAULT = "default"
    KABLE = "kable"
    TIBBLE = "tibble"


class TemplateMode(Enum):
    """Which template the conversion uses. Exactly one is active per options record."""

    BUNDLED = "bundled"  # version-matched template shipped with this package
    CUSTOM = "custom"  # caller-supplied template path
    BUILTIN = "builtin"  # pandoc's own template


def _coerce_enum(enum_type, option: str, value):
    """Coerce a string (or enum member) into enum_type, raising InvalidOptionError otherwise."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidOptionError(option, value, [member.value for member in enum_type]) from None


def _as_path_tuple(value) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, Path)):
        return (str(value),)
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class Includes:
    """
    Files whose content pandoc includes verbatim.

    Attributes:
        in_header: Files included at the end of the LaTeX preamble
        before_body: Files included right after \\begin{document}
        after_body: Files included right before \\end{document}
    """

    in_header: Tuple[str, ...] = field(default_factory=tuple)
    before_body: Tuple[str, ...] = field(default_factory=tuple)
    after_body: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "in_header", _as_path_tuple(self.in_header))
        object.__setattr__(self, "before_body", _as_path_tuple(self.before_body))
        object.__setattr__(self, "after_body", _as_path_tuple(self.after_body))

    @classmethod
    def from_value(cls, value) -> Optional["Includes"]:
        """Build from an Includes, a mapping with the same keys, or None."""
        if value is None or isinstance(value, Includes):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - {"in_header", "before_body", "after_body"}
            if unknown:
                raise InvalidOptionError(
                    "includes", sorted(unknown), ["in_header", "before_body", "after_body"]
                )
            return cls(**value)
        raise InvalidOptionError("includes", value)


@dataclass(frozen=True)
class ConversionOptions:
    """
    Options controlling a Markdown to PDF conversion.

    Attributes:
        toc: Include a table of contents
        toc_depth: Depth of headers in the table of contents
        number_sections: Number section headings
        fig_width: Default figure width (inches)
        fig_height: Default figure height (inches)
        fig_crop: Crop PDF figures with pdfcrop when available
        fig_caption: Render figures with captions
        dev: Graphics device used for figures
        df_print: Data frame print mode
        highlight: Syntax highlighting style, or None to disable highlighting
        template: "default" (bundled template), a template path, or None (pandoc built-in)
        keep_tex: Keep the intermediate .tex file
        keep_md: Keep the intermediate Markdown file
        latex_engine: LaTeX engine producing the PDF
        citation_package: LaTeX citation package
        includes: Extra content included in the header or around the body
        md_extensions: Markdown extensions added to or removed from the input dialect
        output_extensions: Extensions added to or removed from the latex output format
        pandoc_args: Extra pandoc arguments, appended after all generated ones
        extra_dependencies: Extra LaTeX packages loaded in the preamble
    """

    toc: bool = False
    toc_depth: int = 2
    number_sections: bool = False
    fig_width: float = 6.5
    fig_height: float = 4.5
    fig_crop: bool = True
    fig_caption: bool = True
    dev: str = "pdf"
    df_print: DataFramePrint = DataFramePrint.DEFAULT
    highlight: Optional[HighlightStyle] = HighlightStyle.DEFAULT
    template: Optional[str] = DEFAULT_TEMPLATE
    keep_tex: bool = False
    keep_md: bool = False
    latex_engine: LatexEngine = LatexEngine.PDFLATEX
    citation_package: CitationPackage = CitationPackage.NONE
    includes: Optional[Includes] = None
    md_extensions: Optional[str] = None
    output_extensions: Tuple[str, ...] = field(default_factory=tuple)
    pandoc_args: Tuple[str, ...] = field(default_factory=tuple)
    extra_dependencies: Tuple[LatexDependency, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.highlight is not None:
            self._set("highlight", _coerce_enum(HighlightStyle, "highlight", self.highlight))
        self._set("latex_engine", _coerce_enum(LatexEngine, "latex_engine", self.latex_engine))
        self._set(
            "citation_package",
            _coerce_enum(CitationPackage, "citation_package", self.citation_package),
        )
        self._set("df_print", _coerce_enum(DataFramePrint, "df_print", self.df_print))

        if isinstance(self.toc_depth, bool) or not isinstance(self.toc_depth, int) or self.toc_depth < 1:
            raise InvalidOptionError("toc_depth", self.toc_depth)

        if self.template is not None:
            if not isinstance(self.template, (str, Path)) or not str(self.template):
                raise InvalidOptionError("template", self.template)
            self._set("template", str(self.template))

        self._set("includes", Includes.from_value(self.includes))

        if isinstance(self.output_extensions, str):
            self._set("output_extensions", (self.output_extensions,))
        else:
            self._set("output_extensions", tuple(self.output_extensions or ()))

        if isinstance(self.pandoc_args, str):
            self._set("pandoc_args", (self.pandoc_args,))
        else:
            self._set("pandoc_args", tuple(str(arg) for arg in self.pandoc_args or ()))

        self._set("extra_dependencies", tuple(latex_dependencies(self.extra_dependencies)))

    def _set(self, name: str, value) -> None:
        # Frozen dataclass: normalize fields in place during __post_init__
        object.__setattr__(self, name, value)

    @property
    def template_mode(self) -> TemplateMode:
        """Active template mode derived from the template field."""
        if self.template is None:
            return TemplateMode.BUILTIN
        if self.template == DEFAULT_TEMPLATE:
            return TemplateMode.BUNDLED
        return TemplateMode.CUSTOM


def option_names() -> Tuple[str, ...]:
    """Names of all ConversionOptions fields."""
    return tuple(f.name for f in fields(ConversionOptions))


def conversion_options_from_dict(data: Mapping[str, Any]) -> ConversionOptions:
    """
    Build ConversionOptions from a plain mapping (e.g., parsed YAML).

    Raises:
        InvalidOptionError: If the mapping has keys that are not option names
    """
    known = option_names()
    unknown = [key for key in data if key not in known]
    if unknown:
        raise InvalidOptionError("options", unknown, known)
    return ConversionOptions(**dict(data))


def load_conversion_options(
    config_path: Path, section: Optional[str] = None
) -> ConversionOptions:
    """
    Load conversion options from a YAML file.

    Args:
        config_path: YAML file holding option names and values
        section: Optional top-level key to read options from (e.g., "pdf_document")

    Returns:
        Validated ConversionOptions

    Raises:
        ValueError: If the file does not contain a mapping, or the section is missing
        InvalidOptionError: If an option name or value is invalid
    """
    config = OmegaConf.load(config_path)
    if not isinstance(config, DictConfig):
        raise ValueError(f"Options file must contain a mapping: {config_path}")

    data: Dict[str, Any] = OmegaConf.to_container(config, resolve=True)

    if section is not None:
        if section not in data:
            available = list(data.keys())
            raise ValueError(f"Section '{section}' not found in {config_path}. Available sections: {available}")
        data = data[section] or {}

    return conversion_options_from_dict(data)
