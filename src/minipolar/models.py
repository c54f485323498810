# src/minipolar/models.py
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from minipolar.config import ECMA_TARGET, HTML_IGNORE_FRAGMENTS, HTML_PROCESS_SCRIPTS


class FileKind(Enum):
    JS = "js"
    CSS = "css"
    HTML = "html"
    OTHER = "other"


class TaskStatus(Enum):
    MINIFIED = "minified"
    COPIED = "copied"
    FAILED = "failed"


@dataclass(frozen=True)
class FileTask:
    """One filesystem entry scheduled for processing."""
    input_path: Path
    output_path: Path
    rel_path: str
    kind: FileKind


@dataclass(frozen=True)
class ClassificationFlags:
    has_code_examples: bool = False
    has_framework_content: bool = False


@dataclass(frozen=True)
class JsMinifyOptions:
    """
    JavaScript minifier request. Field names follow what they control;
    `to_terser()` renders them as a terser options object.
    """
    dead_code: bool = True
    drop_console: bool = False
    drop_debugger: bool = True
    passes: int = 2
    keep_classnames: bool = False
    keep_fnames: bool = False
    keep_infinity: bool = True
    keep_fargs: bool = True
    mangle_toplevel: bool = True
    mangle_properties: bool = False
    strip_comments: bool = True
    quote_style: int = 1  # terser: 1 = prefer single quotes
    preserve_annotations: bool = True
    beautify: bool = False
    keep_quoted_props: bool = True
    name_cache: Optional[Dict[str, Any]] = None
    ecma: int = ECMA_TARGET
    safari10: bool = True

    def to_terser(self) -> Dict[str, Any]:
        return {
            "compress": {
                "dead_code": self.dead_code,
                "drop_console": self.drop_console,
                "drop_debugger": self.drop_debugger,
                "passes": self.passes,
                "keep_classnames": self.keep_classnames,
                "keep_fnames": self.keep_fnames,
                "keep_infinity": self.keep_infinity,
                "keep_fargs": self.keep_fargs,
            },
            "mangle": {
                "toplevel": self.mangle_toplevel,
                "properties": self.mangle_properties,
                "keep_classnames": True,
                "keep_fnames": True,
            },
            "format": {
                "comments": not self.strip_comments,
                "quote_style": self.quote_style,
                "preserve_annotations": self.preserve_annotations,
                "beautify": self.beautify,
                "keep_quoted_props": self.keep_quoted_props,
            },
            "nameCache": self.name_cache,
            "ecma": self.ecma,
            "safari10": self.safari10,
        }


@dataclass(frozen=True)
class CssMinifyOptions:
    level1_all: bool = True
    level2_all: bool = True
    remove_unused_at_rules: bool = True
    restructure_rules: bool = True
    strip_comments: bool = True

    def to_cleancss_args(self) -> List[str]:
        args = []
        if self.level1_all:
            args += ["-O1", "all:on"]
        if self.level2_all:
            level2 = ["all:on"]
            if self.remove_unused_at_rules:
                level2.append("removeUnusedAtRules:on")
            if self.restructure_rules:
                level2.append("restructureRules:on")
            args += ["-O2", ",".join(level2)]
        return args


@dataclass(frozen=True)
class HtmlMinifyOptions:
    collapse_whitespace: bool = True
    conservative_collapse: bool = True
    preserve_line_breaks: bool = False
    remove_comments: bool = True
    remove_empty_attributes: bool = True
    remove_redundant_attributes: bool = False
    remove_script_type_attributes: bool = True
    remove_style_link_type_attributes: bool = True
    minify_css: bool = True
    minify_js: bool = True
    use_short_doctype: bool = True
    minify_urls: bool = False
    case_sensitive: bool = True
    prevent_attributes_escaping: bool = True
    quote_character: str = "'"
    custom_attr_assign: Tuple[str, ...] = ("=",)
    ignore_custom_fragments: Tuple[str, ...] = HTML_IGNORE_FRAGMENTS
    process_scripts: Tuple[str, ...] = HTML_PROCESS_SCRIPTS

    def to_html_minifier(self) -> Dict[str, Any]:
        # Regex lists are plain sources; the html-minifier-terser CLI compiles them.
        return {
            "collapseWhitespace": self.collapse_whitespace,
            "conservativeCollapse": self.conservative_collapse,
            "preserveLineBreaks": self.preserve_line_breaks,
            "removeComments": self.remove_comments,
            "removeEmptyAttributes": self.remove_empty_attributes,
            "removeRedundantAttributes": self.remove_redundant_attributes,
            "removeScriptTypeAttributes": self.remove_script_type_attributes,
            "removeStyleLinkTypeAttributes": self.remove_style_link_type_attributes,
            "minifyCSS": self.minify_css,
            "minifyJS": self.minify_js,
            "useShortDoctype": self.use_short_doctype,
            "minifyURLs": self.minify_urls,
            "caseSensitive": self.case_sensitive,
            "preventAttributesEscaping": self.prevent_attributes_escaping,
            "quoteCharacter": self.quote_character,
            "customAttrAssign": list(self.custom_attr_assign),
            "ignoreCustomFragments": list(self.ignore_custom_fragments),
            "processScripts": list(self.process_scripts),
        }


@dataclass(frozen=True)
class TaskOutcome:
    task: FileTask
    status: TaskStatus
    error: Optional[str] = None
    bytes_in: int = 0
    bytes_out: int = 0

    @property
    def ok(self) -> bool:
        return self.status is not TaskStatus.FAILED


@dataclass
class RunReport:
    """Aggregated outcomes of one tree walk."""
    outcomes: List[TaskOutcome] = field(default_factory=list)
    directory_errors: List[Tuple[str, str]] = field(default_factory=list)

    def count(self, status: TaskStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def failed(self) -> bool:
        return bool(self.directory_errors) or self.count(TaskStatus.FAILED) > 0

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    @property
    def bytes_in(self) -> int:
        return sum(o.bytes_in for o in self.outcomes if o.ok)

    @property
    def bytes_out(self) -> int:
        return sum(o.bytes_out for o in self.outcomes if o.ok)
