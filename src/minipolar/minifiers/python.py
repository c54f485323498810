# src/minipolar/minifiers/python.py
"""
In-process minifiers built on Python libraries.

rjsmin and csscompressor only strip comments and whitespace, so the
renaming and compression fields of the JS/CSS options are not honoured
here; the Node engine honours all of them. Names are never mangled by
these libraries. Scripts are parsed with esprima first so syntax errors
are reported, and pretty-printing is done by jsbeautifier.
"""
import json
import logging
import re
import uuid
from typing import List, Tuple

import csscompressor
import esprima
import jsbeautifier
import minify_html
import rjsmin

from minipolar.minifiers.base import MinifyError
from minipolar.models import CssMinifyOptions, HtmlMinifyOptions, JsMinifyOptions

logger = logging.getLogger(__name__)

_SCRIPT_BLOCK = re.compile(
    r"(<script\b[^>]*\btype\s*=\s*[\"']?(?P<type>[^\"'\s>]+)[\"']?[^>]*>)(?P<body>[\s\S]*?)(</script\s*>)",
    re.IGNORECASE,
)


def check_js_syntax(text: str):
    """Raises MinifyError unless `text` parses as a script or a module."""
    try:
        esprima.parseScript(text)
        return
    except Exception as e:
        script_error = e
    try:
        esprima.parseModule(text)
    except Exception:
        raise MinifyError(f"SyntaxError: {script_error}") from script_error


def beautify_js(text: str) -> str:
    opts = jsbeautifier.default_options()
    opts.indent_size = 2
    return jsbeautifier.beautify(text, opts)


def minify_js(text: str, options: JsMinifyOptions) -> str:
    check_js_syntax(text)
    try:
        minified = rjsmin.jsmin(text, keep_bang_comments=not options.strip_comments)
        if options.beautify:
            minified = beautify_js(minified)
    except Exception as e:
        raise MinifyError(f"rjsmin failed: {e}") from e
    return minified


def minify_css(text: str, options: CssMinifyOptions) -> str:
    try:
        return csscompressor.compress(text, preserve_exclamation_comments=not options.strip_comments)
    except Exception as e:
        raise MinifyError(f"csscompressor failed: {e}") from e


def protect_fragments(html: str, patterns: Tuple[str, ...]) -> Tuple[str, str, List[str]]:
    """
    Replaces every span matched by `patterns` (applied in order) with an
    opaque identifier-like placeholder. Returns the rewritten text, the
    placeholder prefix used for this call and the original spans, indexed
    by placeholder number.
    """
    token = f"__minipolar_{uuid.uuid4().hex}_"
    fragments: List[str] = []

    def _stash(match: re.Match) -> str:
        fragments.append(match.group(0))
        return f"{token}{len(fragments) - 1}__"

    for pattern in patterns:
        html = re.sub(pattern, _stash, html)
    return html, token, fragments


def restore_fragments(html: str, token: str, fragments: List[str]) -> str:
    if not fragments:
        return html
    placeholder = re.compile(re.escape(token) + r"(\d+)__")

    def _restore(match: re.Match) -> str:
        index = int(match.group(1))
        return fragments[index] if index < len(fragments) else match.group(0)

    # Restored spans can themselves contain placeholders of earlier patterns.
    previous = None
    while previous != html:
        previous = html
        html = placeholder.sub(_restore, html)
    return html


def compact_script_data(html: str, script_types: Tuple[str, ...]) -> str:
    """Compacts JSON bodies of <script> blocks whose type is listed."""
    wanted = {t.lower() for t in script_types}

    def _compact(match: re.Match) -> str:
        if match.group("type").lower() not in wanted:
            return match.group(0)
        body = match.group("body")
        try:
            data = json.loads(body)
        except (ValueError, RecursionError):
            logger.debug("Leaving unparseable %s script body as-is", match.group("type"))
            return match.group(0)
        try:
            compact = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        except RecursionError:
            return match.group(0)
        return match.group(1) + compact + match.group(4)

    return _SCRIPT_BLOCK.sub(_compact, html)


def minify_html_text(text: str, options: HtmlMinifyOptions) -> str:
    html = compact_script_data(text, options.process_scripts)
    html, token, fragments = protect_fragments(html, options.ignore_custom_fragments)
    try:
        minified = minify_html.minify(
            html,
            keep_comments=not options.remove_comments,
            minify_css=options.minify_css,
            minify_js=options.minify_js,
            keep_closing_tags=True,
            keep_html_and_head_opening_tags=True,
            preserve_brace_template_syntax=True,
            preserve_chevron_percent_template_syntax=True,
        )
    except Exception as e:
        raise MinifyError(f"minify_html failed: {e}") from e
    return restore_fragments(minified, token, fragments)
