# src/minipolar/core/options.py
from minipolar.models import (
    ClassificationFlags,
    CssMinifyOptions,
    HtmlMinifyOptions,
    JsMinifyOptions,
)


def build_js_options(flags: ClassificationFlags) -> JsMinifyOptions:
    """
    Derives the JavaScript minifier request from the classifier flags.

    Component code keeps its class and function names and gets a fresh
    rename cache; files with code samples stay pretty-printed. Top-level
    names are only renamed when neither flag is set.
    """
    framework = flags.has_framework_content
    examples = flags.has_code_examples
    return JsMinifyOptions(
        keep_classnames=framework,
        keep_fnames=framework,
        mangle_toplevel=not framework and not examples,
        beautify=examples,
        name_cache={} if framework else None,
    )


def build_css_options() -> CssMinifyOptions:
    return CssMinifyOptions()


def build_html_options() -> HtmlMinifyOptions:
    return HtmlMinifyOptions()
