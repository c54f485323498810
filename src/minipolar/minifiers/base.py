# src/minipolar/minifiers/base.py
from dataclasses import dataclass
from typing import Callable

from minipolar.models import CssMinifyOptions, HtmlMinifyOptions, JsMinifyOptions


class MinifyError(Exception):
    """A minifier rejected its input or could not run."""


JsMinifier = Callable[[str, JsMinifyOptions], str]
CssMinifier = Callable[[str, CssMinifyOptions], str]
HtmlMinifier = Callable[[str, HtmlMinifyOptions], str]


@dataclass(frozen=True)
class Minifiers:
    """The three minify services the walker dispatches to."""
    js: JsMinifier
    css: CssMinifier
    html: HtmlMinifier
