# src/minipolar/minifiers/node.py
"""
Minifiers backed by the Node CLIs terser, clean-css-cli and
html-minifier-terser. Source goes in on stdin and the result comes back on
stdout. Install with: npm install -g terser clean-css-cli html-minifier-terser
"""
import json
import logging
import os
import shutil
import subprocess
import tempfile
from typing import Any, Dict, List, Optional

from minipolar.config import NODE_TOOLS
from minipolar.minifiers.base import MinifyError
from minipolar.models import CssMinifyOptions, HtmlMinifyOptions, JsMinifyOptions

logger = logging.getLogger(__name__)


def tool_available(name: str) -> bool:
    return shutil.which(name) is not None


class NodeMinifier:
    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def _run(self, tool: str, args: List[str], text: str) -> str:
        executable = shutil.which(tool)
        if executable is None:
            raise MinifyError(f"'{tool}' not found on PATH")
        logger.debug("Running %s %s", executable, " ".join(args))

        try:
            result = subprocess.run(
                [executable, *args],
                input=text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise MinifyError(f"{tool} timed out after {self.timeout}s") from None
        except OSError as e:
            raise MinifyError(f"could not run {tool}: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise MinifyError(f"{tool}: {detail}")
        return result.stdout

    def _run_with_config(self, tool: str, config: Dict[str, Any], text: str) -> str:
        fd, config_path = tempfile.mkstemp(prefix="minipolar-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config, f)
            return self._run(tool, ["--config-file", config_path], text)
        finally:
            os.unlink(config_path)

    def minify_js(self, text: str, options: JsMinifyOptions) -> str:
        return self._run_with_config(NODE_TOOLS["JS"], options.to_terser(), text)

    def minify_css(self, text: str, options: CssMinifyOptions) -> str:
        return self._run(NODE_TOOLS["CSS"], options.to_cleancss_args(), text)

    def minify_html(self, text: str, options: HtmlMinifyOptions) -> str:
        return self._run_with_config(NODE_TOOLS["HTML"], options.to_html_minifier(), text)
