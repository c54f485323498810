# src/minipolar/minifiers/engine.py
import logging
from typing import Optional

from minipolar.config import ENGINES, NODE_TOOLS
from minipolar.minifiers import python as py_engine
from minipolar.minifiers.base import Minifiers
from minipolar.minifiers.node import NodeMinifier, tool_available

logger = logging.getLogger(__name__)


def get_minifiers(engine: str = "auto", timeout: Optional[float] = None) -> Minifiers:
    """
    Picks the minify service for each format.

    "python" uses the in-process libraries, "node" the Node CLIs, and
    "auto" takes the Node CLI for a format when it is on PATH.
    """
    if engine not in ENGINES:
        raise ValueError(f"Unknown engine '{engine}' (expected one of {', '.join(ENGINES)})")

    node = NodeMinifier(timeout=timeout)
    python_services = {"JS": py_engine.minify_js, "CSS": py_engine.minify_css, "HTML": py_engine.minify_html_text}
    node_services = {"JS": node.minify_js, "CSS": node.minify_css, "HTML": node.minify_html}

    chosen = {}
    for fmt, tool in NODE_TOOLS.items():
        use_node = engine == "node" or (engine == "auto" and tool_available(tool))
        chosen[fmt] = node_services[fmt] if use_node else python_services[fmt]
        logger.debug("%s minifier: %s", fmt, tool if use_node else "python")

    return Minifiers(js=chosen["JS"], css=chosen["CSS"], html=chosen["HTML"])
