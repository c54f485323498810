# src/minipolar/core/banner.py
from typing import Tuple

from minipolar.config import BANNER_ART
from minipolar.models import FileKind

_DELIMITERS = {
    FileKind.JS: ("/*", "*/"),
    FileKind.CSS: ("/*", "*/"),
    FileKind.HTML: ("<!--", "-->"),
}


def comment_delimiters(kind: FileKind) -> Tuple[str, str]:
    try:
        return _DELIMITERS[kind]
    except KeyError:
        raise ValueError(f"No banner comment syntax for {kind.name} files") from None


def render_banner(kind: FileKind) -> str:
    opener, closer = comment_delimiters(kind)
    return f"{opener}\n{BANNER_ART}\n{closer}\n"


def apply_banner(content: str, kind: FileKind) -> str:
    return render_banner(kind) + content


def strip_banner(content: str, kind: FileKind) -> str:
    """Removes one leading banner, so reprocessed output is not stamped twice."""
    banner = render_banner(kind)
    if content.startswith(banner):
        return content[len(banner):]
    return content
