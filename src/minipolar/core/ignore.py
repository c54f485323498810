# src/minipolar/core/ignore.py
import logging
from pathlib import Path
from typing import List, Optional

import pathspec

from minipolar.config import IGNORE_FILENAME

logger = logging.getLogger(__name__)


def find_ignore_file(input_root: Path) -> Optional[Path]:
    """Returns the input tree's .minifyignore, if it has one."""
    candidate = input_root / IGNORE_FILENAME
    return candidate if candidate.is_file() else None


def load_ignore_spec(ignore_file: Optional[Path], extra_patterns: Optional[List[str]] = None) -> pathspec.PathSpec:
    """
    Loads gitwildmatch rules from the ignore file (when given) plus any extra
    patterns from the command line. An unreadable or malformed rule set is
    logged and replaced by an empty one, so nothing is excluded.
    """
    lines: List[str] = []

    if ignore_file is not None:
        try:
            with open(ignore_file, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.error("Could not read %s: %s", ignore_file, e)

    if extra_patterns:
        lines.extend(extra_patterns)

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception as e:
        logger.error("Error parsing ignore rules: %s", e)
        return pathspec.PathSpec.from_lines("gitwildmatch", [])


def is_ignored(spec: Optional[pathspec.PathSpec], rel_path: Path, is_directory: bool = False) -> bool:
    if spec is None:
        return False
    candidate = rel_path.as_posix()
    if is_directory:
        candidate += "/"
    return spec.match_file(candidate)
