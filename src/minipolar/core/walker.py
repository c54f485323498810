# src/minipolar/core/walker.py
import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import pathspec

from minipolar.config import EXTENSION_KINDS, IGNORE_FILENAME
from minipolar.core.banner import apply_banner, strip_banner
from minipolar.core.classifier import classify_js
from minipolar.core.ignore import is_ignored
from minipolar.core.options import build_css_options, build_html_options, build_js_options
from minipolar.minifiers.base import Minifiers, MinifyError
from minipolar.models import FileKind, FileTask, RunReport, TaskOutcome, TaskStatus

logger = logging.getLogger(__name__)

_LABELS = {
    FileKind.JS: "JavaScript",
    FileKind.CSS: "CSS",
    FileKind.HTML: "HTML",
}


def detect_kind(path: Path) -> FileKind:
    return FileKind[EXTENSION_KINDS.get(path.suffix.lower(), "OTHER")]


class TreeWalker:
    """
    Mirrors `input_root` into `output_root`, minifying scripts, stylesheets
    and markup on the way and copying everything else.

    Each file is handled on its own: a failure is logged and reported for
    that file (or, for directories, that subtree) and the walk moves on.
    """

    def __init__(
        self,
        input_root: Path,
        output_root: Path,
        minifiers: Minifiers,
        ignore_spec: Optional[pathspec.PathSpec] = None,
    ):
        self.input_root = Path(input_root).resolve()
        self.output_root = Path(output_root).resolve()
        self.minifiers = minifiers
        self.ignore_spec = ignore_spec
        self.directory_errors: List[Tuple[str, str]] = []
        self._handlers: Dict[FileKind, Callable[[FileTask], TaskOutcome]] = {
            FileKind.JS: self._minify_js,
            FileKind.CSS: self._minify_css,
            FileKind.HTML: self._minify_html,
            FileKind.OTHER: self._copy,
        }

    def run(self) -> RunReport:
        self.directory_errors = []
        outcomes = list(self.walk())
        return RunReport(outcomes=outcomes, directory_errors=list(self.directory_errors))

    def walk(self) -> Iterator[TaskOutcome]:
        for root, dirs, files in os.walk(self.input_root, onerror=self._on_walk_error):
            root_path = Path(root)
            rel_root = root_path.relative_to(self.input_root)
            out_dir = self.output_root / rel_root

            try:
                out_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self._record_directory_error(root_path, e)
                dirs.clear()
                continue

            # --- 1. Prune directories (in place, so os.walk skips them) ---
            dirs.sort()
            for d in list(dirs):
                dir_abs_path = root_path / d
                if dir_abs_path.resolve() == self.output_root:
                    dirs.remove(d)
                elif is_ignored(self.ignore_spec, rel_root / d, is_directory=True):
                    logger.debug("Skipping ignored directory %s", (rel_root / d).as_posix())
                    dirs.remove(d)

            # --- 2. Process files ---
            for f in sorted(files):
                file_abs_path = root_path / f
                rel_path = rel_root / f

                if rel_root == Path(".") and f == IGNORE_FILENAME:
                    continue
                if is_ignored(self.ignore_spec, rel_path):
                    continue
                if not file_abs_path.is_file():
                    logger.debug("Skipping non-regular file %s", rel_path.as_posix())
                    continue

                task = FileTask(
                    input_path=file_abs_path,
                    output_path=out_dir / f,
                    rel_path=rel_path.as_posix(),
                    kind=detect_kind(file_abs_path),
                )
                yield self.process(task)

    def process(self, task: FileTask) -> TaskOutcome:
        try:
            return self._handlers[task.kind](task)
        except (MinifyError, OSError, UnicodeDecodeError) as e:
            label = _LABELS.get(task.kind)
            if label:
                logger.error("Error minifying %s %s: %s", label, task.rel_path, e)
            else:
                logger.error("Error copying %s: %s", task.rel_path, e)
            return TaskOutcome(task=task, status=TaskStatus.FAILED, error=str(e))
        except Exception as e:
            logger.exception("Unexpected error processing %s", task.rel_path)
            return TaskOutcome(task=task, status=TaskStatus.FAILED, error=f"{type(e).__name__}: {e}")

    # --- Handlers ---

    def _minify_js(self, task: FileTask) -> TaskOutcome:
        source = self._read_source(task)
        options = build_js_options(classify_js(source))
        return self._write_minified(task, source, self.minifiers.js(source, options))

    def _minify_css(self, task: FileTask) -> TaskOutcome:
        source = self._read_source(task)
        return self._write_minified(task, source, self.minifiers.css(source, build_css_options()))

    def _minify_html(self, task: FileTask) -> TaskOutcome:
        source = self._read_source(task)
        return self._write_minified(task, source, self.minifiers.html(source, build_html_options()))

    def _copy(self, task: FileTask) -> TaskOutcome:
        shutil.copyfile(task.input_path, task.output_path)
        size = task.output_path.stat().st_size
        logger.info("Copied: %s", task.output_path)
        return TaskOutcome(task=task, status=TaskStatus.COPIED, bytes_in=size, bytes_out=size)

    # --- Helpers ---

    def _read_source(self, task: FileTask) -> str:
        text = task.input_path.read_text(encoding="utf-8")
        return strip_banner(text, task.kind)

    def _write_minified(self, task: FileTask, source: str, minified: str) -> TaskOutcome:
        content = apply_banner(minified, task.kind)
        data = content.encode("utf-8")
        task.output_path.write_bytes(data)
        logger.info("%s minified: %s", _LABELS[task.kind], task.output_path)
        return TaskOutcome(
            task=task,
            status=TaskStatus.MINIFIED,
            bytes_in=len(source.encode("utf-8")),
            bytes_out=len(data),
        )

    def _on_walk_error(self, error: OSError):
        self._record_directory_error(Path(error.filename or self.input_root), error)

    def _record_directory_error(self, path: Path, error: OSError):
        try:
            rel = path.relative_to(self.input_root).as_posix()
        except ValueError:
            rel = str(path)
        logger.error("Error processing directory %s: %s", rel, error)
        self.directory_errors.append((rel, str(error)))
