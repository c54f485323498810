# src/minipolar/core/report.py
from pathlib import Path
from typing import Dict, Iterable

from minipolar.models import RunReport, TaskOutcome, TaskStatus

STATUS_MARKERS = {
    TaskStatus.MINIFIED: "[min]",
    TaskStatus.COPIED: "[copy]",
    TaskStatus.FAILED: "[FAILED]",
}


def render_report_tree(outcomes: Iterable[TaskOutcome], root_name: str) -> str:
    """Renders processed files as a tree, each leaf tagged with its status."""
    tree_dict: Dict = {}
    statuses: Dict[str, TaskStatus] = {}
    for outcome in outcomes:
        statuses[outcome.task.rel_path] = outcome.status
        current_level = tree_dict
        for part in Path(outcome.task.rel_path).parts:
            current_level = current_level.setdefault(part, {})

    lines = [f"{root_name}/"]

    def _generate_lines_recursive(subtree: Dict, prefix: str, parent: str):
        entries = sorted(subtree.items())
        for i, (name, content) in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            rel = f"{parent}/{name}" if parent else name
            marker = STATUS_MARKERS.get(statuses.get(rel))
            suffix = f" {marker}" if marker and not content else ""
            lines.append(f"{prefix}{connector}{name}{suffix}")

            if content:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(content, new_prefix, rel)

    _generate_lines_recursive(tree_dict, "", "")
    return "\n".join(lines) + "\n"


def format_summary(report: RunReport) -> str:
    minified = report.count(TaskStatus.MINIFIED)
    copied = report.count(TaskStatus.COPIED)
    failed = report.count(TaskStatus.FAILED)
    lines = [
        f"Minified: {minified} | Copied: {copied} | Failed: {failed}",
        f"Bytes:    {report.bytes_in} -> {report.bytes_out}",
    ]
    if report.directory_errors:
        lines.append(f"Skipped directories: {len(report.directory_errors)}")
    return "\n".join(lines)
