"""
Reporting over a completed frame tree.

The percentage of every node is taken relative to its immediate parent, so a
region using half of its parent's time reports 50% regardless of how deep it
sits. Percentages are computed once, here, from the integer durations.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from hprof.node import TimerNode


@dataclass
class ReportRow:
    path: Tuple[str, ...]
    name: str
    depth: int
    duration_ns: int
    percentage: float
    calls: int


@dataclass
class TreeReport:
    """Flattened, percentage-annotated view of one frame tree (root row first)."""
    root_label: str
    total_ns: int
    rows: List[ReportRow] = field(default_factory=list)

    def format(self) -> str:
        """Render the report as text, two spaces of indentation per depth level."""
        lines = [f"Timing information for {self.root_label}:\n"]
        for row in self.rows:
            if row.depth == 0:
                continue
            lines.append(f"{'  ' * row.depth}{row.name} - {row.duration_ns}ns ({row.percentage}%)\n")
        return "".join(lines)

    def to_records(self) -> List[dict]:
        """One flat dict per region (root excluded), for tabular sinks."""
        return [
            {
                "path": "/".join(row.path),
                "depth": row.depth,
                "duration_ns": row.duration_ns,
                "percentage": row.percentage,
                "calls": row.calls,
            }
            for row in self.rows if row.depth > 0
        ]

    def get(self, *path: str) -> Optional[ReportRow]:
        for row in self.rows:
            if row.path == path:
                return row
        return None


def percentage(duration_ns: int, parent_ns: int) -> float:
    if parent_ns == 0:
        return float("nan")
    return 100.0 * (duration_ns / parent_ns)


def build_report(root: TimerNode, root_label: Optional[str] = None) -> TreeReport:
    """
    Walk `root` in pre-order and annotate every node with its share of its parent.

    Args:
        root (TimerNode): Root of a completed frame tree. It is not modified.
        root_label (str): Label for the report header. Defaults to the root's name.

    Returns:
        TreeReport: Rows in traversal order; the root row has depth 0 and 100%.
    """
    report = TreeReport(root_label=root_label or root.name, total_ns=root.self_duration)
    paths = {id(root): ()}
    for depth, parent, node in root.walk():
        if parent is None:
            path = ()
            pct = 100.0
        else:
            path = paths[id(parent)] + (node.name,)
            pct = percentage(node.self_duration, parent.self_duration)
        paths[id(node)] = path
        report.rows.append(ReportRow(
            path=path,
            name=node.name,
            depth=depth,
            duration_ns=node.self_duration,
            percentage=pct,
            calls=node.calls,
        ))
    return report


def format_report(root: TimerNode, root_label: Optional[str] = None) -> str:
    return build_report(root, root_label).format()
