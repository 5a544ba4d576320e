"""Triangulation statistics and presentation utilities.

A driver fills a TriangulationStats when the caller passes one; the
benchmark harness turns a batch of them into a table.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable


@dataclass
class TriangulationStats:
    method: str = ''
    vertices: int = 0
    ear_tests: int = 0
    point_tests: int = 0
    ears_clipped: int = 0
    reclassified: int = 0
    scan_steps: int = 0
    # Timing (seconds)
    time_total: float = 0.0

    def reset(self) -> None:
        for f in fields(self):
            if f.name != 'method':
                setattr(self, f.name, f.default)

    def to_dict(self) -> Dict[str, Any]:  # pragma: no cover - simple mapping
        return {
            'method': self.method,
            'vertices': self.vertices,
            'ear_tests': self.ear_tests,
            'point_tests': self.point_tests,
            'ears_clipped': self.ears_clipped,
            'reclassified': self.reclassified,
            'scan_steps': self.scan_steps,
            'time_total': self.time_total,
            'tests_per_ear': (self.ear_tests / self.ears_clipped) if self.ears_clipped else 0.0,
        }


def format_stats_table(rows: Iterable[Dict[str, Any]]) -> str:
    """Return a human readable multi-line table of ``TriangulationStats.to_dict()`` rows."""
    rows = list(rows)
    if not rows:
        return "<no stats>"
    header = ["method", "n", "ear_tests", "pt_tests", "clipped", "reclass", "scan", "ms"]
    body = []
    for s in rows:
        body.append([
            str(s['method']), str(s['vertices']), str(s['ear_tests']), str(s['point_tests']),
            str(s['ears_clipped']), str(s['reclassified']), str(s['scan_steps']),
            f"{s['time_total'] * 1000.0:10.3f}",
        ])
    col_w = [len(h) for h in header]
    for r in body:
        for i, v in enumerate(r):
            if len(v) > col_w[i]: col_w[i] = len(v)
    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))
    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in body]
    return "\n".join(lines)


__all__ = ['TriangulationStats', 'format_stats_table']
