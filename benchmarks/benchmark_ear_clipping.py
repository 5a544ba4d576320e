"""Benchmark naive vs optimized ear clipping on random star polygons.

For every polygon size, triangulates ``repeats`` freshly seeded star polygons
with each method, checks the triangle count and area, and prints a table of
the accumulated counters (ear tests, point-in-triangle tests, reclassified
vertices, wall time).
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from polyear.core.config import BenchmarkConfig
from polyear.core.constants import EPS_REL_AREA
from polyear.core.generators import random_star_polygon
from polyear.core.geometry import polygon_signed_area, triangles_signed_areas
from polyear.core.logging_utils import configure_logging, get_logger
from polyear.core.stats import TriangulationStats, format_stats_table
from polyear.core.triangulation import triangulate_indices

logger = get_logger('polyear.benchmark')


def run_benchmark(cfg: BenchmarkConfig):
    """Return one stats row per (size, method), accumulated over ``cfg.repeats`` polygons."""
    rng = np.random.default_rng(cfg.seed)
    rows = []
    for n in cfg.sizes:
        polygons = [random_star_polygon(n, noise=cfg.noise, seed=rng) for _ in range(cfg.repeats)]
        for method in cfg.methods:
            stats = TriangulationStats()
            for pts in polygons:
                idx = triangulate_indices(pts, method, stats=stats)
                if idx.shape[0] != n - 2:
                    raise RuntimeError(f"{method.value}: {idx.shape[0]} triangles for {n} vertices")
                area = float(triangles_signed_areas(pts[idx]).sum())
                expected = polygon_signed_area(pts)
                if abs(area - expected) > EPS_REL_AREA * abs(expected):
                    raise RuntimeError(f"{method.value}: area {area} differs from polygon area {expected}")
            stats.vertices = n
            row = stats.to_dict()
            row['repeats'] = cfg.repeats
            rows.append(row)
            logger.info("n=%d %s: %.3f ms per polygon", n, method.value,
                        1000.0 * stats.time_total / cfg.repeats)
    return rows


def main():
    parser = argparse.ArgumentParser(description='Benchmark naive vs optimized ear clipping')
    parser.add_argument('--sizes', type=int, nargs='+', default=list(BenchmarkConfig.sizes),
                        help='Polygon sizes to test (default: 10 20 50 100 200)')
    parser.add_argument('--repeats', type=int, default=3,
                        help='Polygons per size (default: 3)')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')
    parser.add_argument('--noise', type=float, default=BenchmarkConfig.noise,
                        help='Radial noise of the star polygons, in [0, 1)')
    parser.add_argument('--methods', nargs='+', default=['naive', 'optimized'],
                        choices=['naive', 'optimized'])
    parser.add_argument('--output', type=str, default=None,
                        help='Output JSON file for results')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='INFO')
    args = parser.parse_args()

    configure_logging(args.log_level)
    cfg = BenchmarkConfig(sizes=tuple(args.sizes), repeats=args.repeats, seed=args.seed,
                          noise=args.noise, methods=tuple(args.methods))
    rows = run_benchmark(cfg)
    print(format_stats_table(rows))

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(rows, f, indent=2)
        logger.info("Results saved to %s", args.output)


if __name__ == '__main__':
    main()
