"""Plot helpers for polygons and their triangulations.

Kept out of the eager package imports so ``import polyear`` does not pull in
matplotlib.
"""
from __future__ import annotations

import os as _os
import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from .geometry import as_point_array
from .logging_utils import get_logger

logger = get_logger('polyear.viz')

__all__ = ['plot_triangulation']


def plot_triangulation(polygon, triangles=None, outname: str = 'triangulation.png',
                       label_vertices: bool = False, invert_y: bool = True, title=None):
    """Draw the polygon outline and (optionally) its triangles to ``outname``.

    Args:
        polygon: (N,2) array-like of boundary points
        triangles: iterable of coordinate triangles (as returned by
            ``triangulate``) or an (M,3) index array (``triangulate_indices``)
        outname: output image path
        label_vertices: annotate each boundary vertex with its input index
        invert_y: draw with y growing downward, matching the winding convention

    Returns the output path.
    """
    pts = as_point_array(polygon)
    fig, ax = plt.subplots(figsize=(6, 6))
    try:
        if triangles is not None:
            tri = np.asarray(triangles)
            if tri.ndim == 2:
                tri = pts[tri.astype(np.int64)]
            if tri.size:
                coll = PolyCollection(tri, facecolors=(0.55, 0.75, 0.95), edgecolors=(0.15, 0.3, 0.6),
                                      linewidths=0.8)
                ax.add_collection(coll)
        xs = list(pts[:, 0]) + [pts[0, 0]]
        ys = list(pts[:, 1]) + [pts[0, 1]]
        ax.plot(xs, ys, color=(0.85, 0.2, 0.2), linewidth=1.8)
        ax.scatter(pts[:, 0], pts[:, 1], s=12, color='k', zorder=3)
        if label_vertices:
            for i, (x, y) in enumerate(pts.tolist()):
                ax.annotate(str(i), (x, y), textcoords='offset points', xytext=(3, 3), fontsize=7)
        ax.set_aspect('equal')
        ax.autoscale_view()
        if invert_y:
            ax.invert_yaxis()
        if title:
            ax.set_title(title)
        fig.savefig(outname, dpi=120, bbox_inches='tight')
    finally:
        plt.close(fig)
    logger.info("wrote %s", outname)
    return outname
