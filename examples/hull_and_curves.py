"""
spatia example: curves, hulls and point classification

This example walks through the main operations:
1. Build a 2D polyline and resample it
2. Split it at the projection of an outside point
3. Compute the convex hull of a point cloud and classify query points
4. Visualize the result
"""

import numpy as np
import matplotlib.pyplot as plt

from spatia import (
    Point2D, PolyLine2D, configure_logging, convex_hull, points_in_polygon,
)


def main():
    configure_logging('DEBUG')
    print("=" * 60)
    print("spatia example: curves, hulls and point classification")
    print("=" * 60)

    print("\n[1] Building a polyline...")
    t = np.linspace(0.0, 2.0 * np.pi, 25)
    line = PolyLine2D.from_array(np.column_stack([t, np.sin(t)]))
    print(f"  {len(line)} points, length {line.length:.4f}")
    resampled = line.resample(10)
    print(f"  resampled to {len(resampled)} points")

    print("\n[2] Splitting at the projection of (3, 2)...")
    first, second = line.split_at_point(Point2D(3.0, 2.0))
    print(f"  split point {first[-1]}")
    print(f"  lengths {first.length:.4f} + {second.length:.4f} = {first.length + second.length:.4f}")

    print("\n[3] Convex hull of a random cloud...")
    rng = np.random.default_rng(0)
    cloud = rng.normal(size=(300, 2))
    hull = convex_hull(cloud)
    print(f"  hull has {len(hull)} vertices, area {hull.area:.4f}")
    queries = rng.uniform(-4.0, 4.0, size=(400, 2))
    inside = points_in_polygon(queries, hull)
    print(f"  {int(inside.sum())} of {len(queries)} query points inside")

    print("\n[4] Creating visualization...")
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    ax1.set_aspect('equal')
    ax1.plot(*line.to_array().T, 'b.-', label='polyline')
    ax1.plot(*resampled.to_array().T, 'go', label='resampled')
    ax1.plot([3.0, first[-1].x], [2.0, first[-1].y], 'r--', label='projection')
    ax1.legend()
    ax1.set_title('Curve operations')

    ring = np.vstack([hull.to_array(), hull.to_array()[:1]])
    ax2.set_aspect('equal')
    ax2.plot(*cloud.T, 'k.', markersize=3)
    ax2.plot(*ring.T, 'b-')
    ax2.plot(*queries[inside].T, 'g.', markersize=4)
    ax2.plot(*queries[~inside].T, 'r.', markersize=4)
    ax2.set_title('Convex hull and classification')

    plt.tight_layout()
    plt.savefig('hull_and_curves.png', dpi=120)
    print("  saved hull_and_curves.png")


if __name__ == '__main__':
    main()
