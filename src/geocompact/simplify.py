"""
Douglas-Peucker line simplification.

Reduces a polyline to the subset of its points that lie further than
`epsilon` from the chord of the segment they belong to. Distances are
measured in the units of the coordinates (usually decimal degrees), using
the first two dimensions only.
"""

import math
from typing import List, Sequence, Tuple

# Any sequence of at least two numbers: [x, y] or [x, y, z]
Point = Sequence[float]


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """
    Distance from `point` to the line through `line_start` and `line_end`.

    When the two line points coincide, this is the plain distance from
    `point` to that single point.
    """
    dx = line_end[0] - line_start[0]
    dy = line_end[1] - line_start[1]
    norm = math.hypot(dx, dy)

    if norm == 0:
        return math.hypot(point[0] - line_start[0], point[1] - line_start[1])

    return abs(
        dy * point[0] - dx * point[1] + line_end[0] * line_start[1] - line_end[1] * line_start[0]
    ) / norm


def find_furthest(points: Sequence[Point], start: int, end: int) -> Tuple[int, float]:
    """
    Find the interior point of points[start..end] furthest from the chord.

    Returns (index, distance). The scan uses a strict comparison, so the
    first point reaching the maximum wins ties. With no interior point the
    index is `start` and the distance 0.
    """
    max_dist = 0.0
    max_index = start

    for i in range(start + 1, end):
        dist = perpendicular_distance(points[i], points[start], points[end])
        if dist > max_dist:
            max_dist = dist
            max_index = i

    return max_index, max_dist


def douglas_peucker(points: Sequence[Point], epsilon: float) -> List[Point]:
    """
    Simplify a polyline with the Douglas-Peucker algorithm.

    Args:
        points: Ordered points; extra dimensions are carried through
        epsilon: Distance tolerance, >= 0

    Returns:
        A new list holding a subset of the input points, endpoints included
    """
    if epsilon < 0:
        raise ValueError(f"epsilon must be >= 0, got {epsilon}")

    if len(points) <= 2:
        return list(points)

    keep = [False] * len(points)
    keep[0] = keep[-1] = True

    # Segments still to split, as (start, end) index pairs
    stack = [(0, len(points) - 1)]
    while stack:
        start, end = stack.pop()
        index, dist = find_furthest(points, start, end)
        if dist > epsilon:
            keep[index] = True
            stack.append((index, end))
            stack.append((start, index))

    return [point for point, kept in zip(points, keep) if kept]
