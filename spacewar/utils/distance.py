"""Distance calculations for the game map."""

import math


def distance_3d(a: tuple[float, float, float], b: tuple[float, float, float]) -> float:
    """Calculate straight-line distance between two points in space.

    Ships travel in straight lines, so this is both the AI's proximity
    heuristic and the basis of travel time.

    Args:
        a: First point as (x, y, z)
        b: Second point as (x, y, z)

    Returns:
        Euclidean distance between the two points

    Examples:
        >>> distance_3d((0, 0, 0), (3, 4, 0))
        5.0
    """
    return math.hypot(a[0] - b[0], a[1] - b[1], a[2] - b[2])
