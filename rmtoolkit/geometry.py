"""Plane geometry helpers for image points given as ``(x, y)`` pairs."""

from __future__ import annotations

import math
from collections.abc import Sequence

Point = Sequence[float]


def rad_to_deg(radian: float) -> float:
    return radian * 180 / math.pi


def deg_to_rad(degree: float) -> float:
    return degree / 180 * math.pi


def calc_inclination_angle(point1: Point, point2: Point) -> float:
    """Inclination of the line through two image points, in ``[0, pi)``.

    The image y axis points down, so the slope is negated.
    """
    x1, y1 = point1
    x2, y2 = point2
    if x1 == x2:
        return math.pi / 2
    angle = math.atan(-(y1 - y2) / (x1 - x2))
    if angle < 0:
        angle += math.pi
    return angle


def calc_inner_angle(vertex_point: Point, point1: Point, point2: Point) -> float:
    """Angle at ``vertex_point`` of the triangle it forms with the two other points."""
    a = math.dist(vertex_point, point1)
    b = math.dist(vertex_point, point2)
    c = math.dist(point1, point2)
    if a == 0 or b == 0:
        raise ValueError("a side of the angle has zero length")
    cosine = (a * a + b * b - c * c) / (2 * a * b)
    return math.acos(max(-1.0, min(1.0, cosine)))


def calc_circle_from_3points(
    p1: Point, p2: Point, p3: Point
) -> tuple[tuple[float, float], float]:
    """Return ``((cx, cy), r)`` of the circle through three points."""
    (x1, y1), (x2, y2), (x3, y3) = p1, p2, p3
    a = 2 * (x2 - x1)
    b = 2 * (y2 - y1)
    c = x2 * x2 + y2 * y2 - x1 * x1 - y1 * y1
    d = 2 * (x3 - x2)
    e = 2 * (y3 - y2)
    f = x3 * x3 + y3 * y3 - x2 * x2 - y2 * y2
    denominator = b * d - e * a
    if denominator == 0:
        raise ValueError("points are collinear")
    cx = (b * f - e * c) / denominator
    cy = (d * c - a * f) / denominator
    return (cx, cy), math.hypot(cx - x1, cy - y1)