from __future__ import annotations
from typing import NamedTuple


class Point3D(NamedTuple):
    x: float
    y: float
    z: float


class ProjectedPoint(NamedTuple):
    """Screen position of a projected point, with the rotated z kept as depth."""
    x: float
    y: float
    depth: float
