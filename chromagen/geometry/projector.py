"""
Projector3D
===========

Fixed-axis rotation and oblique isometric projection of 3-D points.

Rotation order is always Y, then X, then Z. The projection keeps the rotated
z as depth and folds half of it into the screen y coordinate:

    screen_x = center_x + x'
    screen_y = center_y - y' - 0.5 * z'
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
from numpy import ndarray as NDArray

from ..types.geometry import Point3D, ProjectedPoint

Z_FORESHORTENING = 0.5


@dataclass(frozen=True)
class ViewParams:
    center_x: float
    center_y: float
    # Uniform scale applied to coordinates before rotation
    scale: float = 1.0


def rotate(point: Union[Point3D, Sequence[float]], angle_y: float, angle_x: float,
           angle_z: float = 0.0) -> Point3D:
    """
    Rotate a point about the Y axis, then X, then Z (radians).

    Args:
        point: (x, y, z)
        angle_y: rotation about the vertical axis
        angle_x: tilt about the horizontal axis
        angle_z: roll about the viewing axis

    Returns:
        Point3D: rotated point
    """
    x, y, z = point
    cos_y, sin_y = math.cos(angle_y), math.sin(angle_y)
    cos_x, sin_x = math.cos(angle_x), math.sin(angle_x)
    cos_z, sin_z = math.cos(angle_z), math.sin(angle_z)

    x1 = x * cos_y + z * sin_y
    z1 = -x * sin_y + z * cos_y

    y1 = y * cos_x - z1 * sin_x
    z2 = y * sin_x + z1 * cos_x

    x2 = x1 * cos_z - y1 * sin_z
    y2 = x1 * sin_z + y1 * cos_z

    return Point3D(x2, y2, z2)


def rotation_matrix(angle_y: float, angle_x: float, angle_z: float = 0.0) -> NDArray:
    """3x3 matrix equivalent to ``rotate`` (apply as ``points @ M.T``)."""
    cos_y, sin_y = math.cos(angle_y), math.sin(angle_y)
    cos_x, sin_x = math.cos(angle_x), math.sin(angle_x)
    cos_z, sin_z = math.cos(angle_z), math.sin(angle_z)

    ry = np.array([[cos_y, 0.0, sin_y], [0.0, 1.0, 0.0], [-sin_y, 0.0, cos_y]])
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cos_x, -sin_x], [0.0, sin_x, cos_x]])
    rz = np.array([[cos_z, -sin_z, 0.0], [sin_z, cos_z, 0.0], [0.0, 0.0, 1.0]])
    return rz @ rx @ ry


def np_rotate(points: NDArray, angle_y: float, angle_x: float, angle_z: float = 0.0) -> NDArray:
    """Vectorized ``rotate`` for an (N, 3) array."""
    points = np.asarray(points, dtype=np.float64)
    return points @ rotation_matrix(angle_y, angle_x, angle_z).T


def project(point: Union[Point3D, Sequence[float]], view: ViewParams) -> ProjectedPoint:
    """Project an already rotated point to screen coordinates."""
    x, y, z = point
    return ProjectedPoint(
        view.center_x + x,
        view.center_y - y - Z_FORESHORTENING * z,
        z,
    )


def np_project(points: NDArray, view: ViewParams) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Vectorized ``project``.

    Returns:
        (screen_x, screen_y, depth), each of shape (N,)
    """
    points = np.asarray(points, dtype=np.float64)
    x, y, z = points[..., 0], points[..., 1], points[..., 2]
    return view.center_x + x, view.center_y - y - Z_FORESHORTENING * z, z


class Projector3D:
    """
    Rotation angles and view bundled together.

    Args:
        angle_y: rotation about Y (radians), usually the animation angle
        angle_x: tilt about X (radians)
        angle_z: roll about Z (radians)
        view: screen center and scale
    """

    def __init__(self, view: ViewParams, angle_y: float = 0.0, angle_x: float = 0.0,
                 angle_z: float = 0.0) -> None:
        self.view = view
        self.angle_y = angle_y
        self.angle_x = angle_x
        self.angle_z = angle_z
        self._matrix = rotation_matrix(angle_y, angle_x, angle_z)

    def rotate(self, point: Union[Point3D, Sequence[float]]) -> Point3D:
        return rotate(point, self.angle_y, self.angle_x, self.angle_z)

    def project_point(self, point: Union[Point3D, Sequence[float]]) -> ProjectedPoint:
        x, y, z = point
        s = self.view.scale
        return project(self.rotate((x * s, y * s, z * s)), self.view)

    def project_points(self, points: NDArray) -> Tuple[NDArray, NDArray, NDArray]:
        """
        Scale, rotate and project an (N, 3) array.

        Returns:
            (screen_x, screen_y, depth)
        """
        points = np.asarray(points, dtype=np.float64) * self.view.scale
        return np_project(points @ self._matrix.T, self.view)


def _unit_cube_edges() -> Tuple[Tuple[Tuple[float, float, float], Tuple[float, float, float]], ...]:
    corners = [(x, y, z) for x in (0.0, 1.0) for y in (0.0, 1.0) for z in (0.0, 1.0)]
    edges = []
    for i, a in enumerate(corners):
        for b in corners[i + 1:]:
            if sum(abs(p - q) for p, q in zip(a, b)) == 1.0:
                edges.append((a, b))
    return tuple(edges)


# The 12 edges of the [0, 1]^3 cube as pairs of corners
CUBE_EDGES = _unit_cube_edges()
