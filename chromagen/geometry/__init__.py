from .projector import (
    Projector3D,
    ViewParams,
    CUBE_EDGES,
    Z_FORESHORTENING,
    np_project,
    np_rotate,
    project,
    rotate,
    rotation_matrix,
)

__all__ = [
    "Projector3D",
    "ViewParams",
    "CUBE_EDGES",
    "Z_FORESHORTENING",
    "np_project",
    "np_rotate",
    "project",
    "rotate",
    "rotation_matrix",
]
