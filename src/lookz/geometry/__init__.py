"""Landmark geometry package for facial ratio measurement."""

from lookz.geometry.landmarks import (
    eye_center,
    distance_2d,
    distance_3d,
    angle_degrees,
    safe_ratio,
)
from lookz.geometry.measurements import measure_face

__all__ = [
    'eye_center',
    'distance_2d',
    'distance_3d',
    'angle_degrees',
    'safe_ratio',
    'measure_face',
]
