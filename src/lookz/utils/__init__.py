"""Utility modules package.

This package provides video capture helpers and unit parsing for
user-declared inputs.
"""

from lookz.utils.video import (
    VideoCapture,
    is_camera,
    iter_frames,
    validate_video_path,
)
from lookz.utils.units import (
    height_from_feet_inches,
    height_from_cm,
    weight_from_kg,
    parse_height,
    parse_weight,
)

__all__ = [
    'VideoCapture',
    'is_camera',
    'iter_frames',
    'validate_video_path',
    'height_from_feet_inches',
    'height_from_cm',
    'weight_from_kg',
    'parse_height',
    'parse_weight',
]
