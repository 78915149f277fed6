"""Face measurement extraction.

Derives every raw geometric quantity the feature scorers need from one
frame's landmarks and bounding box.
"""

import logging

import numpy as np

from lookz.geometry.landmarks import eye_center, distance_2d, angle_degrees, safe_ratio
from lookz.shared.constants import FACE_MESH
from lookz.shared.models import BoundingBox, FaceMeasurements

logger = logging.getLogger(__name__)


def measure_face(landmarks: np.ndarray, bbox: BoundingBox) -> FaceMeasurements:
    """
    Compute raw measurements for one face.

    Vertical quantities use image y (growing downward), so for an upright
    face forehead < nose base < mouth < chin. Width ratios are normalized
    by the bounding box width.

    Args:
        landmarks: Array of shape (468, 3) in pixel space
        bbox: Face bounding box in the same space

    Returns:
        FaceMeasurements; ratios with degenerate denominators are None
    """
    lms = np.asarray(landmarks, dtype=np.float64)

    left_eye = eye_center(lms, FACE_MESH.LEFT_EYE)
    right_eye = eye_center(lms, FACE_MESH.RIGHT_EYE)
    dy = right_eye[1] - left_eye[1]
    dx = right_eye[0] - left_eye[0]
    tilt_angle = abs(angle_degrees(dy, dx))

    forehead_y = lms[FACE_MESH.FOREHEAD][1]
    nose_y = lms[FACE_MESH.NOSE_BASE][1]
    chin_y = lms[FACE_MESH.CHIN][1]
    mouth_y = lms[FACE_MESH.MOUTH_BOTTOM][1]

    upper_third = nose_y - forehead_y
    lower_third = chin_y - nose_y
    face_height_full = chin_y - forehead_y

    left_cheek_y = lms[FACE_MESH.LEFT_CHEEK][1]
    right_cheek_y = lms[FACE_MESH.RIGHT_CHEEK][1]
    cheek_diff = abs(left_cheek_y - right_cheek_y)

    face_width = bbox.width
    eye_distance = distance_2d(left_eye, right_eye)
    jaw_width = abs(lms[FACE_MESH.LEFT_JAW][0] - lms[FACE_MESH.RIGHT_JAW][0])
    nose_width = abs(lms[FACE_MESH.LEFT_NOSE_WING][0] - lms[FACE_MESH.RIGHT_NOSE_WING][0])

    chin_length = chin_y - mouth_y
    face_height = chin_y - nose_y

    return FaceMeasurements(
        left_eye_center=tuple(float(v) for v in left_eye),
        right_eye_center=tuple(float(v) for v in right_eye),
        carnal_tilt_angle=float(tilt_angle),
        upper_third_length=float(upper_third),
        lower_third_length=float(lower_third),
        facial_thirds_ratio=safe_ratio(upper_third, lower_third),
        left_cheek_height=float(left_cheek_y),
        right_cheek_height=float(right_cheek_y),
        cheek_height_diff=float(cheek_diff),
        face_height_full=float(face_height_full),
        cheek_diff_ratio=safe_ratio(cheek_diff, face_height_full),
        eye_distance=float(eye_distance),
        face_width=float(face_width),
        interocular_ratio=safe_ratio(eye_distance, face_width),
        jaw_width=float(jaw_width),
        jaw_ratio=safe_ratio(jaw_width, face_width),
        chin_length=float(chin_length),
        face_height=float(face_height),
        chin_ratio=safe_ratio(chin_length, face_height),
        nose_width=float(nose_width),
        nose_ratio=safe_ratio(nose_width, face_width),
    )
