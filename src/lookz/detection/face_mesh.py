"""MediaPipe Face Mesh landmark detection.

Wraps the 468-point Face Mesh model and converts its normalized output
into pixel-space landmarks and a bounding box per face.

Example:
    >>> from lookz.detection.face_mesh import FaceMeshDetector
    >>> with FaceMeshDetector() as detector:
    ...     detections = detector.detect(frame)
"""

import logging
from typing import List

import cv2
import numpy as np

try:
    import mediapipe as mp
except ImportError as e:
    raise ImportError(
        "mediapipe not installed. Install it using: pip install mediapipe"
    ) from e

from lookz.shared.constants import FACE_MESH
from lookz.shared.exceptions import DetectorError
from lookz.shared.models import BoundingBox, FaceDetection

logger = logging.getLogger(__name__)


class FaceMeshDetector:
    """
    Face landmark detector backed by MediaPipe Face Mesh.

    Landmarks are returned in pixel space: x and y scaled by frame width
    and height, z scaled by frame width (MediaPipe's depth convention).
    The bounding box is the x/y extent of the landmarks.
    """

    def __init__(
        self,
        max_faces: int = FACE_MESH.MAX_FACES,
        min_detection_confidence: float = FACE_MESH.MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = FACE_MESH.MIN_TRACKING_CONFIDENCE,
        static_image_mode: bool = False,
    ):
        """
        Initialize the Face Mesh model.

        Args:
            max_faces: Maximum faces to return per frame
            min_detection_confidence: Detection threshold
            min_tracking_confidence: Tracking threshold between frames
            static_image_mode: Run detection on every frame instead of tracking

        Raises:
            DetectorError: If the model fails to load
        """
        logger.info("Initializing MediaPipe Face Mesh...")
        if not hasattr(mp, "solutions"):
            raise DetectorError(
                f"mediapipe {getattr(mp, '__version__', '?')} has no Face Mesh solution. "
                "Install a supported release using: pip install 'mediapipe<0.10.30'"
            )
        try:
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=static_image_mode,
                max_num_faces=max_faces,
                refine_landmarks=False,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except Exception as e:
            raise DetectorError(f"Failed to load Face Mesh model: {e}") from e

    def detect(self, frame: np.ndarray) -> List[FaceDetection]:
        """
        Detect faces in a frame.

        Args:
            frame: Input frame (BGR format from OpenCV)

        Returns:
            List of FaceDetection, empty when no face is found

        Raises:
            DetectorError: If inference fails
        """
        h, w = frame.shape[:2]
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

        try:
            results = self.face_mesh.process(rgb_frame)
        except Exception as e:
            raise DetectorError(f"Face Mesh inference failed: {e}") from e

        if not results.multi_face_landmarks:
            logger.debug("No faces detected in frame")
            return []

        detections = []
        for face in results.multi_face_landmarks:
            landmarks = np.array(
                [[lm.x * w, lm.y * h, lm.z * w] for lm in face.landmark],
                dtype=np.float64,
            )
            if len(landmarks) < FACE_MESH.LANDMARK_COUNT:
                logger.debug("Skipping face with %d landmarks", len(landmarks))
                continue
            detections.append(FaceDetection(landmarks=landmarks, bbox=_landmark_bbox(landmarks)))

        return detections

    def close(self) -> None:
        self.face_mesh.close()

    def __enter__(self) -> "FaceMeshDetector":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _landmark_bbox(landmarks: np.ndarray) -> BoundingBox:
    x_min, y_min = landmarks[:, 0].min(), landmarks[:, 1].min()
    x_max, y_max = landmarks[:, 0].max(), landmarks[:, 1].max()
    return BoundingBox(top_left=(float(x_min), float(y_min)), bottom_right=(float(x_max), float(y_max)))
