"""Face landmark detection package."""

from lookz.detection.base import FaceDetector
from lookz.detection.face_mesh import FaceMeshDetector

__all__ = ['FaceDetector', 'FaceMeshDetector']
