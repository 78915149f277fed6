"""
LookzScore - Facial Geometry Rating

Scores facial proportions from face-mesh landmarks, stabilizes them over
a short collection window and composes an overall rating with declared
height, weight and eye color.
"""

# Main public API
from lookz.api import score_landmarks, scan_video, rate

# Shared foundational modules (re-exported for convenience)
from lookz.shared import (
    GenderConfig,
    MALE_CONFIG,
    FEMALE_CONFIG,
    Gender,
    EyeColor,
    BoundingBox,
    FeatureScores,
    ScanResult,
    UserProfile,
    RatingBreakdown,
)

# Core classes
from lookz.core import FeatureScorer, ScanAggregator, RatingComposer, ScanSession
from lookz.detection import FaceMeshDetector

__version__ = "0.1.0"

__all__ = [
    # Main API functions
    'score_landmarks',
    'scan_video',
    'rate',

    # Core classes
    'FeatureScorer',
    'ScanAggregator',
    'RatingComposer',
    'ScanSession',
    'FaceMeshDetector',

    # Configuration
    'GenderConfig',
    'MALE_CONFIG',
    'FEMALE_CONFIG',

    # Data models
    'Gender',
    'EyeColor',
    'BoundingBox',
    'FeatureScores',
    'ScanResult',
    'UserProfile',
    'RatingBreakdown',
]
