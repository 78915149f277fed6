"""Shared foundational modules.

This package contains core data structures, configuration, constants,
and exceptions used throughout LookzScore.
"""

from lookz.shared.config import (
    GenderConfig,
    PhysicalRatingConfig,
    BonusConfig,
    CompositionConfig,
    MALE_CONFIG,
    FEMALE_CONFIG,
    get_config,
)
from lookz.shared.constants import (
    FACE_MESH,
    SAMPLING,
    GEOMETRY,
    RATING,
    FEATURE_NAMES,
)
from lookz.shared.exceptions import (
    LookzError,
    RatingUnavailableError,
    MissingInputError,
    InvalidInputError,
    InvalidGenderError,
    ScanError,
    ScanStateError,
    ScanNotReadyError,
    NoScanResultError,
    DetectorError,
    VideoError,
    VideoNotFoundError,
    VideoOpenError,
)
from lookz.shared.models import (
    Gender,
    EyeColor,
    ScanState,
    BoundingBox,
    FaceDetection,
    FaceMeasurements,
    FeatureScores,
    Sample,
    ScanResult,
    UserProfile,
    RatingBreakdown,
)

__all__ = [
    # Configuration
    'GenderConfig',
    'PhysicalRatingConfig',
    'BonusConfig',
    'CompositionConfig',
    'MALE_CONFIG',
    'FEMALE_CONFIG',
    'get_config',

    # Constants
    'FACE_MESH',
    'SAMPLING',
    'GEOMETRY',
    'RATING',
    'FEATURE_NAMES',

    # Exceptions
    'LookzError',
    'RatingUnavailableError',
    'MissingInputError',
    'InvalidInputError',
    'InvalidGenderError',
    'ScanError',
    'ScanStateError',
    'ScanNotReadyError',
    'NoScanResultError',
    'DetectorError',
    'VideoError',
    'VideoNotFoundError',
    'VideoOpenError',

    # Models
    'Gender',
    'EyeColor',
    'ScanState',
    'BoundingBox',
    'FaceDetection',
    'FaceMeasurements',
    'FeatureScores',
    'Sample',
    'ScanResult',
    'UserProfile',
    'RatingBreakdown',
]
