"""Public API package for LookzScore.

This package provides the main public API functions for scoring faces
and composing overall ratings.
"""

from lookz.api.public import score_landmarks, scan_video, rate

__all__ = [
    'score_landmarks',
    'scan_video',
    'rate',
]
