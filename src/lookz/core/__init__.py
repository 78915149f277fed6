"""Core scoring package for facial geometry ratings."""

from lookz.core.scorer import FeatureScorer
from lookz.core.aggregator import ScanAggregator, trimmed_mean
from lookz.core.composer import RatingComposer
from lookz.core.session import ScanSession

__all__ = ['FeatureScorer', 'ScanAggregator', 'trimmed_mean', 'RatingComposer', 'ScanSession']
