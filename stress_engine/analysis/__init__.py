"""Acoustic analysis: segmentation, feature extraction, aggregation and scoring"""

from stress_engine.analysis.acoustic import AcousticStressAnalyzer
from stress_engine.analysis.scoring import score

__all__ = ['AcousticStressAnalyzer', 'score']
