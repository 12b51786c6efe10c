"""
Segmentation Package

Word segmentation (jieba) and its integration with the original text into a
loss-less token stream.
"""

from .integrator import integrate, assign_tags, IntegrationResult
from .oracle import JiebaSegmenter, Segmentation, SegmentationOracle, NON_WORD_FLAG

__all__ = [
    'integrate',
    'assign_tags',
    'IntegrationResult',
    'JiebaSegmenter',
    'Segmentation',
    'SegmentationOracle',
    'NON_WORD_FLAG',
]
