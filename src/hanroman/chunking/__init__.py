"""
Chunking Package

Loss-less splitting of raw input into provider-sized chunks.
"""

from .chunkifier import Chunkifier, SplitMethod, split_whitespace, split_sentences, split_clauses

__all__ = [
    'Chunkifier',
    'SplitMethod',
    'split_whitespace',
    'split_sentences',
    'split_clauses',
]
