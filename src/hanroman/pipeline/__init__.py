"""
Romanization Pipeline Package

Tokenizer stage (jieba) followed by transliterator stage (pypinyin), with
shared cancellation, progress and error tagging.
"""

from .pipeline import ProviderPipeline, PipelineOptions, STAGE_MODES

__all__ = [
    'ProviderPipeline',
    'PipelineOptions',
    'STAGE_MODES',
]
