"""
hanroman - Chinese segmentation and pinyin romanization

Stages:
- Tokenization (jieba) - loss-less token stream with filler tokens
- Transliteration (pypinyin) - chosen reading, heteronyms, tone

Usage:
    from src.hanroman import build_default_registry

    registry = build_default_registry()
    with registry.default_pipeline("zho") as pipeline:
        for token in pipeline.lexical_tokens("银行在哪里？"):
            print(token.surface, token.romanization, token.all_readings_by_character)
"""

from .context import CancellationContext, ProgressReporter, TqdmProgress, CANCEL_CHECK_INTERVAL
from .errors import (
    TranslitError,
    CancellationError,
    InitializationError,
    ConsistencyError,
    UnsupportedTokenError,
    ProcessingError,
    ReleaseError,
    RegistrationError,
    ConfigurationError,
    ChunkingError,
)
from .tokens import Token, ChineseToken, TokenSequence, Tone
from .providers import OperatingMode, ProviderKind
from .pipeline import ProviderPipeline
from .registry import ProviderRegistry, ProviderEntry, Scheme
from .zho import build_default_registry, romanize

__all__ = [
    'CancellationContext',
    'ProgressReporter',
    'TqdmProgress',
    'CANCEL_CHECK_INTERVAL',
    'TranslitError',
    'CancellationError',
    'InitializationError',
    'ConsistencyError',
    'UnsupportedTokenError',
    'ProcessingError',
    'ReleaseError',
    'RegistrationError',
    'ConfigurationError',
    'ChunkingError',
    'Token',
    'ChineseToken',
    'TokenSequence',
    'Tone',
    'OperatingMode',
    'ProviderKind',
    'ProviderPipeline',
    'ProviderRegistry',
    'ProviderEntry',
    'Scheme',
    'build_default_registry',
    'romanize',
]
