"""
Token Package

Data model shared by every stage of the romanization pipeline.

Usage:
    from src.hanroman.tokens import ChineseToken, TokenSequence

    seq = TokenSequence([ChineseToken(surface="你好", is_lexical=True)])
    print(seq.roman())
"""

from .types import (
    Token,
    ChineseToken,
    TokenSequence,
    Tone,
    CJK_IDEOGRAPH_FIRST,
    CJK_IDEOGRAPH_LAST,
)
from .spacing import default_spacing_rule, join_with_spacing, script_of

__all__ = [
    'Token',
    'ChineseToken',
    'TokenSequence',
    'Tone',
    'CJK_IDEOGRAPH_FIRST',
    'CJK_IDEOGRAPH_LAST',
    'default_spacing_rule',
    'join_with_spacing',
    'script_of',
]
