"""
Chinese Phonetic Package

Pinyin readings (pypinyin), scheme selection and heteronym-preserving
resolution for lexical Chinese tokens.
"""

from .oracle import PhoneticOracle, PypinyinOracle
from .resolver import PhoneticResolver, PhoneticReading, parse_tone, choose_first
from .schemes import (
    PINYIN_SCHEMES,
    PinyinScheme,
    DEFAULT_SCHEME,
    NUMERIC_STYLE,
    normalize_scheme_name,
    is_known_scheme,
    style_for_scheme,
)

__all__ = [
    'PhoneticOracle',
    'PypinyinOracle',
    'PhoneticResolver',
    'PhoneticReading',
    'parse_tone',
    'choose_first',
    'PINYIN_SCHEMES',
    'PinyinScheme',
    'DEFAULT_SCHEME',
    'NUMERIC_STYLE',
    'normalize_scheme_name',
    'is_known_scheme',
    'style_for_scheme',
]
