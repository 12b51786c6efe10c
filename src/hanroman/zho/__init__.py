"""
Chinese Language Package

Registers jieba + pypinyin providers and the pinyin schemes.
"""

from .registration import (
    LANGUAGE,
    DEFAULT_CHAIN,
    ZHO_SCHEMES,
    register_chinese,
    build_default_registry,
    romanize,
)

__all__ = [
    'LANGUAGE',
    'DEFAULT_CHAIN',
    'ZHO_SCHEMES',
    'register_chinese',
    'build_default_registry',
    'romanize',
]
