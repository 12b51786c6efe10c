"""
Providers Package

Pipeline stages:
- JiebaProvider: tokenizer (jieba segmentation + filler integration)
- PinyinProvider: transliterator (pypinyin readings via PhoneticResolver)
"""

from .base import Provider, ProviderKind, OperatingMode, ProviderOptions
from .jieba_provider import JiebaProvider, JiebaOptions
from .pinyin_provider import PinyinProvider, PinyinOptions

__all__ = [
    'Provider',
    'ProviderKind',
    'OperatingMode',
    'ProviderOptions',
    'JiebaProvider',
    'JiebaOptions',
    'PinyinProvider',
    'PinyinOptions',
]
