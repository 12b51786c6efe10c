#!/usr/bin/env python3
"""
Chinese (zho) Registration

Fills a ProviderRegistry with the Chinese providers, the default chain
jieba -> pinyin and one scheme per pinyin output style, then freezes it.

Usage:
    from src.hanroman.zho import build_default_registry, romanize

    registry = build_default_registry()
    pipeline = registry.scheme_pipeline("zh", "tone3")

    romanize("你好")   # 'nǐ hǎo'
"""

from typing import List, Optional
from logging import getLogger

from src.hanroman.phonetic.schemes import DEFAULT_SCHEME, PINYIN_SCHEMES
from src.hanroman.providers.jieba_provider import JiebaProvider
from src.hanroman.providers.pinyin_provider import PinyinProvider
from src.hanroman.registry.registry import ProviderRegistry
from src.hanroman.registry.types import ProviderEntry, Scheme

logger = getLogger(__name__)


LANGUAGE = "zho"
DEFAULT_CHAIN = (JiebaProvider.name, PinyinProvider.name)

ZHO_SCHEMES: List[Scheme] = [
    Scheme(name=name, description=scheme.description, providers=DEFAULT_CHAIN, style=name)
    for name, scheme in PINYIN_SCHEMES.items()
]


def register_chinese(registry: ProviderRegistry) -> ProviderRegistry:
    """Register the Chinese providers, default chain and schemes (no freeze)."""
    registry.register(LANGUAGE, ProviderEntry.for_provider(
        JiebaProvider,
        description="jieba word segmentation with POS tags",
    ))
    registry.register(LANGUAGE, ProviderEntry.for_provider(
        PinyinProvider,
        description="pypinyin romanization with heteronyms",
    ))
    registry.set_default_chain(LANGUAGE, DEFAULT_CHAIN)

    for scheme in ZHO_SCHEMES:
        registry.register_scheme(LANGUAGE, scheme)
    registry.set_default_scheme(LANGUAGE, DEFAULT_SCHEME)

    logger.debug(f"Registered {len(ZHO_SCHEMES)} schemes for {LANGUAGE}")
    return registry


def build_default_registry() -> ProviderRegistry:
    """New frozen registry holding the Chinese providers."""
    return register_chinese(ProviderRegistry()).freeze()


def romanize(text: str, scheme: Optional[str] = None, registry: Optional[ProviderRegistry] = None) -> str:
    """
    Quick romanization of Chinese text.

    Args:
        text: Text to romanize
        scheme: Scheme name (default scheme if None)
        registry: Registry to build the pipeline from (a default one if None)

    Returns:
        Romanized text with words spaced apart
    """
    registry = registry or build_default_registry()
    if scheme is None:
        pipeline = registry.default_pipeline(LANGUAGE)
    else:
        pipeline = registry.scheme_pipeline(LANGUAGE, scheme)
    with pipeline:
        return pipeline.roman(text)
