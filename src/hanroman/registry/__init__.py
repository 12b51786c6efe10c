"""
Provider Registry Package
"""

from .types import ProviderEntry, Scheme
from .registry import ProviderRegistry, LanguageProviders, LANGUAGE_ALIASES, normalize_language

__all__ = [
    'ProviderEntry',
    'Scheme',
    'ProviderRegistry',
    'LanguageProviders',
    'LANGUAGE_ALIASES',
    'normalize_language',
]
