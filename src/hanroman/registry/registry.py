#!/usr/bin/env python3
"""
Provider Registry

Directory of providers, default chains and schemes per language:

    (language, kind, name) -> ProviderEntry
    language -> default chain [tokenizer, transliterator]
    language -> schemes (case-insensitive names)

The registry is written once at startup, then frozen; after freeze() every
write raises RegistrationError and the registry can be shared read-only.
Pipelines receive the registry by reference instead of reading a global.

Usage:
    registry = ProviderRegistry()
    registry.register("zh", ProviderEntry.for_provider(JiebaProvider))
    registry.register("zh", ProviderEntry.for_provider(PinyinProvider))
    registry.set_default_chain("zh", ["jieba", "pinyin"])
    registry.freeze()

    pipeline = registry.default_pipeline("zho")
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
from logging import getLogger

from src.hanroman.errors import RegistrationError
from src.hanroman.phonetic.schemes import DEFAULT_SCHEME
from src.hanroman.pipeline.pipeline import ProviderPipeline
from src.hanroman.providers.base import ProviderKind
from src.hanroman.registry.types import ProviderEntry, Scheme

logger = getLogger(__name__)


# Accepted language codes -> ISO 639-3
LANGUAGE_ALIASES: Dict[str, str] = {
    "zh": "zho",
    "chi": "zho",
    "zho": "zho",
    "cmn": "zho",
}


def normalize_language(code: str, aliases: Optional[Dict[str, str]] = None) -> str:
    """
    ISO 639-3 code for any accepted language code.

    Raises:
        RegistrationError: code is not a known language code
    """
    aliases = LANGUAGE_ALIASES if aliases is None else aliases
    key = (code or "").strip().lower()
    if key not in aliases:
        raise RegistrationError(f"{code!r} isn't a known ISO 639 language code")
    return aliases[key]


@dataclass
class LanguageProviders:
    """Everything registered for one language."""
    entries: Dict[Tuple[ProviderKind, str], ProviderEntry] = field(default_factory=dict)
    default_chain: List[str] = field(default_factory=list)
    schemes: Dict[str, Scheme] = field(default_factory=dict)  # lower-cased name -> scheme
    default_scheme: str = DEFAULT_SCHEME


class ProviderRegistry:
    """
    Capability-indexed provider lookup.

    Example:
        registry = build_default_registry()
        registry.get("zho", ProviderKind.TOKENIZER, "jieba")
        [s.name for s in registry.schemes("zh")]   # ['normal', 'tone', ...]

        with registry.scheme_pipeline("zho", "TONE3") as pipeline:
            pipeline.roman("中国")                 # 'zhong1 guo2'
    """

    def __init__(self, aliases: Optional[Dict[str, str]] = None):
        """
        Args:
            aliases: Language code map to use instead of LANGUAGE_ALIASES
        """
        self._aliases = dict(LANGUAGE_ALIASES if aliases is None else aliases)
        self._languages: Dict[str, LanguageProviders] = {}
        self._frozen = False

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<ProviderRegistry languages={sorted(self._languages)} {state}>"

    def normalize_language(self, code: str) -> str:
        return normalize_language(code, self._aliases)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def languages(self) -> List[str]:
        return sorted(self._languages)

    # ------------------------------------------------------------------
    # Writes (before freeze)
    # ------------------------------------------------------------------

    def _writable(self, language: str, action: str) -> LanguageProviders:
        if self._frozen:
            raise RegistrationError(f"registry is frozen, cannot {action}")
        lang = self.normalize_language(language)
        return self._languages.setdefault(lang, LanguageProviders())

    def register(self, language: str, entry: ProviderEntry) -> None:
        """
        Add a provider for a language.

        Raises:
            RegistrationError: frozen registry, unknown language, or the same
                (language, kind, name) registered twice
        """
        if not entry.name:
            raise RegistrationError("provider entry needs a name")
        providers = self._writable(language, f"register {entry.name}")
        key = (entry.kind, entry.name)
        if key in providers.entries:
            raise RegistrationError(
                f"{entry.kind.value} {entry.name!r} already registered for "
                f"{self.normalize_language(language)}"
            )
        providers.entries[key] = entry
        logger.debug(f"Registered {entry.kind.value} {entry.name} for {self.normalize_language(language)}")

    def set_default_chain(self, language: str, names: Sequence[str]) -> None:
        """
        Set the default chain: a tokenizer, optionally followed by a transliterator.

        Raises:
            RegistrationError: empty or too long chain, or a name not
                registered with the required kind
        """
        providers = self._writable(language, "set default chain")
        lang = self.normalize_language(language)
        self._resolve_chain(lang, names)
        providers.default_chain = list(names)

    def register_scheme(self, language: str, scheme: Scheme) -> None:
        """
        Add a scheme for a language.

        Raises:
            RegistrationError: scheme name already taken (case-insensitive)
                or its chain is not registered
        """
        providers = self._writable(language, f"register scheme {scheme.name}")
        lang = self.normalize_language(language)
        key = scheme.name.strip().lower()
        if key in providers.schemes:
            raise RegistrationError(f"scheme {scheme.name!r} already registered for {lang}")
        self._resolve_chain(lang, scheme.providers)
        providers.schemes[key] = scheme

    def set_default_scheme(self, language: str, name: str) -> None:
        """Scheme used when get_scheme() is asked for an unknown name."""
        providers = self._writable(language, "set default scheme")
        key = name.strip().lower()
        if key not in providers.schemes:
            raise RegistrationError(f"cannot make unknown scheme {name!r} the default")
        providers.default_scheme = key

    def freeze(self) -> "ProviderRegistry":
        self._frozen = True
        logger.debug(f"Registry frozen: {self.languages()}")
        return self

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _language(self, language: str) -> Tuple[str, LanguageProviders]:
        lang = self.normalize_language(language)
        providers = self._languages.get(lang)
        if providers is None:
            raise RegistrationError(f"no providers registered for language {lang}")
        return lang, providers

    def get(self, language: str, kind: ProviderKind, name: str) -> ProviderEntry:
        """
        Exact-match lookup.

        Raises:
            RegistrationError: no such provider
        """
        lang, providers = self._language(language)
        entry = providers.entries.get((ProviderKind(kind), name))
        if entry is None:
            raise RegistrationError(f"no {ProviderKind(kind).value} named {name!r} for {lang}")
        return entry

    def entries(self, language: str, kind: Optional[ProviderKind] = None) -> List[ProviderEntry]:
        _, providers = self._language(language)
        return [e for e in providers.entries.values() if kind is None or e.kind == kind]

    def providers_with_capability(self, language: str, capability: str) -> List[ProviderEntry]:
        return [e for e in self.entries(language) if e.has_capability(capability)]

    def default_chain(self, language: str) -> List[ProviderEntry]:
        lang, providers = self._language(language)
        if not providers.default_chain:
            raise RegistrationError(f"no default providers set for {lang}")
        return self._resolve_chain(lang, providers.default_chain)

    def schemes(self, language: str) -> List[Scheme]:
        """Schemes in registration order."""
        _, providers = self._language(language)
        return list(providers.schemes.values())

    def get_scheme(self, language: str, name: str) -> Scheme:
        """
        Case-insensitive scheme lookup; an unknown name gives the default scheme.

        Raises:
            RegistrationError: no schemes registered for the language
        """
        lang, providers = self._language(language)
        if not providers.schemes:
            raise RegistrationError(f"no schemes registered for {lang}")

        scheme = providers.schemes.get((name or "").strip().lower())
        if scheme is not None:
            return scheme

        default = providers.schemes.get(providers.default_scheme)
        if default is None:
            raise RegistrationError(f"unknown scheme {name!r} and no default scheme for {lang}")
        logger.warning(f"Unknown scheme {name!r} for {lang}, using {default.name!r}")
        return default

    # ------------------------------------------------------------------
    # Pipeline factories
    # ------------------------------------------------------------------

    def default_pipeline(self, language: str) -> ProviderPipeline:
        lang = self.normalize_language(language)
        return self._build(lang, self.default_chain(lang))

    def scheme_pipeline(self, language: str, scheme_name: str) -> ProviderPipeline:
        lang = self.normalize_language(language)
        scheme = self.get_scheme(lang, scheme_name)
        pipeline = self._build(lang, self._resolve_chain(lang, scheme.providers))
        pipeline.configure(scheme.options())
        return pipeline

    def pipeline(self, language: str, *names: str) -> ProviderPipeline:
        """Pipeline from explicit provider names (tokenizer[, transliterator])."""
        lang = self.normalize_language(language)
        return self._build(lang, self._resolve_chain(lang, names))

    def _resolve_chain(self, lang: str, names: Sequence[str]) -> List[ProviderEntry]:
        if not names:
            raise RegistrationError(f"empty provider chain for {lang}")
        if len(names) > 2:
            raise RegistrationError(
                f"provider chain for {lang} takes a tokenizer and at most one transliterator, got {list(names)}"
            )

        providers = self._languages.get(lang)
        if providers is None:
            raise RegistrationError(f"no providers registered for language {lang}")

        chain = []
        for name, kind in zip(names, (ProviderKind.TOKENIZER, ProviderKind.TRANSLITERATOR)):
            entry = providers.entries.get((kind, name))
            if entry is None:
                raise RegistrationError(f"{kind.value} {name!r} not found in registered providers for {lang}")
            chain.append(entry)
        return chain

    def _build(self, lang: str, chain: List[ProviderEntry]) -> ProviderPipeline:
        tokenizer = chain[0].create()
        transliterator = chain[1].create() if len(chain) > 1 else None
        pipeline = ProviderPipeline(lang, tokenizer, transliterator)
        logger.debug(f"Built pipeline {pipeline.name} for {lang}")
        return pipeline
