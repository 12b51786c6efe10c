#!/usr/bin/env python3
"""
Pinyin Transliterator Stage

Annotates lexical ChineseTokens with pinyin through the PhoneticResolver.
Tokens of any other type, and lexical tokens that are not Chinese, get their
surface as romanization instead of failing the batch.

Readings for the whole batch are computed first and written to the tokens
only after the batch completed, so a cancelled or failed run leaves the
input sequence exactly as it was.
"""

from typing import List, Optional, Tuple
from logging import getLogger

from pydantic import field_validator

from src.hanroman.context import CANCEL_CHECK_INTERVAL, CancellationContext
from src.hanroman.errors import UnsupportedTokenError
from src.hanroman.phonetic.oracle import PhoneticOracle, PypinyinOracle
from src.hanroman.phonetic.resolver import PhoneticReading, PhoneticResolver
from src.hanroman.phonetic.schemes import (
    DEFAULT_SCHEME,
    NUMERIC_STYLE,
    is_known_scheme,
    normalize_scheme_name,
    style_for_scheme,
)
from src.hanroman.providers.base import OperatingMode, Provider, ProviderKind, ProviderOptions
from src.hanroman.tokens.types import Token, TokenSequence

logger = getLogger(__name__)


class PinyinOptions(ProviderOptions):
    scheme: str = DEFAULT_SCHEME

    @field_validator("scheme", mode="before")
    @classmethod
    def fallback_to_default(cls, value):
        if value is None:
            return DEFAULT_SCHEME
        if not isinstance(value, str):
            raise ValueError(f"scheme must be a string, got {type(value).__name__}")
        if not is_known_scheme(value):
            logger.warning(f"Unknown pinyin scheme {value!r}, using {DEFAULT_SCHEME!r}")
            return DEFAULT_SCHEME
        return normalize_scheme_name(value)


class PinyinProvider(Provider):
    """
    Transliterator stage backed by pypinyin.

    Usage:
        provider = PinyinProvider()
        provider.configure({"scheme": "tone3"})
        provider.run(ctx, OperatingMode.TRANSLITERATE, tokens)
    """

    name = "pinyin"
    kind = ProviderKind.TRANSLITERATOR
    capabilities = frozenset({"transliteration", "heteronyms", "tone"})
    supported_modes = frozenset({OperatingMode.TRANSLITERATE})
    options_model = PinyinOptions

    def __init__(self, oracle: Optional[PhoneticOracle] = None):
        """
        Args:
            oracle: Phonetic oracle to use instead of pypinyin
        """
        super().__init__()
        self._oracle = oracle
        self._resolver: Optional[PhoneticResolver] = None

    @property
    def scheme(self) -> str:
        return self.options.scheme

    def _load(self, ctx: CancellationContext, force_fresh: bool) -> None:
        oracle = self._oracle if self._oracle is not None else PypinyinOracle()
        self._resolver = PhoneticResolver(
            oracle,
            style=style_for_scheme(self.options.scheme),
            numeric_style=NUMERIC_STYLE,
        )
        logger.debug(f"{self.name}: scheme={self.options.scheme}")

    def _unload(self) -> None:
        self._resolver = None

    def run(self, ctx: CancellationContext, mode: OperatingMode, items: TokenSequence) -> TokenSequence:
        ctx.check(f"{self.name} processing")
        self._check_mode(mode)
        self.initialize(ctx)

        total = len(items)
        pending: List[Tuple[Token, Optional[PhoneticReading]]] = []

        for idx, token in enumerate(items):
            if idx % CANCEL_CHECK_INTERVAL == 0:
                ctx.check(f"{self.name} token {idx}")
            self._report(idx, total)

            if not token.is_lexical:
                continue
            pending.append((token, self._read(token)))

        ctx.check(f"{self.name} commit")
        for token, reading in pending:
            PhoneticResolver.apply(token, reading)

        self._report(total, total)
        logger.debug(f"{self.name}: romanized {len(pending)} lexical tokens")
        return items

    def _read(self, token: Token) -> Optional[PhoneticReading]:
        try:
            return self._resolver.read(token)
        except UnsupportedTokenError as err:
            logger.debug(f"{self.name}: {err}; using surface as romanization")
            return None
