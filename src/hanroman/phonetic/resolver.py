#!/usr/bin/env python3
"""
Phonetic Resolution for Chinese Tokens

Assigns one canonical pinyin reading to every lexical Chinese token while
keeping every candidate reading of every character (heteronyms).

Selection policy:
- The chosen reading of a character is candidate 0 of its list, i.e. the
  reading pypinyin ranks as most frequent. There is no contextual
  disambiguation: 行 in 银行 and in 行走 gets whatever the oracle lists first
  for the token it appears in.
- A character with no candidates contributes an empty placeholder, so the
  joined reading still has one slot per character.

Tone:
- Derived only for single-syllable tokens, from the trailing digit of the
  numeric reading ("hao3" -> 3).
- Multi-syllable tokens keep tone unset. Tone sandhi (e.g. 你好 ni3 hao3 ->
  ni2 hao3) is not resolved here.

Usage:
    from src.hanroman.phonetic import PhoneticResolver, PypinyinOracle

    resolver = PhoneticResolver(PypinyinOracle())
    token = ChineseToken(surface="好", is_lexical=True)
    resolver.resolve(token)
    print(token.romanization, token.tone)   # hǎo Tone.THIRD
"""

import re
from typing import Iterable, List, NamedTuple, Optional
from logging import getLogger

from pypinyin import Style

from src.hanroman.errors import ConsistencyError, UnsupportedTokenError
from src.hanroman.phonetic.oracle import PhoneticOracle
from src.hanroman.phonetic.schemes import NUMERIC_STYLE
from src.hanroman.tokens.types import ChineseToken, Token, Tone

logger = getLogger(__name__)


_TRAILING_DIGIT_RE = re.compile(r"(\d)$")


def parse_tone(syllable: str) -> Optional[Tone]:
    """
    Tone from the trailing digit of a numeric pinyin syllable.

    Examples:
        >>> parse_tone("hao3")
        <Tone.THIRD: 3>
        >>> parse_tone("ma5")
        <Tone.NEUTRAL: 5>
        >>> parse_tone("hao") is None
        True
    """
    match = _TRAILING_DIGIT_RE.search(syllable)
    if match is None:
        return None
    value = int(match.group(1))
    if value < Tone.FIRST or value > Tone.NEUTRAL:
        return None
    return Tone(value)


def choose_first(candidates: List[List[str]]) -> List[str]:
    """Candidate 0 of every character, "" where a character has none."""
    return [chars[0] if chars else "" for chars in candidates]


class PhoneticReading(NamedTuple):
    primary: str
    numeric: str
    all_readings: List[List[str]]
    numeric_all: List[List[str]]
    tone: Optional[Tone]


class PhoneticResolver:
    """
    Resolves pinyin readings for lexical Chinese tokens.

    Resolution is split in two steps so a caller can compute readings for a
    whole batch and only write them to the tokens once the batch succeeded:
    - read(token): query the oracle, return a PhoneticReading (no mutation)
    - apply(token, reading): write the reading onto the token
    resolve(token) does both.
    """

    def __init__(
        self,
        oracle: PhoneticOracle,
        style: Style = Style.TONE,
        numeric_style: Style = NUMERIC_STYLE,
    ):
        """
        Args:
            oracle: Source of per-character candidate readings
            style: Output style of the primary reading (from the configured scheme)
            numeric_style: Style of the numeric reading used for tone extraction
        """
        self.oracle = oracle
        self.style = style
        self.numeric_style = numeric_style

    def read(self, token: Token) -> Optional[PhoneticReading]:
        """
        Compute the reading of a lexical token without modifying it.

        Returns:
            PhoneticReading for a Chinese token, None for a token that is not
            Chinese (its romanization is its surface)

        Raises:
            UnsupportedTokenError: token is not a ChineseToken
            ConsistencyError: oracle answers disagree on the character count
        """
        if not isinstance(token, ChineseToken):
            raise UnsupportedTokenError(
                f"expected ChineseToken, got {type(token).__name__} for {token.surface!r}"
            )
        if not token.is_chinese():
            return None

        surface = token.surface
        all_readings = self.oracle.readings(surface, self.style, heteronym=True)
        numeric_all = self.oracle.readings(surface, self.numeric_style, heteronym=True)

        if len(all_readings) != len(numeric_all):
            raise ConsistencyError(
                f"phonetic oracle returned {len(all_readings)} diacritic and "
                f"{len(numeric_all)} numeric entries for {surface!r}"
            )
        if len(all_readings) != len(surface):
            raise ConsistencyError(
                f"phonetic oracle returned {len(all_readings)} entries for "
                f"{len(surface)} characters in {surface!r}"
            )

        chosen = choose_first(all_readings)
        chosen_numeric = choose_first(numeric_all)

        tone = None
        if len(chosen_numeric) == 1:
            tone = parse_tone(chosen_numeric[0])

        for idx, candidates in enumerate(all_readings):
            if not candidates:
                logger.debug(f"No reading for {surface[idx]!r} in {surface!r}")

        return PhoneticReading(
            primary=" ".join(chosen),
            numeric=" ".join(chosen_numeric),
            all_readings=[list(c) for c in all_readings],
            numeric_all=[list(c) for c in numeric_all],
            tone=tone,
        )

    @staticmethod
    def apply(token: Token, reading: Optional[PhoneticReading]) -> None:
        """Write a reading onto a lexical token; None means identity romanization."""
        if not token.is_lexical:
            return
        if reading is None:
            token.romanization = token.surface
            return

        token.primary_reading = reading.primary
        token.numeric_reading = reading.numeric
        token.all_readings_by_character = reading.all_readings
        token.numeric_reading_all = reading.numeric_all
        token.tone = reading.tone
        token.original_tone = reading.tone
        token.tone_sandhi_applied = False
        token.romanization = reading.primary

    def resolve(self, token: Token) -> None:
        """Resolve a single token in place. Non-lexical tokens are left untouched."""
        if not token.is_lexical:
            return
        self.apply(token, self.read(token))

    def resolve_all(self, tokens: Iterable[Token]) -> int:
        """
        Resolve every lexical token of a sequence in place.

        Tokens that are not ChineseTokens get their surface as romanization.

        Returns:
            Number of lexical tokens annotated
        """
        count = 0
        for token in tokens:
            if not token.is_lexical:
                continue
            try:
                reading = self.read(token)
            except UnsupportedTokenError:
                reading = None
            self.apply(token, reading)
            count += 1
        return count
