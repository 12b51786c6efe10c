#!/usr/bin/env python3
"""
Token Data Types

Pydantic models for the tokens produced by the tokenizer stage and annotated
by the transliterator stage.

Token lifecycle:
1. Created by the segmentation integrator (lexical words + filler spans)
2. Annotated in place by the phonetic resolver (lexical Chinese tokens only)
3. Handed to the caller read-only once the pipeline returns
"""

from enum import IntEnum
from typing import Optional, Dict, Any, List, Iterator, Iterable

from pydantic import BaseModel, Field

from src.hanroman.tokens.spacing import join_with_spacing


# CJK Unified Ideographs block recognized as Chinese
CJK_IDEOGRAPH_FIRST = 0x4E00
CJK_IDEOGRAPH_LAST = 0x9FFF


class Tone(IntEnum):
    """Mandarin tone numbers as written in numeric pinyin."""
    FIRST = 1    # 阴平
    SECOND = 2   # 阳平
    THIRD = 3    # 上声
    FOURTH = 4   # 去声
    NEUTRAL = 5  # 轻声


class Token(BaseModel):
    """
    Language-independent token.

    Concatenating `surface` over a token sequence reproduces the input text
    exactly. Non-lexical tokens (whitespace, punctuation, anything the
    segmenter did not report as a word) never carry a romanization.
    """

    surface: str = Field(
        ...,
        description="Exact substring of the source text covered by this token",
        examples=["你好", "，", " "]
    )

    is_lexical: bool = Field(
        default=False,
        description="True if the segmenter reported this span as a word; False for filler",
    )

    romanization: str = Field(
        default="",
        description="Chosen romanized output; empty until resolved",
        examples=["nǐ hǎo", "ni3 hao3"]
    )

    part_of_speech: str = Field(
        default="",
        description="Part-of-speech tag from the segmenter (lexical tokens only)",
        examples=["l", "n", "eng", "m"]
    )

    start: int = Field(
        default=0,
        ge=0,
        description="Character offset of the token in the full input text",
    )

    end: int = Field(
        default=0,
        ge=0,
        description="Character offset one past the token's last character",
    )

    language: str = Field(
        default="zho",
        description="ISO 639-3 code of the token's language",
    )

    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific additional data",
    )

    def roman(self) -> str:
        """Romanization if it adds anything over the surface, else empty."""
        if not self.is_lexical or self.romanization == self.surface:
            return ""
        return self.romanization

    def roman_or_surface(self) -> str:
        return self.roman() or self.surface


class ChineseToken(Token):
    """
    Token with Chinese-specific phonological annotations.

    Reading fields hold one entry per character of the surface:
    - all_readings_by_character[i]: candidate readings of the i-th character
      in the configured style, most frequent first (heteronyms)
    - numeric_reading_all[i]: same candidates in numeric-tone notation

    The chosen reading of each character is always candidate 0. Tone is only
    derived for single-syllable tokens; tone sandhi across syllables is not
    resolved.
    """

    simplified: str = Field(
        default="",
        description="Simplified form (the surface, no conversion table is consulted)",
    )

    traditional: str = Field(
        default="",
        description="Traditional form (the surface, no conversion table is consulted)",
    )

    primary_reading: str = Field(
        default="",
        description="Chosen reading per character, space-joined, in the configured style",
        examples=["nǐ hǎo"]
    )

    numeric_reading: str = Field(
        default="",
        description="Chosen reading per character, space-joined, numeric tone suffix",
        examples=["ni3 hao3"]
    )

    all_readings_by_character: List[List[str]] = Field(
        default_factory=list,
        description="Ordered candidate readings for every character",
        examples=[[["hǎo", "hào"]]]
    )

    numeric_reading_all: List[List[str]] = Field(
        default_factory=list,
        description="Ordered candidate numeric readings for every character",
        examples=[[["hao3", "hao4"]]]
    )

    tone: Optional[Tone] = Field(
        default=None,
        description="Tone of a single-syllable token; None for multi-syllable tokens",
    )

    original_tone: Optional[Tone] = Field(
        default=None,
        description="Tone before any sandhi",
    )

    tone_sandhi_applied: bool = Field(
        default=False,
        description="Whether a tone sandhi rule changed the tone",
    )

    classifier_type: str = Field(
        default="",
        description="Classifier kind guessed from the POS tag ('indiv' for tag 'q')",
    )

    is_stative: bool = Field(
        default=False,
        description="Stative verb/adjective guessed from the POS tag ('a')",
    )

    def is_chinese(self) -> bool:
        """True if every character lies in the CJK Unified Ideographs block."""
        if not self.surface:
            return False
        return all(
            CJK_IDEOGRAPH_FIRST <= ord(char) <= CJK_IDEOGRAPH_LAST
            for char in self.surface
        )

    def is_classifier(self) -> bool:
        return self.classifier_type != ""

    def has_simplified_variant(self) -> bool:
        return self.simplified != "" and self.simplified != self.surface


class TokenSequence:
    """
    Ordered tokens plus the raw chunks still waiting for the tokenizer.

    The tokenizer stage consumes `raw` and fills `tokens`; the transliterator
    stage annotates `tokens` in place.
    """

    def __init__(self, tokens: Optional[Iterable[Token]] = None, raw: Optional[List[str]] = None):
        self.tokens: List[Token] = list(tokens or [])
        self.raw: List[str] = list(raw or [])

    def append(self, *tokens: Token) -> None:
        self.tokens.extend(tokens)

    def clear_raw(self) -> None:
        self.raw = []

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, idx: int) -> Token:
        return self.tokens[idx]

    def __repr__(self) -> str:
        return f"TokenSequence(tokens={len(self.tokens)}, raw={len(self.raw)})"

    def lexical(self) -> "TokenSequence":
        """New sequence holding only lexical tokens (no whitespace/punctuation)."""
        return TokenSequence(t for t in self.tokens if t.is_lexical)

    def surface(self) -> str:
        """Concatenated surfaces; equals the input text for tokenizer output."""
        return "".join(t.surface for t in self.tokens)

    def roman_parts(self) -> List[str]:
        return [t.roman_or_surface() for t in self.tokens]

    def tokenized_parts(self) -> List[str]:
        return [t.surface for t in self.tokens]

    def roman(self) -> str:
        """Romanized text with words spaced apart."""
        return join_with_spacing(self.roman_parts())

    def tokenized(self) -> str:
        """Surface text with words spaced apart."""
        return join_with_spacing(self.tokenized_parts())
