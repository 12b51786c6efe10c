#!/usr/bin/env python3
"""
Segmentation Integration

Segmenters report only the lexical content of a chunk: a flat list of words,
usually without the whitespace and punctuation between them. The integrator
puts those words back into the original text, turning every gap into a
non-lexical filler token, so that the token surfaces concatenate back to the
chunk exactly.

Usage:
    from src.hanroman.segmentation.integrator import integrate, assign_tags

    result = integrate("你好吗，世界？", ["你好", "吗", "世界"])
    [t.surface for t in result.tokens]
    # ['你好', '吗', '，', '世界', '？']
    assign_tags(result.tokens, ["l", "y", "n"])
"""

from typing import List, NamedTuple, Sequence, Type
from logging import getLogger

from src.hanroman.errors import ConsistencyError
from src.hanroman.tokens.types import Token

logger = getLogger(__name__)


class IntegrationResult(NamedTuple):
    tokens: List[Token]
    missed: List[str]  # oracle words that could not be located in the chunk


def integrate(
    chunk: str,
    words: Sequence[str],
    offset: int = 0,
    token_cls: Type[Token] = Token,
) -> IntegrationResult:
    """
    Merge a segmenter's word list with the chunk it came from.

    Words are consumed in order. Each word is searched for from the current
    cursor; text between the cursor and the match becomes one filler token.
    A word that does not occur at or after the cursor is treated as
    non-authoritative: it is skipped, and its characters end up in a filler
    token instead. No character of the chunk is ever dropped or reordered.

    Args:
        chunk: Original text chunk
        words: Words reported by the segmenter, in order
        offset: Position of the chunk in the full input (for token offsets)
        token_cls: Token class to instantiate (e.g. ChineseToken)

    Returns:
        IntegrationResult with the ordered tokens and the skipped words
    """
    tokens: List[Token] = []
    missed: List[str] = []
    cursor = 0

    def emit(start: int, end: int, is_lexical: bool) -> None:
        tokens.append(token_cls(
            surface=chunk[start:end],
            is_lexical=is_lexical,
            start=offset + start,
            end=offset + end,
        ))

    for word_idx, word in enumerate(words):
        if not word:
            continue

        found = chunk.find(word, cursor)
        if found == -1:
            missed.append(word)
            logger.debug(
                f"Word {word!r} (#{word_idx}) not found after position {cursor}, skipping"
            )
            continue

        if found > cursor:
            emit(cursor, found, is_lexical=False)
        emit(found, found + len(word), is_lexical=True)
        cursor = found + len(word)

    if cursor < len(chunk):
        emit(cursor, len(chunk), is_lexical=False)

    if missed:
        logger.warning(
            f"{len(missed)} of {len(words)} segmenter words could not be aligned "
            f"with the chunk and were kept as filler"
        )

    return IntegrationResult(tokens, missed)


def assign_tags(tokens: Sequence[Token], tags: Sequence[str]) -> None:
    """
    Attach part-of-speech tags to lexical tokens, positionally.

    Raises:
        ConsistencyError: if the tag count differs from the lexical token count
    """
    lexical = [t for t in tokens if t.is_lexical]
    if len(lexical) != len(tags):
        raise ConsistencyError(
            f"segmenter returned {len(tags)} POS tags for {len(lexical)} lexical tokens"
        )
    for token, tag in zip(lexical, tags):
        token.part_of_speech = tag
