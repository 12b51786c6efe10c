#!/usr/bin/env python3
"""
Input Chunking

Splits raw input into chunks that fit a provider's maximum input length.
Chunks are loss-less: joining them with "" gives back the input, so the
reconstruction invariant of the tokenizer stage holds across chunks too.

Split strategies, tried in order on any piece that is still too long:
1. Whitespace (each whitespace run stays its own piece)
2. Sentence boundaries (Latin and CJK terminal punctuation)
3. Clause boundaries (commas, semicolons, enumeration commas)

Small pieces are then merged greedily back up to the maximum length.
"""

import re
from typing import Callable, List, NamedTuple
from logging import getLogger

from src.hanroman.errors import ChunkingError

logger = getLogger(__name__)


class SplitMethod(NamedTuple):
    name: str
    split: Callable[[str], List[str]]


_WHITESPACE_RE = re.compile(r"(\s+)")
_SENTENCE_END_RE = re.compile(r"(?<=[.!?。．！？])")
_CLAUSE_END_RE = re.compile(r"(?<=[,;、，；：:])")


def split_whitespace(text: str) -> List[str]:
    return [piece for piece in _WHITESPACE_RE.split(text) if piece]


def split_sentences(text: str) -> List[str]:
    return [piece for piece in _SENTENCE_END_RE.split(text) if piece]


def split_clauses(text: str) -> List[str]:
    return [piece for piece in _CLAUSE_END_RE.split(text) if piece]


class Chunkifier:
    """
    Splits text into chunks of at most `max_length` characters.

    Example:
        chunkifier = Chunkifier(max_length=10)
        chunkifier.chunkify("你好吗？我很好。谢谢你！")
        # ['你好吗？我很好。', '谢谢你！']
    """

    def __init__(self, max_length: int = 0):
        """
        Args:
            max_length: Maximum characters per chunk; 0 or negative means unbounded
        """
        self.max_length = max_length
        self.split_methods = [
            SplitMethod("whitespace", split_whitespace),
            SplitMethod("sentences", split_sentences),
            SplitMethod("clauses", split_clauses),
        ]

    def fits(self, text: str) -> bool:
        return self.max_length <= 0 or len(text) <= self.max_length

    def chunkify(self, text: str) -> List[str]:
        """
        Split text into chunks.

        Returns:
            [] for empty text, [text] when it fits, else the merged pieces

        Raises:
            ChunkingError: if some piece cannot be split below max_length
        """
        if not text:
            return []
        if self.fits(text):
            return [text]

        pieces = self._split(text, 0)
        chunks = self._merge(pieces)
        logger.debug(f"Chunkified {len(text)} chars into {len(chunks)} chunks (max={self.max_length})")
        return chunks

    def _split(self, text: str, method_idx: int) -> List[str]:
        if self.fits(text):
            return [text]
        if method_idx >= len(self.split_methods):
            raise ChunkingError(
                f"could not split {text[:30]!r}... ({len(text)} chars) "
                f"below max length {self.max_length}"
            )

        method = self.split_methods[method_idx]
        pieces = method.split(text)
        logger.debug(f"Split method '{method.name}' produced {len(pieces)} pieces")

        result = []
        for piece in pieces:
            result.extend(self._split(piece, method_idx + 1))
        return result

    def _merge(self, pieces: List[str]) -> List[str]:
        """Greedily concatenate consecutive pieces without exceeding max_length."""
        chunks = []
        current = ""
        for piece in pieces:
            if current and len(current) + len(piece) > self.max_length:
                chunks.append(current)
                current = piece
            else:
                current += piece
        if current:
            chunks.append(current)
        return chunks
