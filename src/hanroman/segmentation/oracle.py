#!/usr/bin/env python3
"""
Segmentation Oracle

Boundary to the external word segmenter. The pipeline only needs, per chunk:
- the ordered lexical words
- one part-of-speech tag per lexical word

`JiebaSegmenter` adapts jieba's POS-tagging segmenter (jieba.posseg) to that
contract. jieba also emits whitespace and punctuation as pairs flagged 'x';
those are dropped here and come back as filler tokens via the integrator.
"""

from pathlib import Path
from typing import List, NamedTuple, Optional, Protocol
from logging import getLogger

import jieba
import jieba.posseg

logger = getLogger(__name__)


# jieba's flag for non-word segments (punctuation, whitespace, symbols)
NON_WORD_FLAG = "x"


class Segmentation(NamedTuple):
    words: List[str]
    tags: List[str]  # same length as words


class SegmentationOracle(Protocol):
    def segment(self, chunk: str) -> Segmentation:
        ...


class JiebaSegmenter:
    """
    jieba-backed segmentation oracle.

    Each instance owns a private jieba.Tokenizer, so custom dictionaries
    loaded into one segmenter never leak into another.

    Usage:
        segmenter = JiebaSegmenter()
        segmenter.segment("你好吗，世界？")
        # Segmentation(words=['你好', '吗', '世界'], tags=['l', 'y', 'n'])
    """

    def __init__(
        self,
        hmm: bool = True,
        user_dict: Optional[Path] = None,
        dictionary: Optional[Path] = None,
        cache_dir: Optional[str] = None,
    ):
        """
        Load the jieba dictionary (takes about a second on first use).

        Args:
            hmm: Use jieba's HMM to discover words missing from the dictionary
            user_dict: Optional user dictionary file (jieba user dict format)
            dictionary: Optional replacement for jieba's main dictionary
            cache_dir: Directory for jieba's prefix-dictionary cache (system temp dir if None)
        """
        self.hmm = hmm
        if dictionary is not None:
            self._tokenizer = jieba.Tokenizer(dictionary=str(dictionary))
        else:
            self._tokenizer = jieba.Tokenizer()
        self._tokenizer.tmp_dir = cache_dir
        self._tokenizer.initialize()
        self._tokenizer.tmp_dir = None

        if user_dict is not None:
            user_dict = Path(user_dict)
            if not user_dict.exists():
                raise FileNotFoundError(f"jieba user dictionary not found at {user_dict}")
            self._tokenizer.load_userdict(str(user_dict))
            logger.info(f"Loaded jieba user dictionary: {user_dict}")

        self._pos_tokenizer = jieba.posseg.POSTokenizer(self._tokenizer)
        logger.info(f"jieba segmenter ready (hmm={hmm})")

    def segment(self, chunk: str) -> Segmentation:
        words = []
        tags = []
        for pair in self._pos_tokenizer.cut(chunk, HMM=self.hmm):
            if pair.flag == NON_WORD_FLAG:
                continue
            words.append(pair.word)
            tags.append(pair.flag)
        return Segmentation(words, tags)

    def close(self) -> None:
        self._pos_tokenizer = None
        self._tokenizer = None
