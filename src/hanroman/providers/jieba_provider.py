#!/usr/bin/env python3
"""
jieba Tokenizer Stage

Segments raw chunks into ChineseTokens: jieba supplies the words and their
POS tags, the segmentation integrator restores the whitespace and
punctuation between them as filler tokens.
"""

import tempfile
from pathlib import Path
from typing import Optional
from logging import getLogger

from src.hanroman.context import CancellationContext
from src.hanroman.providers.base import OperatingMode, Provider, ProviderKind, ProviderOptions
from src.hanroman.segmentation.integrator import assign_tags, integrate
from src.hanroman.segmentation.oracle import JiebaSegmenter, SegmentationOracle
from src.hanroman.tokens.types import ChineseToken, TokenSequence

logger = getLogger(__name__)


# jieba POS tags with a direct token annotation
CLASSIFIER_TAG = "q"   # 量词
ADJECTIVE_TAG = "a"    # 形容词


class JiebaOptions(ProviderOptions):
    hmm: bool = True
    user_dict: Optional[Path] = None
    dictionary: Optional[Path] = None


class JiebaProvider(Provider):
    """
    Tokenizer stage backed by jieba.

    Input: TokenSequence whose `raw` holds the text chunks.
    Output: new TokenSequence of ChineseTokens covering every chunk
    character; the input's `raw` is cleared on success.

    Usage:
        provider = JiebaProvider()
        seq = provider.run(ctx, OperatingMode.TOKENIZE, TokenSequence(raw=["你好，世界"]))
        [t.surface for t in seq]   # ['你好', '，', '世界']
    """

    name = "jieba"
    kind = ProviderKind.TOKENIZER
    capabilities = frozenset({"tokenization", "pos-tagging"})
    supported_modes = frozenset({OperatingMode.TOKENIZE})
    options_model = JiebaOptions

    def __init__(self, segmenter: Optional[SegmentationOracle] = None):
        """
        Args:
            segmenter: Segmentation oracle to use instead of loading jieba
        """
        super().__init__()
        self._injected = segmenter
        self._segmenter: Optional[SegmentationOracle] = None

    def _load(self, ctx: CancellationContext, force_fresh: bool) -> None:
        if self._injected is not None:
            self._segmenter = self._injected
            return

        options = self.options
        if force_fresh:
            # Point jieba at an empty cache directory so it rebuilds from the dictionary
            with tempfile.TemporaryDirectory(prefix="jieba-") as tmp_dir:
                self._segmenter = self._create_segmenter(options, tmp_dir)
        else:
            self._segmenter = self._create_segmenter(options, None)

    @staticmethod
    def _create_segmenter(options: JiebaOptions, cache_dir: Optional[str]) -> JiebaSegmenter:
        return JiebaSegmenter(
            hmm=options.hmm,
            user_dict=options.user_dict,
            dictionary=options.dictionary,
            cache_dir=cache_dir,
        )

    def _unload(self) -> None:
        if isinstance(self._segmenter, JiebaSegmenter):
            self._segmenter.close()
        self._segmenter = None

    def run(self, ctx: CancellationContext, mode: OperatingMode, items: TokenSequence) -> TokenSequence:
        ctx.check(f"{self.name} processing")
        self._check_mode(mode)
        self.initialize(ctx)

        chunks = items.raw
        if not chunks:
            self._report(0, 0)
            return items

        output = TokenSequence(items.tokens)
        total = len(chunks)
        offset = 0

        for idx, chunk in enumerate(chunks):
            ctx.check(f"{self.name} chunk {idx}")
            self._report(idx, total)

            if chunk:
                output.append(*self._tokenize_chunk(chunk, offset))
            offset += len(chunk)

        ctx.check(f"{self.name} commit")
        self._report(total, total)
        logger.debug(f"{self.name}: {total} chunks -> {len(output)} tokens")

        items.clear_raw()
        return output

    def _tokenize_chunk(self, chunk: str, offset: int):
        segmentation = self._segmenter.segment(chunk)
        result = integrate(chunk, segmentation.words, offset=offset, token_cls=ChineseToken)
        assign_tags(result.tokens, segmentation.tags)

        for token in result.tokens:
            token.simplified = token.surface
            token.traditional = token.surface
            if token.part_of_speech == CLASSIFIER_TAG:
                token.classifier_type = "indiv"
            elif token.part_of_speech == ADJECTIVE_TAG:
                token.is_stative = True

        return result.tokens
