#!/usr/bin/env python3
"""
Tests for the jieba tokenizer stage and the pinyin transliterator stage
"""

import logging

import pytest

from src.hanroman.context import CANCEL_CHECK_INTERVAL, CancellationContext
from src.hanroman.errors import CancellationError, ConfigurationError, ConsistencyError
from src.hanroman.providers import (
    JiebaProvider,
    OperatingMode,
    PinyinOptions,
    PinyinProvider,
)
from src.hanroman.segmentation.oracle import Segmentation
from src.hanroman.tokens.types import ChineseToken, Token, TokenSequence, Tone

from tests.fakes import FakeSegmenter


@pytest.fixture
def ctx():
    return CancellationContext()


@pytest.fixture
def tokenizer(fake_segmenter):
    provider = JiebaProvider(segmenter=fake_segmenter)
    yield provider
    provider.release()


@pytest.fixture
def transliterator(fake_oracle):
    provider = PinyinProvider(oracle=fake_oracle)
    yield provider
    provider.release()


def tokenize(provider, ctx, *chunks):
    return provider.run(ctx, OperatingMode.TOKENIZE, TokenSequence(raw=list(chunks)))


class CountingProvider(JiebaProvider):
    def __init__(self, segmenter):
        super().__init__(segmenter=segmenter)
        self.loads = 0
        self.unloads = 0

    def _load(self, ctx, force_fresh):
        self.loads += 1
        super()._load(ctx, force_fresh)

    def _unload(self):
        self.unloads += 1
        super()._unload()


class TestLifecycle:
    """Test lazy initialization and idempotent release."""

    def test_lazy_initialize(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        assert not provider.initialized
        assert provider.loads == 0

        tokenize(provider, ctx, "你好")
        assert provider.initialized
        assert provider.loads == 1

    def test_initialize_once(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        provider.initialize(ctx)
        provider.initialize(ctx)
        tokenize(provider, ctx, "你好")
        assert provider.loads == 1

    def test_reinitialize(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        provider.initialize(ctx)
        provider.reinitialize(ctx, force_fresh=True)

        assert provider.loads == 2
        assert provider.unloads == 1
        assert provider.initialized

    def test_double_release(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        provider.initialize(ctx)
        provider.release()
        provider.release()

        assert provider.unloads == 1
        assert not provider.initialized

    def test_release_ignores_cancellation(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        provider.initialize(ctx)
        ctx.cancel()
        provider.release(ctx)
        assert provider.unloads == 1

    def test_initialize_cancelled(self, fake_segmenter):
        provider = CountingProvider(fake_segmenter)
        ctx = CancellationContext()
        ctx.cancel("stop")

        with pytest.raises(CancellationError, match="stop"):
            provider.initialize(ctx)
        assert provider.loads == 0

    def test_configure_reloads_only_on_change(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        provider.initialize(ctx)

        provider.configure({"hmm": True})
        assert provider.initialized

        provider.configure({"hmm": False})
        assert not provider.initialized
        assert provider.options.hmm is False

    def test_configure_invalid(self, tokenizer):
        with pytest.raises(ConfigurationError):
            tokenizer.configure({"hmm": "sometimes"})

    def test_validate_options_does_not_apply(self, fake_segmenter, ctx):
        provider = CountingProvider(fake_segmenter)
        provider.initialize(ctx)

        options = provider.validate_options({"hmm": False})
        assert options.hmm is False
        assert provider.options.hmm is True
        assert provider.initialized


class TestJiebaProvider:
    """Test the tokenizer stage."""

    def test_example_sentence(self, tokenizer, ctx):
        seq = tokenize(tokenizer, ctx, "你好吗，世界？")

        assert seq.surface() == "你好吗，世界？"
        assert [t.surface for t in seq] == ["你好", "吗", "，", "世界", "？"]
        assert [t.is_lexical for t in seq] == [True, True, False, True, False]
        assert all(isinstance(t, ChineseToken) for t in seq)

    def test_tags(self, tokenizer, ctx):
        seq = tokenize(tokenizer, ctx, "你好吗，世界？")
        assert [t.part_of_speech for t in seq.lexical()] == ["l", "y", "n"]

    def test_simplified_and_traditional(self, tokenizer, ctx):
        token = tokenize(tokenizer, ctx, "世界")[0]
        assert token.simplified == "世界"
        assert token.traditional == "世界"

    def test_classifier_and_stative(self, tokenizer, ctx):
        seq = tokenize(tokenizer, ctx, "一个大银行")
        by_surface = {t.surface: t for t in seq}

        assert by_surface["个"].classifier_type == "indiv"
        assert by_surface["个"].is_classifier()
        assert by_surface["大"].is_stative
        assert not by_surface["银行"].is_stative

    def test_offsets_across_chunks(self, tokenizer, ctx):
        chunks = ["你好，", "世界。", "我们"]
        text = "".join(chunks)
        seq = tokenize(tokenizer, ctx, *chunks)

        assert seq.surface() == text
        for token in seq:
            assert text[token.start:token.end] == token.surface

    def test_raw_consumed(self, tokenizer, ctx):
        items = TokenSequence(raw=["你好"])
        out = tokenizer.run(ctx, OperatingMode.TOKENIZE, items)

        assert items.raw == []
        assert out.raw == []
        assert len(out) == 1

    def test_no_raw_passes_through(self, tokenizer, ctx):
        items = TokenSequence([ChineseToken(surface="好", is_lexical=True)])
        assert tokenizer.run(ctx, OperatingMode.TOKENIZE, items) is items

    def test_no_raw_reports_completion(self, tokenizer, ctx, progress):
        tokenizer.with_progress_callback(progress)
        tokenizer.run(ctx, OperatingMode.TOKENIZE, TokenSequence())
        assert progress.calls == [(0, 0)]

    def test_wrong_mode(self, tokenizer, ctx):
        with pytest.raises(ConfigurationError):
            tokenizer.run(ctx, OperatingMode.TRANSLITERATE, TokenSequence(raw=["你好"]))

    def test_progress_per_chunk(self, tokenizer, ctx, progress):
        tokenizer.with_progress_callback(progress)
        tokenize(tokenizer, ctx, "你好", "世界", "我们")
        assert progress.calls == [(0, 3), (1, 3), (2, 3), (3, 3)]

    def test_cancelled_before_any_segmenter_call(self, tokenizer, fake_segmenter):
        ctx = CancellationContext()
        ctx.cancel()
        items = TokenSequence(raw=["你好"])

        with pytest.raises(CancellationError):
            tokenizer.run(ctx, OperatingMode.TOKENIZE, items)
        assert fake_segmenter.calls == []
        assert items.raw == ["你好"]

    def test_cancelled_between_chunks(self, tokenizer, fake_segmenter):
        ctx = CancellationContext()

        def cancel_after_first(processed, total):
            if processed == 1:
                ctx.cancel()

        tokenizer.with_progress_callback(cancel_after_first)
        items = TokenSequence(raw=["你好", "世界", "我们"])

        with pytest.raises(CancellationError):
            tokenizer.run(ctx, OperatingMode.TOKENIZE, items)
        assert "我们" not in fake_segmenter.calls
        assert items.raw == ["你好", "世界", "我们"]
        assert len(items) == 0

    def test_tag_mismatch(self, ctx):
        class ExtraTagSegmenter(FakeSegmenter):
            def segment(self, chunk):
                result = super().segment(chunk)
                return Segmentation(result.words, result.tags + ["x"])

        provider = JiebaProvider(segmenter=ExtraTagSegmenter())
        items = TokenSequence(raw=["你好"])

        with pytest.raises(ConsistencyError):
            provider.run(ctx, OperatingMode.TOKENIZE, items)
        assert items.raw == ["你好"]


class TestPinyinOptions:
    """Test scheme option validation."""

    def test_default(self):
        assert PinyinOptions().scheme == "tone"

    def test_case_insensitive(self):
        assert PinyinOptions(scheme=" TONE3 ").scheme == "tone3"

    def test_unknown_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            options = PinyinOptions(scheme="wade-giles")
        assert options.scheme == "tone"
        assert "wade-giles" in caplog.text

    def test_not_a_string(self, transliterator):
        with pytest.raises(ConfigurationError):
            transliterator.configure({"scheme": 3})


class TestPinyinProvider:
    """Test the transliterator stage."""

    def test_annotates_lexical_tokens(self, tokenizer, transliterator, ctx):
        seq = tokenize(tokenizer, ctx, "你好吗，世界？")
        out = transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        assert out is seq
        assert [t.romanization for t in seq] == ["nǐ hǎo", "ma", "", "shì jiè", ""]
        assert seq[1].tone == Tone.NEUTRAL

    def test_filler_never_annotated(self, tokenizer, transliterator, ctx):
        seq = tokenize(tokenizer, ctx, "你好，世界")
        transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        filler = [t for t in seq if not t.is_lexical]
        assert filler
        for token in filler:
            assert token.romanization == ""
            assert token.all_readings_by_character == []
            assert token.tone is None

    def test_scheme(self, tokenizer, transliterator, ctx):
        transliterator.configure({"scheme": "tone3"})
        seq = tokenize(tokenizer, ctx, "我们")
        transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        assert seq[0].romanization == "wo3 men5"
        assert transliterator.scheme == "tone3"

    def test_identity_fallback_for_other_tokens(self, transliterator, ctx, fake_oracle):
        seq = TokenSequence([
            Token(surface="你好", is_lexical=True),
            ChineseToken(surface="世界", is_lexical=True),
        ])
        transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        assert seq[0].romanization == "你好"
        assert seq[1].romanization == "shì jiè"
        assert [text for text, _ in fake_oracle.calls] == ["世界", "世界"]

    def test_non_chinese_no_oracle_call(self, tokenizer, transliterator, ctx, fake_oracle):
        seq = tokenize(tokenizer, ctx, "Hello 123")
        transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        for token in seq:
            assert token.roman_or_surface() == token.surface
        assert [t.romanization for t in seq.lexical()] == ["Hello", "123"]
        assert fake_oracle.calls == []

    def test_wrong_mode(self, transliterator, ctx):
        with pytest.raises(ConfigurationError):
            transliterator.run(ctx, OperatingMode.TOKENIZE, TokenSequence())

    def test_progress_per_token(self, tokenizer, transliterator, ctx, progress):
        seq = tokenize(tokenizer, ctx, "你好，世界")
        transliterator.with_progress_callback(progress)
        transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        assert progress.calls == [(0, 3), (1, 3), (2, 3), (3, 3)]

    def test_cancellation_leaves_tokens_untouched(self, transliterator):
        ctx = CancellationContext()
        seq = TokenSequence(
            ChineseToken(surface="好", is_lexical=True)
            for _ in range(CANCEL_CHECK_INTERVAL * 2 + 5)
        )

        def cancel_midway(processed, total):
            if processed == CANCEL_CHECK_INTERVAL + 10:
                ctx.cancel()

        transliterator.with_progress_callback(cancel_midway)
        with pytest.raises(CancellationError):
            transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        assert all(t.romanization == "" for t in seq)

    def test_cancellation_checked_periodically(self, transliterator, fake_oracle):
        ctx = CancellationContext()
        seq = TokenSequence(
            ChineseToken(surface="好", is_lexical=True)
            for _ in range(CANCEL_CHECK_INTERVAL * 3)
        )

        def cancel_early(processed, total):
            if processed == 1:
                ctx.cancel()

        transliterator.with_progress_callback(cancel_early)
        with pytest.raises(CancellationError):
            transliterator.run(ctx, OperatingMode.TRANSLITERATE, seq)

        # stopped at the check on token CANCEL_CHECK_INTERVAL, two oracle calls per token
        assert len(fake_oracle.calls) == CANCEL_CHECK_INTERVAL * 2
