#!/usr/bin/env python3
"""
Tests for input chunking
"""

import pytest

from src.hanroman.chunking import Chunkifier, split_clauses, split_sentences, split_whitespace
from src.hanroman.errors import ChunkingError


class TestSplitters:
    """Test the loss-less split functions."""

    def test_whitespace_keeps_runs(self):
        assert split_whitespace("ab  cd\nef") == ["ab", "  ", "cd", "\n", "ef"]

    def test_sentences(self):
        assert split_sentences("你好吗？我很好。谢谢") == ["你好吗？", "我很好。", "谢谢"]

    def test_clauses(self):
        assert split_clauses("一，二；三、四") == ["一，", "二；", "三、", "四"]

    @pytest.mark.parametrize("split", [split_whitespace, split_sentences, split_clauses])
    def test_lossless(self, split):
        text = "Hello, world. 你好，世界！ 再见。"
        assert "".join(split(text)) == text


class TestChunkifier:
    """Test Chunkifier limits and merging."""

    def test_empty(self):
        assert Chunkifier(10).chunkify("") == []

    def test_fits(self):
        assert Chunkifier(10).chunkify("你好") == ["你好"]

    def test_unbounded(self):
        text = "字" * 10000
        assert Chunkifier(0).chunkify(text) == [text]

    def test_sentences_merged(self):
        chunks = Chunkifier(max_length=10).chunkify("你好吗？我很好。谢谢你！")
        assert chunks == ["你好吗？我很好。", "谢谢你！"]

    def test_whitespace_merged(self):
        assert Chunkifier(6).chunkify("ab cd ef gh") == ["ab cd ", "ef gh"]

    def test_falls_back_to_clauses(self):
        chunks = Chunkifier(4).chunkify("一二，三四，五六")
        assert chunks == ["一二，", "三四，", "五六"]

    def test_unsplittable(self):
        with pytest.raises(ChunkingError):
            Chunkifier(5).chunkify("abcdefgh")

    @pytest.mark.parametrize("max_length", [6, 8, 13, 20])
    def test_reconstruction_and_limit(self, max_length):
        text = "我们去北京。 他们也去，对吗？ 好的！"
        chunks = Chunkifier(max_length).chunkify(text)

        assert "".join(chunks) == text
        assert all(len(chunk) <= max_length for chunk in chunks)
