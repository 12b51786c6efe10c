#!/usr/bin/env python3
"""
Tests for phonetic resolution (chosen reading, heteronyms, tone)
"""

import pytest
from pypinyin import Style

from src.hanroman.errors import ConsistencyError, UnsupportedTokenError
from src.hanroman.phonetic import (
    PypinyinOracle,
    PhoneticResolver,
    choose_first,
    is_known_scheme,
    normalize_scheme_name,
    parse_tone,
    style_for_scheme,
)
from src.hanroman.tokens.types import ChineseToken, Token, Tone

from tests.fakes import READINGS, FakePhoneticOracle


def word(surface, **kwargs):
    return ChineseToken(surface=surface, is_lexical=True, **kwargs)


@pytest.fixture
def resolver(fake_oracle):
    return PhoneticResolver(fake_oracle)


class TestParseTone:
    """Test tone extraction from numeric syllables."""

    @pytest.mark.parametrize("syllable,tone", [
        ("hao3", Tone.THIRD),
        ("ma5", Tone.NEUTRAL),
        ("zhong1", Tone.FIRST),
        ("xing2", Tone.SECOND),
        ("shi4", Tone.FOURTH),
    ])
    def test_trailing_digit(self, syllable, tone):
        assert parse_tone(syllable) == tone

    @pytest.mark.parametrize("syllable", ["hao", "", "ha3o", "ma0", "ma6"])
    def test_no_tone(self, syllable):
        assert parse_tone(syllable) is None


class TestChooseFirst:
    def test_first_candidate(self):
        assert choose_first([["hǎo", "hào"], ["nǐ"]]) == ["hǎo", "nǐ"]

    def test_empty_candidates_placeholder(self):
        assert choose_first([["nǐ"], []]) == ["nǐ", ""]


class TestSchemes:
    @pytest.mark.parametrize("name,style", [
        ("tone", Style.TONE),
        ("TONE3", Style.TONE3),
        (" normal ", Style.NORMAL),
        ("firstletter", Style.FIRST_LETTER),
        ("finalstone2", Style.FINALS_TONE2),
        ("unknown", Style.TONE),
        ("", Style.TONE),
    ])
    def test_style_for_scheme(self, name, style):
        assert style_for_scheme(name) == style

    def test_known(self):
        assert is_known_scheme("Tone2")
        assert not is_known_scheme("wade-giles")
        assert normalize_scheme_name(" Initials ") == "initials"


class TestResolver:
    """Test PhoneticResolver on lexical tokens."""

    def test_multi_syllable_word(self, resolver):
        token = word("你好")
        resolver.resolve(token)

        assert token.romanization == "nǐ hǎo"
        assert token.primary_reading == "nǐ hǎo"
        assert token.numeric_reading == "ni3 hao3"
        assert token.all_readings_by_character == [["nǐ"], ["hǎo", "hào"]]
        assert token.numeric_reading_all == [["ni3"], ["hao3", "hao4"]]
        assert token.tone is None
        assert token.original_tone is None

    def test_single_syllable_tone(self, resolver):
        token = word("好")
        resolver.resolve(token)

        assert token.romanization == "hǎo"
        assert token.tone == Tone.THIRD
        assert token.original_tone == Tone.THIRD
        assert token.tone_sandhi_applied is False

    def test_neutral_tone(self, resolver):
        token = word("吗")
        resolver.resolve(token)
        assert token.tone == Tone.NEUTRAL

    def test_oracle_queried_twice(self, resolver, fake_oracle):
        resolver.resolve(word("世界"))
        assert fake_oracle.calls == [("世界", Style.TONE), ("世界", Style.TONE3)]

    def test_configured_style(self, fake_oracle):
        resolver = PhoneticResolver(fake_oracle, style=Style.TONE3)
        token = word("银行")
        resolver.resolve(token)
        assert token.romanization == "yin2 xing2"

    def test_non_lexical_untouched(self, resolver, fake_oracle):
        token = ChineseToken(surface="，")
        resolver.resolve(token)

        assert token.romanization == ""
        assert token.all_readings_by_character == []
        assert fake_oracle.calls == []

    def test_non_chinese_passes_through(self, resolver, fake_oracle):
        token = word("Hello")
        resolver.resolve(token)

        assert token.romanization == "Hello"
        assert token.primary_reading == ""
        assert fake_oracle.calls == []

    def test_character_without_readings(self, resolver):
        token = word("你龘")
        resolver.resolve(token)

        assert token.all_readings_by_character == [["nǐ"], []]
        assert token.primary_reading == "nǐ "
        assert token.tone is None

    def test_single_unknown_character(self, resolver):
        token = word("龘")
        resolver.resolve(token)

        assert token.all_readings_by_character == [[]]
        assert token.romanization == ""
        assert token.tone is None

    def test_unsupported_token_type(self, resolver):
        with pytest.raises(UnsupportedTokenError):
            resolver.read(Token(surface="你好", is_lexical=True))

    def test_read_does_not_mutate(self, resolver):
        token = word("好")
        reading = resolver.read(token)

        assert reading.primary == "hǎo"
        assert token.romanization == ""
        PhoneticResolver.apply(token, reading)
        assert token.romanization == "hǎo"

    def test_resolve_all_with_fallback(self, resolver):
        tokens = [
            word("我们"),
            ChineseToken(surface=" "),
            Token(surface="去", is_lexical=True),
        ]
        count = resolver.resolve_all(tokens)

        assert count == 2
        assert tokens[0].romanization == "wǒ men"
        assert tokens[1].romanization == ""
        assert tokens[2].romanization == "去"

    def test_candidate_retention_and_selection(self, resolver):
        surface = "".join(READINGS)
        token = word(surface)
        resolver.resolve(token)

        assert len(token.all_readings_by_character) == len(surface)
        chosen = token.primary_reading.split(" ")
        for char, candidates, pick in zip(surface, token.all_readings_by_character, chosen):
            assert candidates == READINGS[char][0]
            assert pick == candidates[0]


class TestResolverConsistency:
    """Test oracle answers that violate the per-character contract."""

    def test_diacritic_and_numeric_counts_differ(self):
        class ShortNumericOracle(FakePhoneticOracle):
            def readings(self, text, style, heteronym=True):
                result = super().readings(text, style, heteronym)
                return result[:-1] if style == Style.TONE3 else result

        resolver = PhoneticResolver(ShortNumericOracle())
        with pytest.raises(ConsistencyError):
            resolver.resolve(word("你好"))

    def test_count_differs_from_surface(self):
        class MergingOracle(FakePhoneticOracle):
            def readings(self, text, style, heteronym=True):
                return [["x"]]

        token = word("你好")
        with pytest.raises(ConsistencyError, match="2 characters"):
            PhoneticResolver(MergingOracle()).resolve(token)
        assert token.romanization == ""


class MixedScriptToken(ChineseToken):
    """Chinese word with a Latin letter, e.g. a stock-market term like A股."""

    def is_chinese(self) -> bool:
        return True


class TestPypinyinAdapter:
    """Test the real pypinyin adapter on characters it has no reading for."""

    def test_no_reading_is_empty_list(self):
        oracle = PypinyinOracle()

        assert oracle.readings("a好", Style.TONE3) == [[], ["hao3", "hao4"]]
        assert oracle.readings("abc", Style.TONE) == [[], [], []]

    def test_resolved_slot_is_empty(self):
        token = MixedScriptToken(surface="A股", is_lexical=True)
        PhoneticResolver(PypinyinOracle()).resolve(token)

        assert token.all_readings_by_character[0] == []
        assert token.numeric_reading_all[0] == []
        assert token.all_readings_by_character[1][0] == "gǔ"
        assert token.numeric_reading == " gu3"
