#!/usr/bin/env python3
"""
Phonetic Oracle

Boundary to the external pinyin source. Given a text and an output style it
returns one ordered list of candidate readings per character, most frequent
reading first. `PypinyinOracle` adapts pypinyin to that contract.
"""

from typing import List, Protocol

from pypinyin import Style, pinyin


class PhoneticOracle(Protocol):
    def readings(self, text: str, style: Style, heteronym: bool = True) -> List[List[str]]:
        ...


def _no_candidates(chars: str) -> List[List[str]]:
    # Characters without pinyin data get an empty candidate list each
    return [[] for _ in chars]


class PypinyinOracle:
    """
    pypinyin-backed phonetic oracle.

    Neutral tone is written with the digit 5 in numeric styles ("ma5"), so
    every numeric syllable ends with its tone digit.

    Usage:
        oracle = PypinyinOracle()
        oracle.readings("好", Style.TONE)
        # [['hǎo', 'hào']]
    """

    def readings(self, text: str, style: Style, heteronym: bool = True) -> List[List[str]]:
        result = pinyin(
            text,
            style=style,
            heteronym=heteronym,
            errors=_no_candidates,
            neutral_tone_with_five=True,
        )
        # pypinyin turns an empty candidate list into ['']
        return [[reading for reading in chars if reading] for chars in result]
