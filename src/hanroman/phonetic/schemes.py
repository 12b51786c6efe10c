"""
Pinyin romanization schemes.

Maps user-facing scheme names to pypinyin output styles. Unknown names fall
back to DEFAULT_SCHEME (diacritic tone marks).
"""

from typing import Dict, NamedTuple

from pypinyin import Style


DEFAULT_SCHEME = "tone"

# Style used for numeric readings: tone digit at the end of each syllable,
# so the trailing digit of a single syllable is its tone
NUMERIC_STYLE = Style.TONE3


class PinyinScheme(NamedTuple):
    style: Style
    description: str


PINYIN_SCHEMES: Dict[str, PinyinScheme] = {
    "normal": PinyinScheme(Style.NORMAL, "Pinyin without tone marks (zhong guo)"),
    "tone": PinyinScheme(Style.TONE, "Pinyin with diacritic tone marks (zhōng guó)"),
    "tone2": PinyinScheme(Style.TONE2, "Pinyin with tone digit after the toned vowel (zho1ng guo2)"),
    "tone3": PinyinScheme(Style.TONE3, "Pinyin with tone digit at the end of the syllable (zhong1 guo2)"),
    "initials": PinyinScheme(Style.INITIALS, "Pinyin initials only (zh g)"),
    "firstletter": PinyinScheme(Style.FIRST_LETTER, "First letter of each syllable (z g)"),
    "finals": PinyinScheme(Style.FINALS, "Pinyin finals only (ong uo)"),
    "finalstone": PinyinScheme(Style.FINALS_TONE, "Pinyin finals with diacritic tone marks (ōng uó)"),
    "finalstone2": PinyinScheme(Style.FINALS_TONE2, "Pinyin finals with tone digit after the toned vowel (o1ng uo2)"),
    "finalstone3": PinyinScheme(Style.FINALS_TONE3, "Pinyin finals with tone digit at the end (ong1 uo2)"),
}


def normalize_scheme_name(name: str) -> str:
    """Lower-case and strip a scheme name; empty names become DEFAULT_SCHEME."""
    name = (name or "").strip().lower()
    return name or DEFAULT_SCHEME


def is_known_scheme(name: str) -> bool:
    return normalize_scheme_name(name) in PINYIN_SCHEMES


def style_for_scheme(name: str) -> Style:
    """pypinyin style for a scheme name, DEFAULT_SCHEME's style if unknown."""
    scheme = PINYIN_SCHEMES.get(normalize_scheme_name(name), PINYIN_SCHEMES[DEFAULT_SCHEME])
    return scheme.style
