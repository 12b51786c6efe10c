"""
Spacing rule used to render token sequences as readable text.

Chinese text has no spaces between words; once tokenized or romanized the
words must be spaced apart ("nǐ hǎo ma, shì jiè?") while punctuation stays
attached to its neighbour.
"""

import unicodedata
from typing import Callable, Iterable

# (previous piece, current piece) -> insert a space between them?
SpacingRule = Callable[[str, str], bool]

OPENING_PUNCTUATION = set("([{«\"'「【（［『《〈")
CLOSING_PUNCTUATION = set(")]}»\"'」】）］｝』》〉")
SEPARATOR_PUNCTUATION = set(",;、，；")
TERMINAL_PUNCTUATION = set(".!?。．！？")
ATTACHED_TO_NUMBER = set(".,%°:-/×⁄+±=<>~$€£¥₹₽¢#№")

CJK_SCRIPTS = {"Han", "Hiragana", "Katakana", "Hangul"}
SE_ASIAN_SCRIPTS = {"Thai", "Lao", "Khmer", "Myanmar"}
NON_SPACING_SCRIPTS = CJK_SCRIPTS | SE_ASIAN_SCRIPTS | {
    "Devanagari", "Bengali", "Tamil", "Telugu",
    "Kannada", "Malayalam", "Gujarati", "Gurmukhi",
}

# Leading word of the Unicode character name -> script
_NAME_PREFIX_SCRIPTS = {
    "CJK": "Han",
    "HIRAGANA": "Hiragana",
    "KATAKANA": "Katakana",
    "HANGUL": "Hangul",
    "THAI": "Thai",
    "LAO": "Lao",
    "KHMER": "Khmer",
    "MYANMAR": "Myanmar",
    "DEVANAGARI": "Devanagari",
    "BENGALI": "Bengali",
    "TAMIL": "Tamil",
    "TELUGU": "Telugu",
    "KANNADA": "Kannada",
    "MALAYALAM": "Malayalam",
    "GUJARATI": "Gujarati",
    "GURMUKHI": "Gurmukhi",
    "LATIN": "Latin",
}


def script_of(char: str) -> str:
    """Rough script category of a character ("Common" when unknown)."""
    name = unicodedata.name(char, "")
    return _NAME_PREFIX_SCRIPTS.get(name.split(" ", 1)[0], "Common")


def _is_punct(char: str) -> bool:
    return unicodedata.category(char).startswith("P")


def default_spacing_rule(prev: str, current: str) -> bool:
    """
    Decide whether a space goes between two adjacent pieces of text.

    Examples:
        >>> default_spacing_rule("nǐ", "hǎo")
        True
        >>> default_spacing_rule("ma", "，")
        False
        >>> default_spacing_rule("，", "shì")
        True
    """
    if not prev or not current:
        return False

    last_prev = prev[-1]
    first_curr = current[0]

    # Existing whitespace already separates the pieces
    if last_prev.isspace() or first_curr.isspace():
        return False

    if first_curr in CLOSING_PUNCTUATION:
        return False
    if last_prev in OPENING_PUNCTUATION:
        return False
    if first_curr in SEPARATOR_PUNCTUATION:
        return False
    if last_prev in SEPARATOR_PUNCTUATION:
        return True
    if first_curr in TERMINAL_PUNCTUATION:
        return False
    if last_prev in TERMINAL_PUNCTUATION:
        return True
    if _is_punct(last_prev) and _is_punct(first_curr):
        return False

    prev_script = script_of(last_prev)
    curr_script = script_of(first_curr)

    if prev_script in NON_SPACING_SCRIPTS and curr_script in NON_SPACING_SCRIPTS:
        return True

    if last_prev.isdigit() and first_curr in ATTACHED_TO_NUMBER:
        return False
    if last_prev in ATTACHED_TO_NUMBER and first_curr.isdigit():
        return False
    if last_prev.isdigit() and first_curr.isdigit():
        return False

    # Contractions and hyphenated words
    if last_prev in "'-" or first_curr in "'-":
        return False

    # Remaining cases (script transitions, Latin words, mixed symbols): space
    return True


def join_with_spacing(parts: Iterable[str], rule: SpacingRule = default_spacing_rule) -> str:
    """Join pieces, inserting a single space wherever `rule` asks for one."""
    pieces = []
    prev = ""
    for part in parts:
        if pieces and rule(prev, part):
            pieces.append(" ")
        pieces.append(part)
        prev = part
    return "".join(pieces)
