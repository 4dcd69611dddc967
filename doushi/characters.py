"""
Character handling and kana conversion for Doushi.

Provides character classification, hiragana/katakana conversion and
width normalization used when reading lexicon data and learner input.
"""

import re
from typing import Dict, Optional

# ============================================================================
# Kana Character Tables
# ============================================================================

# Sokuon (gemination marker)
SOKUON_CHARACTERS = {"sokuon": "っッ"}

# Small kana modifiers and long vowel marker
MODIFIER_CHARACTERS = {
    "+a": "ぁァ", "+i": "ぃィ", "+u": "ぅゥ", "+e": "ぇェ", "+o": "ぉォ",
    "+ya": "ゃャ", "+yu": "ゅュ", "+yo": "ょョ", "+wa": "ゎヮ",
    "long_vowel": "ー"
}

# Main kana table
KANA_CHARACTERS = {
    "a": "あア",     "i": "いイ",     "u": "うウ",     "e": "えエ",     "o": "おオ",
    "ka": "かカ",    "ki": "きキ",    "ku": "くク",    "ke": "けケ",    "ko": "こコ",
    "sa": "さサ",    "shi": "しシ",   "su": "すス",    "se": "せセ",    "so": "そソ",
    "ta": "たタ",    "chi": "ちチ",   "tsu": "つツ",   "te": "てテ",    "to": "とト",
    "na": "なナ",    "ni": "にニ",    "nu": "ぬヌ",    "ne": "ねネ",    "no": "のノ",
    "ha": "はハ",    "hi": "ひヒ",    "fu": "ふフ",    "he": "へヘ",    "ho": "ほホ",
    "ma": "まマ",    "mi": "みミ",    "mu": "むム",    "me": "めメ",    "mo": "もモ",
    "ya": "やヤ",                     "yu": "ゆユ",                     "yo": "よヨ",
    "ra": "らラ",    "ri": "りリ",    "ru": "るル",    "re": "れレ",    "ro": "ろロ",
    "wa": "わワ",    "wi": "ゐヰ",                     "we": "ゑヱ",    "wo": "をヲ",
    "n": "んン",
    # Voiced consonants (dakuten)
    "ga": "がガ",    "gi": "ぎギ",    "gu": "ぐグ",    "ge": "げゲ",    "go": "ごゴ",
    "za": "ざザ",    "ji": "じジ",    "zu": "ずズ",    "ze": "ぜゼ",    "zo": "ぞゾ",
    "da": "だダ",    "dji": "ぢヂ",   "dzu": "づヅ",   "de": "でデ",    "do": "どド",
    "ba": "ばバ",    "bi": "びビ",    "bu": "ぶブ",    "be": "べベ",    "bo": "ぼボ",
    "pa": "ぱパ",    "pi": "ぴピ",    "pu": "ぷプ",    "pe": "ぺペ",    "po": "ぽポ",
    "vu": "ゔヴ",
}

# Combined character table
ALL_CHARACTERS = {
    **SOKUON_CHARACTERS,
    **MODIFIER_CHARACTERS,
    **KANA_CHARACTERS
}

# Build character -> class mapping
CHAR_CLASS_HASH: Dict[str, str] = {}
for char_class, chars in ALL_CHARACTERS.items():
    for char in chars:
        CHAR_CLASS_HASH[char] = char_class


def get_char_class(char: str) -> str:
    """
    Get the character class for a kana character.

    Args:
        char: A single character.

    Returns:
        Character class name (e.g., 'ka', 'shi', 'sokuon') or the character itself.
    """
    return CHAR_CLASS_HASH.get(char, char)


def get_kana_vowel(char: str) -> Optional[str]:
    """
    Get the vowel row of a plain kana ('a', 'i', 'u', 'e' or 'o'; 'n' for ん).

    Returns None for kanji, small kana, sokuon and anything else.
    """
    char_class = get_char_class(char)
    if char_class != char and char_class in KANA_CHARACTERS:
        return char_class[-1]
    return None


# ============================================================================
# Character Width Normalization
# ============================================================================

# Half-width to full-width kana mapping
HALF_WIDTH_KANA = "･ｦｧｨｩｪｫｬｭｮｯｰｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉﾊﾋﾌﾍﾎﾏﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜﾝﾞﾟ"
FULL_WIDTH_KANA = "・ヲァィゥェォャュョッーアイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワン゛゜"

# Full-width alphanumeric to half-width
FULL_WIDTH_ALNUM = (
    "０１２３４５６７８９ａｂｃｄｅｆｇｈｉｊｋｌｍｎｏｐｑｒｓｔｕｖｗｘｙｚ"
    "ＡＢＣＤＥＦＧＨＩＪＫＬＭＮＯＰＱＲＳＴＵＶＷＸＹＺ－　"
)
HALF_WIDTH_ALNUM = (
    "0123456789abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ- "
)

_CHAR_NORM_MAP: Dict[str, str] = dict(zip(FULL_WIDTH_ALNUM, HALF_WIDTH_ALNUM))
_CHAR_NORM_MAP.update(zip(HALF_WIDTH_KANA, FULL_WIDTH_KANA))

# Voiced/semi-voiced pairs for joining a base kana with a separate (half-width) mark
_DAKUTEN_PAIRS = {
    "ka": "ga", "ki": "gi", "ku": "gu", "ke": "ge", "ko": "go",
    "sa": "za", "shi": "ji", "su": "zu", "se": "ze", "so": "zo",
    "ta": "da", "chi": "dji", "tsu": "dzu", "te": "de", "to": "do",
    "ha": "ba", "hi": "bi", "fu": "bu", "he": "be", "ho": "bo",
    "u": "vu",
}
_HANDAKUTEN_PAIRS = {
    "ha": "pa", "hi": "pi", "fu": "pu", "he": "pe", "ho": "po",
}

DAKUTEN_JOIN: Dict[str, str] = {}
for mark, pairs in (("゛", _DAKUTEN_PAIRS), ("゜", _HANDAKUTEN_PAIRS)):
    for cc, ccd in pairs.items():
        for plain, voiced in zip(KANA_CHARACTERS[cc], KANA_CHARACTERS[ccd]):
            DAKUTEN_JOIN[plain + mark] = voiced


# ============================================================================
# Regular Expressions
# ============================================================================

KATAKANA_REGEX = r"[ァ-ヺヽヾー]"
HIRAGANA_REGEX = r"[ぁ-ゔゝゞー]"
KANA_REGEX = f"({KATAKANA_REGEX}|{HIRAGANA_REGEX})"

_WORD_PATTERNS = {
    'katakana': re.compile(rf"^{KATAKANA_REGEX}+$"),
    'hiragana': re.compile(rf"^{HIRAGANA_REGEX}+$"),
    'kana': re.compile(rf"^{KANA_REGEX}+$"),
}


# ============================================================================
# Character Testing Functions
# ============================================================================

def test_word(word: str, char_class: str) -> bool:
    """
    Test if a word consists entirely of a specific character class.

    Args:
        word: The word to test.
        char_class: One of 'katakana', 'hiragana' or 'kana'.

    Returns:
        True if the word matches the character class entirely.
    """
    if not word:
        return False

    pattern = _WORD_PATTERNS.get(char_class)
    if pattern:
        return bool(pattern.match(word))
    return False


def is_kana(word: str) -> bool:
    """Check if word consists entirely of kana (hiragana or katakana)."""
    return test_word(word, 'kana')


# ============================================================================
# Text Normalization
# ============================================================================

def to_normal_char(char: str) -> Optional[str]:
    """
    Convert a full-width alphanumeric or half-width kana to its normal form.

    Returns:
        Normalized character or None if no normalization needed.
    """
    return _CHAR_NORM_MAP.get(char)


def normalize(text: str) -> str:
    """
    Normalize text for comparison.

    - Converts full-width alphanumeric to half-width
    - Converts half-width kana to full-width
    - Combines dakuten/handakuten with base characters

    Args:
        text: Text to normalize.

    Returns:
        Normalized text.
    """
    text = ''.join(to_normal_char(char) or char for char in text)
    for pattern, replacement in DAKUTEN_JOIN.items():
        if pattern in text:
            text = text.replace(pattern, replacement)
    return text


# ============================================================================
# Kana Conversion
# ============================================================================

def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.

    Args:
        text: Text to convert.

    Returns:
        Text with katakana converted to hiragana.
    """
    result = []
    for char in normalize(text):
        char_class = CHAR_CLASS_HASH.get(char)
        if char_class:
            # Hiragana is the first character in the pair
            result.append(ALL_CHARACTERS[char_class][0])
        else:
            result.append(char)
    return ''.join(result)
