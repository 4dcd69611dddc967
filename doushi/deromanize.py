"""
Deromanize module for Doushi.

Converts romanized Japanese (romaji) typed by a learner to kana so it can be
compared with a conjugated reading.
"""

from typing import Dict, List

# ============================================================================
# Romaji Mapping
# ============================================================================

ROMAJI_MAP: Dict[str, str] = {
    # Vowels
    'a': 'あ', 'i': 'い', 'u': 'う', 'e': 'え', 'o': 'お',

    # K-row
    'ka': 'か', 'ki': 'き', 'ku': 'く', 'ke': 'け', 'ko': 'こ',
    'kya': 'きゃ', 'kyu': 'きゅ', 'kyo': 'きょ',
    'ga': 'が', 'gi': 'ぎ', 'gu': 'ぐ', 'ge': 'げ', 'go': 'ご',
    'gya': 'ぎゃ', 'gyu': 'ぎゅ', 'gyo': 'ぎょ',

    # S-row
    'sa': 'さ', 'si': 'し', 'su': 'す', 'se': 'せ', 'so': 'そ',
    'sha': 'しゃ', 'shi': 'し', 'shu': 'しゅ', 'she': 'しぇ', 'sho': 'しょ',
    'sya': 'しゃ', 'syu': 'しゅ', 'syo': 'しょ',
    'za': 'ざ', 'zi': 'じ', 'zu': 'ず', 'ze': 'ぜ', 'zo': 'ぞ',
    'ja': 'じゃ', 'ji': 'じ', 'ju': 'じゅ', 'je': 'じぇ', 'jo': 'じょ',
    'jya': 'じゃ', 'jyu': 'じゅ', 'jyo': 'じょ',
    'zya': 'じゃ', 'zyu': 'じゅ', 'zyo': 'じょ',

    # T-row
    'ta': 'た', 'ti': 'ち', 'tu': 'つ', 'te': 'て', 'to': 'と',
    'chi': 'ち', 'tsu': 'つ',
    'cha': 'ちゃ', 'chu': 'ちゅ', 'che': 'ちぇ', 'cho': 'ちょ',
    'tya': 'ちゃ', 'tyu': 'ちゅ', 'tyo': 'ちょ',
    'da': 'だ', 'di': 'ぢ', 'du': 'づ', 'de': 'で', 'do': 'ど',
    'dya': 'ぢゃ', 'dyu': 'ぢゅ', 'dyo': 'ぢょ',

    # N-row
    'na': 'な', 'ni': 'に', 'nu': 'ぬ', 'ne': 'ね', 'no': 'の',
    'nya': 'にゃ', 'nyu': 'にゅ', 'nyo': 'にょ',

    # H-row
    'ha': 'は', 'hi': 'ひ', 'hu': 'ふ', 'fu': 'ふ', 'he': 'へ', 'ho': 'ほ',
    'hya': 'ひゃ', 'hyu': 'ひゅ', 'hyo': 'ひょ',
    'ba': 'ば', 'bi': 'び', 'bu': 'ぶ', 'be': 'べ', 'bo': 'ぼ',
    'bya': 'びゃ', 'byu': 'びゅ', 'byo': 'びょ',
    'pa': 'ぱ', 'pi': 'ぴ', 'pu': 'ぷ', 'pe': 'ぺ', 'po': 'ぽ',
    'pya': 'ぴゃ', 'pyu': 'ぴゅ', 'pyo': 'ぴょ',
    'fa': 'ふぁ', 'fi': 'ふぃ', 'fe': 'ふぇ', 'fo': 'ふぉ',

    # M-row
    'ma': 'ま', 'mi': 'み', 'mu': 'む', 'me': 'め', 'mo': 'も',
    'mya': 'みゃ', 'myu': 'みゅ', 'myo': 'みょ',

    # Y-row
    'ya': 'や', 'yu': 'ゆ', 'yo': 'よ',

    # R-row
    'ra': 'ら', 'ri': 'り', 'ru': 'る', 're': 'れ', 'ro': 'ろ',
    'rya': 'りゃ', 'ryu': 'りゅ', 'ryo': 'りょ',

    # W-row
    'wa': 'わ', 'wi': 'ゐ', 'we': 'ゑ', 'wo': 'を',

    # N
    'n': 'ん', "n'": 'ん', 'nn': 'ん',

    # Small kana
    'xa': 'ぁ', 'xi': 'ぃ', 'xu': 'ぅ', 'xe': 'ぇ', 'xo': 'ぉ',
    'la': 'ぁ', 'li': 'ぃ', 'lu': 'ぅ', 'le': 'ぇ', 'lo': 'ぉ',
    'xtu': 'っ', 'ltu': 'っ', 'xtsu': 'っ', 'ltsu': 'っ',
    'xya': 'ゃ', 'xyu': 'ゅ', 'xyo': 'ょ',
    'lya': 'ゃ', 'lyu': 'ゅ', 'lyo': 'ょ',

    # Long vowel
    '-': 'ー',
}

_MAX_CHUNK = max(len(k) for k in ROMAJI_MAP)


# ============================================================================
# Romaji to Kana Conversion
# ============================================================================

def romaji_to_hiragana(text: str) -> str:
    """
    Convert romanized text to hiragana.

    Example:
        >>> romaji_to_hiragana("tabenakatta")
        'たべなかった'
    """
    return _convert_romaji(text, ROMAJI_MAP)


def _convert_romaji(text: str, mapping: Dict[str, str]) -> str:
    """
    Convert romanized text using the given mapping.

    Longest match wins. A doubled consonant (other than n) becomes a small tsu.
    Characters with no mapping are kept as-is.
    """
    result: List[str] = []
    i = 0
    text_lower = text.lower()
    sokuon = mapping['xtu']

    while i < len(text_lower):
        c = text_lower[i]

        # Gemination: "tt" -> っt, "tch" -> っch
        if i + 1 < len(text_lower) and c.isalpha() and c not in 'aeioun':
            nxt = text_lower[i + 1]
            if nxt == c or (c == 't' and text_lower.startswith('ch', i + 1)):
                result.append(sokuon)
                i += 1
                continue

        # "nn" before a vowel or y is ん followed by a na-row syllable
        if text_lower.startswith('nn', i) and i + 2 < len(text_lower) and text_lower[i + 2] in 'aeiouy':
            result.append(mapping['n'])
            i += 1
            continue

        for length in range(_MAX_CHUNK, 0, -1):
            chunk = text_lower[i:i + length]
            if len(chunk) == length and chunk in mapping:
                result.append(mapping[chunk])
                i += length
                break
        else:
            # Keep the character as-is
            result.append(text[i])
            i += 1

    return ''.join(result)


# ============================================================================
# Romaji Detection
# ============================================================================

def is_romaji(text: str) -> bool:
    """
    Check if text appears to be romanized Japanese.

    Only ASCII letters, apostrophes, hyphens and spaces are allowed. Text that
    converts to kana with no letters left over is accepted; anything else
    needs a vowel ratio that looks like Japanese.
    """
    if not text:
        return False

    text_clean = text.replace('-', '').replace("'", '').replace(' ', '')
    if not text_clean.isascii() or not text_clean.isalpha():
        return False

    converted = romaji_to_hiragana(text_clean)
    if not any(c.isascii() and c.isalpha() for c in converted):
        return True

    vowel_count = sum(1 for c in text_clean.lower() if c in 'aeiou')

    # Japanese has high vowel-to-consonant ratio
    if len(text_clean) > 3:
        ratio = vowel_count / len(text_clean)
        if ratio < 0.3 or ratio > 0.8:
            return False

    return True
