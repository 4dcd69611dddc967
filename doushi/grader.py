"""
Answer checking for practice questions.

Two practice styles are supported:

- perform:   the learner is shown a verb and a conjugation label and types
             the surface form (kana, kanji or romaji).
- recognize: the learner is shown a surface form and names the voice, mode
             and modifiers that produced it.

Answers are compared by exact string equality after input normalization;
alternative spellings are not accepted.
"""

import re
from typing import FrozenSet, Iterable, Tuple

from doushi.characters import as_hiragana, normalize
from doushi.constants import Voice, Mode, Modifier, MODIFIER_ORDER
from doushi.deromanize import is_romaji, romaji_to_hiragana

_TOKEN_SPLIT = re.compile(r"[\s,+]+")
_RECOGNITION_TOKENS = {member.value: member for enum in (Voice, Mode, Modifier) for member in enum}


def normalize_answer(text: str) -> str:
    """
    Normalize learner input before comparison.

    Strips surrounding whitespace, folds character widths, converts romaji
    to hiragana and folds katakana to hiragana.
    """
    text = normalize(text.strip()).strip()
    if is_romaji(text):
        text = romaji_to_hiragana(text.replace(' ', ''))
    return as_hiragana(text)


def expected_answer(question, use_reading: bool = False) -> str:
    """The string a response is compared against."""
    return question.reading_answer if use_reading else question.answer


def check_answer(question, response: str, use_reading: bool = False) -> bool:
    """
    Check a typed answer.

    Args:
        question: Question being answered.
        response: Raw learner input.
        use_reading: Compare against the kana reading instead of the lemma form.
            Romaji input can only match when this is set.

    Returns:
        True if the normalized response equals the expected answer.
    """
    return normalize_answer(response) == as_hiragana(expected_answer(question, use_reading))


def parse_recognition(text: str) -> Tuple[Voice, Mode, FrozenSet[Modifier]]:
    """
    Parse a typed recognition answer such as ``"potential negative past"``.

    Tokens are voice, mode and modifier names in any order, separated by
    spaces, commas or ``+``. A missing voice means dictionary and a missing
    mode means standard.

    Raises:
        ValueError: On an unknown token or a second voice or mode.
    """
    voice = mode = None
    modifiers = set()
    for token in _TOKEN_SPLIT.split(text.strip().lower()):
        if not token:
            continue
        member = _RECOGNITION_TOKENS.get(token)
        if member is None:
            raise ValueError(f"Unknown voice, mode or modifier: {token!r}")
        if isinstance(member, Voice):
            if voice is not None:
                raise ValueError(f"More than one voice given: {text!r}")
            voice = member
        elif isinstance(member, Mode):
            if mode is not None:
                raise ValueError(f"More than one mode given: {text!r}")
            mode = member
        else:
            modifiers.add(member)

    return voice or Voice.DICTIONARY, mode or Mode.STANDARD, frozenset(modifiers)


def check_recognition(
    question,
    voice: Voice,
    mode: Mode,
    modifiers: Iterable[Modifier],
) -> bool:
    """Check that the learner identified the exact voice, mode and modifiers."""
    return (
        Voice(voice) == question.voice
        and Mode(mode) == question.mode
        and frozenset(Modifier(m) for m in modifiers) == question.modifiers
    )


def recognition_answer(question) -> str:
    """The triple behind a question, spelled the way `parse_recognition` reads it."""
    tokens = [question.voice.value, question.mode.value]
    tokens.extend(m.value for m in MODIFIER_ORDER if m in question.modifiers)
    return ' '.join(tokens)
