"""
Practice question generation for Doushi.

A question pairs a verb with a randomly chosen (voice, mode, modifiers)
triple and the expected answer. Illegal mode/modifier combinations cannot be
produced: modifiers are only ever drawn from the mode's legal set.

Randomness comes exclusively from the ``rng`` argument, so a seeded
``random.Random`` replays the same sequence of questions.
"""

import random
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Sequence

from doushi import settings
from doushi.conjugations import conjugate
from doushi.constants import (
    VerbClass, Voice, Mode, Modifier,
    ALL_MODIFIERS, MODIFIER_ORDER, legal_modifiers,
)
from doushi.lexicon import VerbRecord, filter_verbs


class EmptyEnabledSetError(ValueError):
    """A selection was requested from an empty set of choices."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No {name} enabled")


@dataclass(frozen=True)
class Question:
    """
    A single practice item.

    Attributes:
        verb: The verb being practiced.
        voice: Requested voice.
        mode: Requested mode.
        modifiers: Requested modifiers (always legal for the mode).
        answer: Expected surface form of the lemma.
        reading_answer: Expected surface form of the kana reading.
    """
    verb: VerbRecord
    voice: Voice
    mode: Mode
    modifiers: FrozenSet[Modifier]
    answer: str
    reading_answer: str

    @property
    def description(self) -> str:
        from doushi.output import describe
        return describe(self.voice, self.mode, self.modifiers)


@dataclass(frozen=True)
class QuizSettings:
    """
    Caller-selected practice configuration.

    Voices, modes and modifiers that are not enabled are never asked.
    """
    levels: FrozenSet[str] = field(default_factory=lambda: frozenset(settings.QUIZ_LEVELS))
    classes: FrozenSet[VerbClass] = frozenset(VerbClass)
    voices: FrozenSet[Voice] = frozenset(Voice)
    modes: FrozenSet[Mode] = frozenset(Mode)
    modifiers: FrozenSet[Modifier] = ALL_MODIFIERS


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create the random source for question generation."""
    return random.Random(seed)


def _ordered(enabled: Iterable, members) -> list:
    """Enabled members in enum definition order, for reproducible sampling."""
    enabled = set(enabled)
    return [m for m in members if m in enabled]


def generate_question(
    verb: VerbRecord,
    enabled_voices: Iterable[Voice],
    enabled_modes: Iterable[Mode],
    enabled_modifiers: Iterable[Modifier],
    rng: random.Random,
) -> Question:
    """
    Generate a random question for a verb.

    Args:
        verb: Verb to practice.
        enabled_voices: Voices to sample from (non-empty).
        enabled_modes: Modes to sample from (non-empty).
        enabled_modifiers: Modifier toggles the caller allows.
        rng: Random source.

    Returns:
        Question whose modifiers are a subset of legal_modifiers(mode).

    Raises:
        EmptyEnabledSetError: If no voice or no mode is enabled.
    """
    voices = _ordered((Voice(v) for v in enabled_voices), Voice)
    modes = _ordered((Mode(m) for m in enabled_modes), Mode)
    if not voices:
        raise EmptyEnabledSetError("voices")
    if not modes:
        raise EmptyEnabledSetError("modes")

    voice = rng.choice(voices)
    mode = rng.choice(modes)

    allowed = legal_modifiers(mode) & {Modifier(m) for m in enabled_modifiers}
    modifiers = frozenset(
        m for m in MODIFIER_ORDER
        if m in allowed and rng.random() < settings.QUIZ_MODIFIER_PROBABILITY
    )

    return Question(
        verb=verb,
        voice=voice,
        mode=mode,
        modifiers=modifiers,
        answer=conjugate(verb, voice, mode, modifiers),
        reading_answer=conjugate(verb, voice, mode, modifiers, use_reading=True),
    )


def pick_verb(verbs: Sequence[VerbRecord], rng: random.Random) -> VerbRecord:
    """Pick a verb uniformly at random."""
    if not verbs:
        raise EmptyEnabledSetError("verbs")
    return verbs[rng.randrange(len(verbs))]


def next_question(
    verbs: Sequence[VerbRecord],
    quiz: QuizSettings,
    rng: random.Random,
) -> Question:
    """
    Pick a verb matching the quiz settings and generate a question for it.

    Raises:
        EmptyEnabledSetError: If no verb matches, or no voice/mode is enabled.
    """
    candidates = filter_verbs(verbs, levels=quiz.levels, classes=quiz.classes)
    verb = pick_verb(candidates, rng)
    return generate_question(verb, quiz.voices, quiz.modes, quiz.modifiers, rng)
