"""
Japanese verb conjugation engine for Doushi.

This module derives conjugated surface forms from dictionary-form verbs.
A conjugation request is processed in two stages:

    1. Voice   - rewrites the lemma into a voiced stem
                 (dictionary, potential, passive, causative, causative-passive).
                 Every non-dictionary voice produces a stem ending in る that
                 conjugates as an ichidan verb from then on.
    2. Mode    - renders the voiced stem as standard, te-form, volitional or
                 imperative, applying the modifiers (polite, negative, past)
                 that are legal for that mode.

Example:
    >>> conjugate_word("読む", VerbClass.GODAN, Voice.POTENTIAL, Mode.STANDARD,
    ...                {Modifier.NEGATIVE, Modifier.PAST})
    '読めなかった'
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Tuple

from doushi.characters import get_kana_vowel
from doushi.constants import (
    VerbClass, Voice, Mode, Modifier,
    LEGAL_MODIFIERS, MODIFIER_ORDER, legal_modifiers,
)


# ============================================================================
# Errors
# ============================================================================

class MalformedVerbError(ValueError):
    """A verb's class tag is inconsistent with its written form."""

    def __init__(self, word: str, verb_class: VerbClass, reason: str):
        self.word = word
        self.verb_class = verb_class
        self.reason = reason
        super().__init__(f"Malformed {VerbClass(verb_class).value} verb {word!r}: {reason}")


class IllegalModifierError(ValueError):
    """Modifiers were requested that the mode does not allow."""

    def __init__(self, mode: Mode, modifiers: FrozenSet[Modifier]):
        self.mode = mode
        self.modifiers = modifiers
        names = ', '.join(m.value for m in MODIFIER_ORDER if m in modifiers)
        super().__init__(f"Modifier(s) not allowed with {mode.value} mode: {names}")


# ============================================================================
# Godan (五段) Stem Tables
# ============================================================================

class Row(IntEnum):
    """Gojūon vowel rows used to derive godan stems."""
    A = 0
    I = 1
    U = 2
    E = 3
    O = 4


# Maps: ending -> (a-row, i-row, u-row, e-row, o-row)
GODAN_STEMS: Dict[str, Tuple[str, str, str, str, str]] = {
    'う': ('わ', 'い', 'う', 'え', 'お'),
    'く': ('か', 'き', 'く', 'け', 'こ'),
    'ぐ': ('が', 'ぎ', 'ぐ', 'げ', 'ご'),
    'す': ('さ', 'し', 'す', 'せ', 'そ'),
    'つ': ('た', 'ち', 'つ', 'て', 'と'),
    'ぬ': ('な', 'に', 'ぬ', 'ね', 'の'),
    'ぶ': ('ば', 'び', 'ぶ', 'べ', 'ぼ'),
    'む': ('ま', 'み', 'む', 'め', 'も'),
    'る': ('ら', 'り', 'る', 'れ', 'ろ'),
}

# Te-form / Ta-form sound changes (onbin) for godan verbs
# Maps: ending -> (te-form suffix, ta-form suffix)
GODAN_TE_TA: Dict[str, Tuple[str, str]] = {
    'う': ('って', 'った'),
    'く': ('いて', 'いた'),
    'ぐ': ('いで', 'いだ'),
    'す': ('して', 'した'),
    'つ': ('って', 'った'),
    'ぬ': ('んで', 'んだ'),
    'ぶ': ('んで', 'んだ'),
    'む': ('んで', 'んだ'),
    'る': ('って', 'った'),
}

# 行く and its variants take って/った instead of いて/いた
IKU_VERBS = ('行く', '逝く', '往く', 'いく', 'ゆく')
IKU_TE_TA = ('って', 'った')

# Irregular lexemes
SURU_VERBS = ('する', '為る')
KURU_VERBS = ('来る', '來る', 'くる')


def is_iku_verb(word: str) -> bool:
    """Check if a godan verb is 行く (or a compound ending in it)."""
    return word.endswith(IKU_VERBS)


def get_godan_stem(word: str, row: Row) -> str:
    """
    Get godan verb stem for a specific vowel row.

    Args:
        word: Godan verb in dictionary form.
        row: Vowel row to shift the final kana to.

    Returns:
        Word with ending changed to specified row.

    Raises:
        MalformedVerbError: If the word does not end in a godan terminal.
    """
    ending = word[-1:] if word else ''
    if ending not in GODAN_STEMS or len(word) < 2:
        raise MalformedVerbError(word, VerbClass.GODAN, "ending is not a u-row kana")
    return word[:-1] + GODAN_STEMS[ending][row]


def get_godan_onbin(word: str, te: bool) -> str:
    """
    Get the sound-changed te- or ta-form of a godan verb.

    Args:
        word: Godan verb in dictionary form.
        te: True for the te-form, False for the ta-form.

    Returns:
        Conjugated form (e.g. 書く -> 書いて / 書いた, 行く -> 行って / 行った).
    """
    ending = word[-1:] if word else ''
    if ending not in GODAN_TE_TA or len(word) < 2:
        raise MalformedVerbError(word, VerbClass.GODAN, "ending is not a u-row kana")
    te_suffix, ta_suffix = IKU_TE_TA if is_iku_verb(word) else GODAN_TE_TA[ending]
    return word[:-1] + (te_suffix if te else ta_suffix)


# ============================================================================
# Inflection Variants
# ============================================================================

class Inflection(ABC):
    """
    Stem-forming rules for one effective inflection class.

    Each subclass implements every stem operation, so a verb class that is
    missing a rule fails at class definition rather than producing a wrong
    form for some voice/mode combination.
    """

    verb_class: VerbClass

    def __init__(self, word: str):
        self.word = word

    # Stems used by modifiers
    @abstractmethod
    def masu_stem(self) -> str:
        """Stem before ます (continuative)."""

    @abstractmethod
    def nai_stem(self) -> str:
        """Stem before ない (irrealis)."""

    # Plain forms used by modes
    @abstractmethod
    def te_form(self) -> str:
        """Plain te-form."""

    @abstractmethod
    def ta_form(self) -> str:
        """Plain past."""

    @abstractmethod
    def volitional(self) -> str:
        """Plain volitional."""

    @abstractmethod
    def imperative(self) -> str:
        """Plain imperative."""

    # Voices
    @abstractmethod
    def potential(self) -> str:
        """Potential stem (conjugates as ichidan)."""

    @abstractmethod
    def passive(self) -> str:
        """Passive stem (conjugates as ichidan)."""

    @abstractmethod
    def causative(self) -> str:
        """Causative stem (conjugates as ichidan)."""

    def causative_passive(self) -> str:
        """Causative stem with its る replaced by られる."""
        return self.causative()[:-1] + 'られる'


class IchidanInflection(Inflection):
    """一段: drop る and add the suffix."""

    verb_class = VerbClass.ICHIDAN

    def __init__(self, word: str):
        if len(word) < 2 or not word.endswith('る'):
            raise MalformedVerbError(word, VerbClass.ICHIDAN, "does not end in る")
        if get_kana_vowel(word[-2]) not in (None, 'i', 'e'):
            raise MalformedVerbError(word, VerbClass.ICHIDAN, "kana before る is not i- or e-row")
        super().__init__(word)
        self.stem = word[:-1]

    def masu_stem(self) -> str:
        return self.stem

    def nai_stem(self) -> str:
        return self.stem

    def te_form(self) -> str:
        return self.stem + 'て'

    def ta_form(self) -> str:
        return self.stem + 'た'

    def volitional(self) -> str:
        return self.stem + 'よう'

    def imperative(self) -> str:
        return self.stem + 'ろ'

    def potential(self) -> str:
        return self.stem + 'られる'

    def passive(self) -> str:
        return self.stem + 'られる'

    def causative(self) -> str:
        return self.stem + 'させる'


class GodanInflection(Inflection):
    """五段: shift the final kana across the vowel rows."""

    verb_class = VerbClass.GODAN

    def __init__(self, word: str):
        if len(word) < 2 or word[-1] not in GODAN_STEMS:
            raise MalformedVerbError(word, VerbClass.GODAN, "ending is not a u-row kana")
        super().__init__(word)

    def masu_stem(self) -> str:
        return get_godan_stem(self.word, Row.I)

    def nai_stem(self) -> str:
        return get_godan_stem(self.word, Row.A)

    def te_form(self) -> str:
        return get_godan_onbin(self.word, te=True)

    def ta_form(self) -> str:
        return get_godan_onbin(self.word, te=False)

    def volitional(self) -> str:
        return get_godan_stem(self.word, Row.O) + 'う'

    def imperative(self) -> str:
        return get_godan_stem(self.word, Row.E)

    def potential(self) -> str:
        return get_godan_stem(self.word, Row.E) + 'る'

    def passive(self) -> str:
        return get_godan_stem(self.word, Row.A) + 'れる'

    def causative(self) -> str:
        return get_godan_stem(self.word, Row.A) + 'せる'


class SuruInflection(Inflection):
    """する and noun + する compounds. The prefix is kept unchanged."""

    verb_class = VerbClass.SURU

    def __init__(self, word: str, verb_class: VerbClass = VerbClass.SURU):
        if verb_class == VerbClass.IRREGULAR:
            if word not in SURU_VERBS:
                raise MalformedVerbError(word, verb_class, "not する or 来る")
            self.prefix = ''
        else:
            if len(word) < 3 or not word.endswith('する'):
                raise MalformedVerbError(word, verb_class, "does not end in する after a noun")
            self.prefix = word[:-2]
        super().__init__(word)

    def masu_stem(self) -> str:
        return self.prefix + 'し'

    def nai_stem(self) -> str:
        return self.prefix + 'し'

    def te_form(self) -> str:
        return self.prefix + 'して'

    def ta_form(self) -> str:
        return self.prefix + 'した'

    def volitional(self) -> str:
        return self.prefix + 'しよう'

    def imperative(self) -> str:
        return self.prefix + 'しろ'

    def potential(self) -> str:
        # Lexicalized: できる, not a rule-derived form of する
        return self.prefix + 'できる'

    def passive(self) -> str:
        return self.prefix + 'される'

    def causative(self) -> str:
        return self.prefix + 'させる'


class KuruInflection(Inflection):
    """
    来る (to come).

    Written with the kanji the stem character never changes (来ます, 来ない);
    written in kana it alternates between き and こ (きます, こない).
    """

    verb_class = VerbClass.IRREGULAR

    def __init__(self, word: str):
        # 来る itself, or a compound joined by て/で (持ってくる, 出て来る)
        compound = len(word) > 2 and word[-3] in 'てで' and word.endswith(KURU_VERBS)
        if word not in KURU_VERBS and not compound:
            raise MalformedVerbError(word, VerbClass.IRREGULAR, "not する or 来る")
        super().__init__(word)
        if word.endswith('くる'):
            self.ki = word[:-2] + 'き'
            self.ko = word[:-2] + 'こ'
        else:
            self.ki = self.ko = word[:-1]

    def masu_stem(self) -> str:
        return self.ki

    def nai_stem(self) -> str:
        return self.ko

    def te_form(self) -> str:
        return self.ki + 'て'

    def ta_form(self) -> str:
        return self.ki + 'た'

    def volitional(self) -> str:
        return self.ko + 'よう'

    def imperative(self) -> str:
        # Lexical override: こい, never the rule-derived くれ
        return self.ko + 'い'

    def potential(self) -> str:
        return self.ko + 'られる'

    def passive(self) -> str:
        return self.ko + 'られる'

    def causative(self) -> str:
        return self.ko + 'させる'


def get_inflection(word: str, verb_class: VerbClass) -> Inflection:
    """
    Select the inflection variant for a word and its class.

    Raises:
        MalformedVerbError: If the word cannot belong to the class.
    """
    verb_class = VerbClass(verb_class)
    if verb_class == VerbClass.ICHIDAN:
        return IchidanInflection(word)
    elif verb_class == VerbClass.GODAN:
        return GodanInflection(word)
    elif verb_class == VerbClass.SURU:
        return SuruInflection(word, VerbClass.SURU)
    elif verb_class == VerbClass.IRREGULAR:
        if word in SURU_VERBS:
            return SuruInflection(word, VerbClass.IRREGULAR)
        return KuruInflection(word)
    raise MalformedVerbError(word, verb_class, "unknown verb class")


# ============================================================================
# Stage 1: Voice
# ============================================================================

@dataclass(frozen=True)
class VoicedStem:
    """
    Result of the voice stage.

    Attributes:
        text: Voiced stem in dictionary form (e.g. 読める).
        verb_class: Class the stem conjugates as from here on.
    """
    text: str
    verb_class: VerbClass

    def inflection(self) -> Inflection:
        return get_inflection(self.text, self.verb_class)


def apply_voice(word: str, verb_class: VerbClass, voice: Voice) -> VoicedStem:
    """
    Rewrite a dictionary-form verb into the requested voice.

    Args:
        word: Verb in dictionary form.
        verb_class: Inflection class of the verb.
        voice: Voice to apply.

    Returns:
        VoicedStem; any voice other than DICTIONARY is reclassified as ichidan.
    """
    voice = Voice(voice)
    inflection = get_inflection(word, verb_class)

    if voice == Voice.DICTIONARY:
        return VoicedStem(word, VerbClass(verb_class))
    elif voice == Voice.POTENTIAL:
        text = inflection.potential()
    elif voice == Voice.PASSIVE:
        text = inflection.passive()
    elif voice == Voice.CAUSATIVE:
        text = inflection.causative()
    elif voice == Voice.CAUSATIVE_PASSIVE:
        text = inflection.causative_passive()
    else:
        raise ValueError(f"Unknown voice: {voice!r}")

    return VoicedStem(text, VerbClass.ICHIDAN)


# ============================================================================
# Stage 2: Mode and Modifiers
# ============================================================================

def check_modifiers(mode: Mode, modifiers: Iterable[Modifier]) -> FrozenSet[Modifier]:
    """
    Normalize a modifier collection and check it against the legality matrix.

    Returns:
        The modifiers as a frozenset.

    Raises:
        IllegalModifierError: If any modifier is not legal for the mode.
    """
    mode = Mode(mode)
    modifiers = frozenset(Modifier(m) for m in modifiers)
    illegal = modifiers - legal_modifiers(mode)
    if illegal:
        raise IllegalModifierError(mode, illegal)
    return modifiers


def _standard_form(inflection: Inflection, polite: bool, negative: bool, past: bool) -> str:
    """Render one cell of the eight-way standard-mode table."""
    if polite:
        if negative:
            suffix = 'ませんでした' if past else 'ません'
        else:
            suffix = 'ました' if past else 'ます'
        return inflection.masu_stem() + suffix
    if negative:
        return inflection.nai_stem() + ('なかった' if past else 'ない')
    if past:
        return inflection.ta_form()
    return inflection.word


def apply_mode(stem: VoicedStem, mode: Mode, modifiers: Iterable[Modifier] = ()) -> str:
    """
    Render a voiced stem in a mode with the given modifiers.

    Args:
        stem: Output of the voice stage.
        mode: Mode to render.
        modifiers: Modifiers legal for the mode.

    Returns:
        Final surface form.
    """
    mode = Mode(mode)
    modifiers = check_modifiers(mode, modifiers)
    inflection = stem.inflection()

    if mode == Mode.STANDARD:
        return _standard_form(
            inflection,
            polite=Modifier.POLITE in modifiers,
            negative=Modifier.NEGATIVE in modifiers,
            past=Modifier.PAST in modifiers,
        )
    elif mode == Mode.TE_FORM:
        if Modifier.NEGATIVE in modifiers:
            return inflection.nai_stem() + 'なくて'
        return inflection.te_form()
    elif mode == Mode.VOLITIONAL:
        if Modifier.POLITE in modifiers:
            return inflection.masu_stem() + 'ましょう'
        return inflection.volitional()
    elif mode == Mode.IMPERATIVE:
        return inflection.imperative()

    raise ValueError(f"Unknown mode: {mode!r}")


# ============================================================================
# Conjugation Engine
# ============================================================================

def conjugate_word(
    word: str,
    verb_class: VerbClass,
    voice: Voice = Voice.DICTIONARY,
    mode: Mode = Mode.STANDARD,
    modifiers: Iterable[Modifier] = (),
) -> str:
    """
    Conjugate a dictionary-form word.

    Modifiers are validated before any stem is derived, so an illegal
    combination is rejected even for a malformed word.

    Raises:
        IllegalModifierError: Modifiers outside legal_modifiers(mode).
        MalformedVerbError: Word inconsistent with its class.
    """
    modifiers = check_modifiers(mode, modifiers)
    stem = apply_voice(word, verb_class, voice)
    return apply_mode(stem, mode, modifiers)


def conjugate(
    verb,
    voice: Voice = Voice.DICTIONARY,
    mode: Mode = Mode.STANDARD,
    modifiers: Iterable[Modifier] = (),
    use_reading: bool = False,
) -> str:
    """
    Conjugate a verb record.

    Args:
        verb: VerbRecord (anything with lemma, reading and verb_class).
        voice: Stage 1 voice.
        mode: Stage 2 mode.
        modifiers: Modifiers legal for the mode.
        use_reading: Conjugate the kana reading instead of the lemma.

    Returns:
        Conjugated surface form.
    """
    word = verb.reading if use_reading else verb.lemma
    return conjugate_word(word, verb.verb_class, voice, mode, modifiers)


# ============================================================================
# Enumeration of the conjugation space
# ============================================================================

def modifier_combinations(mode: Mode) -> List[FrozenSet[Modifier]]:
    """
    List every legal modifier set for a mode, smallest first.

    Standard mode yields 8 sets, te-form and volitional 2, imperative 1.
    """
    legal = [m for m in MODIFIER_ORDER if m in LEGAL_MODIFIERS[Mode(mode)]]
    combos = []
    for mask in range(1 << len(legal)):
        combos.append(frozenset(m for i, m in enumerate(legal) if mask & (1 << i)))
    combos.sort(key=len)
    return combos


def iter_legal_forms() -> Iterator[Tuple[Voice, Mode, FrozenSet[Modifier]]]:
    """Yield every legal (voice, mode, modifiers) triple in a stable order."""
    for voice in Voice:
        for mode in Mode:
            for modifiers in modifier_combinations(mode):
                yield voice, mode, modifiers


def conjugation_table(verb, use_reading: bool = False) -> List[Tuple[Voice, Mode, FrozenSet[Modifier], str]]:
    """
    Generate all conjugations of a verb.

    Returns:
        List of (voice, mode, modifiers, surface form) tuples.
    """
    return [
        (voice, mode, modifiers, conjugate(verb, voice, mode, modifiers, use_reading=use_reading))
        for voice, mode, modifiers in iter_legal_forms()
    ]
