"""
Consolidated constants for Doushi.

This module provides a single source of truth for:
- The closed enums of the conjugation space (verb class, voice, mode, modifier)
- The Mode -> Modifier legality matrix
- Human-readable labels (English and Japanese) for every enum member

All other modules should import from here to avoid duplication.
"""

from enum import Enum
from typing import Dict, FrozenSet


# ============================================================================
# Inflection Classes
# ============================================================================

class VerbClass(str, Enum):
    """Conjugation rule family of a verb. Exactly one applies per lemma."""
    GODAN = "godan"          # 五段 (u-verbs)
    ICHIDAN = "ichidan"      # 一段 (ru-verbs)
    IRREGULAR = "irregular"  # する / 来る
    SURU = "suru"            # noun + する compounds


VERB_CLASS_NAMES: Dict[VerbClass, str] = {
    VerbClass.GODAN: "Godan verb (Group I / u-verb)",
    VerbClass.ICHIDAN: "Ichidan verb (Group II / ru-verb)",
    VerbClass.IRREGULAR: "Irregular verb (Group III)",
    VerbClass.SURU: "Suru compound (noun + する)",
}

VERB_CLASS_NAMES_JA: Dict[VerbClass, str] = {
    VerbClass.GODAN: "五段動詞",
    VerbClass.ICHIDAN: "一段動詞",
    VerbClass.IRREGULAR: "不規則動詞",
    VerbClass.SURU: "サ変動詞",
}

VERB_CLASS_SHORT_NAMES: Dict[VerbClass, str] = {
    VerbClass.GODAN: "五段",
    VerbClass.ICHIDAN: "一段",
    VerbClass.IRREGULAR: "不規則",
    VerbClass.SURU: "サ変",
}


# ============================================================================
# Voice / Mode / Modifier
# ============================================================================

class Voice(str, Enum):
    """Stage 1 transform: what the subject can do / has done to it."""
    DICTIONARY = "dictionary"
    POTENTIAL = "potential"
    PASSIVE = "passive"
    CAUSATIVE = "causative"
    CAUSATIVE_PASSIVE = "causative_passive"


class Mode(str, Enum):
    """Stage 2 transform: sentence-final function of the verb."""
    STANDARD = "standard"
    TE_FORM = "te"
    VOLITIONAL = "volitional"
    IMPERATIVE = "imperative"


class Modifier(str, Enum):
    """Orthogonal toggles applied within a mode's legal subset."""
    POLITE = "polite"
    NEGATIVE = "negative"
    PAST = "past"


ALL_MODIFIERS: FrozenSet[Modifier] = frozenset(Modifier)

# Fixed legality matrix. Not configurable per call.
LEGAL_MODIFIERS: Dict[Mode, FrozenSet[Modifier]] = {
    Mode.STANDARD: ALL_MODIFIERS,
    Mode.TE_FORM: frozenset({Modifier.NEGATIVE}),
    Mode.VOLITIONAL: frozenset({Modifier.POLITE}),
    Mode.IMPERATIVE: frozenset(),
}


def legal_modifiers(mode: Mode) -> FrozenSet[Modifier]:
    """Get the set of modifiers that may be combined with a mode."""
    return LEGAL_MODIFIERS[Mode(mode)]


# ============================================================================
# Labels
# ============================================================================

VOICE_DESCRIPTIONS: Dict[Voice, str] = {
    Voice.DICTIONARY: "Dictionary",
    Voice.POTENTIAL: "Potential",
    Voice.PASSIVE: "Passive",
    Voice.CAUSATIVE: "Causative",
    Voice.CAUSATIVE_PASSIVE: "Causative-Passive",
}

VOICE_DESCRIPTIONS_JA: Dict[Voice, str] = {
    Voice.DICTIONARY: "辞書形",
    Voice.POTENTIAL: "可能形",
    Voice.PASSIVE: "受身形",
    Voice.CAUSATIVE: "使役形",
    Voice.CAUSATIVE_PASSIVE: "使役受身形",
}

MODE_DESCRIPTIONS: Dict[Mode, str] = {
    Mode.STANDARD: "Standard",
    Mode.TE_FORM: "Te-form",
    Mode.VOLITIONAL: "Volitional",
    Mode.IMPERATIVE: "Imperative",
}

MODE_DESCRIPTIONS_JA: Dict[Mode, str] = {
    Mode.STANDARD: "普通形",
    Mode.TE_FORM: "て形",
    Mode.VOLITIONAL: "意志形",
    Mode.IMPERATIVE: "命令形",
}

MODIFIER_DESCRIPTIONS: Dict[Modifier, str] = {
    Modifier.POLITE: "Polite (masu)",
    Modifier.NEGATIVE: "Negative (nai)",
    Modifier.PAST: "Past (ta)",
}

MODIFIER_DESCRIPTIONS_JA: Dict[Modifier, str] = {
    Modifier.POLITE: "丁寧",
    Modifier.NEGATIVE: "否定",
    Modifier.PAST: "過去",
}

# Display order of active modifiers
MODIFIER_ORDER = (Modifier.POLITE, Modifier.NEGATIVE, Modifier.PAST)

BASE_FORM_LABEL = "Dictionary form"
BASE_FORM_LABEL_JA = "辞書形"

# JLPT levels present in the bundled lexicon, easiest first
LEVELS = ("N5", "N4", "N3")
