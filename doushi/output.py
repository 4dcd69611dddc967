"""
Human-readable rendering for Doushi.

Formats (voice, mode, modifiers) triples as labels, and renders questions
and full conjugation tables as text.
"""

from typing import Iterable, List

from doushi.conjugations import conjugation_table
from doushi.constants import (
    VerbClass, Voice, Mode, Modifier,
    VOICE_DESCRIPTIONS, VOICE_DESCRIPTIONS_JA,
    MODE_DESCRIPTIONS, MODE_DESCRIPTIONS_JA,
    MODIFIER_DESCRIPTIONS, MODIFIER_DESCRIPTIONS_JA,
    MODIFIER_ORDER, BASE_FORM_LABEL, BASE_FORM_LABEL_JA,
    VERB_CLASS_NAMES, VERB_CLASS_NAMES_JA, VERB_CLASS_SHORT_NAMES,
)

LABEL_SEPARATOR = " + "

_LABELS = {
    'en': (VOICE_DESCRIPTIONS, MODE_DESCRIPTIONS, MODIFIER_DESCRIPTIONS, BASE_FORM_LABEL),
    'ja': (VOICE_DESCRIPTIONS_JA, MODE_DESCRIPTIONS_JA, MODIFIER_DESCRIPTIONS_JA, BASE_FORM_LABEL_JA),
}


def describe(voice: Voice, mode: Mode, modifiers: Iterable[Modifier] = (), lang: str = 'en') -> str:
    """
    Describe a conjugation as a label.

    The voice is named unless it is the dictionary voice, the mode unless it
    is standard, then each active modifier in the order polite, negative, past.

    Example:
        >>> describe(Voice.POTENTIAL, Mode.STANDARD, {Modifier.PAST, Modifier.NEGATIVE})
        'Potential + Negative (nai) + Past (ta)'
        >>> describe(Voice.DICTIONARY, Mode.STANDARD)
        'Dictionary form'
    """
    voice_labels, mode_labels, modifier_labels, base_label = _LABELS[lang]
    voice, mode = Voice(voice), Mode(mode)
    active = {Modifier(m) for m in modifiers}

    parts = []
    if voice != Voice.DICTIONARY:
        parts.append(voice_labels[voice])
    if mode != Mode.STANDARD:
        parts.append(mode_labels[mode])
    parts.extend(modifier_labels[m] for m in MODIFIER_ORDER if m in active)

    return LABEL_SEPARATOR.join(parts) if parts else base_label


def get_verb_class_name(verb_class: VerbClass, short: bool = False, lang: str = 'en') -> str:
    """Get the display name of an inflection class."""
    verb_class = VerbClass(verb_class)
    if short:
        return VERB_CLASS_SHORT_NAMES[verb_class]
    if lang == 'ja':
        return VERB_CLASS_NAMES_JA[verb_class]
    return VERB_CLASS_NAMES[verb_class]


def format_verb(verb) -> str:
    """One-line summary of a verb record: lemma, reading, gloss, class, level."""
    head = str(verb)
    tags = [get_verb_class_name(verb.verb_class, short=True)]
    if verb.level:
        tags.append(verb.level)
    gloss = f" {verb.gloss}" if verb.gloss else ""
    return f"{head}{gloss} [{', '.join(tags)}]"


def format_question(question, lang: str = 'en') -> str:
    """Format a question as the prompt shown to the learner."""
    label = describe(question.voice, question.mode, question.modifiers, lang=lang)
    return f"{format_verb(question.verb)}\n  → {label}"


def format_recognition(question) -> str:
    """Format a question as a recognition prompt: the conjugated form and its verb."""
    form = question.answer
    if question.reading_answer != question.answer:
        form += f"【{question.reading_answer}】"
    return f"{form}  ({format_verb(question.verb)})\n  → voice mode modifiers?"


def format_conjugation_table(verb, use_reading: bool = False, lang: str = 'en') -> str:
    """
    Format every legal conjugation of a verb, one per line.

    Lines are grouped by voice; each line holds the label and the surface form.
    """
    rows = conjugation_table(verb, use_reading=use_reading)
    labels = [describe(voice, mode, mods, lang=lang) for voice, mode, mods, _ in rows]
    width = max(len(label) for label in labels)

    lines: List[str] = [format_verb(verb)]
    current_voice = None
    for (voice, _mode, _mods, surface), label in zip(rows, labels):
        if voice != current_voice:
            lines.append('')
            current_voice = voice
        lines.append(f"  {label:<{width}}  {surface}")
    return '\n'.join(lines)
