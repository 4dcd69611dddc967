"""
Doushi: Japanese verb conjugation and practice.

Derives any surface form of a dictionary-form verb across voice, mode and
modifiers, and generates randomized practice questions from that space.
"""

__version__ = "0.1.0"

from doushi.constants import (
    VerbClass, Voice, Mode, Modifier,
    LEGAL_MODIFIERS, legal_modifiers,
)
from doushi.conjugations import (
    MalformedVerbError, IllegalModifierError,
    conjugate, conjugate_word, conjugation_table,
)
from doushi.lexicon import VerbRecord, load_verb_table
from doushi.questions import (
    EmptyEnabledSetError, Question, QuizSettings,
    generate_question, next_question, make_rng,
)
from doushi.output import describe
from doushi.grader import check_answer

__all__ = [
    '__version__',
    'VerbClass', 'Voice', 'Mode', 'Modifier',
    'LEGAL_MODIFIERS', 'legal_modifiers',
    'MalformedVerbError', 'IllegalModifierError', 'EmptyEnabledSetError',
    'conjugate', 'conjugate_word', 'conjugation_table',
    'VerbRecord', 'load_verb_table',
    'Question', 'QuizSettings', 'generate_question', 'next_question', 'make_rng',
    'describe', 'check_answer',
]
