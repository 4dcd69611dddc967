"""
Pydantic models for Doushi JSON output.

These models give the command line ``--json`` output a stable, typed shape:
- Type-safe schemas for verbs, conjugations and questions
- Automatic JSON serialization

Usage:
    from doushi.models import ConjugationResult

    result = ConjugationResult.from_conjugation(verb, Voice.POTENTIAL, Mode.STANDARD,
                                                {Modifier.NEGATIVE})
    print(result.model_dump_json())
"""

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from doushi.conjugations import conjugate, conjugation_table
from doushi.constants import Voice, Mode, Modifier, MODIFIER_ORDER
from doushi.output import describe


def _ordered_values(modifiers: Iterable[Modifier]) -> List[str]:
    active = {Modifier(m) for m in modifiers}
    return [m.value for m in MODIFIER_ORDER if m in active]


class VerbResult(BaseModel):
    """A lexicon entry."""
    lemma: str = Field(..., description="Dictionary form as usually written")
    reading: str = Field(..., description="Kana reading")
    gloss: str = Field("", description="Short English meaning")
    verb_class: str = Field(..., description="Inflection class: godan, ichidan, irregular or suru")
    level: str = Field("", description="Proficiency tag (e.g. 'N5')")

    model_config = ConfigDict(from_attributes=True)  # Allow creating from VerbRecord / ORM rows

    @classmethod
    def from_record(cls, verb: Any) -> "VerbResult":
        """Create VerbResult from a VerbRecord or Verb row."""
        verb_class = verb.verb_class
        return cls(
            lemma=verb.lemma,
            reading=verb.reading,
            gloss=verb.gloss or "",
            verb_class=verb_class.value if hasattr(verb_class, 'value') else str(verb_class),
            level=verb.level or "",
        )


class ConjugationResult(BaseModel):
    """
    One conjugated form of a verb.

    Example:
        {"verb": {...}, "voice": "potential", "mode": "standard",
         "modifiers": ["negative", "past"], "label": "Potential + Negative (nai) + Past (ta)",
         "text": "読めなかった", "reading": "よめなかった"}
    """
    verb: VerbResult = Field(..., description="Verb that was conjugated")
    voice: str = Field(..., description="Voice applied in the first stage")
    mode: str = Field(..., description="Mode applied in the second stage")
    modifiers: List[str] = Field(default_factory=list, description="Active modifiers, polite/negative/past order")
    label: str = Field(..., description="Human-readable description of the form")
    text: str = Field(..., description="Conjugated lemma")
    reading: Optional[str] = Field(None, description="Conjugated kana reading")

    @classmethod
    def from_conjugation(
        cls,
        verb: Any,
        voice: Voice,
        mode: Mode,
        modifiers: Iterable[Modifier] = (),
        text: Optional[str] = None,
        reading: Optional[str] = None,
    ) -> "ConjugationResult":
        """
        Create ConjugationResult for a verb record.

        Args:
            verb: VerbRecord to conjugate.
            voice: Stage 1 voice.
            mode: Stage 2 mode.
            modifiers: Modifiers legal for the mode.
            text: Precomputed lemma form (computed when None).
            reading: Precomputed reading form (computed when None).
        """
        modifiers = frozenset(Modifier(m) for m in modifiers)
        if text is None:
            text = conjugate(verb, voice, mode, modifiers)
        if reading is None:
            reading = conjugate(verb, voice, mode, modifiers, use_reading=True)
        return cls(
            verb=VerbResult.from_record(verb),
            voice=Voice(voice).value,
            mode=Mode(mode).value,
            modifiers=_ordered_values(modifiers),
            label=describe(voice, mode, modifiers),
            text=text,
            reading=reading,
        )


class ConjugationTable(BaseModel):
    """Every legal conjugation of a verb."""
    verb: VerbResult = Field(..., description="Verb that was conjugated")
    forms: List[ConjugationResult] = Field(..., description="One entry per legal voice/mode/modifier triple")
    count: int = Field(..., description="Number of forms")

    @classmethod
    def from_verb(cls, verb: Any) -> "ConjugationTable":
        """Build the full table for a verb record."""
        readings = conjugation_table(verb, use_reading=True)
        forms = [
            ConjugationResult.from_conjugation(verb, voice, mode, mods, text=text, reading=reading)
            for (voice, mode, mods, text), (_, _, _, reading)
            in zip(conjugation_table(verb), readings)
        ]
        return cls(verb=VerbResult.from_record(verb), forms=forms, count=len(forms))


class QuestionResult(BaseModel):
    """A generated practice question."""
    verb: VerbResult = Field(..., description="Verb being practiced")
    voice: str = Field(..., description="Requested voice")
    mode: str = Field(..., description="Requested mode")
    modifiers: List[str] = Field(default_factory=list, description="Requested modifiers")
    prompt: str = Field(..., description="Label shown to the learner")
    answer: str = Field(..., description="Expected conjugated lemma")
    reading_answer: str = Field(..., description="Expected conjugated reading")

    @classmethod
    def from_question(cls, question: Any) -> "QuestionResult":
        """Create QuestionResult from a Question."""
        return cls(
            verb=VerbResult.from_record(question.verb),
            voice=question.voice.value,
            mode=question.mode.value,
            modifiers=_ordered_values(question.modifiers),
            prompt=question.description,
            answer=question.answer,
            reading_answer=question.reading_answer,
        )


class QuizSummary(BaseModel):
    """Score of a finished quiz session."""
    asked: int = Field(0, description="Questions asked")
    correct: int = Field(0, description="Questions answered correctly")
    missed: List[QuestionResult] = Field(default_factory=list, description="Questions answered incorrectly")

    @property
    def accuracy(self) -> float:
        return self.correct / self.asked if self.asked else 0.0
