"""
Verb lexicon for Doushi.

The lexicon is a read-only table of VerbRecord entries. It ships as a
tab-separated file (data/verbs.tsv) and can also be loaded into SQLite
(see doushi.loading.lexicon) and queried from there.
"""

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from doushi.constants import VerbClass


@dataclass(frozen=True)
class VerbRecord:
    """
    One lexeme of the lexicon.

    Attributes:
        lemma: Dictionary form as usually written (e.g. 書く).
        reading: Kana reading of the lemma (e.g. かく).
        gloss: Short meaning.
        verb_class: Inflection class. Must match the lemma's ending; this is
            not checked here and surfaces as MalformedVerbError on conjugation.
        level: Proficiency tag (e.g. JLPT 'N5').
    """
    lemma: str
    reading: str
    gloss: str
    verb_class: VerbClass
    level: str = ""

    def __post_init__(self):
        # Accept plain strings from files/DB rows
        object.__setattr__(self, 'verb_class', VerbClass(self.verb_class))

    def __str__(self) -> str:
        if self.reading and self.reading != self.lemma:
            return f"{self.lemma}【{self.reading}】"
        return self.lemma


def load_verb_table(path: Optional[Union[str, Path]] = None) -> List[VerbRecord]:
    """
    Load the lexicon from a TSV file.

    Args:
        path: TSV file; defaults to settings.VERBS_PATH (the bundled lexicon).

    Returns:
        List of VerbRecord in file order.
    """
    from doushi.loading.lexicon import read_verb_rows
    from doushi.settings import VERBS_PATH

    return [VerbRecord(**row) for row in read_verb_rows(path or VERBS_PATH)]


def filter_verbs(
    verbs: Iterable[VerbRecord],
    levels: Optional[Iterable[str]] = None,
    classes: Optional[Iterable[VerbClass]] = None,
) -> List[VerbRecord]:
    """
    Filter verbs by proficiency level and inflection class.

    A filter of None keeps everything; an empty collection keeps nothing.
    """
    level_set = set(levels) if levels is not None else None
    class_set = {VerbClass(c) for c in classes} if classes is not None else None

    return [
        v for v in verbs
        if (level_set is None or v.level in level_set)
        and (class_set is None or v.verb_class in class_set)
    ]


def group_by_level(verbs: Iterable[VerbRecord]) -> Dict[str, List[VerbRecord]]:
    """Group verbs by level tag, preserving order within each group."""
    groups: Dict[str, List[VerbRecord]] = defaultdict(list)
    for verb in verbs:
        groups[verb.level].append(verb)
    return dict(groups)


def group_by_class(verbs: Iterable[VerbRecord]) -> Dict[VerbClass, List[VerbRecord]]:
    """Group verbs by inflection class, preserving order within each group."""
    groups: Dict[VerbClass, List[VerbRecord]] = defaultdict(list)
    for verb in verbs:
        groups[verb.verb_class].append(verb)
    return dict(groups)


def find_verb(verbs: Sequence[VerbRecord], text: str) -> Optional[VerbRecord]:
    """Find a verb by lemma or reading."""
    for verb in verbs:
        if text in (verb.lemma, verb.reading):
            return verb
    return None


# ============================================================================
# Database Queries
# ============================================================================

def query_verbs(
    session: Session,
    levels: Optional[Iterable[str]] = None,
    classes: Optional[Iterable[VerbClass]] = None,
) -> List[VerbRecord]:
    """
    Read verbs from the lexicon database.

    Args:
        session: SQLAlchemy session bound to a lexicon database.
        levels: Level tags to keep (None for all).
        classes: Inflection classes to keep (None for all).

    Returns:
        List of VerbRecord ordered by insertion.
    """
    from doushi.db.models import Verb

    stmt = select(Verb).order_by(Verb.id)
    if levels is not None:
        stmt = stmt.where(Verb.level.in_(list(levels)))
    if classes is not None:
        stmt = stmt.where(Verb.verb_class.in_([VerbClass(c).value for c in classes]))

    return [row.to_record() for row in session.execute(stmt).scalars()]
