"""
Lexicon loading for Doushi.

Reads the tab-separated verb table and stores it in the SQLite lexicon
database.

File format (header row required):
    lemma	reading	gloss	verb_class	level
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from doushi.characters import as_hiragana
from doushi.constants import VerbClass
from doushi.db.connection import session_scope
from doushi.db.models import Verb
from doushi.lexicon import VerbRecord

logger = logging.getLogger(__name__)

COLUMNS = ("lemma", "reading", "gloss", "verb_class", "level")

_VERB_CLASS_VALUES = {c.value for c in VerbClass}


def read_verb_rows(path: Union[str, Path]) -> List[Dict[str, str]]:
    """
    Parse a verb TSV file into row dicts.

    Rows with a missing lemma or an unknown verb class are skipped with a
    warning. Readings are normalized to hiragana; an empty reading falls back
    to the lemma.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the header is missing a required column.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Verb table not found at: {path}")

    rows = []
    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f, delimiter='\t')
        missing = [c for c in COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{path}: missing column(s): {', '.join(missing)}")

        for line_no, row in enumerate(reader, start=2):
            lemma = (row.get('lemma') or '').strip()
            verb_class = (row.get('verb_class') or '').strip().lower()
            if not lemma:
                logger.warning(f"{path.name}:{line_no}: empty lemma, skipped")
                continue
            if verb_class not in _VERB_CLASS_VALUES:
                logger.warning(f"{path.name}:{line_no}: unknown verb class {verb_class!r}, skipped")
                continue

            reading = (row.get('reading') or '').strip()
            rows.append({
                'lemma': lemma,
                'reading': as_hiragana(reading) if reading else lemma,
                'gloss': (row.get('gloss') or '').strip(),
                'verb_class': verb_class,
                'level': (row.get('level') or '').strip(),
            })

    logger.debug(f"Read {len(rows)} verbs from {path}")
    return rows


def store_verbs(session: Session, records: Iterable[VerbRecord], replace: bool = False) -> int:
    """
    Insert verb records into the lexicon table.

    Args:
        session: Session on a database with the schema created.
        records: Records to insert. Duplicates (same lemma and reading) are skipped.
        replace: Delete existing rows first.

    Returns:
        Number of rows inserted.
    """
    if replace:
        session.execute(delete(Verb))

    existing = {tuple(row) for row in session.execute(select(Verb.lemma, Verb.reading))}
    count = 0
    for record in records:
        key = (record.lemma, record.reading)
        if key in existing:
            logger.debug(f"Duplicate verb {record.lemma} ({record.reading}), skipped")
            continue
        session.add(Verb.from_record(record))
        existing.add(key)
        count += 1

    session.flush()
    return count


def count_verbs(session: Session) -> int:
    """Number of verbs in the lexicon table."""
    return session.execute(select(func.count(Verb.id))).scalar_one()


def load_lexicon(
    db_path: Optional[Union[str, Path]] = None,
    tsv_path: Optional[Union[str, Path]] = None,
    replace: bool = True,
) -> int:
    """
    Build the lexicon database from a verb TSV file.

    Args:
        db_path: Output database (defaults to settings.DB_PATH).
        tsv_path: Source table (defaults to settings.VERBS_PATH).
        replace: Replace any existing rows.

    Returns:
        Number of verbs stored.
    """
    from doushi.settings import VERBS_PATH

    source = Path(tsv_path) if tsv_path else VERBS_PATH
    records = [VerbRecord(**row) for row in read_verb_rows(source)]
    logger.info(f"Loading {len(records)} verbs from {source}")

    with session_scope(db_path, create=True) as session:
        inserted = store_verbs(session, records, replace=replace)
        total = count_verbs(session)

    logger.info(f"Stored {inserted} verbs ({total} total)")
    return inserted
