"""
Command line interface for doushi.

Usage:
    python -m doushi.cli conjugate 読む --class godan --voice potential --negative --past
    python -m doushi.cli table 来る --class irregular       # every legal form
    python -m doushi.cli quiz --count 10 --level N5          # interactive practice
    python -m doushi.cli quiz --recognize                    # name the form instead
    python -m doushi.cli init-db                             # build the lexicon database
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from doushi import __version__, settings
from doushi.characters import as_hiragana, is_kana
from doushi.constants import VerbClass, Voice, Mode, Modifier, LEVELS
from doushi.conjugations import conjugate
from doushi.grader import (
    check_answer, check_recognition, expected_answer, parse_recognition, recognition_answer,
)
from doushi.lexicon import VerbRecord, find_verb, load_verb_table, query_verbs
from doushi.models import ConjugationResult, ConjugationTable, QuestionResult, QuizSummary
from doushi.output import describe, format_conjugation_table, format_question, format_recognition
from doushi.questions import QuizSettings, make_rng, next_question

logger = logging.getLogger(__name__)

VERB_CLASS_CHOICES = [c.value for c in VerbClass]
VOICE_CHOICES = [v.value for v in Voice]
MODE_CHOICES = [m.value for m in Mode]


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr when --verbose or DOUSHI_DEBUG is set."""
    if verbose or settings.DEBUG:
        logging.basicConfig(
            level=logging.DEBUG if settings.DEBUG else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def resolve_verb(word: str, verb_class: Optional[str] = None, reading: Optional[str] = None) -> VerbRecord:
    """
    Build a VerbRecord for a word given on the command line.

    Without --class the word is looked up (by lemma or reading) in the
    bundled lexicon.

    Raises:
        ValueError: If no class is given and the word is not in the lexicon.
    """
    known = find_verb(load_verb_table(), word)
    if verb_class is None:
        if known is None:
            raise ValueError(f"{word} is not in the lexicon; pass --class")
        return known

    if reading is None:
        if known is not None and VerbClass(verb_class) == known.verb_class:
            reading = known.reading
        elif is_kana(word):
            reading = as_hiragana(word)
        else:
            reading = word
    return VerbRecord(
        lemma=word,
        reading=reading,
        gloss=known.gloss if known else "",
        verb_class=verb_class,
        level=known.level if known else "",
    )


# ============================================================================
# Subcommands
# ============================================================================

def _add_verb_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('verb', help='Verb in dictionary form (e.g. 書く)')
    parser.add_argument(
        '--class', '-c',
        dest='verb_class',
        choices=VERB_CLASS_CHOICES,
        default=None,
        help='Inflection class (default: look the verb up in the lexicon)',
    )
    parser.add_argument(
        '--reading', '-r',
        type=str,
        default=None,
        metavar='KANA',
        help='Kana reading of the verb',
    )
    parser.add_argument('--json', action='store_true', help='Output as JSON')
    parser.add_argument('--lang', choices=['en', 'ja'], default='en', help='Label language')
    parser.add_argument('--verbose', action='store_true', help='Enable logging')


def main_conjugate(args: list) -> int:
    """CLI entry point for conjugate subcommand."""
    parser = argparse.ArgumentParser(
        description='Conjugate a verb into one voice/mode/modifier combination',
        prog='doushi conjugate',
    )
    _add_verb_arguments(parser)
    parser.add_argument('--voice', choices=VOICE_CHOICES, default=Voice.DICTIONARY.value)
    parser.add_argument('--mode', choices=MODE_CHOICES, default=Mode.STANDARD.value)
    parser.add_argument('--polite', action='store_true', help='Add the polite (masu) modifier')
    parser.add_argument('--negative', action='store_true', help='Add the negative (nai) modifier')
    parser.add_argument('--past', action='store_true', help='Add the past (ta) modifier')

    parsed = parser.parse_args(args)
    configure_logging(parsed.verbose)

    modifiers = set()
    if parsed.polite:
        modifiers.add(Modifier.POLITE)
    if parsed.negative:
        modifiers.add(Modifier.NEGATIVE)
    if parsed.past:
        modifiers.add(Modifier.PAST)

    verb = resolve_verb(parsed.verb, parsed.verb_class, parsed.reading)
    voice, mode = Voice(parsed.voice), Mode(parsed.mode)

    if parsed.json:
        result = ConjugationResult.from_conjugation(verb, voice, mode, modifiers)
        print(json.dumps(result.model_dump(), ensure_ascii=False))
    else:
        text = conjugate(verb, voice, mode, modifiers)
        reading = conjugate(verb, voice, mode, modifiers, use_reading=True)
        label = describe(voice, mode, modifiers, lang=parsed.lang)
        suffix = f"【{reading}】" if reading != text else ""
        print(f"{text}{suffix}  ({label})")
    return 0


def main_table(args: list) -> int:
    """CLI entry point for table subcommand."""
    parser = argparse.ArgumentParser(
        description='Print every legal conjugation of a verb',
        prog='doushi table',
    )
    _add_verb_arguments(parser)
    parser.add_argument('--kana', action='store_true', help='Conjugate the reading instead of the lemma')

    parsed = parser.parse_args(args)
    configure_logging(parsed.verbose)

    verb = resolve_verb(parsed.verb, parsed.verb_class, parsed.reading)
    if parsed.json:
        table = ConjugationTable.from_verb(verb)
        print(json.dumps(table.model_dump(), ensure_ascii=False, indent=2))
    else:
        print(format_conjugation_table(verb, use_reading=parsed.kana, lang=parsed.lang))
    return 0


def _load_quiz_verbs(database: Optional[str]) -> List[VerbRecord]:
    if database is None:
        return load_verb_table()

    from doushi.db.connection import session_scope

    with session_scope(database) as session:
        verbs = query_verbs(session)
    logger.info(f"Loaded {len(verbs)} verbs from {database}")
    return verbs


def _grade_recognition(question, response: str) -> bool:
    """Grade a typed voice/mode/modifier answer; unreadable input counts as wrong."""
    try:
        voice, mode, modifiers = parse_recognition(response)
    except ValueError as e:
        print(f"  ! {e}")
        return False
    return check_recognition(question, voice, mode, modifiers)


def main_quiz(args: list) -> int:
    """CLI entry point for quiz subcommand."""
    parser = argparse.ArgumentParser(
        description='Practice conjugations interactively',
        prog='doushi quiz',
    )
    parser.add_argument('--count', '-n', type=int, default=10, metavar='N', help='Number of questions (default: 10)')
    parser.add_argument('--seed', '-s', type=int, default=None, metavar='S', help='Random seed for a reproducible quiz')
    parser.add_argument('--level', action='append', choices=LEVELS, default=None, help='Level to include (repeatable)')
    parser.add_argument('--class', dest='classes', action='append', choices=VERB_CLASS_CHOICES, default=None,
                        help='Inflection class to include (repeatable)')
    parser.add_argument('--voice', dest='voices', action='append', choices=VOICE_CHOICES, default=None,
                        help='Voice to include (repeatable)')
    parser.add_argument('--mode', dest='modes', action='append', choices=MODE_CHOICES, default=None,
                        help='Mode to include (repeatable)')
    parser.add_argument('--no-polite', action='store_true', help='Never ask polite forms')
    parser.add_argument('--no-negative', action='store_true', help='Never ask negative forms')
    parser.add_argument('--no-past', action='store_true', help='Never ask past forms')
    parser.add_argument('--database', '-d', type=str, default=None, metavar='PATH',
                        help='Read verbs from a lexicon database instead of the bundled table')
    parser.add_argument('--reading', action='store_true', help='Grade against the kana reading (accepts romaji)')
    parser.add_argument('--recognize', action='store_true',
                        help='Show the conjugated form and answer with its voice, mode and modifiers')
    parser.add_argument('--json', action='store_true', help='Print the generated questions as JSON instead of asking them')
    parser.add_argument('--lang', choices=['en', 'ja'], default='en', help='Label language')
    parser.add_argument('--verbose', action='store_true', help='Enable logging')

    parsed = parser.parse_args(args)
    configure_logging(parsed.verbose)

    modifiers = set(Modifier)
    if parsed.no_polite:
        modifiers.discard(Modifier.POLITE)
    if parsed.no_negative:
        modifiers.discard(Modifier.NEGATIVE)
    if parsed.no_past:
        modifiers.discard(Modifier.PAST)

    quiz = QuizSettings(
        levels=frozenset(parsed.level or settings.QUIZ_LEVELS),
        classes=frozenset(VerbClass(c) for c in (parsed.classes or VERB_CLASS_CHOICES)),
        voices=frozenset(Voice(v) for v in (parsed.voices or VOICE_CHOICES)),
        modes=frozenset(Mode(m) for m in (parsed.modes or MODE_CHOICES)),
        modifiers=frozenset(modifiers),
    )

    verbs = _load_quiz_verbs(parsed.database)
    rng = make_rng(parsed.seed)
    questions = (next_question(verbs, quiz, rng) for _ in range(parsed.count))

    if parsed.json:
        output = [QuestionResult.from_question(q).model_dump() for q in questions]
        print(json.dumps(output, ensure_ascii=False, indent=2))
        return 0

    summary = QuizSummary()
    for number, question in enumerate(questions, start=1):
        prompt = format_recognition(question) if parsed.recognize else format_question(question, lang=parsed.lang)
        print(f"[{number}/{parsed.count}] {prompt}")
        try:
            response = input('> ')
        except EOFError:
            print()
            break

        summary.asked += 1
        if parsed.recognize:
            correct = _grade_recognition(question, response)
            label = describe(question.voice, question.mode, question.modifiers, lang=parsed.lang)
            expected = f"{recognition_answer(question)} ({label})"
        else:
            correct = check_answer(question, response, use_reading=parsed.reading)
            expected = expected_answer(question, use_reading=parsed.reading)

        if correct:
            summary.correct += 1
            print("  ✓ Correct")
        else:
            summary.missed.append(QuestionResult.from_question(question))
            print(f"  ✗ {expected}")

    print()
    print(f"Score: {summary.correct}/{summary.asked} ({summary.accuracy:.0%})")
    return 0


def init_db_command(args) -> int:
    """Build the lexicon database from a verb table."""
    from doushi.loading.lexicon import load_lexicon

    source = Path(args.source) if args.source else settings.VERBS_PATH
    db_path = Path(args.output) if args.output else settings.DB_PATH

    if not source.exists():
        print(f"Error: verb table not found: {source}", file=sys.stderr)
        return 1

    # Confirm overwrite
    if db_path.exists() and not args.force:
        print(f"Database already exists: {db_path}")
        response = input("Overwrite? [y/N]: ").strip().lower()
        if response != 'y':
            print("Aborted.")
            return 1

    print("Initializing database...")
    print(f"  Source: {source}")
    print(f"  Output: {db_path}")

    total = load_lexicon(db_path=db_path, tsv_path=source, replace=True)

    print()
    print(f"✅ Database initialized: {total} verbs")
    print("Set DOUSHI_DB_PATH to use this database:")
    print(f'  export DOUSHI_DB_PATH="{db_path.absolute()}"')
    return 0


def main_init_db(args: list) -> int:
    """CLI entry point for init-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Initialize the doushi lexicon database from a verb table',
        prog='doushi init-db',
    )
    parser.add_argument('--source', '-s', type=str, metavar='PATH',
                        help='Verb table TSV (default: bundled data/verbs.tsv)')
    parser.add_argument('--output', '-o', type=str, metavar='PATH',
                        help='Output database path (default: data/doushi.db)')
    parser.add_argument('--force', '-f', action='store_true',
                        help='Overwrite existing database without prompting')
    parser.add_argument('--verbose', action='store_true', help='Enable logging')

    parsed = parser.parse_args(args)
    configure_logging(parsed.verbose)
    return init_db_command(parsed)


SUBCOMMANDS = {
    'conjugate': main_conjugate,
    'table': main_table,
    'quiz': main_quiz,
    'init-db': main_init_db,
}


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] in SUBCOMMANDS:
        try:
            return SUBCOMMANDS[args_list[0]](args_list[1:])
        except (ValueError, FileNotFoundError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    parser = argparse.ArgumentParser(
        description='Japanese verb conjugation and practice',
        prog='doushi',
        epilog='Subcommands:\n'
               '  doushi conjugate   Conjugate one form of a verb\n'
               '  doushi table       Print every legal form of a verb\n'
               '  doushi quiz        Practice conjugations\n'
               '  doushi init-db     Build the lexicon database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-v', '--version', action='store_true', help='Show version information')

    parsed, rest = parser.parse_known_args(args_list)

    if parsed.version:
        print(f'doushi {__version__}')
        return 0

    if rest:
        print(f"Error: unknown command: {rest[0]}", file=sys.stderr)
    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
