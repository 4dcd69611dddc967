"""
Settings and configuration for Doushi.

Values can be overridden through environment variables.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Bundled lexicon (tab-separated: lemma, reading, gloss, verb_class, level)
DEFAULT_VERBS_PATH = DATA_DIR / "verbs.tsv"
VERBS_PATH = Path(os.environ.get("DOUSHI_VERBS_PATH", DEFAULT_VERBS_PATH))

# Lexicon database path - defaults to data/doushi.db
DEFAULT_DB_PATH = DATA_DIR / "doushi.db"
DB_PATH = Path(os.environ.get("DOUSHI_DB_PATH", DEFAULT_DB_PATH))

# Debug mode
DEBUG = os.environ.get("DOUSHI_DEBUG", "").lower() in ("1", "true", "yes")

# Default quiz levels (comma-separated, e.g. "N5,N4")
QUIZ_LEVELS = tuple(
    level.strip()
    for level in os.environ.get("DOUSHI_LEVELS", "N5,N4,N3").split(",")
    if level.strip()
)

# Chance that each enabled, legal modifier is added to a generated question
QUIZ_MODIFIER_PROBABILITY = 0.5

