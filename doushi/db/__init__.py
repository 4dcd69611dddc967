"""SQLite storage for the verb lexicon."""
