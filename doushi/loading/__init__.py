"""Loaders that build the lexicon database from bundled data files."""
