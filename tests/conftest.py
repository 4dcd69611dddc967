"""
Pytest configuration and fixtures for doushi tests.
"""

import random

import pytest
from sqlalchemy.orm import sessionmaker

from doushi.constants import VerbClass
from doushi.db.connection import get_engine, init_schema
from doushi.lexicon import VerbRecord


@pytest.fixture
def rng():
    """Seeded random source; every test sees the same sequence."""
    return random.Random(1234)


@pytest.fixture
def kaku():
    return VerbRecord("書く", "かく", "to write", VerbClass.GODAN, "N5")


@pytest.fixture
def iku():
    return VerbRecord("行く", "いく", "to go", VerbClass.GODAN, "N5")


@pytest.fixture
def yomu():
    return VerbRecord("読む", "よむ", "to read", VerbClass.GODAN, "N5")


@pytest.fixture
def taberu():
    return VerbRecord("食べる", "たべる", "to eat", VerbClass.ICHIDAN, "N5")


@pytest.fixture
def kuru():
    return VerbRecord("来る", "くる", "to come", VerbClass.IRREGULAR, "N5")


@pytest.fixture
def suru():
    return VerbRecord("する", "する", "to do", VerbClass.IRREGULAR, "N5")


@pytest.fixture
def benkyou():
    return VerbRecord("勉強する", "べんきょうする", "to study", VerbClass.SURU, "N5")


@pytest.fixture
def sample_verbs(kaku, iku, yomu, taberu, kuru, suru, benkyou):
    """A small lexicon covering every inflection class."""
    return [kaku, iku, yomu, taberu, kuru, suru, benkyou]


@pytest.fixture
def db_session():
    """Session on an in-memory lexicon database with the schema created."""
    engine = get_engine(':memory:')
    init_schema(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()
