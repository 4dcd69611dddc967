"""
SQLAlchemy models for the Doushi lexicon database.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from doushi.lexicon import VerbRecord


class Base(DeclarativeBase):
    pass


class Verb(Base):
    """One lexicon entry. Mirrors VerbRecord."""

    __tablename__ = "verb"
    __table_args__ = (UniqueConstraint("lemma", "reading", name="uq_verb_lemma_reading"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lemma: Mapped[str] = mapped_column(String, nullable=False, index=True)
    reading: Mapped[str] = mapped_column(String, nullable=False, index=True)
    gloss: Mapped[str] = mapped_column(String, nullable=False, default="")
    verb_class: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    level: Mapped[str] = mapped_column(String(8), nullable=False, default="", index=True)

    def to_record(self) -> VerbRecord:
        return VerbRecord(
            lemma=self.lemma,
            reading=self.reading,
            gloss=self.gloss,
            verb_class=self.verb_class,
            level=self.level,
        )

    @classmethod
    def from_record(cls, record: VerbRecord) -> "Verb":
        return cls(
            lemma=record.lemma,
            reading=record.reading,
            gloss=record.gloss,
            verb_class=record.verb_class.value,
            level=record.level,
        )

    def __repr__(self) -> str:
        return f"<Verb {self.lemma} ({self.verb_class}, {self.level})>"
