"""Data models for news classification."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .tokenizer import Tokens


@dataclass(frozen=True)
class Document:
    """A labeled news item.

    ``label`` is the zero-based class id. Source tables number classes
    from 1; use ``from_row`` to convert.
    """

    label: int
    title: str
    description: str

    @classmethod
    def from_row(cls, class_index: int, title: str, description: str) -> "Document":
        """Build a document from a 1-indexed source row."""
        if class_index < 1:
            raise ValueError(f"Class index must be a positive integer, got {class_index}")
        return cls(label=class_index - 1, title=title, description=description)

    @property
    def text(self) -> str:
        """Title and description joined by a single space."""
        return f"{self.title} {self.description}"

    def words(self) -> Tokens:
        """Lazy token sequence of the title and description."""
        return Tokens(self.text)


@dataclass
class ClassStatistics:
    """Word frequency aggregate for one class.

    Counts only ever grow; ``total_word_count`` always equals the sum of
    ``word_count`` values.
    """

    word_count: Counter = field(default_factory=Counter)
    total_word_count: int = 0
    document_count: int = 0

    def add(self, document: Document) -> None:
        """Accumulate one document's tokens into this class."""
        self.document_count += 1
        for word in document.words():
            self.word_count[word] += 1
            self.total_word_count += 1

    @property
    def vocabulary_size(self) -> int:
        return len(self.word_count)

    def most_common(self, n: int = 10) -> list[tuple[str, int]]:
        """The ``n`` most frequent words in this class."""
        return self.word_count.most_common(n)

    def to_dict(self) -> dict:
        return {
            "document_count": self.document_count,
            "total_word_count": self.total_word_count,
            "vocabulary_size": self.vocabulary_size,
        }
