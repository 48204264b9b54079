"""Multinomial Naive Bayes over word counts.

The model keeps one ``ClassStatistics`` per class and picks the class
with the highest posterior ``P(class) * prod(P(word | class))``.
Probabilities are combined in base-2 log space to avoid underflow when
multiplying many small factors.

Scoring rules:

- ``P(class)`` is the class's share of all training documents.
- ``P(word | class)`` is ``(count + alpha) / (total + alpha * |V|)``
  where ``|V|`` is the vocabulary size over all classes. With the
  default ``alpha = 0`` a word never seen in a class gives that class a
  probability of exactly zero, whatever the other words say.
- A zero probability contributes ``log2(0) = -inf``, so the class score
  is ``0.0``. Classes with no documents, and every class of an
  untrained model, score ``0.0``.
- The best class is the first one whose score strictly beats the
  running maximum, starting from zero. When every score is zero the
  prediction is class 0 with score ``0.0``.

Classes are ranked by log score, so documents long enough for the
linear score to underflow to ``0.0`` are still ranked correctly.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .config import ClassifierConfig
from .exceptions import LabelOutOfRangeError
from .models import ClassStatistics, Document

logger = logging.getLogger(__name__)


@dataclass
class ClassificationResult:
    """Outcome of classifying one document.

    Attributes:
        predicted_class: Zero-based id of the winning class.
        score: ``P(class) * prod(P(word | class))`` for the winner.
        scores: The same quantity for every class, by class id.
        log_scores: Base-2 logs of ``scores`` (``-inf`` for zero).
    """

    predicted_class: int
    score: float
    scores: list[float]
    log_scores: list[float]

    def to_dict(self) -> dict:
        return {
            "predicted_class": self.predicted_class,
            "score": self.score,
            "scores": self.scores,
        }


class NaiveBayesClassifier:
    """Naive Bayes news classifier with a fixed set of classes.

    Example::

        model = NaiveBayesClassifier(["World", "Sports", "Business", "Sci/Tech"])
        model.train(training_documents)

        result = model.classify(document)
        print(model.class_names[result.predicted_class])

    Args:
        class_names: Display names, one per class, in class-id order.
        config: Scoring configuration (smoothing).
    """

    def __init__(
        self,
        class_names: Sequence[str],
        config: ClassifierConfig | None = None,
    ) -> None:
        self.class_names: list[str] = list(class_names)
        self.classes: list[ClassStatistics] = [ClassStatistics() for _ in self.class_names]
        self.config = config or ClassifierConfig()
        self._vocabulary: set[str] = set()

    @property
    def num_classes(self) -> int:
        return len(self.classes)

    @property
    def alpha(self) -> float:
        return self.config.alpha

    @property
    def total_documents(self) -> int:
        """Number of training documents seen across all classes."""
        return sum(stats.document_count for stats in self.classes)

    @property
    def vocabulary(self) -> frozenset[str]:
        """Every word seen in training, over all classes."""
        return frozenset(self._vocabulary)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, documents: Iterable[Document]) -> None:
        """Accumulate word and document counts from labeled documents.

        Counts add up across calls: training twice on the same documents
        counts them twice.

        Raises:
            LabelOutOfRangeError: If a label is not a valid class id.
                Documents before the offending one stay counted.
        """
        trained = 0
        try:
            for document in documents:
                if not 0 <= document.label < self.num_classes:
                    raise LabelOutOfRangeError(document.label, self.num_classes)
                self.classes[document.label].add(document)
                trained += 1
        finally:
            for stats in self.classes:
                self._vocabulary.update(stats.word_count)

        for name, stats in zip(self.class_names, self.classes):
            logger.debug(
                "Class %r: %d documents, %d words, %d distinct",
                name, stats.document_count, stats.total_word_count, stats.vocabulary_size,
            )
        logger.info(
            "Trained on %d documents (%d total, vocabulary %d)",
            trained, self.total_documents, len(self._vocabulary),
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, document: Document) -> ClassificationResult:
        """Pick the most probable class for a document."""
        log_scores = self._log_scores(list(document.words()))

        predicted = 0
        best = -math.inf
        for class_id, log_score in enumerate(log_scores):
            if log_score > best:
                predicted = class_id
                best = log_score

        return ClassificationResult(
            predicted_class=predicted,
            score=2.0 ** best,
            scores=[2.0 ** s for s in log_scores],
            log_scores=log_scores,
        )

    def classify_batch(self, documents: Iterable[Document]) -> list[ClassificationResult]:
        return [self.classify(document) for document in documents]

    def predict(self, documents: Iterable[Document]) -> list[int]:
        """Predicted class ids for a batch of documents."""
        return [self.classify(document).predicted_class for document in documents]

    def _log_scores(self, words: list[str]) -> list[float]:
        """Base-2 log posterior (unnormalized) for every class."""
        total_documents = self.total_documents
        vocab_size = len(self._vocabulary)

        log_scores: list[float] = []
        for stats in self.classes:
            if total_documents == 0 or stats.document_count == 0:
                log_scores.append(-math.inf)
                continue

            log_score = math.log2(stats.document_count / total_documents)
            for word in words:
                log_score += self._word_log_prob(stats, word, vocab_size)
                if log_score == -math.inf:
                    break
            log_scores.append(log_score)

        return log_scores

    def _word_log_prob(self, stats: ClassStatistics, word: str, vocab_size: int) -> float:
        """``log2 P(word | class)``, ``-inf`` when the probability is zero."""
        numerator = stats.word_count.get(word, 0) + self.alpha
        denominator = stats.total_word_count + self.alpha * vocab_size
        if numerator <= 0 or denominator <= 0:
            return -math.inf
        return math.log2(numerator / denominator)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def most_informative_words(
        self,
        class_id: int,
        top_n: int = 20,
    ) -> list[tuple[str, float]]:
        """Return the words that most distinguish a class from the others.

        Each word seen in the class is scored by ``log2 P(word | class)``
        minus the mean of ``log2 P(word | other)`` over the other classes,
        using the model's smoothing. Without smoothing, a word that some
        other class never saw scores ``inf``. Equal scores are ordered by
        frequency in the class, then alphabetically.

        Args:
            class_id: Target class id.
            top_n: Number of words to return.

        Returns:
            List of (word, log_ratio) tuples, most distinctive first.
            With a single class the ratio is the word's own log probability.

        Raises:
            LabelOutOfRangeError: If class_id is not a valid class id.
        """
        if not 0 <= class_id < self.num_classes:
            raise LabelOutOfRangeError(class_id, self.num_classes)

        target = self.classes[class_id]
        others = [s for i, s in enumerate(self.classes) if i != class_id]
        vocab_size = len(self._vocabulary)

        ratios: list[tuple[str, float]] = []
        for word in target.word_count:
            ratio = self._word_log_prob(target, word, vocab_size)
            if others:
                other_lps = [self._word_log_prob(s, word, vocab_size) for s in others]
                ratio -= sum(other_lps) / len(other_lps)
            ratios.append((word, round(ratio, 4)))

        ratios.sort(key=lambda x: (-x[1], -target.word_count[x[0]], x[0]))
        return ratios[:top_n]

    def __repr__(self) -> str:
        return (
            f"NaiveBayesClassifier(classes={self.class_names!r}, "
            f"documents={self.total_documents}, alpha={self.alpha})"
        )
