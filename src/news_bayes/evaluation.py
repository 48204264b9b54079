"""Held-out evaluation: confusion matrix and precision report.

Precision for a class is the fraction of documents predicted as that
class that really belong to it (a row of the confusion matrix). When a
class is never predicted its precision is undefined and reported as
``None``; recall follows the same rule for classes absent from the
held-out set. Overall precision counts every prediction once, as a true
or false positive of its predicted class, so it equals accuracy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from .classifier import NaiveBayesClassifier
from .exceptions import LabelOutOfRangeError
from .models import Document

logger = logging.getLogger(__name__)


def _ratio(numerator: int, denominator: int) -> Optional[float]:
    return numerator / denominator if denominator > 0 else None


class ConfusionMatrix:
    """Square count table indexed ``[predicted][actual]``."""

    def __init__(self, num_classes: int) -> None:
        self.num_classes = num_classes
        self.counts: list[list[int]] = [[0] * num_classes for _ in range(num_classes)]

    def add(self, predicted: int, actual: int) -> None:
        self.counts[predicted][actual] += 1

    def __getitem__(self, predicted: int) -> list[int]:
        return self.counts[predicted]

    def row_total(self, predicted: int) -> int:
        """All predictions made for a class."""
        return sum(self.counts[predicted])

    def column_total(self, actual: int) -> int:
        """All documents that truly belong to a class."""
        return sum(row[actual] for row in self.counts)

    @property
    def total(self) -> int:
        return sum(sum(row) for row in self.counts)

    @property
    def correct(self) -> int:
        return sum(self.counts[i][i] for i in range(self.num_classes))

    def to_dict(self) -> dict:
        return {"predicted_by_actual": [list(row) for row in self.counts]}


@dataclass
class EvaluationReport:
    """Metrics from classifying a held-out set.

    Attributes:
        class_names: Display names by class id.
        confusion_matrix: Prediction counts, ``[predicted][actual]``.
        precision: Per-class precision, ``None`` if never predicted.
        recall: Per-class recall, ``None`` if absent from the held-out set.
        overall_precision: Correct predictions over all predictions
            (accuracy); ``None`` for an empty held-out set.
        support: Held-out documents per actual class.
        training_documents: Training documents per class.
    """

    class_names: list[str]
    confusion_matrix: ConfusionMatrix
    precision: list[Optional[float]] = field(default_factory=list)
    recall: list[Optional[float]] = field(default_factory=list)
    overall_precision: Optional[float] = None
    support: list[int] = field(default_factory=list)
    training_documents: list[int] = field(default_factory=list)

    @property
    def accuracy(self) -> Optional[float]:
        return self.overall_precision

    @property
    def total(self) -> int:
        return self.confusion_matrix.total

    def to_dict(self) -> dict:
        def _round(value: Optional[float]) -> Optional[float]:
            return round(value, 4) if value is not None else None

        return {
            "overall_precision": _round(self.overall_precision),
            "documents_evaluated": self.total,
            "classes": [
                {
                    "id": class_id,
                    "name": name,
                    "training_documents": self.training_documents[class_id],
                    "support": self.support[class_id],
                    "precision": _round(self.precision[class_id]),
                    "recall": _round(self.recall[class_id]),
                }
                for class_id, name in enumerate(self.class_names)
            ],
            "confusion_matrix": self.confusion_matrix.to_dict(),
        }

    def summary(self) -> str:
        """Plain-text table of the report."""

        def _fmt(value: Optional[float]) -> str:
            return f"{value:>10.4f}" if value is not None else f"{'n/a':>10}"

        overall = (
            f"{self.overall_precision:.2%}" if self.overall_precision is not None else "n/a"
        )
        lines = [
            f"Overall precision: {overall} ({self.confusion_matrix.correct}/{self.total})",
            "",
            f"{'Class':<20} {'Trained':>10} {'Precision':>10} {'Recall':>10} {'Support':>10}",
            "-" * 64,
        ]
        for class_id, name in enumerate(self.class_names):
            lines.append(
                f"{name:<20} {self.training_documents[class_id]:>10} "
                f"{_fmt(self.precision[class_id])} {_fmt(self.recall[class_id])} "
                f"{self.support[class_id]:>10}"
            )
        return "\n".join(lines)


def compute_report(
    matrix: ConfusionMatrix,
    class_names: Sequence[str],
    training_documents: Sequence[int] | None = None,
) -> EvaluationReport:
    """Derive precision, recall and support from a filled confusion matrix."""
    n = matrix.num_classes
    return EvaluationReport(
        class_names=list(class_names),
        confusion_matrix=matrix,
        precision=[_ratio(matrix[c][c], matrix.row_total(c)) for c in range(n)],
        recall=[_ratio(matrix[c][c], matrix.column_total(c)) for c in range(n)],
        overall_precision=_ratio(matrix.correct, matrix.total),
        support=[matrix.column_total(c) for c in range(n)],
        training_documents=(
            list(training_documents) if training_documents is not None else [0] * n
        ),
    )


def evaluate(
    model: NaiveBayesClassifier,
    documents: Iterable[Document],
) -> EvaluationReport:
    """Classify held-out documents and build the precision report.

    The model is only read, never modified.

    Args:
        model: A trained classifier.
        documents: Labeled held-out documents.

    Returns:
        EvaluationReport with the confusion matrix and precision metrics.
    """
    matrix = ConfusionMatrix(model.num_classes)
    for document in documents:
        if not 0 <= document.label < model.num_classes:
            raise LabelOutOfRangeError(document.label, model.num_classes)
        result = model.classify(document)
        matrix.add(result.predicted_class, document.label)

    report = compute_report(
        matrix,
        model.class_names,
        training_documents=[stats.document_count for stats in model.classes],
    )
    logger.info(
        "Evaluated %d documents, %d correct",
        report.total, matrix.correct,
    )
    return report
