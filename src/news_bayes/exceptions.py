"""Exception types raised by news-bayes."""

from __future__ import annotations


class NewsBayesError(Exception):
    """Base class for all news-bayes errors."""


class DatasetError(NewsBayesError, ValueError):
    """A dataset file could not be read into documents or class names."""


class LabelOutOfRangeError(NewsBayesError, ValueError):
    """A document label does not index one of the model's classes."""

    def __init__(self, label: int, num_classes: int) -> None:
        self.label = label
        self.num_classes = num_classes
        super().__init__(
            f"Class label {label} is out of range: model has {num_classes} "
            f"classes (valid ids 0..{num_classes - 1})"
        )
