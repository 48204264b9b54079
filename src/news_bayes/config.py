"""Classifier configuration.

Values come from CLI options, which fall back to ``NEWS_BAYES_*``
environment variables (optionally set in a ``.env`` file).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

ENV_PREFIX = "NEWS_BAYES"


@dataclass(frozen=True)
class ClassifierConfig:
    """Settings for training, scoring and reporting.

    Args:
        alpha: Additive smoothing for word probabilities. ``0.0`` keeps the
            raw frequency estimate, where a word never seen in a class
            zeroes that class's score.
        top_words: Number of most frequent words to report per class.
    """

    alpha: float = 0.0
    top_words: int = 10

    def __post_init__(self) -> None:
        if self.alpha < 0:
            raise ValueError(f"alpha must be >= 0, got {self.alpha}")
        if self.top_words < 0:
            raise ValueError(f"top_words must be >= 0, got {self.top_words}")

    def to_dict(self) -> dict:
        return asdict(self)
