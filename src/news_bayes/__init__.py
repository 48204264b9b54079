"""news-bayes -- Naive Bayes topic classification for news articles."""

__version__ = "0.1.0"

from .classifier import ClassificationResult, NaiveBayesClassifier
from .config import ClassifierConfig
from .evaluation import ConfusionMatrix, EvaluationReport, compute_report, evaluate
from .exceptions import DatasetError, LabelOutOfRangeError, NewsBayesError
from .models import ClassStatistics, Document
from .parsers import iter_documents, read_class_names, read_documents
from .tokenizer import Tokens, tokenize

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "ClassificationResult",
    "ClassifierConfig",
    # Data
    "Document",
    "ClassStatistics",
    # Tokenization
    "Tokens",
    "tokenize",
    # Evaluation
    "ConfusionMatrix",
    "EvaluationReport",
    "compute_report",
    "evaluate",
    # Datasets
    "iter_documents",
    "read_documents",
    "read_class_names",
    # Errors
    "NewsBayesError",
    "DatasetError",
    "LabelOutOfRangeError",
]
