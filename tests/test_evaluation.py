"""Tests for held-out evaluation and the confusion matrix."""

from __future__ import annotations

import json

import pytest

from news_bayes.classifier import NaiveBayesClassifier
from news_bayes.evaluation import (
    ConfusionMatrix,
    EvaluationReport,
    compute_report,
    evaluate,
)
from news_bayes.exceptions import LabelOutOfRangeError
from news_bayes.models import Document


@pytest.fixture
def trained_model(class_names, news_documents) -> NaiveBayesClassifier:
    model = NaiveBayesClassifier(class_names)
    model.train(news_documents)
    return model


# ---------------------------------------------------------------------------
# ConfusionMatrix
# ---------------------------------------------------------------------------

class TestConfusionMatrix:
    """Tests for the predicted-by-actual count table."""

    def test_starts_at_zero(self) -> None:
        matrix = ConfusionMatrix(3)
        assert matrix.counts == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]
        assert matrix.total == 0

    def test_indexed_predicted_then_actual(self) -> None:
        matrix = ConfusionMatrix(2)
        matrix.add(predicted=1, actual=0)
        assert matrix[1][0] == 1
        assert matrix[0][1] == 0

    def test_totals(self) -> None:
        matrix = ConfusionMatrix(2)
        for predicted, actual in [(0, 0), (0, 1), (1, 1), (1, 1)]:
            matrix.add(predicted, actual)
        assert matrix.row_total(0) == 2
        assert matrix.row_total(1) == 2
        assert matrix.column_total(0) == 1
        assert matrix.column_total(1) == 3
        assert matrix.correct == 3
        assert matrix.total == 4

    def test_to_dict(self) -> None:
        matrix = ConfusionMatrix(2)
        matrix.add(0, 1)
        assert matrix.to_dict() == {"predicted_by_actual": [[0, 1], [0, 0]]}


# ---------------------------------------------------------------------------
# compute_report
# ---------------------------------------------------------------------------

class TestComputeReport:
    """Tests for deriving precision from a filled matrix."""

    def test_precision_is_row_based(self) -> None:
        matrix = ConfusionMatrix(2)
        # Predicted 0 three times, right twice
        for predicted, actual in [(0, 0), (0, 0), (0, 1), (1, 1)]:
            matrix.add(predicted, actual)
        report = compute_report(matrix, ["a", "b"])
        assert report.precision == pytest.approx([2 / 3, 1.0])
        assert report.recall == pytest.approx([1.0, 0.5])
        assert report.overall_precision == pytest.approx(0.75)
        assert report.support == [2, 2]

    def test_never_predicted_class_is_none(self) -> None:
        matrix = ConfusionMatrix(3)
        matrix.add(0, 0)
        matrix.add(0, 1)
        report = compute_report(matrix, ["a", "b", "c"])
        assert report.precision[1] is None
        assert report.precision[2] is None
        assert report.recall[2] is None
        assert report.recall[1] == 0.0

    def test_empty_matrix(self) -> None:
        report = compute_report(ConfusionMatrix(2), ["a", "b"])
        assert report.overall_precision is None
        assert report.precision == [None, None]
        assert report.training_documents == [0, 0]

    def test_overall_equals_accuracy(self) -> None:
        matrix = ConfusionMatrix(3)
        pairs = [(0, 0), (1, 0), (2, 2), (2, 1), (1, 1), (0, 2)]
        for predicted, actual in pairs:
            matrix.add(predicted, actual)
        report = compute_report(matrix, ["a", "b", "c"])
        tp = sum(matrix[c][c] for c in range(3))
        fp = sum(matrix.row_total(c) - matrix[c][c] for c in range(3))
        assert report.overall_precision == pytest.approx(tp / (tp + fp))
        assert report.accuracy == pytest.approx(3 / 6)


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------

class TestEvaluate:
    """End-to-end evaluation over a trained model."""

    def test_matrix_total_equals_documents(self, trained_model, news_documents) -> None:
        report = evaluate(trained_model, news_documents)
        assert report.confusion_matrix.total == len(news_documents)
        assert report.total == len(news_documents)

    def test_precision_bounds(self, trained_model) -> None:
        held_out = [
            Document(0, "peace talks", "weather today"),
            Document(1, "team", "stocks"),
            Document(2, "shares", "oil"),
            Document(1, "the coach", "the team"),
        ]
        report = evaluate(trained_model, held_out)
        for value in report.precision + report.recall + [report.overall_precision]:
            assert value is None or 0.0 <= value <= 1.0

    def test_perfectly_separable(self, separable_documents) -> None:
        train, held_out = separable_documents
        model = NaiveBayesClassifier(["Sports", "Finance"])
        model.train(train)
        report = evaluate(model, held_out)
        assert report.overall_precision == 1.0
        assert report.precision == [1.0, 1.0]
        assert report.confusion_matrix.counts == [[2, 0], [0, 2]]

    def test_sports_finance_scenario(self) -> None:
        model = NaiveBayesClassifier(["Sports", "Finance"])
        model.train([
            Document(0, "sports sports", "sports"),
            Document(1, "finance", "finance finance"),
        ])
        held_out = [
            Document(0, "sports", ""),
            Document(1, "finance", ""),
            Document(1, "weather", ""),
        ]
        report = evaluate(model, held_out)
        # The unseen word scores zero everywhere and falls back to class 0
        assert report.confusion_matrix.counts == [[1, 1], [0, 1]]
        assert report.precision == pytest.approx([0.5, 1.0])
        assert report.overall_precision == pytest.approx(2 / 3)

    def test_training_documents_reported(self, trained_model) -> None:
        report = evaluate(trained_model, [])
        assert report.training_documents == [3, 3, 3]
        assert report.overall_precision is None

    def test_does_not_mutate_model(self, trained_model, news_documents) -> None:
        before = [s.to_dict() for s in trained_model.classes]
        evaluate(trained_model, news_documents)
        assert [s.to_dict() for s in trained_model.classes] == before

    def test_held_out_label_out_of_range(self, trained_model) -> None:
        with pytest.raises(LabelOutOfRangeError):
            evaluate(trained_model, [Document(7, "peace", "")])


# ---------------------------------------------------------------------------
# EvaluationReport output
# ---------------------------------------------------------------------------

class TestEvaluationReport:
    """Tests for report serialization."""

    @pytest.fixture
    def report(self, trained_model, news_documents) -> EvaluationReport:
        return evaluate(trained_model, news_documents)

    def test_to_dict_is_json_serializable(self, report) -> None:
        data = report.to_dict()
        json.dumps(data)
        assert data["documents_evaluated"] == 9
        assert [c["name"] for c in data["classes"]] == ["World", "Sports", "Business"]
        assert "predicted_by_actual" in data["confusion_matrix"]

    def test_to_dict_keeps_none(self) -> None:
        report = compute_report(ConfusionMatrix(1), ["only"])
        data = report.to_dict()
        assert data["overall_precision"] is None
        assert data["classes"][0]["precision"] is None

    def test_summary_marks_undefined(self) -> None:
        matrix = ConfusionMatrix(2)
        matrix.add(0, 0)
        summary = compute_report(matrix, ["Sports", "Finance"]).summary()
        assert "Overall precision: 100.00% (1/1)" in summary
        assert "n/a" in summary
        assert "Finance" in summary
