"""Shared test fixtures for news-bayes tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from news_bayes.models import Document

WORLD_DOCS = [
    ("Leaders meet at summit", "Presidents and ministers discuss peace talks in Geneva."),
    ("Election results announced", "The parliament vote ends with a narrow majority."),
    ("Ceasefire agreed", "Rebels and government troops sign a peace accord."),
]

SPORTS_DOCS = [
    ("Team wins championship", "The striker scored twice as the team won the final."),
    ("Coach resigns after defeat", "The league season ends with the coach leaving the club."),
    ("Record broken at stadium", "The sprinter won gold and broke the stadium record."),
]

BUSINESS_DOCS = [
    ("Stocks rally on earnings", "Shares climbed as quarterly profits beat forecasts."),
    ("Oil prices rise", "Crude futures and energy stocks gained on supply worries."),
    ("Bank cuts rates", "The central bank lowered interest rates to support markets."),
]

CLASS_NAMES = ["World", "Sports", "Business"]


@pytest.fixture
def class_names() -> list[str]:
    return list(CLASS_NAMES)


@pytest.fixture
def news_documents() -> list[Document]:
    """Small three-class corpus with mostly distinct vocabulary."""
    docs = []
    for label, group in enumerate([WORLD_DOCS, SPORTS_DOCS, BUSINESS_DOCS]):
        docs.extend(Document(label=label, title=t, description=d) for t, d in group)
    return docs


@pytest.fixture
def separable_documents() -> tuple[list[Document], list[Document]]:
    """Two classes with no shared vocabulary: (training, held-out)."""
    train = [
        Document(0, "sports", "sports sports"),
        Document(0, "sports match", "match goal sports"),
        Document(0, "goal", "match"),
        Document(1, "finance", "finance finance"),
        Document(1, "finance market", "market stock finance"),
        Document(1, "stock", "market"),
    ]
    held_out = [
        Document(0, "goal", "sports match"),
        Document(0, "match", "goal goal"),
        Document(1, "stock", "finance market"),
        Document(1, "market", "stock stock"),
    ]
    return train, held_out


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """Directory with train.csv, test.csv and classes.txt in AG News layout."""
    train_rows = ['"Class Index","Title","Description"']
    for label, group in enumerate([WORLD_DOCS, SPORTS_DOCS, BUSINESS_DOCS], start=1):
        train_rows.extend(f'"{label}","{t}","{d}"' for t, d in group)
    (tmp_path / "train.csv").write_text("\n".join(train_rows) + "\n", encoding="utf-8")

    test_rows = [
        '"Class Index","Title","Description"',
        '"1","Peace talks","Ministers discuss peace."',
        '"2","Team won","The team won the final."',
        '"3","Stocks climbed","Shares and stocks gained."',
    ]
    (tmp_path / "test.csv").write_text("\n".join(test_rows) + "\n", encoding="utf-8")

    (tmp_path / "classes.txt").write_text("\n".join(CLASS_NAMES) + "\n", encoding="utf-8")
    return tmp_path
