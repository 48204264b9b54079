"""Readers for the news dataset tables.

Two CSV layouts are supported:

- Document tables (training and test) with a header row and columns
  ``Class Index``, ``Title``, ``Description``. Header names are matched
  ignoring case, spaces and underscores; when they are not recognized
  the first three columns are used in that order.
- The class-name table: one display name per row, no header. Row ``i``
  names class id ``i``.
"""

from __future__ import annotations

import csv
import logging
import re
from collections.abc import Iterator
from pathlib import Path

from .exceptions import DatasetError
from .models import Document

logger = logging.getLogger(__name__)

_COLUMNS = ("classindex", "title", "description")


def _normalize_header(name: str) -> str:
    return re.sub(r"[\s_]+", "", name).lower()


def _validate_path(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise DatasetError(f"Not a file: {path}")


def _column_positions(header: list[str]) -> tuple[int, int, int]:
    normalized = [_normalize_header(name) for name in header]
    if all(column in normalized for column in _COLUMNS):
        return tuple(normalized.index(column) for column in _COLUMNS)  # type: ignore[return-value]
    logger.warning(
        "Line 1 %r is not a recognized header but was skipped as one; "
        "reading label, title, description from columns 1-3",
        header,
    )
    return (0, 1, 2)


def iter_documents(path: str | Path) -> Iterator[Document]:
    """Lazily read labeled documents from a CSV file.

    Args:
        path: CSV file with a header row.

    Yields:
        Documents with zero-based labels.

    Raises:
        FileNotFoundError: If the file does not exist.
        DatasetError: If the header is missing or a row is malformed.
    """
    path = Path(path)
    _validate_path(path)

    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            raise DatasetError(f"{path.name}: file is empty, expected a header row")
        label_col, title_col, desc_col = _column_positions(header)
        width = max(label_col, title_col, desc_col) + 1

        for row in reader:
            if not row:
                continue
            line = reader.line_num
            if len(row) < width:
                raise DatasetError(
                    f"{path.name}:{line}: expected at least {width} fields, got {len(row)}"
                )
            try:
                class_index = int(row[label_col].strip())
                document = Document.from_row(class_index, row[title_col], row[desc_col])
            except ValueError as e:
                raise DatasetError(f"{path.name}:{line}: invalid class label: {e}") from e
            yield document


def read_documents(path: str | Path) -> list[Document]:
    """Read every labeled document from a CSV file."""
    documents = list(iter_documents(path))
    logger.info("Read %d documents from %s", len(documents), Path(path).name)
    return documents


def read_class_names(path: str | Path) -> list[str]:
    """Read class display names, one per row, in class-id order.

    Raises:
        FileNotFoundError: If the file does not exist.
        DatasetError: If the file holds no names.
    """
    path = Path(path)
    _validate_path(path)

    with open(path, "r", encoding="utf-8", newline="") as f:
        names = [row[0].strip() for row in csv.reader(f) if row and row[0].strip()]

    if not names:
        raise DatasetError(f"{path.name}: no class names found")
    logger.debug("Class names from %s: %s", path.name, names)
    return names
