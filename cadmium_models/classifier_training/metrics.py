"""Confusion matrix, per-category metrics, and plotting helpers."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from tqdm.auto import tqdm

from cadmium_models.classifier import TextClassifier
from cadmium_models.classifier_training.data import LabeledExample
from cadmium_models.errors import EmptyTestSet


class ConfusionMatrix:
    """Counts of (actual, predicted) category pairs; absent pairs read as zero."""

    def __init__(self):
        self._rows: Dict[str, Counter] = {}
        self._columns: Dict[str, None] = {}

    def add(self, actual: str, predicted: str, count: int = 1) -> None:
        if count < 0:
            raise ValueError("count must be non-negative")

        self._rows.setdefault(actual, Counter())[predicted] += count
        self._columns.setdefault(predicted, None)

    def count(self, actual: str, predicted: str) -> int:
        row = self._rows.get(actual)
        return row[predicted] if row is not None else 0

    @property
    def categories(self) -> List[str]:
        """Actual categories, in the order they were first seen."""

        return list(self._rows)

    @property
    def predicted_categories(self) -> List[str]:
        return list(self._columns)

    @property
    def total(self) -> int:
        return sum(sum(row.values()) for row in self._rows.values())

    def __iter__(self) -> Iterator[Tuple[str, str, int]]:
        for actual, row in self._rows.items():
            for predicted, count in row.items():
                yield actual, predicted, count

    def true_positives(self, category: str) -> int:
        return self.count(category, category)

    def false_positives(self, category: str) -> int:
        """Examples of other actual categories that were predicted as ``category``."""

        return sum(row[category] for actual, row in self._rows.items() if actual != category)

    def false_negatives(self, category: str) -> int:
        """Examples of ``category`` that were predicted as anything else."""

        row = self._rows.get(category)
        if row is None:
            return 0

        return sum(count for predicted, count in row.items() if predicted != category)

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {actual: dict(row) for actual, row in self._rows.items()}

    def to_frame(self) -> pd.DataFrame:
        """Dense table with actual categories as rows and predictions as columns.

        Columns list the actual categories first, followed by any category that
        was only ever predicted.
        """

        columns = self.categories + [c for c in self.predicted_categories if c not in self._rows]
        data = [[self.count(actual, predicted) for predicted in columns] for actual in self.categories]
        frame = pd.DataFrame(data, index=self.categories, columns=columns, dtype="int64")
        frame.index.name = "actual"
        frame.columns.name = "predicted"

        return frame


@dataclass(frozen=True)
class CategoryMetrics:
    precision: float
    recall: float
    f1: float


@dataclass
class EvaluationReport:
    """Accuracy and per-category metrics for one evaluation pass."""

    matrix: ConfusionMatrix
    correct: int
    total: int
    per_category: Dict[str, CategoryMetrics] = field(default_factory=dict)

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            raise EmptyTestSet("Accuracy is undefined for an empty test set")
        return self.correct / self.total

    @property
    def categories(self) -> List[str]:
        return list(self.per_category)

    @property
    def precision(self) -> Dict[str, float]:
        return {c: m.precision for c, m in self.per_category.items()}

    @property
    def recall(self) -> Dict[str, float]:
        return {c: m.recall for c, m in self.per_category.items()}

    @property
    def f1(self) -> Dict[str, float]:
        return {c: m.f1 for c, m in self.per_category.items()}


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or ``0.0`` when the denominator is zero."""

    if denominator == 0:
        return 0.0

    return numerator / denominator


def compute_category_metrics(tp: int, fp: int, fn: int) -> CategoryMetrics:
    """Precision, recall, and F1 from raw counts.

    A zero denominator yields ``0.0`` for that metric, so a category that was
    never predicted reports zero precision rather than an undefined value.
    """

    precision = safe_ratio(tp, tp + fp)
    recall = safe_ratio(tp, tp + fn)
    f1 = safe_ratio(2 * precision * recall, precision + recall)

    return CategoryMetrics(precision=precision, recall=recall, f1=f1)


def build_report(matrix: ConfusionMatrix) -> EvaluationReport:
    """Derive accuracy inputs and per-category metrics from a filled matrix."""

    total = matrix.total
    if total == 0:
        raise EmptyTestSet("Cannot compute metrics from an empty confusion matrix")

    per_category = {
        category: compute_category_metrics(
            matrix.true_positives(category),
            matrix.false_positives(category),
            matrix.false_negatives(category),
        )
        for category in matrix.categories
    }
    correct = sum(matrix.true_positives(category) for category in matrix.categories)

    return EvaluationReport(matrix=matrix, correct=correct, total=total, per_category=per_category)


def evaluate(
    classifier: TextClassifier,
    examples: Sequence[LabeledExample],
    progress: bool = False,
) -> EvaluationReport:
    """Predict every held-out example and summarize the results.

    Raises:
        EmptyTestSet: If ``examples`` is empty.
    """

    if not examples:
        raise EmptyTestSet("The test set is empty; accuracy is undefined")

    matrix = ConfusionMatrix()
    for example in tqdm(examples, desc="Evaluating", total=len(examples), disable=not progress):
        matrix.add(example.category, classifier.classify_category(example.text))

    return build_report(matrix)


def plot_confusion_matrix(matrix: ConfusionMatrix) -> plt.Figure:  # type: ignore
    """Plot raw confusion matrix counts for visualization."""

    frame = matrix.to_frame()
    cm = frame.to_numpy()
    row_names = list(frame.index)
    column_names = list(frame.columns)

    fig, ax = plt.subplots(figsize=(6, 5))
    im = ax.imshow(cm, interpolation="nearest", cmap=plt.cm.Blues)
    ax.figure.colorbar(im, ax=ax)

    ax.set_xticks(np.arange(len(column_names)))
    ax.set_xticklabels(column_names, rotation=45, ha="right")
    ax.set_yticks(np.arange(len(row_names)))
    ax.set_yticklabels(row_names)

    ax.set_ylabel("True label")
    ax.set_xlabel("Predicted label")
    ax.set_title("Confusion Matrix")

    thresh = cm.max() / 2.0 if cm.size > 0 else 0

    for i in range(cm.shape[0]):
        for j in range(cm.shape[1]):
            val = cm[i, j]
            ax.text(
                j,
                i,
                format(int(val), "d"),
                ha="center",
                va="center",
                color="white" if val > thresh else "black",
            )

    fig.tight_layout()
    return fig


__all__ = [
    "ConfusionMatrix",
    "CategoryMetrics",
    "EvaluationReport",
    "safe_ratio",
    "compute_category_metrics",
    "build_report",
    "evaluate",
    "plot_confusion_matrix",
]
