"""Shared pytest fixtures for cadmium_models tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from cadmium_models.classifier import BayesClassifier
from cadmium_models.classifier_training.utils.config import Config

# ============================================================================
# Data Fixtures
# ============================================================================

SENTIMENT_LINES = [
    "I love this phone\tpos",
    "What a wonderful day\tpos",
    "Absolutely fantastic service\tpos",
    "I love the new design\tpos",
    "Great movie, loved it\tpos",
    "I hate waiting in line\tneg",
    "This is a terrible product\tneg",
    "Worst service ever\tneg",
    "I hate this weather\tneg",
    "Awful, broken and slow\tneg",
]


@pytest.fixture
def write_data(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write raw text to a file under ``tmp_path`` and return its path."""

    def _write(content: str, name: str = "training_data.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sentiment_lines() -> List[str]:
    return list(SENTIMENT_LINES)


@pytest.fixture
def sentiment_file(write_data, sentiment_lines) -> Path:
    return write_data("\n".join(sentiment_lines) + "\n")


# ============================================================================
# Classifier Fixtures
# ============================================================================


@pytest.fixture
def trained_classifier(sentiment_lines) -> BayesClassifier:
    """Classifier trained on every sentiment line."""

    classifier = BayesClassifier()
    for line in sentiment_lines:
        text, category = line.split("\t")
        classifier.train(text, category)
    return classifier


class FixedPermutation:
    """Stand-in for ``numpy.random.Generator`` returning a preset order."""

    def __init__(self, order):
        self.order = list(order)

    def permutation(self, n: int) -> np.ndarray:
        assert n == len(self.order)
        return np.asarray(self.order)


@pytest.fixture
def fixed_permutation():
    return FixedPermutation


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def config(tmp_path: Path, sentiment_file: Path) -> Config:
    cfg = Config()
    cfg.data.data_file = str(sentiment_file)
    cfg.data.seed = 13
    cfg.training.progress = False
    cfg.export.output_dir = str(tmp_path / "out")
    cfg.export.output_name = "sentiment_test"
    cfg.validate()
    return cfg
