"""Sequential training loop over labeled examples."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Sequence

from tqdm.auto import tqdm

from cadmium_models.classifier import TextClassifier
from cadmium_models.classifier_training.data import LabeledExample
from cadmium_models.log_utils import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class TrainingResult:
    """Outcome of a training pass."""

    documents: int
    duration_seconds: float


def train_classifier(
    classifier: TextClassifier,
    examples: Sequence[LabeledExample],
    progress: bool = True,
) -> TrainingResult:
    """Feed every example to ``classifier.train`` in order and time the pass.

    The classifier is mutated in place. Errors raised by the classifier are
    not caught: a failed training call aborts the run.
    """

    LOGGER.info("Training on %s examples", len(examples))
    start = time.monotonic()

    for example in tqdm(examples, desc="Training", total=len(examples), disable=not progress):
        classifier.train(example.text, example.category)

    duration = time.monotonic() - start
    LOGGER.info("Training completed in %.2f seconds", duration)

    return TrainingResult(documents=len(examples), duration_seconds=duration)


__all__ = ["TrainingResult", "train_classifier"]
