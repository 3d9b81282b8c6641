"""End-to-end training run: load, split, train, evaluate, export."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import numpy as np

from cadmium_models.classifier import BayesClassifier, TextClassifier
from cadmium_models.classifier_training.data import LabeledExample, Split, load_examples, split_dataset
from cadmium_models.classifier_training.exporter import ExportedArtifacts, export_model
from cadmium_models.classifier_training.metrics import EvaluationReport, evaluate
from cadmium_models.classifier_training.trainer import TrainingResult, train_classifier
from cadmium_models.classifier_training.utils.config import Config
from cadmium_models.errors import EmptyTestSet
from cadmium_models.log_utils import get_logger


LOGGER = get_logger(__name__)


@dataclass
class TrainingRun:
    examples: List[LabeledExample]
    split: Split
    classifier: TextClassifier
    training: TrainingResult
    report: EvaluationReport
    artifacts: ExportedArtifacts


def _percent(value: float) -> float:
    return round(value * 100, 2)


def log_report(report: EvaluationReport) -> None:
    """Log accuracy, per-category metrics, and the confusion matrix."""

    LOGGER.info("Accuracy: %s%% (%s/%s)", _percent(report.accuracy), report.correct, report.total)

    for category, metrics in report.per_category.items():
        LOGGER.info(
            "%s: precision=%s%% recall=%s%% f1=%s%%",
            category,
            _percent(metrics.precision),
            _percent(metrics.recall),
            _percent(metrics.f1),
        )

    LOGGER.info("Confusion matrix:\n%s", report.matrix.to_frame().to_string())


def run_training(
    cfg: Config,
    classifier: Optional[TextClassifier] = None,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> TrainingRun:
    """Run the whole harness once and return every intermediate result.

    Raises:
        ResourceUnavailable: If the data file cannot be read.
        EmptyTestSet: If the split leaves nothing to evaluate on.
        SerializationFailure: If the trained classifier cannot be serialized.
        WriteFailure: If an artifact cannot be written.
    """

    LOGGER.info("Loading training data from %s", cfg.data.data_file)
    examples = load_examples(cfg.data.data_file)
    LOGGER.info("Total samples: %s", len(examples))

    distribution = Counter(example.category for example in examples)
    for category, count in sorted(distribution.items()):
        LOGGER.debug("  %s: %s", category, count)

    split = split_dataset(examples, cfg.data.train_fraction, seed=cfg.data.seed, rng=rng)
    LOGGER.info("Training samples: %s | Test samples: %s", len(split.train), len(split.test))

    if not split.test:
        raise EmptyTestSet(
            f"No test examples after splitting {len(examples)} samples "
            f"with train_fraction={cfg.data.train_fraction}"
        )

    if classifier is None:
        classifier = BayesClassifier(alpha=cfg.training.alpha)

    training = train_classifier(classifier, split.train, progress=cfg.training.progress)

    LOGGER.info("Evaluating on %s test samples", len(split.test))
    report = evaluate(classifier, split.test, progress=cfg.training.progress)
    log_report(report)

    artifacts = export_model(
        classifier,
        report,
        training,
        dataset_size=len(examples),
        test_split=cfg.data.test_split,
        export_cfg=cfg.export,
        metadata_cfg=cfg.metadata,
        now=now,
    )

    return TrainingRun(
        examples=examples,
        split=split,
        classifier=classifier,
        training=training,
        report=report,
        artifacts=artifacts,
    )


__all__ = ["TrainingRun", "log_report", "run_training"]
