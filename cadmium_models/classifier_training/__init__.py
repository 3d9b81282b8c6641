"""Classifier training package consolidating data, metrics, training, and export."""

from cadmium_models.classifier_training.data import (
    LabeledExample,
    Split,
    load_examples,
    parse_line,
    split_dataset,
)
from cadmium_models.classifier_training.exporter import (
    ExportedArtifacts,
    build_metadata,
    export_model,
    load_classifier,
)
from cadmium_models.classifier_training.metrics import (
    CategoryMetrics,
    ConfusionMatrix,
    EvaluationReport,
    compute_category_metrics,
    evaluate,
    plot_confusion_matrix,
)
from cadmium_models.classifier_training.pipeline import TrainingRun, run_training
from cadmium_models.classifier_training.trainer import TrainingResult, train_classifier

__all__ = [
    "LabeledExample",
    "Split",
    "load_examples",
    "parse_line",
    "split_dataset",
    "ExportedArtifacts",
    "build_metadata",
    "export_model",
    "load_classifier",
    "CategoryMetrics",
    "ConfusionMatrix",
    "EvaluationReport",
    "compute_category_metrics",
    "evaluate",
    "plot_confusion_matrix",
    "TrainingRun",
    "run_training",
    "TrainingResult",
    "train_classifier",
]
