"""Model serialization and ``metadata.yml`` generation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import matplotlib.pyplot as plt
import yaml

from cadmium_models.classifier import BayesClassifier, TextClassifier
from cadmium_models.classifier_training.metrics import EvaluationReport, plot_confusion_matrix
from cadmium_models.classifier_training.trainer import TrainingResult
from cadmium_models.classifier_training.utils.config import ExportConfig, MetadataConfig
from cadmium_models.classifier_training.utils.training import write_atomic
from cadmium_models.errors import ResourceUnavailable, SerializationFailure, WriteFailure
from cadmium_models.log_utils import get_logger


LOGGER = get_logger(__name__)

METRIC_DECIMALS = 4
DURATION_DECIMALS = 2
BINARY_SUFFIX = ".model"
JSON_SUFFIX = ".model.json"


@dataclass(frozen=True)
class ExportedArtifacts:
    model_path: Path
    json_path: Path
    metadata_path: Path
    model_bytes: int
    plot_path: Optional[Path] = None


def _round_metrics(values: Dict[str, float]) -> Dict[str, float]:
    return {category: round(float(value), METRIC_DECIMALS) for category, value in values.items()}


def build_metadata(
    classifier: TextClassifier,
    report: EvaluationReport,
    training: TrainingResult,
    dataset_size: int,
    test_split: float,
    metadata: MetadataConfig,
    now: Optional[datetime] = None,
    output_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble the metadata document for a finished training run.

    ``name`` falls back to ``output_name`` when the metadata config leaves it
    unset. Categories are the union of what the classifier learned and what
    was evaluated, sorted. Metric maps are keyed by the evaluated categories.
    Timestamps are rendered in UTC.
    """

    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)

    trained_on: Dict[str, Any] = {"dataset": metadata.dataset, "size": int(dataset_size)}
    if metadata.source:
        trained_on["source"] = metadata.source
    trained_on["license"] = metadata.dataset_license

    document: Dict[str, Any] = {
        "name": metadata.name or output_name,
        "version": metadata.version,
        "description": metadata.description,
        "model_type": metadata.model_type,
        "trained_on": [trained_on],
        "categories": sorted(set(classifier.categories) | set(report.categories)),
        "vocabulary_size": int(classifier.vocabulary_size),
        "training_documents": int(training.documents),
        "accuracy": round(report.accuracy, METRIC_DECIMALS),
        "precision": _round_metrics(report.precision),
        "recall": _round_metrics(report.recall),
        "f1_score": _round_metrics(report.f1),
        "language": metadata.language,
        "license": metadata.license,
        "author": metadata.author,
        "created_at": now.strftime("%Y-%m-%d"),
        "cadmium_version": metadata.cadmium_version,
    }

    if metadata.tags:
        document["tags"] = list(metadata.tags)

    document["training_config"] = {
        "test_split": round(float(test_split), METRIC_DECIMALS),
        "training_time_seconds": round(training.duration_seconds, DURATION_DECIMALS),
        "trained_at": now.strftime("%Y-%m-%dT%H:%M:%SZ"),
    }

    return document


def render_metadata(document: Dict[str, Any]) -> str:
    return yaml.safe_dump(
        document,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        explicit_start=True,
    )


def _serialize(classifier: TextClassifier) -> tuple[bytes, str]:
    try:
        return classifier.to_binary(), classifier.to_json()
    except Exception as exc:
        raise SerializationFailure(f"Failed to serialize classifier: {exc}") from exc


def _write(data: Union[bytes, str], path: Path) -> int:
    try:
        return write_atomic(data, path)
    except OSError as exc:
        raise WriteFailure(f"Failed to write {path}: {exc}") from exc


def export_model(
    classifier: TextClassifier,
    report: EvaluationReport,
    training: TrainingResult,
    dataset_size: int,
    test_split: float,
    export_cfg: ExportConfig,
    metadata_cfg: MetadataConfig,
    now: Optional[datetime] = None,
) -> ExportedArtifacts:
    """Write the binary model, its JSON twin, and ``metadata.yml``.

    Both serializations are produced in memory before anything touches the
    disk, so a serialization error leaves no artifacts behind.

    Raises:
        SerializationFailure: If the classifier cannot be serialized.
        WriteFailure: If any artifact cannot be written.
    """

    model_bytes, model_json = _serialize(classifier)

    output_dir = Path(export_cfg.output_dir)
    model_path = output_dir / f"{export_cfg.output_name}{BINARY_SUFFIX}"
    json_path = output_dir / f"{export_cfg.output_name}{JSON_SUFFIX}"
    metadata_path = output_dir / export_cfg.metadata_file

    size = _write(model_bytes, model_path)
    LOGGER.info("Model exported to %s (%s bytes)", model_path, size)

    _write(model_json, json_path)
    LOGGER.info("JSON fallback exported to %s", json_path)

    document = build_metadata(
        classifier,
        report,
        training,
        dataset_size=dataset_size,
        test_split=test_split,
        metadata=metadata_cfg,
        now=now,
        output_name=export_cfg.output_name,
    )
    _write(render_metadata(document), metadata_path)
    LOGGER.info("Metadata saved to %s", metadata_path)

    plot_path: Optional[Path] = None
    if export_cfg.plot_confusion_matrix:
        plot_path = output_dir / f"{export_cfg.output_name}.confusion_matrix.png"
        fig = plot_confusion_matrix(report.matrix)
        try:
            fig.savefig(plot_path)
        except OSError as exc:
            raise WriteFailure(f"Failed to write {plot_path}: {exc}") from exc
        finally:
            plt.close(fig)
        LOGGER.info("Confusion matrix plot saved to %s", plot_path)

    return ExportedArtifacts(
        model_path=model_path,
        json_path=json_path,
        metadata_path=metadata_path,
        model_bytes=size,
        plot_path=plot_path,
    )


def load_classifier(path: Union[str, Path]) -> BayesClassifier:
    """Load a classifier from a ``.model`` or ``.model.json`` artifact.

    Raises:
        ResourceUnavailable: If the file cannot be read.
        SerializationFailure: If its contents are not a valid classifier state.
    """

    path = Path(path)
    is_json = path.suffix.lower() == ".json"

    try:
        data = path.read_text(encoding="utf-8") if is_json else path.read_bytes()
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceUnavailable(f"Cannot read model {path}: {exc}") from exc

    try:
        if is_json:
            return BayesClassifier.from_json(data)  # type: ignore[arg-type]
        return BayesClassifier.from_binary(data)  # type: ignore[arg-type]
    except ValueError as exc:
        raise SerializationFailure(f"Cannot load model {path}: {exc}") from exc


__all__ = [
    "ExportedArtifacts",
    "build_metadata",
    "render_metadata",
    "export_model",
    "load_classifier",
]
