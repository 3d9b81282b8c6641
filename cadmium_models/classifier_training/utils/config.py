"""Configuration utilities for training runs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class DataConfig:
    data_file: str = "training_data.txt"
    train_fraction: float = 0.8
    seed: Optional[int] = None

    def validate(self) -> None:
        if not self.data_file:
            raise ValueError("data_file must be provided")
        if not 0.0 <= self.train_fraction <= 1.0:
            raise ValueError("train_fraction must be within [0.0, 1.0]")

    @property
    def test_split(self) -> float:
        return round(1.0 - self.train_fraction, 4)


@dataclass
class TrainingConfig:
    alpha: float = 1.0
    progress: bool = True

    def validate(self) -> None:
        if self.alpha <= 0:
            raise ValueError("alpha must be positive")


@dataclass
class ExportConfig:
    output_name: str = "sentiment_twitter"
    output_dir: str = "."
    metadata_file: str = "metadata.yml"
    plot_confusion_matrix: bool = False

    def validate(self) -> None:
        if not self.output_name:
            raise ValueError("output_name must be provided")
        if not self.metadata_file:
            raise ValueError("metadata_file must be provided")


@dataclass
class MetadataConfig:
    """Descriptive fields copied verbatim into ``metadata.yml``."""

    name: Optional[str] = None
    version: str = "1.0.0"
    description: str = "Twitter sentiment analysis model trained on Sentiment140 data"
    model_type: str = "Bayes"
    dataset: str = "Sentiment140"
    source: Optional[str] = "http://thinknook.com/wp-content/uploads/2012/09/Sentiment-Analysis-Dataset.zip"
    dataset_license: str = "Other"
    language: str = "en"
    license: str = "Other"
    author: str = "Cadmium Contributors"
    cadmium_version: str = ">= 0.2.0"
    tags: List[str] = field(default_factory=lambda: ["sentiment", "social-media", "twitter", "english"])

    def validate(self) -> None:
        if self.name is not None and not self.name:
            raise ValueError("metadata name must not be empty; omit it to use the output name")
        if not isinstance(self.tags, list):
            raise ValueError("metadata tags must be a list")


@dataclass
class Config:
    data: DataConfig = field(default_factory=DataConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    log_level: str = "INFO"

    def validate(self) -> None:
        self.data.validate()
        self.training.validate()
        self.export.validate()
        self.metadata.validate()
        self.log_level = self.log_level.upper()


def load_config(path: str) -> Config:
    """Read a YAML config file; absent sections fall back to defaults."""

    with open(path, "r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")

    def _load(section, cls):
        values = raw.get(section) or {}
        if not isinstance(values, dict):
            raise ValueError(f"Configuration block '{section}' must be a mapping")
        return cls(**values)

    cfg = Config(
        data=_load("data", DataConfig),
        training=_load("training", TrainingConfig),
        export=_load("export", ExportConfig),
        metadata=_load("metadata", MetadataConfig),
        log_level=raw.get("log_level", "INFO"),
    )
    cfg.validate()

    return cfg


__all__ = [
    "Config",
    "DataConfig",
    "TrainingConfig",
    "ExportConfig",
    "MetadataConfig",
    "load_config",
]
