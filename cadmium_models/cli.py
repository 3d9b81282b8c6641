"""Command-line entrypoint: ``cadmium-models train`` and ``cadmium-models test``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from cadmium_models import VERSION
from cadmium_models.classifier_training.exporter import load_classifier
from cadmium_models.classifier_training.pipeline import run_training
from cadmium_models.classifier_training.utils.config import Config, load_config
from cadmium_models.errors import CadmiumModelsError
from cadmium_models.log_utils import get_logger, setup_logging


LOGGER = get_logger(__name__)

SAMPLE_SENTENCES = [
    "I absolutely love this new feature! It's amazing!",
    "This is the worst experience I've ever had.",
    "Just had lunch. It was okay.",
    "Can't wait for the weekend! Going to be so much fun!",
    "My car broke down again. So frustrated right now.",
]

USAGE = f"""Cadmium Models CLI v{VERSION}

Usage: cadmium-models <command> [options]

Commands:
  train <data_file> <output_name>    Train a new model
  test <model_path>                  Test a trained model
  help, -h, --help                   Show this help message

Examples:
  cadmium-models train training_data.txt sentiment_twitter
  cadmium-models test models/sentiment/sentiment_twitter.model
"""


def print_usage() -> None:
    print(USAGE)


def parse_train_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for the ``train`` command."""

    parser = argparse.ArgumentParser(prog="cadmium-models train", description="Train a new model.")
    parser.add_argument("data_file", nargs="?", default=None, help="Tab-separated training data")
    parser.add_argument("output_name", nargs="?", default=None, help="Base name of the exported model")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory for exported artifacts")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the train/test shuffle")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level")
    return parser.parse_args(argv)


def parse_test_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for the ``test`` command."""

    parser = argparse.ArgumentParser(prog="cadmium-models test", description="Test a trained model.")
    parser.add_argument("model_path", help="Path to a .model or .model.json artifact")
    parser.add_argument(
        "--text",
        action="append",
        default=None,
        help="Sentence to classify; repeat for several (defaults to built-in samples)",
    )
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return parser.parse_args(argv)


def build_train_config(args: argparse.Namespace) -> Config:
    """Merge CLI overrides on top of the YAML config (or defaults)."""

    cfg = load_config(args.config) if args.config else Config()

    if args.data_file:
        cfg.data.data_file = args.data_file
    if args.output_name:
        cfg.export.output_name = args.output_name
    if args.output_dir:
        cfg.export.output_dir = args.output_dir
    if args.seed is not None:
        cfg.data.seed = args.seed
    if args.log_level:
        cfg.log_level = args.log_level

    cfg.validate()
    return cfg


def run_train(argv: Sequence[str]) -> int:
    args = parse_train_args(argv)
    setup_logging(args.log_level or "INFO")

    try:
        cfg = build_train_config(args)
    except (OSError, ValueError, TypeError) as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 1
    logging.getLogger().setLevel(getattr(logging, cfg.log_level, logging.INFO))

    LOGGER.info("Starting model training")
    try:
        run = run_training(cfg)
    except CadmiumModelsError as exc:
        LOGGER.error("Training failed: %s", exc)
        return 1

    LOGGER.info("Training complete. Generated files:")
    for path in (run.artifacts.model_path, run.artifacts.json_path, run.artifacts.metadata_path):
        LOGGER.info("  - %s", path)
    if run.artifacts.plot_path is not None:
        LOGGER.info("  - %s", run.artifacts.plot_path)

    return 0


def run_test(argv: Sequence[str]) -> int:
    args = parse_test_args(argv)
    setup_logging(args.log_level)

    LOGGER.info("Loading model %s", args.model_path)
    try:
        classifier = load_classifier(args.model_path)
    except CadmiumModelsError as exc:
        LOGGER.error("Could not load model: %s", exc)
        return 1

    LOGGER.info("Vocabulary size: %s", classifier.vocabulary_size)
    LOGGER.info("Total documents: %s", classifier.total_documents)
    LOGGER.info("Categories: %s", ", ".join(classifier.categories))

    sentences: List[str] = args.text or SAMPLE_SENTENCES
    for text in sentences:
        scores = classifier.classify(text)
        top_category = classifier.classify_category(text)
        LOGGER.info('"%s" -> %s (confidence: %s%%)', text, top_category, round(scores[top_category], 2))

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print_usage()
        return 1

    command, rest = args[0], args[1:]
    if command == "train":
        return run_train(rest)
    if command == "test":
        return run_test(rest)
    if command in {"-h", "--help", "help"}:
        print_usage()
        return 0

    print(f"Unknown command: {command}\n")
    print_usage()
    return 1


if __name__ == "__main__":
    sys.exit(main())
