"""Entrypoint for training a tab-separated text classifier.

Usage: python train_classifier.py <training_data.txt> <output_name> [--config CONFIG]
"""
from __future__ import annotations

import sys

from cadmium_models.cli import run_train


def main():
    """Train, evaluate, and export a model from the command line."""

    sys.exit(run_train(sys.argv[1:]))


if __name__ == "__main__":
    main()
