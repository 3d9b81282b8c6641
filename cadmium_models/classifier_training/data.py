"""Loading and splitting of tab-separated labeled text."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from cadmium_models.errors import MalformedRecord, ResourceUnavailable
from cadmium_models.log_utils import get_logger


LOGGER = get_logger(__name__)

FIELD_DELIMITER = "\t"
DEFAULT_TRAIN_FRACTION = 0.8


@dataclass(frozen=True)
class LabeledExample:
    """A single training line: free text plus the category in its last field."""

    text: str
    category: str


@dataclass
class Split:
    """Disjoint training and held-out partitions of a dataset."""

    train: List[LabeledExample] = field(default_factory=list)
    test: List[LabeledExample] = field(default_factory=list)


def parse_line(line: str) -> LabeledExample:
    """Parse one line into a :class:`LabeledExample`.

    The category is the last tab-separated field; any earlier fields are
    joined back together with tabs to form the text.

    Raises:
        MalformedRecord: If the line has fewer than two fields.
    """

    parts = line.split(FIELD_DELIMITER)
    if len(parts) < 2:
        raise MalformedRecord(f"Expected at least 2 tab-separated fields, got {len(parts)}")

    return LabeledExample(text=FIELD_DELIMITER.join(parts[:-1]), category=parts[-1])


def load_examples(path: Union[str, Path]) -> List[LabeledExample]:
    """Read every well-formed example from a UTF-8, tab-separated file.

    Blank lines are ignored and lines without a tab are skipped; both are
    reported in the log but never raised.

    Raises:
        ResourceUnavailable: If the file is missing, unreadable, or not UTF-8.
    """

    examples: List[LabeledExample] = []
    skipped = 0

    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line_number, raw_line in enumerate(fh, start=1):
                line = raw_line.rstrip("\r\n")
                if not line.strip():
                    continue

                try:
                    examples.append(parse_line(line))
                except MalformedRecord as exc:
                    skipped += 1
                    LOGGER.debug("Skipping line %s of %s: %s", line_number, path, exc)
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceUnavailable(f"Cannot read training data {path}: {exc}") from exc

    if skipped:
        LOGGER.warning("Skipped %s malformed line(s) in %s", skipped, path)

    return examples


def split_dataset(
    examples: List[LabeledExample],
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Split:
    """Shuffle ``examples`` uniformly and cut them into train/test partitions.

    The first ``floor(train_fraction * n)`` shuffled examples form the
    training set. Pass ``seed`` (or a ready ``rng``) for a reproducible split.
    """

    if not 0.0 <= train_fraction <= 1.0:
        raise ValueError("train_fraction must be within [0.0, 1.0]")

    generator = rng if rng is not None else np.random.default_rng(seed)
    order = generator.permutation(len(examples))
    shuffled = [examples[int(idx)] for idx in order]

    split_index = int(math.floor(train_fraction * len(shuffled)))

    return Split(train=shuffled[:split_index], test=shuffled[split_index:])


__all__ = [
    "FIELD_DELIMITER",
    "DEFAULT_TRAIN_FRACTION",
    "LabeledExample",
    "Split",
    "parse_line",
    "load_examples",
    "split_dataset",
]
