"""Error types raised across the training harness."""
from __future__ import annotations


class CadmiumModelsError(Exception):
    """Base class for harness errors."""


class ResourceUnavailable(CadmiumModelsError):
    """An input file is missing, unreadable, or not valid UTF-8."""


class MalformedRecord(CadmiumModelsError):
    """A training line does not contain at least a text and a category field."""


class EmptyTestSet(CadmiumModelsError):
    """Evaluation was requested over zero examples."""


class SerializationFailure(CadmiumModelsError):
    """The classifier state could not be encoded or decoded."""


class WriteFailure(CadmiumModelsError):
    """An artifact could not be written to disk."""


__all__ = [
    "CadmiumModelsError",
    "ResourceUnavailable",
    "MalformedRecord",
    "EmptyTestSet",
    "SerializationFailure",
    "WriteFailure",
]
