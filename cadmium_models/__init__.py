"""Train, evaluate, and export tab-separated text classifiers."""

from cadmium_models.classifier import BayesClassifier, TextClassifier
from cadmium_models.errors import (
    CadmiumModelsError,
    EmptyTestSet,
    MalformedRecord,
    ResourceUnavailable,
    SerializationFailure,
    WriteFailure,
)

VERSION = "0.1.0"

__all__ = [
    "VERSION",
    "BayesClassifier",
    "TextClassifier",
    "CadmiumModelsError",
    "EmptyTestSet",
    "MalformedRecord",
    "ResourceUnavailable",
    "SerializationFailure",
    "WriteFailure",
]
