"""Multinomial naive Bayes text classifier used by the training harness.

The harness only relies on the :class:`TextClassifier` protocol. ``BayesClassifier``
is the concrete implementation shipped with the package: it keeps plain count
tables (vocabulary, per-category token counts, per-category document counts) so
that its state serializes losslessly, and hands probability estimation to
scikit-learn's ``MultinomialNB``.
"""
from __future__ import annotations

import io
import json
import re
import sys
from collections import Counter
from typing import Any, Dict, List, Optional, Protocol, Set, runtime_checkable

import joblib
import numpy as np
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB


STATE_FORMAT = "cadmium-bayes/1"
TOKEN_PATTERN = re.compile(r"\w+")


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split it into word tokens."""

    return TOKEN_PATTERN.findall(text.lower())


@runtime_checkable
class TextClassifier(Protocol):
    """Operations the harness needs from a trainable text classifier."""

    def train(self, text: str, category: str) -> None: ...

    def classify(self, text: str) -> Dict[str, float]: ...

    def classify_category(self, text: str) -> str: ...

    @property
    def vocabulary_size(self) -> int: ...

    @property
    def total_documents(self) -> int: ...

    @property
    def categories(self) -> List[str]: ...

    def to_binary(self) -> bytes: ...

    def to_json(self) -> str: ...


class BayesClassifier:
    """Incrementally trained multinomial naive Bayes over word counts."""

    def __init__(self, alpha: float = 1.0):
        if alpha <= 0:
            raise ValueError("alpha must be positive")

        self.alpha = float(alpha)
        self._token_counts: Dict[str, Counter] = {}
        self._doc_counts: Counter = Counter()
        self._vocabulary: Set[str] = set()

        self._fitted = False
        self._priors: Optional[np.ndarray] = None
        self._vectorizer: Optional[CountVectorizer] = None
        self._model: Optional[MultinomialNB] = None

    def __repr__(self) -> str:
        return (
            f"BayesClassifier(categories={self.categories}, "
            f"vocabulary_size={self.vocabulary_size}, total_documents={self.total_documents})"
        )

    @property
    def categories(self) -> List[str]:
        return sorted(self._doc_counts)

    @property
    def vocabulary_size(self) -> int:
        return len(self._vocabulary)

    @property
    def total_documents(self) -> int:
        return sum(self._doc_counts.values())

    def train(self, text: str, category: str) -> None:
        """Add one labeled document to the count tables."""

        tokens = tokenize(text)
        self._token_counts.setdefault(category, Counter()).update(tokens)
        self._doc_counts[category] += 1
        self._vocabulary.update(tokens)
        self._fitted = False

    def classify(self, text: str) -> Dict[str, float]:
        """Return a confidence percentage (0-100) for every known category."""

        probabilities = self._predict_proba(text)
        return {category: float(p) * 100.0 for category, p in zip(self.categories, probabilities)}

    def classify_category(self, text: str) -> str:
        """Return the most likely category; ties go to the alphabetically first one."""

        scores = self.classify(text)
        return max(scores, key=scores.__getitem__)

    def _predict_proba(self, text: str) -> np.ndarray:
        self._ensure_fitted()

        if self._model is None or self._vectorizer is None:
            return self._priors  # type: ignore[return-value]

        features = self._vectorizer.transform([text])
        return self._model.predict_proba(features)[0]

    def _ensure_fitted(self) -> None:
        if self._fitted:
            return

        categories = self.categories
        if not categories:
            raise ValueError("Classifier has not been trained on any documents")

        priors = np.asarray([self._doc_counts[c] for c in categories], dtype=np.float64)
        self._priors = priors / priors.sum()

        vocabulary = sorted(self._vocabulary)
        if vocabulary:
            counts = np.asarray(
                [[self._token_counts[c][token] for token in vocabulary] for c in categories],
                dtype=np.float64,
            )
            # One aggregated row per category; priors come from document counts.
            self._model = MultinomialNB(alpha=self.alpha, class_prior=self._priors)
            self._model.fit(counts, categories)
            self._vectorizer = CountVectorizer(analyzer=tokenize, vocabulary=vocabulary)
        else:
            self._model = None
            self._vectorizer = None

        self._fitted = True

    def to_state(self) -> Dict[str, Any]:
        """Return the full classifier state as plain, deterministically ordered data."""

        # Interned strings keep the pickled (binary) form byte-identical for equal states.
        categories = [sys.intern(c) for c in self.categories]
        return {
            "format": STATE_FORMAT,
            "alpha": self.alpha,
            "categories": categories,
            "documents": {c: int(self._doc_counts[c]) for c in categories},
            "token_counts": {
                c: {
                    sys.intern(token): int(n)
                    for token, n in sorted(self._token_counts.get(c, Counter()).items())
                }
                for c in categories
            },
            "vocabulary": [sys.intern(token) for token in sorted(self._vocabulary)],
        }

    @classmethod
    def from_state(cls, state: Dict[str, Any]) -> "BayesClassifier":
        """Rebuild a classifier from :meth:`to_state` output."""

        if not isinstance(state, dict) or state.get("format") != STATE_FORMAT:
            raise ValueError(f"Unsupported classifier state; expected format '{STATE_FORMAT}'")

        try:
            classifier = cls(alpha=state["alpha"])
            for category in state["categories"]:
                documents = int(state["documents"][category])
                if documents < 0:
                    raise ValueError(f"Negative document count for category '{category}'")
                classifier._doc_counts[category] = documents
                classifier._token_counts[category] = Counter(
                    {token: int(n) for token, n in state["token_counts"].get(category, {}).items()}
                )
                classifier._vocabulary.update(classifier._token_counts[category])
            classifier._vocabulary.update(state.get("vocabulary", []))
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed classifier state: {exc}") from exc

        return classifier

    def to_json(self) -> str:
        return json.dumps(self.to_state(), ensure_ascii=False, sort_keys=True, indent=2)

    @classmethod
    def from_json(cls, text: str) -> "BayesClassifier":
        try:
            state = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Classifier JSON is not valid: {exc}") from exc

        return cls.from_state(state)

    def to_binary(self) -> bytes:
        buffer = io.BytesIO()
        joblib.dump(self.to_state(), buffer)
        return buffer.getvalue()

    @classmethod
    def from_binary(cls, data: bytes) -> "BayesClassifier":
        try:
            state = joblib.load(io.BytesIO(data))
        except Exception as exc:
            raise ValueError(f"Classifier binary could not be decoded: {exc}") from exc

        return cls.from_state(state)


__all__ = ["BayesClassifier", "TextClassifier", "tokenize", "STATE_FORMAT"]
