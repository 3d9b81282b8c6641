"""Tests for the naive Bayes classifier and its serialization."""

import json

import pytest

from cadmium_models.classifier import BayesClassifier, TextClassifier, tokenize

HELD_OUT_TEXTS = [
    "I love this",
    "terrible and slow",
    "what a day",
    "nothing known here",
    "hate hate love",
]


def test_tokenize_lowercases_words():
    assert tokenize("I LOVE it, really!") == ["i", "love", "it", "really"]


def test_satisfies_protocol():
    assert isinstance(BayesClassifier(), TextClassifier)


def test_introspection(trained_classifier):
    assert trained_classifier.categories == ["neg", "pos"]
    assert trained_classifier.total_documents == 10
    assert trained_classifier.vocabulary_size == len(trained_classifier.to_state()["vocabulary"])


def test_classify_two_examples():
    classifier = BayesClassifier()
    classifier.train("I love it", "pos")
    classifier.train("I hate it", "neg")

    scores = classifier.classify("I love it")

    assert classifier.classify_category("I love it") == "pos"
    assert scores["pos"] > 50
    assert scores["pos"] == pytest.approx(200 / 3)
    assert sum(scores.values()) == pytest.approx(100.0)


def test_single_category_is_certain():
    classifier = BayesClassifier()
    classifier.train("I love it", "pos")
    classifier.train("I love it", "pos")

    assert classifier.classify("I love it") == {"pos": pytest.approx(100.0)}
    assert classifier.classify_category("anything at all") == "pos"


def test_training_after_classify_refits():
    classifier = BayesClassifier()
    classifier.train("sunny bright", "pos")
    assert classifier.classify_category("gloomy") == "pos"

    classifier.train("gloomy dark", "neg")

    assert classifier.classify_category("gloomy") == "neg"


def test_tokenless_documents_fall_back_to_priors():
    classifier = BayesClassifier()
    classifier.train("!!!", "a")
    classifier.train("???", "a")
    classifier.train("...", "b")

    scores = classifier.classify("anything")

    assert scores["a"] == pytest.approx(200 / 3)
    assert classifier.classify_category("anything") == "a"


def test_ties_go_to_first_category():
    classifier = BayesClassifier()
    classifier.train("same words", "b")
    classifier.train("same words", "a")

    assert classifier.classify_category("same words") == "a"


def test_untrained_classifier_cannot_classify():
    with pytest.raises(ValueError):
        BayesClassifier().classify("hello")


def test_rejects_non_positive_alpha():
    with pytest.raises(ValueError):
        BayesClassifier(alpha=0)


def test_binary_round_trip(trained_classifier):
    restored = BayesClassifier.from_binary(trained_classifier.to_binary())

    assert restored.to_state() == trained_classifier.to_state()
    for text in HELD_OUT_TEXTS:
        assert restored.classify_category(text) == trained_classifier.classify_category(text)
        assert restored.classify(text) == pytest.approx(trained_classifier.classify(text))


def test_json_round_trip(trained_classifier):
    restored = BayesClassifier.from_json(trained_classifier.to_json())

    assert restored.vocabulary_size == trained_classifier.vocabulary_size
    assert restored.total_documents == trained_classifier.total_documents
    for text in HELD_OUT_TEXTS:
        assert restored.classify_category(text) == trained_classifier.classify_category(text)


def test_binary_and_json_forms_agree(trained_classifier):
    from_binary = BayesClassifier.from_binary(trained_classifier.to_binary())
    from_json = BayesClassifier.from_json(trained_classifier.to_json())

    assert from_binary.to_state() == from_json.to_state()


def test_binary_is_byte_stable(trained_classifier):
    assert trained_classifier.to_binary() == trained_classifier.to_binary()
    restored = BayesClassifier.from_binary(trained_classifier.to_binary())
    assert restored.to_binary() == trained_classifier.to_binary()


def test_json_is_human_readable(trained_classifier):
    state = json.loads(trained_classifier.to_json())

    assert state["categories"] == ["neg", "pos"]
    assert state["documents"] == {"neg": 5, "pos": 5}
    assert state["token_counts"]["pos"]["love"] == 2


@pytest.mark.parametrize(
    "payload",
    ["not json", json.dumps({"format": "other"}), json.dumps({"format": "cadmium-bayes/1"})],
)
def test_from_json_rejects_invalid_state(payload):
    with pytest.raises(ValueError):
        BayesClassifier.from_json(payload)


def test_from_binary_rejects_garbage():
    with pytest.raises(ValueError):
        BayesClassifier.from_binary(b"\x00\x01garbage")
