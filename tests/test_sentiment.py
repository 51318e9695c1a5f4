"""Tests for the lexicon sentiment analyzer."""

import pytest

from nlu.classifiers import NEGATIVE_WORDS, POSITIVE_WORDS, LexiconSentimentAnalyzer
from nlu.models import SentimentLabel, SentimentResult


@pytest.fixture
def analyzer():
    return LexiconSentimentAnalyzer()


class TestLexiconSentimentAnalyzer:

    def test_neutral_without_lexicon_words(self, analyzer):
        result = analyzer.score("What are your pricing plans?")
        assert result.score == 0.0
        assert result.label == SentimentLabel.NEUTRAL

    def test_single_word_stays_neutral(self, analyzer):
        result = analyzer.score("This is good")
        assert result.score == pytest.approx(0.2)
        assert result.label == SentimentLabel.NEUTRAL

    def test_two_positive_words_are_positive(self, analyzer):
        result = analyzer.score("Great product, I love it!")
        assert result.score == pytest.approx(0.4)
        assert result.label == SentimentLabel.POSITIVE

    def test_two_negative_words_are_negative(self, analyzer):
        result = analyzer.score("Terrible support, bad experience")
        assert result.score == pytest.approx(-0.4)
        assert result.label == SentimentLabel.NEGATIVE

    def test_tokens_must_match_exactly(self, analyzer):
        # "goodness" и "likely" не являются словами словаря
        assert analyzer.score("goodness likely").score == 0.0

    def test_case_insensitive(self, analyzer):
        assert analyzer.score("GREAT, EXCELLENT").score == pytest.approx(0.4)

    def test_symmetric_under_lexicon_swap(self, analyzer):
        positive = analyzer.score("great good excellent thing")
        negative = analyzer.score("bad poor terrible thing")
        assert positive.score == pytest.approx(-negative.score)

    def test_clamped_to_unit_interval(self, analyzer):
        text = " ".join(["great"] * 10)
        assert analyzer.score(text).score == 1.0
        text = " ".join(["terrible"] * 10)
        assert analyzer.score(text).score == -1.0

    def test_multiword_entry_never_matches(self, analyzer):
        assert analyzer.score("it is not working").score == 0.0

    def test_deterministic(self, analyzer):
        assert analyzer.score("good and bad") == analyzer.score("good and bad")

    def test_lexicons_are_disjoint(self):
        assert not POSITIVE_WORDS & NEGATIVE_WORDS


class TestSentimentResult:

    @pytest.mark.parametrize("score, label", [
        (0.31, SentimentLabel.POSITIVE),
        (0.3, SentimentLabel.NEUTRAL),
        (-0.3, SentimentLabel.NEUTRAL),
        (-0.31, SentimentLabel.NEGATIVE),
    ])
    def test_label_thresholds(self, score, label):
        assert SentimentResult.from_score(score).label == label

    def test_to_dict(self):
        assert SentimentResult.from_score(0.4).to_dict() == {"score": 0.4, "label": "positive"}
