"""Tests for the rule-based intent classifier."""

import pytest

from nlu.classifiers import DEFAULT_INTENT_RULES, IntentRule, RuleBasedIntentClassifier
from nlu.models import BuiltinIntent, Intent

CATALOG = BuiltinIntent.names()


@pytest.fixture
def classifier():
    return RuleBasedIntentClassifier()


class TestRuleBasedIntentClassifier:

    def test_pricing_question_fires_only_pricing(self, classifier):
        intents = classifier.classify("What are your pricing plans?", CATALOG)
        assert intents == [Intent("pricing", 0.9)]

    def test_no_match_falls_back_to_default(self, classifier):
        intents = classifier.classify("xyz123 qwerty", CATALOG)
        assert intents == [Intent("default", 0.3)]

    def test_empty_text_falls_back_to_default(self, classifier):
        assert classifier.classify("", CATALOG) == [Intent.fallback()]

    @pytest.mark.parametrize("text", ["hello", "Hey", "HI", "Hello there"])
    def test_greeting_is_top_intent(self, classifier, text):
        intents = classifier.classify(text, CATALOG)
        assert intents[0] == Intent("greeting", 0.95)

    def test_support_scenario(self, classifier):
        intents = classifier.classify("I need help setting up the chatbot", CATALOG)
        assert Intent("support", 0.75) in intents

    def test_candidates_sorted_by_confidence(self, classifier):
        # product_info 0.8, pricing 0.9, greeting 0.95 ("hi" внутри "this")
        intents = classifier.classify("What is the price of this product?", CATALOG)
        confidences = [i.confidence for i in intents]
        assert confidences == sorted(confidences, reverse=True)
        assert {i.name for i in intents} >= {"product_info", "pricing"}

    def test_ties_keep_catalog_order(self):
        rules = {
            "a": IntentRule(keywords=("foo",), confidence=0.5),
            "b": IntentRule(keywords=("foo",), confidence=0.5),
            "c": IntentRule(keywords=("foo",), confidence=0.7),
        }
        classifier = RuleBasedIntentClassifier(rules)

        assert [i.name for i in classifier.classify("foo", ["a", "b", "c"])] == ["c", "a", "b"]
        assert [i.name for i in classifier.classify("foo", ["b", "a", "c"])] == ["c", "b", "a"]

    def test_non_firing_intents_are_omitted(self, classifier):
        intents = classifier.classify("How much does it cost?", CATALOG)
        assert all(i.confidence > 0 for i in intents)
        assert "goodbye" not in [i.name for i in intents]

    def test_intent_without_rule_never_fires(self, classifier):
        intents = classifier.classify("refund please", CATALOG + ["refund"])
        assert intents == [Intent.fallback()]
        assert not classifier.has_rule("refund")

    def test_exact_goodbye_phrase(self, classifier):
        assert classifier.classify("thanks", CATALOG)[0] == Intent("goodbye", 0.9)

    def test_case_insensitive(self, classifier):
        assert classifier.classify("PRICING", CATALOG) == classifier.classify("pricing", CATALOG)

    def test_default_rules_cover_builtin_catalog(self):
        assert set(DEFAULT_INTENT_RULES) == set(CATALOG)
