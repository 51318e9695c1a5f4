"""NLU Classifiers - классификаторы на основе правил."""

from .intent_classifier import RuleBasedIntentClassifier, IntentRule, DEFAULT_INTENT_RULES
from .entity_extractor import RuleBasedEntityExtractor, DEFAULT_ENTITY_PATTERNS
from .sentiment_analyzer import LexiconSentimentAnalyzer, POSITIVE_WORDS, NEGATIVE_WORDS

__all__ = [
    "RuleBasedIntentClassifier",
    "IntentRule",
    "DEFAULT_INTENT_RULES",
    "RuleBasedEntityExtractor",
    "DEFAULT_ENTITY_PATTERNS",
    "LexiconSentimentAnalyzer",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
]
