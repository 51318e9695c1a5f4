"""Tests for InputValidator."""

import pytest

from utils.validators import InputValidator


@pytest.fixture
def validator():
    return InputValidator(max_length=20)


class TestInputValidator:

    @pytest.mark.parametrize("text, expected", [
        ("hello", True),
        ("", False),
        ("   ", False),
        (None, False),
        ("x" * 21, False),
        ("x" * 20, True),
    ])
    def test_validate_message(self, validator, text, expected):
        assert validator.validate_message(text)[0] is expected

    def test_entity_span_must_fit_text(self, validator):
        entity = {"type": "product", "value": "chatbot", "start": 27, "end": 34}
        assert validator.validate_entity(entity, "I need help setting up the chatbot") == (True, None)
        assert not validator.validate_entity(entity, "short")[0]

    @pytest.mark.parametrize("entity", [
        "chatbot",
        {"type": "", "value": "x", "start": 0, "end": 1},
        {"type": "product", "value": "x", "start": "0", "end": 1},
        {"type": "product", "value": "x", "start": 5, "end": 1},
        {"type": "product", "value": "x", "start": True, "end": 1},
    ])
    def test_invalid_entities(self, validator, entity):
        assert not validator.validate_entity(entity)[0]

    def test_training_payload(self, validator):
        payload = {
            "examples": [{"id": "1", "text": "hi", "intent": "greeting", "entities": []}],
            "intents": ["greeting"],
            "entityTypes": [],
            "lastUpdated": "2024-01-01T00:00:00Z",
        }
        assert validator.validate_training_payload(payload) == (True, None)

    def test_training_payload_reports_example_index(self, validator):
        payload = {"examples": [{"text": "hi", "intent": "greeting"}, {"text": "bye"}]}
        is_valid, error = validator.validate_training_payload(payload)
        assert not is_valid
        assert error.startswith("Example 1")

    @pytest.mark.parametrize("info, expected", [
        ({"name": "Ada", "email": "ada@example.com"}, True),
        ({"name": "Ada", "email": "ada@example"}, False),
        ({"name": "  ", "email": "ada@example.com"}, False),
        ({}, False),
    ])
    def test_validate_user_info(self, validator, info, expected):
        assert validator.validate_user_info(info)[0] is expected
