"""
Response selection - выбор готового ответа по намерению.
"""

import random
from typing import Dict, List, Optional

from config.constants import DEFAULT_INTENT_NAME
from nlu.models import NlpResult


INTENT_RESPONSES: Dict[str, List[str]] = {
    "product_info": [
        "ConnectAI offers advanced chatbot capabilities powered by natural language processing. Our solution can understand user intent, extract important information, and provide relevant answers based on your knowledge base.",
        "Our product includes features like intent recognition, entity extraction, knowledge base integration, and seamless human handoff when needed.",
        "ConnectAI helps businesses automate customer support, generate leads, and provide 24/7 assistance to website visitors.",
    ],
    "pricing": [
        "We offer three pricing tiers: Basic ($49/month), Pro ($99/month), and Enterprise (custom pricing). Each plan offers different features and conversation volumes.",
        "Our pricing is based on the number of monthly conversations and features needed. The Pro plan at $99/month is our most popular option.",
        "You can start with a 14-day free trial to test all Pro features before making a decision.",
    ],
    "implementation": [
        "Implementing ConnectAI on your website is easy! Just add our JavaScript snippet to your site, and you're ready to go. Our documentation provides step-by-step instructions.",
        "Setup takes just minutes. After signing up, you'll get a code snippet to add to your website. Then you can customize your chatbot through our admin dashboard.",
        "We offer a guided setup process to help you implement ConnectAI on your website, web app, or other platforms.",
    ],
    "support": [
        "I'd be happy to help you with setup or troubleshooting. Could you tell me more about what specific issue you're encountering?",
        "Our support team is available to help you with any implementation challenges. Would you like me to connect you with a support agent?",
        "For technical support, you can also check our documentation at docs.connectai.com or email support@connectai.com.",
    ],
    "greeting": [
        "Hello! Welcome to ConnectAI. How can I help you today?",
        "Hi there! I'm the ConnectAI assistant. What would you like to know about our services?",
        "Welcome! I'm here to answer questions about ConnectAI. What can I assist you with?",
    ],
    "goodbye": [
        "Thank you for chatting with ConnectAI. Have a great day!",
        "It was great helping you today. Feel free to come back if you have more questions!",
        "Thanks for your interest in ConnectAI. Don't hesitate to reach out if you need anything else!",
    ],
    "lead_generation": [
        "I'd be happy to connect you with our team. Could you provide your name and email so we can reach out?",
        "To help you better, would you mind sharing your contact information? Our team can follow up with more details.",
        "Would you like to schedule a demo with our team? We just need your name and email to set that up.",
    ],
    DEFAULT_INTENT_NAME: [
        "I'm not sure I understood that correctly. Could you rephrase your question?",
        "I'm still learning! Could you ask that in a different way?",
        "I don't have information on that specific topic yet. Is there something else I can help you with?",
    ],
}


class ResponseSelector:
    """
    Выбор ответа для намерения.

    Выбор среди кандидатов равновероятный; для детерминизма передайте
    собственный random.Random с фиксированным seed.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, List[str]]] = None,
        rng: Optional[random.Random] = None,
    ):
        table = responses if responses is not None else INTENT_RESPONSES
        if not table.get(DEFAULT_INTENT_NAME):
            raise ValueError("Response table must contain a non-empty 'default' list")
        for intent_name, candidates in table.items():
            if not candidates or not all(candidates):
                raise ValueError(f"Response list for '{intent_name}' must contain non-empty strings")
        self.responses = {name: list(candidates) for name, candidates in table.items()}
        self.rng = rng or random.Random()

    def candidates_for(self, intent_name: str) -> List[str]:
        """Кандидаты для намерения; неизвестные имена получают список default."""
        return self.responses.get(intent_name) or self.responses[DEFAULT_INTENT_NAME]

    def select(self, intent_name: str) -> str:
        return self.rng.choice(self.candidates_for(intent_name))

    def respond(self, result: NlpResult) -> str:
        """Ответ по лучшему намерению результата анализа."""
        intent_name = result.intents[0].name if result.intents else DEFAULT_INTENT_NAME
        return self.select(intent_name)
