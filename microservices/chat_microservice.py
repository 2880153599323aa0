import logging
from typing import Dict, Optional
from openai import AsyncOpenAI
from rapidfuzz import process, utils
from config import OPENAI_API_KEY, OPENAI_MODEL, SUPPORT_EMAIL


logger = logging.getLogger(__name__)

FUZZY_MATCH_SCORE = 85

KNOWLEDGE_BASE = {
    "en": {
        "greeting": "Hello! I'm SokoCamp AI assistant. How can I help you today?",
        "help": "I can help with: \n- Product inquiries\n- Order status\n- Vendor information\n- Marketplace policies\n- Account issues\n\nWhat do you need help with?",
        "default": "I'm not sure I understand. Could you rephrase your question? Here are things I can help with:\n- Products\n- Vendors\n- Orders\n- Delivery\n- Payments\n- Returns\n\n"
                   f"For further assistance, please email us at {SUPPORT_EMAIL}",
        "forwarded": "Question forwarded for additional support",
        "forward_failed": "Error forwarding question",
        "learned": 'Learned: "{question}" -> "{answer}"',
        "bad_format": "Use format: question || answer",
        "bad_passcode": "Incorrect passcode",
        "training_failed": "Training failed",
        "unanswered": 'Unanswered question: "{question}"',
    },
    "sw": {
        "greeting": "Habari! Mimi ni msaidizi wa SokoCamp AI. Ninaweza kukusaidia vipi leo?",
        "help": "Naweza kusaidia kuhusu: \n- Maswali ya bidhaa\n- Hali ya maagizo\n- Taarifa za wauzaji\n- Sera ya soko\n- Matatizo ya akaunti\n\nUnahitaji msaada gani?",
        "default": "Sielewi vizuri. Unaweza kueleza tena swali lako? Hizi ni mambo ninayoweza kusaidia:\n- Bidhaa\n- Wauzaji\n- Maagizo\n- Uwasilishaji\n- Malipo\n- Rudisho\n\n"
                   f"Kwa msaada zaidi, tafadhali tutumie barua pepe {SUPPORT_EMAIL}",
        "forwarded": "Swali limesafirishwa kwa msaada wa ziada",
        "forward_failed": "Hitilafu katika kusafirisha swali",
        "learned": 'Nimejifunza: "{question}" -> "{answer}"',
        "bad_format": "Tumia muundo: swali || jibu",
        "bad_passcode": "Nambari ya siri si sahihi",
        "training_failed": "Hitilafu katika mafunzo",
        "unanswered": 'Swali lisilojibiwa: "{question}"',
    },
}

SYSTEM_PROMPTS = {
    "en": """You are SokoCamp assistant, a marketplace platform. You help customers with:
- Product inquiries
- Order status
- Vendor information
- Marketplace policies
- Account issues
- Shopping and payments
- Delivery
- Returns and exchanges

Respond briefly, friendly, and helpfully. If you don't understand a question, ask for clarification.
If the question is not related to SokoCamp, direct them to contact our support team at {support}

Context: {context}""",
    "sw": """Wewe ni msaidizi wa SokoCamp, soko la kitandao. Unasaidia wateja kuhusu:
- Maswali ya bidhaa
- Hali ya maagizo
- Taarifa za wauzaji
- Sera za soko
- Matatizo ya akaunti
- Ununuzi na malipo
- Uwasilishaji
- Rudisho na ubadilishaji

Jibu kwa ufupi, kwa urafiki, na kwa msaada. Kama hujaelewa swali, omba mtu aeleze zaidi.
Kama swali halihusu SokoCamp, elekeza mtu aongee na timu yetu ya msaada kwa {support}

Context: {context}""",
}


def bot_text(name: str, language: str = "en", **values) -> str:
    texts = KNOWLEDGE_BASE.get(language, KNOWLEDGE_BASE["en"])
    return texts[name].format(**values) if values else texts[name]


def knowledge_context(responses: Dict[str, str]) -> str:
    return "\n".join(f"Q: {question} A: {answer}" for question, answer in responses.items())


def parse_training_message(message: str):
    # "question || answer" -> ("question", "answer")
    if "||" not in message:
        return None
    question, _, answer = message.partition("||")
    question, answer = question.strip(), answer.strip()
    if not question or not answer:
        return None
    return question, answer


class RuleBasedResponder:
    """Answers from trained responses, falling back to canned texts."""

    def __init__(self, responses: Optional[Dict[str, str]] = None, language: str = "en"):
        self.responses = {question.lower(): answer for question,
                          answer in (responses or {}).items() if question}
        self.language = language

    def trained_answer(self, prompt: str) -> Optional[str]:
        text = prompt.strip().lower()
        if not text or not self.responses:
            return None
        if text in self.responses:
            return self.responses[text]
        for question, answer in self.responses.items():
            if question in text:
                return answer
        match = process.extractOne(text, list(self.responses), processor=utils.default_process)
        if match and match[1] > FUZZY_MATCH_SCORE:
            return self.responses[match[0]]
        return None

    async def generate_reply(self, prompt: str, context: str = "") -> str:
        answer = self.trained_answer(prompt)
        if answer:
            return answer
        text = prompt.lower()
        if "help" in text or "msaada" in text:
            return bot_text("help", self.language)
        return bot_text("default", self.language)


class RemoteResponder:
    """Generative answers through the OpenAI chat completion API."""

    def __init__(self, api_key: str = OPENAI_API_KEY, model: str = OPENAI_MODEL,
                 language: str = "en", client=None):
        self.model = model
        self.language = language
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def generate_reply(self, prompt: str, context: str = "") -> str:
        system_prompt = SYSTEM_PROMPTS.get(self.language, SYSTEM_PROMPTS["en"]).format(
            support=SUPPORT_EMAIL, context=context)
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=0.3,
            max_tokens=500,
        )
        content = response.choices[0].message.content
        if not content:
            raise ValueError("Empty completion")
        return content.strip()


class ChatBot:
    """Picks the generative responder when a key is configured.

    Trained answers always win. When the remote call fails the rule based
    responder answers instead.
    """

    def __init__(self, responses: Optional[Dict[str, str]] = None, language: str = "en",
                 api_key: str = OPENAI_API_KEY, remote=None):
        self.language = language
        self.rules = RuleBasedResponder(responses, language)
        if remote is None and api_key:
            remote = RemoteResponder(api_key=api_key, language=language)
        self.remote = remote
        if self.remote is None:
            logger.info("AI not configured. Falling back to rule-based responses.")

    @property
    def ai_enabled(self) -> bool:
        return self.remote is not None

    def is_default_reply(self, reply: str) -> bool:
        return reply == bot_text("default", self.language)

    async def generate_reply(self, prompt: str, context: Optional[str] = None) -> str:
        answer = self.rules.trained_answer(prompt)
        if answer:
            return answer
        if self.remote is not None:
            try:
                return await self.remote.generate_reply(
                    prompt, context if context is not None else knowledge_context(self.rules.responses))
            except Exception as e:
                logger.error("AI response failed: %s", e)
        return await self.rules.generate_reply(prompt, context or "")
