from types import SimpleNamespace
from microservices.chat_microservice import ChatBot, RemoteResponder, RuleBasedResponder, bot_text, parse_training_message
from services.chat_service import chat_reply


RESPONSES = {"How long is delivery?": "Delivery takes 2-3 days."}


class FailingResponder:
    async def generate_reply(self, prompt, context=""):
        raise ConnectionError("AI unavailable")


class EchoResponder:
    def __init__(self):
        self.prompts = []

    async def generate_reply(self, prompt, context=""):
        self.prompts.append(prompt)
        return f"AI: {prompt}"


class FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(content):
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content)))


async def test_trained_answer_wins_over_ai():
    remote = EchoResponder()
    bot = ChatBot(RESPONSES, remote=remote)
    assert await bot.generate_reply("how long is delivery?") == "Delivery takes 2-3 days."
    assert remote.prompts == []


async def test_trained_answer_fuzzy_match():
    responder = RuleBasedResponder(RESPONSES)
    assert responder.trained_answer("how long is delivry") == "Delivery takes 2-3 days."
    assert responder.trained_answer("what is the weather") is None


async def test_remote_failure_falls_back_to_rules():
    bot = ChatBot({}, remote=FailingResponder())
    assert bot.ai_enabled
    assert await bot.generate_reply("where is my parcel") == bot_text("default")


async def test_no_key_means_rule_based():
    bot = ChatBot({}, language="sw", api_key="")
    assert not bot.ai_enabled
    assert await bot.generate_reply("nahitaji msaada") == bot_text("help", "sw")


async def test_remote_uses_language_prompt():
    client = fake_openai("  Karibu!  ")
    responder = RemoteResponder(api_key="key", language="sw", client=client)
    assert await responder.generate_reply("habari", context="Q: a A: b") == "Karibu!"
    call = client.chat.completions.calls[0]
    assert call["messages"][0]["role"] == "system"
    assert "Q: a A: b" in call["messages"][0]["content"]
    assert call["messages"][1] == {"role": "user", "content": "habari"}


async def test_empty_completion_falls_back():
    remote = RemoteResponder(api_key="key", client=fake_openai(""))
    bot = ChatBot({}, remote=remote)
    assert await bot.generate_reply("help me") == bot_text("help")


async def test_chat_reply_without_vendor_does_not_forward():
    result = await chat_reply("something odd", bot=ChatBot({}, api_key=""))
    assert result == {"reply": bot_text("default"), "ai_enabled": False, "system": None}


def test_parse_training_message():
    assert parse_training_message("Do you ship? || Yes, everywhere") == ("Do you ship?", "Yes, everywhere")
    assert parse_training_message("no separator") is None
    assert parse_training_message(" || answer only") is None


def test_bot_text_falls_back_to_english():
    assert bot_text("greeting", "fr") == bot_text("greeting", "en")
    assert bot_text("learned", "en", question="q", answer="a") == 'Learned: "q" -> "a"'
