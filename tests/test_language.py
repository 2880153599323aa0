from microservices.storage_microservice import LANGUAGE_KEY, LocalStore
from microservices.translation_microservice import translate
from services.language_service import LanguageState


def test_defaults_to_english(store, channel):
    assert LanguageState(store, channel).current == "en"


async def test_unknown_language_is_ignored(store, channel):
    language = LanguageState(store, channel)
    assert await language.change_language("fr") is False
    assert language.current == "en"
    assert store.get_item(LANGUAGE_KEY) is None


async def test_choice_is_saved(store, store_collection, channel):
    await LanguageState(store, channel).change_language("sw")
    reopened = LocalStore(store_collection, "client-1")
    await reopened.load()
    assert LanguageState(reopened, channel).current == "sw"


async def test_saved_unknown_language_falls_back(store, channel):
    await store.set_item(LANGUAGE_KEY, "xx")
    assert LanguageState(store, channel).current == "en"


async def test_change_reaches_sibling_context(registry):
    first = await registry.get("browser", "tab-1")
    second = await registry.get("browser", "tab-2")
    await first.language.change_language("sw")
    assert second.language.current == "sw"
    other_browser = await registry.get("other-browser")
    assert other_browser.language.current == "en"


def test_missing_key_falls_back_to_key():
    assert translate("no.such.key", "sw") == "no.such.key"
    assert translate("no.such.key", "xx") == "no.such.key"


async def test_swahili_differs_from_english(store, channel):
    language = LanguageState(store, channel)
    assert language.t("common.cart") == "Cart"
    await language.change_language("sw")
    assert language.t("common.cart") == "Mkoba"
    assert language.messages()["common.add_to_cart"] == "Weka Mkobani"
