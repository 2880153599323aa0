from typing import Dict
from microservices.storage_microservice import LANGUAGE_CHANGED, LANGUAGE_KEY, BroadcastChannel, LocalStore, storage_event
from microservices.translation_microservice import DEFAULT_LANGUAGE, MESSAGES, translate


class LanguageState:
    def __init__(self, store: LocalStore, channel: BroadcastChannel):
        self.store = store
        self.channel = channel
        saved_language = store.get_item(LANGUAGE_KEY)
        self.current = saved_language if saved_language in MESSAGES else DEFAULT_LANGUAGE
        self._unsubscribe = channel.subscribe(
            LANGUAGE_CHANGED, self._on_changed)

    def _on_changed(self, event):
        language = (event or {}).get("new_value")
        if language in MESSAGES:
            self.current = language

    async def change_language(self, language: str) -> bool:
        # unsupported codes are ignored
        if language not in MESSAGES:
            return False
        self.current = language
        await self.store.set_item(LANGUAGE_KEY, language)
        self.channel.publish(
            LANGUAGE_CHANGED, storage_event(LANGUAGE_KEY, language))
        return True

    def t(self, key: str) -> str:
        return translate(key, self.current)

    def messages(self) -> Dict[str, str]:
        return MESSAGES[self.current]

    def dispose(self):
        self._unsubscribe()
