from __future__ import annotations

import logging

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.ports.translation_catalog import TranslationCatalogPort
from househelp.application.utils.interpolation import interpolate
from househelp.application.utils.rows import entities_from_rows
from househelp.domain.entities.language import Language, Translation

FALLBACK_LANGUAGE = "en"


class LanguageUseCase:
    """
    Holds the current language and its translations for the process.
    Remote translations win; bundled ones are used when the backend is unavailable.
    """

    def __init__(
        self,
        backend: BackendPort,
        catalog: TranslationCatalogPort,
        default_language: str = FALLBACK_LANGUAGE,
    ) -> None:
        self._backend = backend
        self._catalog = catalog
        self._default_language = default_language
        self._current_language = default_language
        self._translations: dict[str, dict[str, str]] = {}
        self._initialized = False
        self._logger = logging.getLogger(__name__)

    @property
    def current_language(self) -> str:
        return self._current_language

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self, preferred_locale: str | None = None) -> None:
        if preferred_locale:
            code = preferred_locale.replace("_", "-").split("-")[0].lower()
            if code and await self.is_language_supported(code):
                self._current_language = code
        await self.load_translations()
        self._initialized = True

    async def is_language_supported(self, code: str) -> bool:
        try:
            row = await self._backend.select_one(
                "languages", TableQuery(eq={"code": code, "is_active": True}), columns="code"
            )
            return bool(row)
        except BackendError:
            return False

    async def get_available_languages(self) -> list[Language]:
        try:
            rows = await self._backend.select(
                "languages", TableQuery(eq={"is_active": True}, order=(("name", True),))
            )
            return entities_from_rows(Language, rows)
        except BackendError as e:
            self._logger.error("Error fetching available languages", extra={"error": str(e)})
            return []

    async def load_translations(self) -> None:
        try:
            rows = await self._backend.rpc(
                "get_translations", {"language_code_param": self._current_language}
            )
            grouped: dict[str, dict[str, str]] = {}
            for translation in entities_from_rows(Translation, rows):
                grouped.setdefault(translation.namespace, {})[translation.key] = translation.value
            self._translations = grouped
        except BackendError as e:
            self._logger.error(
                "Error loading translations", extra={"language": self._current_language, "error": str(e)}
            )
            self._load_fallback_translations()

    def _load_fallback_translations(self) -> None:
        try:
            self._translations = self._catalog.load(self._current_language)
            return
        except LookupError as e:
            self._logger.error(
                "Error loading fallback translations", extra={"language": self._current_language, "error": str(e)}
            )
        try:
            self._translations = self._catalog.load(FALLBACK_LANGUAGE)
        except LookupError as e:
            self._logger.error("Failed to load any translations", extra={"error": str(e)})
            self._translations = {}

    async def set_language(self, code: str, user_id: str | None = None) -> bool:
        if not await self.is_language_supported(code):
            self._logger.error("Language is not supported", extra={"language": code})
            return False

        self._current_language = code
        await self.load_translations()
        self._initialized = True

        if user_id:
            try:
                await self._backend.rpc(
                    "set_user_language", {"user_id_param": user_id, "language_code_param": code}
                )
            except BackendError as e:
                self._logger.error(
                    "Error saving language preference", extra={"user_id": user_id, "error": str(e)}
                )
                return False
        return True

    def translate(self, key: str, namespace: str = "common", params: dict[str, str] | None = None) -> str:
        if not self._initialized:
            self._logger.warning("Language service not initialized")
            return key

        translation = self._translations.get(namespace, {}).get(key)
        if not translation:
            return key
        return interpolate(translation, params)
