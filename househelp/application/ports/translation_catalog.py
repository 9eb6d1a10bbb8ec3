from __future__ import annotations

from abc import ABC, abstractmethod


class TranslationCatalogPort(ABC):
    @abstractmethod
    def load(self, language_code: str) -> dict[str, dict[str, str]]:
        """
        Bundled translations for a language, grouped by namespace.
        Raises LookupError when the language is not bundled.
        """
        raise NotImplementedError
