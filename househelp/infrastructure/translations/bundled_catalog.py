from __future__ import annotations

import json
from pathlib import Path

from househelp.application.ports.translation_catalog import TranslationCatalogPort

BUNDLED_DIR = Path(__file__).resolve().parent
NAMESPACES = ("common", "forms")


class BundledTranslationCatalog(TranslationCatalogPort):
    def __init__(self, base_dir: str | Path = BUNDLED_DIR) -> None:
        self._base_dir = Path(base_dir)

    def load(self, language_code: str) -> dict[str, dict[str, str]]:
        language_dir = self._base_dir / language_code
        if not language_dir.is_dir():
            raise LookupError(f"No bundled translations for {language_code}")

        translations: dict[str, dict[str, str]] = {}
        for namespace in NAMESPACES:
            path = language_dir / f"{namespace}.json"
            try:
                with open(path, "r", encoding="utf-8") as f:
                    translations[namespace] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise LookupError(f"Unreadable bundled translations {path}: {e}") from e
        return translations
