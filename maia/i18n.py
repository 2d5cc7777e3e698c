"""
Translator - Localized UI strings with dotted-key lookup.

Tables are nested dicts loaded from maia/data/translations/<lang>.yaml.
A missing key never fails: the key itself is returned and a warning is
logged, so the gap is visible on screen.
"""

import json
import logging
import re
from typing import Iterable, Optional

from maia.config import DEFAULT_LANGUAGE, LANGUAGE_KEY
from maia.content_loader import load_translations
from maia.schemas import LearnLine
from maia.storage import KeyValueStore

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{(\w+)\}")


class Translator:
    def __init__(
        self,
        tables: Optional[dict[str, dict]] = None,
        store: Optional[KeyValueStore] = None,
        language: str = DEFAULT_LANGUAGE,
    ):
        """
        Args:
            tables: Language code -> nested translations (default: bundled tables)
            store: Where the chosen language is remembered between sessions
            language: Language used until a saved preference is restored
        """
        self.tables = tables if tables is not None else load_translations()
        self.store = store
        self.current_language = language if language in self.tables else "en"

    @property
    def languages(self) -> list[str]:
        return list(self.tables)

    def initialize(self):
        """Restore the saved language preference, if any."""
        if self.store is None:
            return
        try:
            raw = self.store.get(LANGUAGE_KEY)
            saved = json.loads(raw) if raw is not None else None
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read language preference: {e}")
            return
        if isinstance(saved, str) and saved in self.tables:
            self.current_language = saved

    def set_language(self, language: str):
        """
        Switch language and remember the choice.

        Raises:
            ValueError: If the language has no translation table
        """
        if language not in self.tables:
            raise ValueError(f"Unsupported language: {language}")
        self.current_language = language
        if self.store is not None:
            try:
                self.store.set(LANGUAGE_KEY, json.dumps(language))
            except OSError as e:
                logger.error(f"Failed to save language preference: {e}")

    def t(self, key: str, **params) -> str:
        """Translate a dotted key, filling {name} placeholders from params."""
        result = self.tables.get(self.current_language, {})
        for part in key.split("."):
            if not isinstance(result, dict):
                logger.warning(f"Cannot access {part} on {type(result).__name__} value")
                return key
            if part not in result:
                logger.warning(f"Translation missing: {key}")
                return key
            result = result[part]

        if not isinstance(result, str):
            logger.warning(f"Invalid translation key: {key}")
            return key

        return PLACEHOLDER.sub(
            lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0),
            result,
        )

    def register_learn_lines(self, lines: Iterable[LearnLine]):
        """
        Register learn line display strings under learn_lines.<id>.

        The line's own fields become the English strings; its translations
        go to their languages. Languages without a table are skipped.
        """
        for line in lines:
            english = self.tables.setdefault("en", {}).setdefault("learn_lines", {})
            english[line.id] = {
                "title": line.title,
                "description": line.description or "",
                "example": line.example or "",
            }
            for language, translation in line.translations.items():
                if language not in self.tables:
                    continue
                table = self.tables[language].setdefault("learn_lines", {})
                table[line.id] = translation.model_dump(exclude_none=True)
