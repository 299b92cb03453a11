"""Suffix -> language lookup, built once from an explicit language list."""

from pathlib import Path

from contextit.languages import Language
from contextit.languages.go import GoLanguage
from contextit.languages.java import JavaLanguage
from contextit.languages.php import PhpLanguage
from contextit.languages.python import PythonLanguage
from contextit.languages.rust import RustLanguage
from contextit.languages.typescript import TypeScriptLanguage


def default_languages() -> list[Language]:
    """Every supported language, in a fixed order."""
    return [
        TypeScriptLanguage(),
        GoLanguage(),
        JavaLanguage(),
        PythonLanguage(),
        RustLanguage(),
        PhpLanguage(),
    ]


class LanguageRegistry:
    """Maps file suffixes to language plugins.

    Read-only once built. ``clear`` and ``rebuild`` exist so tests can swap
    the language set without touching process-wide state.
    """

    def __init__(self, languages: list[Language] | None = None):
        self._by_suffix: dict[str, Language] = {}
        self._languages: list[Language] = []
        self.rebuild(default_languages() if languages is None else languages)

    def rebuild(self, languages: list[Language]) -> None:
        self.clear()
        for language in languages:
            for suffix in language.suffixes:
                key = suffix.lower()
                if key in self._by_suffix:
                    raise ValueError(
                        f"Suffix {suffix} claimed by both "
                        f"{self._by_suffix[key].name} and {language.name}"
                    )
                self._by_suffix[key] = language
            self._languages.append(language)

    def clear(self) -> None:
        self._by_suffix = {}
        self._languages = []

    @property
    def languages(self) -> list[Language]:
        return list(self._languages)

    @property
    def suffixes(self) -> set[str]:
        return set(self._by_suffix)

    @property
    def ignore_dirs(self) -> set[str]:
        dirs: set[str] = set()
        for language in self._languages:
            dirs |= language.ignore_dirs
        return dirs

    def for_suffix(self, suffix: str) -> Language | None:
        return self._by_suffix.get(suffix.lower())

    def for_path(self, path: str | Path) -> Language | None:
        return self.for_suffix(Path(path).suffix)
