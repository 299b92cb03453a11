"""Language protocol: all language-specific behavior in one place."""

from typing import Protocol

from contextit.models import CanonicalSignature, Parameter


class Language(Protocol):
    """Everything the extraction pipeline needs to know about a language.

    Implement this to add support for a new language, then list it in
    ``contextit.registry.default_languages``.
    """

    name: str
    suffixes: list[str]
    ignore_dirs: set[str]

    @property
    def markdown_language_id(self) -> str:
        """Identifier used for fenced code blocks (e.g. ``typescript``)."""
        ...

    def extract_fragments(self, source: str) -> list[str]:
        """Locate declarations and return their signature fragments."""
        ...

    def normalize(self, fragment: str) -> CanonicalSignature | None:
        """Turn one fragment into a signature, or None if it is malformed."""
        ...

    def parse_parameters(self, params: str) -> list[Parameter]:
        """Split raw parameter-list text into parameters."""
        ...

    def extract(self, source: str) -> list[CanonicalSignature]:
        """Extract every signature from source text, in declaration order."""
        ...
