from typing import Protocol


class Parser(Protocol):
    """Locates function-like declarations in raw source text."""

    def extract_fragments(self, source: str) -> list[str]:
        """Return one signature fragment per located declaration.

        Fragments are language-specific strings (name, parameter text,
        return annotation and an owner marker where relevant) that the
        matching language plugin knows how to normalize. The list is
        ordered by first occurrence and holds no duplicates.
        """
        ...
