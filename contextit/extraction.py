"""Extraction facade shared by every language plugin."""

from contextit.languages import Language
from contextit.models import CanonicalSignature


def extract_signatures(language: Language, source: str) -> list[CanonicalSignature]:
    """Run locate then normalize for ``language`` over ``source``.

    Fragments that do not normalize are dropped. Order follows the
    fragment list, which is already deduplicated by the parser.
    """
    if not source or not source.strip():
        return []

    signatures: list[CanonicalSignature] = []
    for fragment in language.extract_fragments(source):
        signature = language.normalize(fragment)
        if signature is not None:
            signatures.append(signature)
    return signatures
