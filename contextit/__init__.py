"""contextit: function signature extraction for code documentation."""

from contextit.models import (
    CanonicalSignature,
    FileSignatures,
    Parameter,
)
from contextit.extraction import extract_signatures
from contextit.languages import Language
from contextit.parsers import Parser
from contextit.registry import LanguageRegistry, default_languages

__all__ = [
    "extract_signatures",
    "default_languages",
    "LanguageRegistry",
    "Language",
    "Parser",
    "CanonicalSignature",
    "FileSignatures",
    "Parameter",
]
