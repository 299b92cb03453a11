"""PHP language plugin."""

import logging
import re

from contextit.extraction import extract_signatures
from contextit.models import CanonicalSignature, Parameter
from contextit.parsers.php import PhpParser
from contextit.scanning import find_top_level, read_balanced, split_top_level

logger = logging.getLogger(__name__)

_TYPE_ENTRY_RE = re.compile(r"^(?:class|trait|interface|enum)\s+([A-Za-z_]\w*)$")
_CLASS_MARKER_RE = re.compile(r"/\*__CLASS:([A-Za-z_]\w*)__\*/\s*$")
_FUNCTION_RE = re.compile(r"^function\s+([A-Za-z_]\w*)\s*(?=\()")
_RETURN_RE = re.compile(r"\s*:\s*(.+)", re.DOTALL)
_VARIABLE_RE = re.compile(r"\$([A-Za-z_]\w*)")
_ATTRIBUTE_RE = re.compile(r"#\[")
_PROMOTION_RE = re.compile(r"\b(?:public|protected|private|readonly)\s+")
_PAIRS = "()[]{}"


def strip_attributes(text: str) -> str:
    """Remove ``#[...]`` attributes, nested brackets included."""
    while True:
        m = _ATTRIBUTE_RE.search(text)
        if not m:
            return text
        _, end = read_balanced(text, m.start() + 1, "[", "]")
        text = text[:m.start()] + text[end:]


class PhpLanguage:
    """PHP support: classes, traits, interfaces, methods and functions."""

    name = "php"
    suffixes = [".php"]
    ignore_dirs = {"vendor"}

    def __init__(self):
        self._parser = PhpParser()

    @property
    def markdown_language_id(self) -> str:
        return self.name

    def extract(self, source: str) -> list[CanonicalSignature]:
        return extract_signatures(self, source)

    def extract_fragments(self, source: str) -> list[str]:
        return self._parser.extract_fragments(source)

    def normalize(self, fragment: str) -> CanonicalSignature | None:
        try:
            return self._parse_fragment(fragment)
        except ValueError as e:
            logger.debug("php: %s in %r", e, fragment)
            return None

    def _parse_fragment(self, fragment: str) -> CanonicalSignature:
        fragment = fragment.strip()

        entry = _TYPE_ENTRY_RE.match(fragment)
        if entry:
            return CanonicalSignature(name=entry.group(1))

        class_name = None
        marker = _CLASS_MARKER_RE.search(fragment)
        if marker:
            class_name = marker.group(1)
            fragment = fragment[:marker.start()].strip()

        m = _FUNCTION_RE.match(fragment)
        if not m:
            raise ValueError("not a function header")
        params, end = read_balanced(fragment, m.end())
        if not params.endswith(")"):
            raise ValueError("unterminated parameter list")

        return_type = None
        returns = _RETURN_RE.match(fragment, end)
        if returns:
            return_type = returns.group(1).strip().rstrip("{;").strip() or None

        return CanonicalSignature(
            name=m.group(1),
            parameters=tuple(self.parse_parameters(params[1:-1])),
            return_type=return_type,
            class_name=class_name,
        )

    def parse_parameters(self, params: str) -> list[Parameter]:
        """Name is the ``$variable``; everything before it is the type.

        Variadics render as ``...Type`` (``...`` when untyped); by-reference
        ``&`` and promoted-property modifiers are dropped from the type.
        """
        parameters = []
        for raw in split_top_level(strip_attributes(params), pairs=_PAIRS):
            eq = find_top_level(raw, "=", _PAIRS)
            if eq != -1:
                raw = raw[:eq].strip()

            variable = _VARIABLE_RE.search(raw)
            if not variable:
                parameters.append(Parameter(name=raw))
                continue

            head = raw[:variable.start()]
            type_ = _PROMOTION_RE.sub("", head.replace("&", "").replace("...", "")).strip() or None
            if "..." in head:
                type_ = f"...{type_}" if type_ else "..."
            parameters.append(Parameter(name=variable.group(1), type=type_))
        return parameters
