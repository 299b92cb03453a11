"""Java language plugin."""

import logging
import re

from contextit.extraction import extract_signatures
from contextit.models import CanonicalSignature, Parameter
from contextit.parsers.java import JavaParser, strip_annotations
from contextit.scanning import read_balanced, split_top_level

logger = logging.getLogger(__name__)

_CLASS_MARKER_RE = re.compile(r"@class:([\w$]+)\s*$")
_IDENT_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


class JavaLanguage:
    """Java support: types, methods and constructors."""

    name = "java"
    suffixes = [".java"]
    ignore_dirs = {"target", "build", "out", ".gradle"}

    def __init__(self):
        self._parser = JavaParser()

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
            logger.debug("java: %s in %r", e, fragment)
            return None

    def _parse_fragment(self, fragment: str) -> CanonicalSignature:
        fragment = fragment.strip()

        # Type declarations are listed by name with no parameters
        if fragment.startswith("class "):
            type_name = fragment[6:].strip()
            if not _IDENT_RE.match(type_name):
                raise ValueError("bad type name")
            return CanonicalSignature(name=type_name)

        class_name = None
        marker = _CLASS_MARKER_RE.search(fragment)
        if marker:
            class_name = marker.group(1)
            fragment = fragment[:marker.start()].strip()

        paren = fragment.find("(")
        if paren == -1:
            raise ValueError("missing parameter list")
        params, _ = read_balanced(fragment, paren)
        if not params.endswith(")"):
            raise ValueError("unterminated parameter list")

        # Constructors have no return type
        parts = fragment[:paren].strip().rsplit(None, 1)
        if not parts:
            raise ValueError("missing name")
        name = parts[-1]
        return_type = parts[0] if len(parts) == 2 else None
        if not _IDENT_RE.match(name):
            raise ValueError("bad method name")

        return CanonicalSignature(
            name=name,
            parameters=tuple(self.parse_parameters(params[1:-1])),
            return_type=return_type,
            class_name=class_name,
        )

    def parse_parameters(self, params: str) -> list[Parameter]:
        parameters = []
        for raw in split_top_level(params):
            text = strip_annotations(raw)
            text = re.sub(r"\bfinal\s+", "", text).strip()
            parts = text.rsplit(None, 1)
            if len(parts) < 2:
                parameters.append(Parameter(name=parts[0] if parts else "", type="Object"))
                continue

            type_, name = parts
            # Legacy array syntax: String args[]
            while name.endswith("[]"):
                name = name[:-2]
                type_ += "[]"
            parameters.append(Parameter(name=name, type=" ".join(type_.split())))
        return parameters
