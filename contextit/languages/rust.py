"""Rust language plugin."""

import logging
import re

from contextit.extraction import extract_signatures
from contextit.models import CanonicalSignature, Parameter
from contextit.parsers.rust import (
    RECEIVERS,
    RustParser,
    canonical_receiver,
    read_generics,
    return_type_after,
)
from contextit.scanning import find_top_level, read_balanced, split_top_level

logger = logging.getLogger(__name__)

_HEAD_RE = re.compile(r"(async\s+)?fn\s+((?:\w+::)?\w+)\s*")


class RustLanguage:
    """Rust support: free functions, impl methods and trait methods."""

    name = "rust"
    suffixes = [".rs"]
    ignore_dirs = {"target"}

    def __init__(self):
        self._parser = RustParser()

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
            logger.debug("rust: %s in %r", e, fragment)
            return None

    def _parse_fragment(self, fragment: str) -> CanonicalSignature:
        fragment = fragment.strip()
        m = _HEAD_RE.match(fragment)
        if not m:
            raise ValueError("not an fn header")

        generics, i = read_generics(fragment, m.end())
        params, end = read_balanced(fragment, i)
        if not params.endswith(")"):
            raise ValueError("unterminated parameter list")

        parameters = tuple(self.parse_parameters(params[1:-1]))
        first = split_top_level(params[1:-1])[:1]
        return CanonicalSignature(
            name=m.group(2) + generics,
            parameters=parameters,
            return_type=return_type_after(fragment, end),
            is_async=bool(m.group(1)),
            # associated functions have no receiver
            is_method=bool(first) and canonical_receiver(first[0]) in RECEIVERS,
        )

    def parse_parameters(self, params: str) -> list[Parameter]:
        parameters = []
        for raw in split_top_level(params):
            if canonical_receiver(raw) in RECEIVERS:
                parameters.append(Parameter(name="self"))
                continue

            colon = find_top_level(raw, ":")
            if colon == -1:
                name, type_ = raw, None
            else:
                name, type_ = raw[:colon].strip(), " ".join(raw[colon + 1:].split()) or None

            is_mutable = name.startswith("mut ")
            if is_mutable:
                name = name[4:].strip()
            parameters.append(Parameter(name=name, type=type_, is_mutable=is_mutable))
        return parameters
