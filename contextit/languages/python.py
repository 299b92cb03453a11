"""Python language plugin."""

import logging
import re

from contextit.extraction import extract_signatures
from contextit.models import CanonicalSignature, Parameter
from contextit.parsers.python import PythonParser
from contextit.scanning import find_top_level, read_balanced, split_top_level

logger = logging.getLogger(__name__)

_DEF_RE = re.compile(r"(async\s+)?def\s+(\w+)\s*(?=\()")
_RETURN_RE = re.compile(r"\s*->\s*(.+)", re.DOTALL)
_PAIRS = "()[]{}"


class PythonLanguage:
    """Python support: functions, async functions and instance methods."""

    name = "python"
    suffixes = [".py"]
    ignore_dirs = {"__pycache__", ".mypy_cache", "__pypackages__", ".pytest_cache", "venv", ".venv"}

    def __init__(self):
        self._parser = PythonParser()

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
            logger.debug("python: %s in %r", e, fragment)
            return None

    def _parse_fragment(self, fragment: str) -> CanonicalSignature:
        fragment = fragment.strip()
        # class entries locate methods but are not signatures themselves
        m = _DEF_RE.match(fragment)
        if not m:
            raise ValueError("not a def header")

        params, end = read_balanced(fragment, m.end())
        if not params.endswith(")"):
            raise ValueError("unterminated parameter list")

        return_type = None
        returns = _RETURN_RE.match(fragment, end)
        if returns:
            return_type = returns.group(1).strip().rstrip(":").strip() or None

        parameters = tuple(self.parse_parameters(params[1:-1]))
        return CanonicalSignature(
            name=m.group(2),
            parameters=parameters,
            return_type=return_type,
            is_async=bool(m.group(1)),
            is_method=bool(parameters) and parameters[0].name == "self",
        )

    def parse_parameters(self, params: str) -> list[Parameter]:
        parameters = []
        for raw in split_top_level(params, pairs=_PAIRS):
            eq = find_top_level(raw, "=", _PAIRS)
            if eq != -1:
                raw = raw[:eq].strip()
            if raw in ("*", "/"):
                # keyword-only / positional-only markers
                continue
            colon = find_top_level(raw, ":", _PAIRS)
            if colon == -1:
                parameters.append(Parameter(name=raw))
            else:
                type_ = raw[colon + 1:].strip()
                parameters.append(Parameter(name=raw[:colon].strip(), type=type_ or None))
        return parameters
