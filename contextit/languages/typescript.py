"""TypeScript / JavaScript language plugin."""

import logging
import re

from contextit.extraction import extract_signatures
from contextit.models import CanonicalSignature, Parameter
from contextit.parsers.typescript import TypeScriptParser
from contextit.scanning import find_top_level, read_balanced, split_top_level

logger = logging.getLogger(__name__)

_CLASS_MARKER_RE = re.compile(r"@class:([\w$]+)")
_ARROW_HEAD_RE = re.compile(r"(?:export\s+)?const\s+([\w$]+)\s*=\s*(async\s+)?(?=\()")
_ARROW_TAIL_RE = re.compile(r"\s*(?::\s*(.+?))?\s*=>\s*$", re.DOTALL)
_HEADER_RE = re.compile(
    r"(?:export\s+)?(?:(?:public|private|protected)\s+)?(async\s+)?(?:function\s+)?"
    r"([\w$#]+)(?:<([^>]*)>)?\s*(?=\()"
)
_RETURN_RE = re.compile(r"\s*:\s*([^@]+)", re.DOTALL)
_PARAM_MODIFIERS_RE = re.compile(r"^(?:(?:public|private|protected|readonly|override)\s+)+")


class TypeScriptLanguage:
    """TypeScript and JavaScript support (one grammar covers both)."""

    name = "typescript"
    suffixes = [".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"]
    ignore_dirs = {"node_modules", "dist", "build", "coverage", ".next"}

    def __init__(self):
        self._parser = TypeScriptParser()

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
            logger.debug("typescript: %s in %r", e, fragment)
            return None

    def _parse_fragment(self, fragment: str) -> CanonicalSignature:
        class_name = None
        marker = _CLASS_MARKER_RE.search(fragment)
        if marker:
            class_name = marker.group(1)
            fragment = fragment[:marker.start()] + fragment[marker.end():]
        fragment = fragment.strip()

        arrow = _ARROW_HEAD_RE.match(fragment)
        if arrow:
            params, end = read_balanced(fragment, arrow.end())
            tail = _ARROW_TAIL_RE.match(fragment, end)
            if not params or not tail:
                raise ValueError("malformed arrow binding")
            return CanonicalSignature(
                name=arrow.group(1),
                parameters=tuple(self.parse_parameters(params[1:-1])),
                return_type=(tail.group(1) or "").strip() or None,
                is_async=bool(arrow.group(2)),
                class_name=class_name,
            )

        header = _HEADER_RE.match(fragment)
        if not header:
            raise ValueError("no declaration header")
        name = header.group(2)
        if header.group(3):
            name = f"{name}<{header.group(3)}>"

        params, end = read_balanced(fragment, header.end())
        if not params.endswith(")"):
            raise ValueError("unterminated parameter list")

        return_type = None
        returns = _RETURN_RE.match(fragment, end)
        if returns:
            return_type = returns.group(1).strip().rstrip(";{").strip() or None

        return CanonicalSignature(
            name=name,
            parameters=tuple(self.parse_parameters(params[1:-1])),
            return_type=return_type,
            is_async=bool(header.group(1)),
            class_name=class_name,
        )

    def parse_parameters(self, params: str) -> list[Parameter]:
        """Split on top-level commas, then on the first top-level colon.

        Default values are dropped unless the parameter text carries an
        arrow, where ``=`` may belong to an inline function type.
        """
        parameters = []
        for raw in split_top_level(params):
            if "=>" not in raw:
                eq = find_top_level(raw, "=")
                if eq != -1:
                    raw = raw[:eq].strip()

            colon = find_top_level(raw, ":")
            if colon == -1:
                name, type_ = raw, None
            else:
                name, type_ = raw[:colon].strip(), raw[colon + 1:].strip() or None

            name = _PARAM_MODIFIERS_RE.sub("", name)
            if name:
                parameters.append(Parameter(name=name, type=type_))
        return parameters
