"""Go language plugin."""

import logging
import re

from contextit.extraction import extract_signatures
from contextit.models import CanonicalSignature, Parameter
from contextit.parsers.go import GoParser
from contextit.scanning import read_balanced, split_top_level

logger = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"[A-Za-z_]\w*")


def receiver_type(receiver: str) -> str | None:
    """Bare type name of a receiver.

    Pointer markers, package qualifiers and generic instantiation are
    removed::

        "c *Calculator"      -> "Calculator"
        "c *pkg.Service[T]"  -> "Service"
        "m MyMap[K, V]"      -> "MyMap"
    """
    head = receiver.split("[", 1)[0]
    parts = head.split()
    if not parts:
        return None
    base = parts[-1].lstrip("*").split(".")[-1]
    return base or None


def receiver_generics(receiver: str) -> str | None:
    start = receiver.find("[")
    if start == -1:
        return None
    content, _ = read_balanced(receiver, start, "[", "]")
    return content[1:-1].strip() or None


def normalize_return_type(text: str) -> str | None:
    cleaned = " ".join(text.split())
    return cleaned or None


class GoLanguage:
    """Go support: functions, methods with receivers, generics, multi-return."""

    name = "go"
    suffixes = [".go"]
    ignore_dirs = {"vendor", "testdata"}

    def __init__(self):
        self._parser = GoParser()

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
            logger.debug("go: %s in %r", e, fragment)
            return None

    def _parse_fragment(self, fragment: str) -> CanonicalSignature:
        # func (receiver)? Name [Generics]? (params) returns? {
        s = fragment.strip()
        if not s.startswith("func"):
            raise ValueError("not a func declaration")
        s = s[4:].strip()

        receiver = None
        if s.startswith("("):
            content, end = read_balanced(s, 0)
            receiver = content[1:-1].strip()
            s = s[end:].strip()

        m = _IDENT_RE.match(s)
        if not m:
            raise ValueError("missing function name")
        name = m.group(0)
        s = s[m.end():].strip()

        generics = None
        if s.startswith("["):
            content, end = read_balanced(s, 0, "[", "]")
            generics = content[1:-1].strip()
            s = s[end:].strip()

        if not s.startswith("("):
            raise ValueError("missing parameter list")
        content, end = read_balanced(s, 0)
        if not content.endswith(")"):
            raise ValueError("unterminated parameter list")
        params = content[1:-1]
        s = s[end:].strip()

        if s.endswith("{"):
            s = s[:-1]
        else:
            s = s.split("\n", 1)[0]
        s = s.strip()

        if s.startswith("("):
            returns, _ = read_balanced(s, 0)
            return_type = normalize_return_type(returns[1:-1])
            if return_type:
                return_type = f"({return_type})"
        else:
            return_type = normalize_return_type(s)

        class_name = None
        if receiver:
            class_name = receiver_type(receiver)
            # Methods without their own generics inherit the receiver's
            if not generics:
                generics = receiver_generics(receiver)
        if generics:
            name = f"{name}[{generics}]"

        return CanonicalSignature(
            name=name,
            parameters=tuple(self.parse_parameters(params)),
            return_type=return_type,
            class_name=class_name,
        )

    def parse_parameters(self, params: str) -> list[Parameter]:
        """Resolve grouped names (``a, b int``) onto the type that follows.

        Bare identifiers queue up in ``pending`` until a segment carrying a
        type arrives; that type is then applied to every queued name plus
        the segment's own name. Names still pending at the end stay untyped.
        """
        parameters: list[Parameter] = []
        pending: list[str] = []

        for raw in split_top_level(params, pairs="()[]{}"):
            if raw.startswith("func("):
                parameters.append(Parameter(name="(anonymous)", type=raw))
                continue

            parts = raw.split(None, 1)
            if len(parts) == 1:
                pending.append(parts[0])
                continue

            type_ = " ".join(parts[1].split())
            for name in pending + [parts[0]]:
                parameters.append(Parameter(name=name, type=type_))
            pending = []

        parameters.extend(Parameter(name=name) for name in pending)
        return parameters
