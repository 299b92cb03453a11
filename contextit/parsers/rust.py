"""Rust declaration locator.

Three independent passes over comment-stripped source: column-0 ``fn``
items, the bodies of ``impl`` blocks and the bodies of ``trait`` blocks.
Block bodies are read with a balanced brace scan and only their depth-0
``fn`` members are taken.

Fragment forms produced:

    [async ]fn name[<G>](params)[ -> Return]
    [async ]fn Owner::name[<G>](params)[ -> Return]

A leading receiver is rewritten to one of ``self``, ``&self`` or
``&mut self`` whatever form it was declared in.
"""

import re

from contextit.scanning import (
    C_STYLE_COMMENTS,
    brace_depths,
    dedupe,
    find_top_level,
    read_balanced,
    split_top_level,
    strip_comments,
)

_QUALIFIERS = (
    r"(?:pub(?:\([^)]*\))?\s+)?(?:default\s+)?(?:const\s+)?(async\s+)?"
    r"(?:unsafe\s+)?(?:extern\s+\"[^\"]*\"\s+)?"
)
_TOP_FN_RE = re.compile(rf"^{_QUALIFIERS}fn\s+(\w+)\s*", re.MULTILINE)
_MEMBER_FN_RE = re.compile(rf"(?<![\w:]){_QUALIFIERS}fn\s+(\w+)\s*")
_IMPL_RE = re.compile(r"^[ \t]*(?:unsafe\s+)?impl\b", re.MULTILINE)
_TRAIT_RE = re.compile(r"^[ \t]*(?:pub(?:\([^)]*\))?\s+)?(?:unsafe\s+)?trait\s+(\w+)", re.MULTILINE)
_ARROW_RE = re.compile(r"\s*->")
_WHERE_RE = re.compile(r"\bwhere\b")
_RECEIVER_RE = re.compile(r"^(&\s*(?:'\w+\s+)?)?(mut\s+)?self$")
_TYPED_RECEIVER_RE = re.compile(r"^(?:mut\s+)?self\s*:\s*(.+)$", re.DOTALL)
_MUT_REF_RE = re.compile(r"^&\s*(?:'\w+\s+)?mut\b")
_IDENT_RE = re.compile(r"^[A-Za-z_]\w*$")

RECEIVERS = ("self", "&self", "&mut self")


def read_generics(text: str, start: int) -> tuple[str, int]:
    """Balanced ``<...>`` scan that does not close on the ``>`` of ``->``."""
    if start >= len(text) or text[start] != "<":
        return "", start
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "<":
            depth += 1
        elif ch == ">" and text[i - 1] != "-":
            depth -= 1
            if depth == 0:
                return text[start:i + 1], i + 1
    return text[start:], len(text)


def return_type_after(text: str, end: int) -> str | None:
    """Return type annotated right after a parameter list ending at ``end``.

    The annotation stops at the body brace, a ``;`` or a ``where`` clause.
    """
    m = _ARROW_RE.match(text, end)
    if not m:
        return None
    rest = _WHERE_RE.split(text[m.end():], 1)[0]
    cut = -1
    for stop in "{;":
        idx = find_top_level(rest, stop, "()[]<>")
        if idx != -1 and (cut == -1 or idx < cut):
            cut = idx
    rest = rest[:cut] if cut != -1 else rest.split("\n", 1)[0]
    return " ".join(rest.split()) or None


def canonical_receiver(segment: str) -> str:
    """Rewrite a receiver parameter to ``self``, ``&self`` or ``&mut self``.

    Anything that is not a receiver is returned unchanged::

        "&'a mut self"     -> "&mut self"
        "self: &Self"      -> "&self"
        "self: Box<Self>"  -> "self"
    """
    m = _RECEIVER_RE.match(segment)
    if m:
        if m.group(1):
            return "&mut self" if m.group(2) else "&self"
        return "self"
    m = _TYPED_RECEIVER_RE.match(segment)
    if m:
        type_ = m.group(1).strip()
        if type_.startswith("&"):
            return "&mut self" if _MUT_REF_RE.match(type_) else "&self"
        return "self"
    return segment


def impl_owner(header: str) -> str | None:
    """Bare type name an ``impl`` header attaches methods to."""
    _, i = read_generics(header.strip(), 0)
    text = _WHERE_RE.split(header.strip()[i:], 1)[0]
    text = re.split(r"\bfor\s+", text, 1)[-1].strip()
    text = re.sub(r"^&\s*(?:'\w+\s+)?(?:mut\s+)?(?:dyn\s+)?", "", text)
    name = text.split("<", 1)[0].split("::")[-1].strip()
    return name if _IDENT_RE.match(name) else None


def _fragment(text: str, m: re.Match, owner: str | None = None) -> str | None:
    generics, i = read_generics(text, m.end())
    while i < len(text) and text[i] in " \t\r\n":
        i += 1
    params, end = read_balanced(text, i)
    if not params.endswith(")"):
        return None

    segments = [" ".join(s.split()) for s in split_top_level(params[1:-1])]
    if segments:
        segments[0] = canonical_receiver(segments[0])

    name = f"{owner}::{m.group(2)}" if owner else m.group(2)
    prefix = "async " if m.group(1) else ""
    fragment = f"{prefix}fn {name}{' '.join(generics.split())}({', '.join(segments)})"
    return_type = return_type_after(text, end)
    if return_type:
        fragment += f" -> {return_type}"
    return fragment


def _block(src: str, start: int) -> tuple[str, int] | None:
    """Inner text of the ``{}`` block whose header starts at ``start``."""
    brace = src.find("{", start)
    if brace == -1 or ";" in src[start:brace]:
        return None
    block, _ = read_balanced(src, brace, "{", "}")
    return block[1:-1], brace


class RustParser:
    """Finds free functions plus ``impl`` and ``trait`` members."""

    def extract_fragments(self, source: str) -> list[str]:
        src = strip_comments(source, C_STYLE_COMMENTS)
        fragments = []

        for m in _TOP_FN_RE.finditer(src):
            fragment = _fragment(src, m)
            if fragment:
                fragments.append(fragment)

        for m in _IMPL_RE.finditer(src):
            found = _block(src, m.end())
            if not found:
                continue
            body, brace = found
            owner = impl_owner(src[m.end():brace])
            if owner:
                fragments.extend(self._members(body, owner))

        for m in _TRAIT_RE.finditer(src):
            found = _block(src, m.end())
            if found:
                fragments.extend(self._members(found[0], m.group(1)))

        return dedupe(fragments)

    @staticmethod
    def _members(body: str, owner: str) -> list[str]:
        depth = brace_depths(body)
        members = []
        for m in _MEMBER_FN_RE.finditer(body):
            if depth[m.start()] != 0:
                continue
            fragment = _fragment(body, m, owner)
            if fragment:
                members.append(fragment)
        return members
