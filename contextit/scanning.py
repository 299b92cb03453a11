"""Lexical helpers shared by every language: balanced scans, comment
stripping and depth-aware splitting.

None of these raise on malformed input. Unbalanced text is consumed to the
end of the string so partial snippets still produce a best-effort result.
"""

import re
from dataclasses import dataclass
from functools import lru_cache


def read_balanced(source: str, start: int, open_char: str = "(", close_char: str = ")") -> tuple[str, int]:
    """Read a balanced span starting at ``source[start]``.

    Returns ``(content, end)`` where ``content`` includes both delimiters and
    ``end`` is the index just past the matching close. If ``start`` does not
    hold ``open_char`` the result is ``("", start)``. If the span never
    closes, the remainder of the string and ``len(source)`` are returned.
    """
    if start >= len(source) or source[start] != open_char:
        return "", start

    depth = 0
    for i in range(start, len(source)):
        ch = source[i]
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return source[start:i + 1], i + 1
    return source[start:], len(source)


def brace_depths(source: str) -> list[int]:
    """Brace depth at every index of ``source``.

    An opening brace reports the depth it opens, a closing brace the depth
    it closes, so ``depths[i] == 0`` means top level.
    """
    depths = [0] * len(source)
    depth = 0
    for i, ch in enumerate(source):
        if ch == "{":
            depth += 1
            depths[i] = depth
        elif ch == "}":
            depths[i] = depth
            depth = max(0, depth - 1)
        else:
            depths[i] = depth
    return depths


_OPENERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def _is_arrow_close(text: str, i: int) -> bool:
    # '>' of '=>' or '->' never closes a generic
    return text[i] == ">" and i > 0 and text[i - 1] in "=-"


def split_top_level(text: str, separator: str = ",", pairs: str = "()[]{}<>") -> list[str]:
    """Split ``text`` on ``separator`` occurrences outside any nesting.

    ``pairs`` lists the open/close characters that count as nesting. Empty
    and whitespace-only segments are dropped; the rest are stripped.
    """
    openers = {pairs[i]: pairs[i + 1] for i in range(0, len(pairs), 2)}
    closers = set(openers.values())
    depth = {o: 0 for o in openers}

    segments: list[str] = []
    buf: list[str] = []
    for i, ch in enumerate(text):
        if ch in openers:
            depth[ch] += 1
        elif ch in closers:
            if not _is_arrow_close(text, i):
                opener = _CLOSERS[ch]
                depth[opener] = max(0, depth[opener] - 1)

        if ch == separator and not any(depth.values()):
            segments.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    segments.append("".join(buf))

    return [s.strip() for s in segments if s.strip()]


def find_top_level(text: str, target: str, pairs: str = "()[]{}<>") -> int:
    """Index of the first ``target`` character outside any nesting, or -1."""
    openers = {pairs[i]: pairs[i + 1] for i in range(0, len(pairs), 2)}
    closers = set(openers.values())
    depth = 0
    for i, ch in enumerate(text):
        if ch == target and depth == 0:
            return i
        if ch in openers:
            depth += 1
        elif ch in closers and not _is_arrow_close(text, i):
            depth = max(0, depth - 1)
    return -1


def dedupe(fragments: list[str]) -> list[str]:
    """Drop repeated fragments (compared stripped), keeping first-seen order."""
    seen: set[str] = set()
    unique: list[str] = []
    for fragment in fragments:
        key = fragment.strip()
        if key and key not in seen:
            seen.add(key)
            unique.append(key)
    return unique


@dataclass(frozen=True)
class CommentSyntax:
    """Literal comment delimiters of one language."""
    line: tuple[str, ...] = ()
    block: tuple[tuple[str, str], ...] = ()
    # (marker, next_char): the line marker is not a comment when followed by next_char
    line_exclusions: tuple[tuple[str, str], ...] = ()


C_STYLE_COMMENTS = CommentSyntax(line=("//",), block=(("/*", "*/"),))
HASH_COMMENTS = CommentSyntax(line=("#",))
# '#[' opens a PHP 8 attribute, not a comment
PHP_COMMENTS = CommentSyntax(
    line=("//", "#"),
    block=(("/*", "*/"),),
    line_exclusions=(("#", "["),),
)


@lru_cache(maxsize=None)
def _comment_pattern(syntax: CommentSyntax) -> re.Pattern:
    exclusions = dict(syntax.line_exclusions)
    alternatives = []
    for open_, close in syntax.block:
        alternatives.append(re.escape(open_) + r"[\s\S]*?" + re.escape(close))
    for marker in syntax.line:
        excluded = exclusions.get(marker)
        guard = f"(?!{re.escape(excluded)})" if excluded else ""
        alternatives.append(re.escape(marker) + guard + r"[^\n]*")
    return re.compile("|".join(alternatives))


def strip_comments(source: str, syntax: CommentSyntax) -> str:
    """Remove every comment described by ``syntax`` in a single pass.

    Comment markers inside string literals are not recognized as such and
    get stripped too.
    """
    if not syntax.line and not syntax.block:
        return source
    return _comment_pattern(syntax).sub("", source)
