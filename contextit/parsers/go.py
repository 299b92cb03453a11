"""Go declaration locator.

A single forward scan over comment-stripped source: every ``func`` token
that starts a declaration opens a signature window, which is extended while
tracking parenthesis and bracket depth until the body's opening brace.
"""

import re

from contextit.scanning import C_STYLE_COMMENTS, dedupe, read_balanced, strip_comments

_VALID_RE = re.compile(r"func\s+[^\n{]*\(")
# Type literals whose braces belong to the signature, not the body
_BRACED_TYPE_RE = re.compile(r"\b(?:interface|struct)\s*$")


class GoParser:
    """Finds ``func`` declarations, with or without receivers."""

    def extract_fragments(self, source: str) -> list[str]:
        src = strip_comments(source, C_STYLE_COMMENTS)
        fragments = []
        i = 0
        while True:
            idx = src.find("func", i)
            if idx == -1:
                break
            i = idx + 4

            if idx > 0 and (src[idx - 1].isalnum() or src[idx - 1] == "_"):
                continue
            # `func(` is a function type or literal, never a declaration
            if not src[idx + 4:idx + 5].isspace():
                continue

            end = self._signature_end(src, idx + 4)
            fragment = src[idx:end]
            if _VALID_RE.match(fragment):
                fragments.append(fragment)
            i = end
        return dedupe(fragments)

    @staticmethod
    def _signature_end(src: str, start: int) -> int:
        """Index just past the first unguarded ``{``.

        A newline outside every group after the parameters have closed ends
        a body-less declaration (assembly stubs, ``//go:linkname``) without
        consuming the next one.
        """
        paren = bracket = 0
        closed = False
        j = start
        while j < len(src):
            ch = src[j]
            if ch == "(":
                paren += 1
            elif ch == ")":
                paren = max(0, paren - 1)
                closed = closed or paren == 0
            elif ch == "[":
                bracket += 1
            elif ch == "]":
                bracket = max(0, bracket - 1)
            elif ch == "\n" and closed and paren == 0 and bracket == 0:
                return j
            elif ch == "{" and paren == 0 and bracket == 0:
                if _BRACED_TYPE_RE.search(src, max(0, j - 16), j):
                    _, j = read_balanced(src, j, "{", "}")
                    continue
                return j + 1
            j += 1
        return len(src)
