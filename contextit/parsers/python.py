"""Python declaration locator.

Regex based, no ``ast``: module-level ``def`` headers are taken at column 0,
then every ``class`` is listed followed by the ``self`` methods found in its
body. The class body runs from the header colon to the first ``}`` that
closes a brace block opened inside it (or to the end of the text), so a
brace literal in a class can end its body early.

Fragment forms produced:

    [async ]def name(params)[ -> Return]
    class Name[(bases)]
"""

import re

from contextit.scanning import HASH_COMMENTS, dedupe, read_balanced, strip_comments

_DEF_RE = re.compile(r"^(async[ \t]+)?def[ \t]+(\w+)[ \t]*(?=\()", re.MULTILINE)
_CLASS_RE = re.compile(r"^[ \t]*class[ \t]+(\w+)[ \t]*", re.MULTILINE)
_METHOD_RE = re.compile(r"^[ \t]*(async[ \t]+)?def[ \t]+(\w+)[ \t]*(?=\(\s*self\b)", re.MULTILINE)
_RETURN_RE = re.compile(r"\s*->\s*([^:\n]+)")


def _header(text: str, match: re.Match) -> str | None:
    params, end = read_balanced(text, match.end())
    if not params.endswith(")"):
        return None
    prefix = "async " if match.group(1) else ""
    header = f"{prefix}def {match.group(2)}({' '.join(params[1:-1].split())})"
    returns = _RETURN_RE.match(text, end)
    if returns:
        header += f" -> {returns.group(1).strip()}"
    return header


def class_body(source: str, start: int) -> str:
    """Text of the class body whose header starts at ``start``."""
    colon = source.find(":", start)
    if colon == -1:
        return ""
    depth = 0
    for i in range(colon + 1, len(source)):
        if source[i] == "{":
            depth += 1
        elif source[i] == "}":
            depth -= 1
            if depth == 0:
                return source[colon + 1:i]
    return source[colon + 1:]


class PythonParser:
    """Finds module-level functions, classes and their instance methods."""

    def extract_fragments(self, source: str) -> list[str]:
        src = strip_comments(source, HASH_COMMENTS)
        fragments = []

        for m in _DEF_RE.finditer(src):
            header = _header(src, m)
            if header:
                fragments.append(header)

        for m in _CLASS_RE.finditer(src):
            bases, end = read_balanced(src, m.end())
            if bases.endswith(")") and bases[1:-1].strip():
                fragments.append(f"class {m.group(1)}({' '.join(bases[1:-1].split())})")
            else:
                fragments.append(f"class {m.group(1)}")
            body = class_body(src, end)
            for method in _METHOD_RE.finditer(body):
                header = _header(body, method)
                if header:
                    fragments.append(header)

        return dedupe(fragments)
