"""PHP declaration locator.

Class-like bodies (``class``, ``trait``, ``interface``, ``enum``) are read
with a balanced brace scan; their depth-0 methods are tagged with an inline
owner marker comment that the normalizer strips back out. Functions outside
every class span are reported as globals afterwards. Anonymous
``new class`` bodies yield nothing.

Fragment forms produced:

    class Name
    function name(params)[: Return] /*__CLASS:Name__*/
    function name(params)[: Return]
"""

import re

from contextit.scanning import PHP_COMMENTS, brace_depths, dedupe, read_balanced, strip_comments

_TYPE_RE = re.compile(
    r"(?<![\w$:>])(?:(?:abstract|final|readonly)\s+)*(class|trait|interface|enum)"
    r"\s+([A-Za-z_]\w*)[^{;]*\{"
)
_ANONYMOUS_CLASS_RE = re.compile(r"\bnew\s+class\b[^{;]*\{")
_FUNCTION_RE = re.compile(r"\bfunction\s+&?\s*([A-Za-z_]\w*)\s*(?=\()")
_RETURN_RE = re.compile(r"\s*:\s*([^{;\n]+)")


def class_marker(owner: str) -> str:
    return f"/*__CLASS:{owner}__*/"


def _fragment(text: str, m: re.Match) -> str | None:
    params, end = read_balanced(text, m.end())
    if not params.endswith(")"):
        return None
    fragment = f"function {m.group(1)}({' '.join(params[1:-1].split())})"
    returns = _RETURN_RE.match(text, end)
    if returns and returns.group(1).strip():
        fragment += f": {returns.group(1).strip()}"
    return fragment


class PhpParser:
    """Finds class-like declarations, their methods and global functions."""

    def extract_fragments(self, source: str) -> list[str]:
        src = strip_comments(source, PHP_COMMENTS)
        fragments = []
        # anonymous classes have no owner name; their methods are not globals
        spans = [
            (m.start(), read_balanced(src, m.end() - 1, "{", "}")[1])
            for m in _ANONYMOUS_CLASS_RE.finditer(src)
        ]
        anonymous = list(spans)

        pos = 0
        while True:
            m = _TYPE_RE.search(src, pos)
            if not m:
                break
            if any(start <= m.start() < end for start, end in anonymous):
                pos = m.end()
                continue
            block, end = read_balanced(src, m.end() - 1, "{", "}")
            spans.append((m.start(), end))
            fragments.append(f"{m.group(1)} {m.group(2)}")
            fragments.extend(self._methods(block[1:-1], m.group(2)))
            # nested declarations belong to this span
            pos = end

        for m in _FUNCTION_RE.finditer(src):
            if any(start <= m.start() < end for start, end in spans):
                continue
            fragment = _fragment(src, m)
            if fragment:
                fragments.append(fragment)

        return dedupe(fragments)

    @staticmethod
    def _methods(body: str, owner: str) -> list[str]:
        depth = brace_depths(body)
        methods = []
        for m in _FUNCTION_RE.finditer(body):
            if depth[m.start()] != 0:
                continue
            fragment = _fragment(body, m)
            if fragment:
                methods.append(f"{fragment} {class_marker(owner)}")
        return methods
