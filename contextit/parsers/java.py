"""Java declaration locator.

Walks a type body one member header at a time: text is accumulated until a
``;`` or ``{`` at the current nesting level. Parenthesized groups and
``{`` blocks are skipped with a balanced scan that steps over string, char
and text-block literals, so a brace inside a literal never ends a body.
Type declarations recurse into their own body.

Fragment forms produced:

    class Name
    ReturnType name(params) @class:Owner
    Name(params) @class:Owner
"""

import re

from contextit.scanning import C_STYLE_COMMENTS, dedupe, read_balanced, strip_comments

_TYPE_DECL_RE = re.compile(r"\b(?:class|interface|enum|record)\s+([A-Za-z_$][\w$]*)")
_ANNOTATION_RE = re.compile(r"@(?!interface\b)[\w$.]+(?:\s*\([^()]*(?:\([^()]*\)[^()]*)*\))?")
_NAME_RE = re.compile(r"([A-Za-z_$][\w$]*)\s*$")
_MODIFIER_RE = re.compile(
    r"^(?:public|protected|private|static|final|abstract|synchronized|native|"
    r"default|strictfp|transient|volatile|sealed|non-sealed)\b\s*"
)
_RETURN_TYPE_RE = re.compile(r"^[\w$.<>\[\],?&\s]+$")


def strip_annotations(text: str) -> str:
    return _ANNOTATION_RE.sub(" ", text)


def _skip_literal(text: str, i: int) -> int:
    """Index just past the string, char or text-block literal opening at ``i``."""
    if text.startswith('"""', i):
        j = i + 3
        while j < len(text):
            if text[j] == "\\":
                j += 2
                continue
            if text.startswith('"""', j):
                return j + 3
            j += 1
        return len(text)

    quote = text[i]
    j = i + 1
    while j < len(text):
        if text[j] == "\\":
            j += 2
            continue
        if text[j] == quote or text[j] == "\n":
            return j + 1
        j += 1
    return len(text)


def _skip_group(text: str, i: int, open_char: str, close_char: str) -> int:
    """Like ``read_balanced`` but delimiters inside literals do not count."""
    depth = 0
    j = i
    while j < len(text):
        ch = text[j]
        if ch in "\"'":
            j = _skip_literal(text, j)
            continue
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return j + 1
        j += 1
    return len(text)


class JavaParser:
    """Finds type declarations, methods and constructors."""

    def extract_fragments(self, source: str) -> list[str]:
        src = strip_comments(source, C_STYLE_COMMENTS)
        fragments: list[str] = []
        self._scan_body(src, None, fragments)
        return dedupe(fragments)

    def _scan_body(self, text: str, owner: str | None, out: list[str]) -> None:
        header_start = 0
        i = 0
        while i < len(text):
            ch = text[i]
            if ch in "\"'":
                i = _skip_literal(text, i)
            elif ch == "(":
                i = _skip_group(text, i, "(", ")")
            elif ch == ";":
                self._member(text[header_start:i], owner, out)
                i += 1
                header_start = i
            elif ch == "{":
                header = text[header_start:i]
                end = _skip_group(text, i, "{", "}")
                type_name = self._type_name(header)
                if type_name:
                    out.append(f"class {type_name}")
                    closed = text[end - 1] == "}" and end - 1 > i
                    self._scan_body(text[i + 1:end - 1 if closed else end], type_name, out)
                else:
                    self._member(header, owner, out)
                i = end
                header_start = i
            else:
                i += 1

    @staticmethod
    def _type_name(header: str) -> str | None:
        text = strip_annotations(header).split("(", 1)[0]
        if "=" in text:
            return None
        m = _TYPE_DECL_RE.search(text)
        return m.group(1) if m else None

    def _member(self, header: str, owner: str | None, out: list[str]) -> None:
        if owner is None:
            return
        text = strip_annotations(header).strip()
        paren = text.find("(")
        if paren == -1:
            return
        head = text[:paren]
        if "=" in head:
            # field initializer
            return

        params, end = read_balanced(text, paren)
        if not params.endswith(")"):
            return
        tail = text[end:].strip()
        if tail and not tail.startswith(("throws", "default")):
            return

        m = _NAME_RE.search(head)
        if not m:
            return
        name = m.group(1)
        prefix = head[:m.start()].strip()
        while True:
            modifier = _MODIFIER_RE.match(prefix)
            if modifier:
                prefix = prefix[modifier.end():]
            elif prefix.startswith("<"):
                # method type parameters
                _, skip = read_balanced(prefix, 0, "<", ">")
                prefix = prefix[skip:].lstrip()
            else:
                break
        return_type = " ".join(prefix.split())
        params = " ".join(params[1:-1].split())

        if not return_type:
            if name == owner:
                out.append(f"{name}({params}) @class:{owner}")
            return
        if _RETURN_TYPE_RE.match(return_type):
            out.append(f"{return_type} {name}({params}) @class:{owner}")
