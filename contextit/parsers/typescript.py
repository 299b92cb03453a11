"""Lightweight TypeScript / JavaScript declaration locator.

Works on comment-stripped text with regex anchors and balanced-parenthesis
scanning instead of a syntax tree. Brace depth is computed once so only
module-level declarations are reported, plus the methods declared directly
inside module-level classes.

Fragment forms produced:

    [async ]name[<G>](params)[: Return]
    [export ]const name = [async ](params)[: Return] =>
    [async ]name[<G>](params)[: Return] @class:Owner
    constructor(params) @class:Owner
"""

import re

from contextit.scanning import (
    C_STYLE_COMMENTS,
    brace_depths,
    dedupe,
    read_balanced,
    strip_comments,
)

_IDENT = r"[A-Za-z_$][\w$]*"

_FUNCTION_RE = re.compile(
    r"(?:^|\n|\r)\s*(?P<export>export\s+)?(?:default\s+)?(?P<async>async\s+)?"
    rf"function(?:\s*\*\s*|\s+)(?P<name>{_IDENT})(?P<generics><[^>]+>)?\s*\("
)

_ARROW_RE = re.compile(
    rf"(?:^|\n|\r)\s*(?P<export>export\s+)?const\s+(?P<name>{_IDENT})"
    r"\s*(?::[^=\n]+)?=\s*(?P<async>async\s+)?\("
)

_FORWARD_REF_RE = re.compile(
    rf"(?:^|\n|\r)\s*(?P<export>export\s+)?const\s+(?P<name>{_IDENT})"
    r"\s*=\s*(?:React\.)?forwardRef\s*"
)

_ALIAS_RE = re.compile(
    rf"(?:^|\n|\r)[ \t]*(?P<export>export\s+)?const\s+(?P<name>{_IDENT})"
    rf"\s*=\s*{_IDENT}(?:\.{_IDENT})+(?=[ \t]*(?:;|\n|\r|$))"
)

_CLASS_RE = re.compile(rf"\bclass\s+(?P<name>{_IDENT})[^{{;]*\{{")

_METHOD_RE = re.compile(
    r"(?:^|\n|\r|;)\s*(?:@[\w.]+(?:\([^)\n]*\))?\s*)*"
    r"(?P<mods>(?:(?:public|private|protected|static|async|readonly|override|abstract|get|set)\s+)*)"
    rf"(?P<name>#?{_IDENT})(?P<generics><[^>]+>)?\??\s*\("
)

_RETURN_RE = re.compile(r"([^={;\n]+)")
_ARROW_TAIL_RE = re.compile(r"\s*(?::\s*([^=;\n]+))?\s*=>")
_FORWARD_REF_TAIL_RE = re.compile(r"\s*:\s*([^=)\n]+)\s*=>")

# Statements that look like `name(` at the start of a line inside a class
_NOT_METHODS = {
    "if", "for", "while", "switch", "catch", "return", "function",
    "typeof", "new", "await", "yield", "super", "do", "else", "try",
}


def _group_depths(source: str) -> list[int]:
    """Open ``(``/``[`` count before every index of ``source``."""
    depths = [0] * len(source)
    depth = 0
    for i, ch in enumerate(source):
        depths[i] = depth
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
    return depths


def _return_annotation(rest: str) -> str:
    rest = rest.lstrip()
    if not rest.startswith(":"):
        return ""
    m = _RETURN_RE.match(rest[1:].lstrip())
    return m.group(1).strip() if m else ""


class TypeScriptParser:
    """Locates functions, arrow bindings, components and class methods."""

    def extract_fragments(self, source: str) -> list[str]:
        src = strip_comments(source, C_STYLE_COMMENTS)
        depth = brace_depths(src)

        functions = self._function_declarations(src, depth)
        arrows = self._arrow_functions(src, depth)
        arrows += self._forward_ref_components(src, depth)
        arrows += self._const_aliases(src, depth)
        methods = self._class_methods(src, depth)

        return dedupe(functions + arrows + methods)

    def _function_declarations(self, src: str, depth: list[int]) -> list[str]:
        fragments = []
        for m in _FUNCTION_RE.finditer(src):
            if depth[m.start("name")] != 0:
                continue
            params, end = read_balanced(src, m.end() - 1)
            if not params:
                continue
            return_type = _return_annotation(src[end:])
            prefix = "async " if m.group("async") else ""
            fragment = f"{prefix}{m.group('name')}{m.group('generics') or ''}{params}"
            if return_type:
                fragment += f": {return_type}"
            fragments.append(fragment)
        return fragments

    def _arrow_functions(self, src: str, depth: list[int]) -> list[str]:
        fragments = []
        for m in _ARROW_RE.finditer(src):
            if depth[m.start("name")] != 0:
                continue
            params, end = read_balanced(src, m.end() - 1)
            if not params:
                continue
            tail = _ARROW_TAIL_RE.match(src, end)
            if not tail:
                # parenthesized expression, not an arrow function
                continue
            return_type = (tail.group(1) or "").strip()
            fragments.append(self._arrow_fragment(m, params, return_type))
        return fragments

    def _forward_ref_components(self, src: str, depth: list[int]) -> list[str]:
        """``const Name = React.forwardRef<...>((props, ref) => ...)``."""
        fragments = []
        for m in _FORWARD_REF_RE.finditer(src):
            if depth[m.start("name")] != 0:
                continue
            pos = m.end()
            if src.startswith("<", pos):
                _, pos = read_balanced(src, pos, "<", ">")
            while pos < len(src) and src[pos].isspace():
                pos += 1
            args, _ = read_balanced(src, pos)
            if not args:
                continue

            inner = args[1:-1]
            first_paren = inner.find("(")
            if first_paren < 0:
                continue
            params, end = read_balanced(inner, first_paren)
            if not params:
                continue
            tail = _FORWARD_REF_TAIL_RE.match(inner, end)
            return_type = tail.group(1).strip() if tail else ""
            fragments.append(self._arrow_fragment(m, params, return_type, exported=False))
        return fragments

    def _const_aliases(self, src: str, depth: list[int]) -> list[str]:
        """``const Select = SelectPrimitive.Root;`` becomes a zero-arg arrow."""
        fragments = []
        for m in _ALIAS_RE.finditer(src):
            if depth[m.start("name")] != 0:
                continue
            fragments.append(f"const {m.group('name')} = () =>")
        return fragments

    @staticmethod
    def _arrow_fragment(m: re.Match, params: str, return_type: str, exported: bool = True) -> str:
        prefix = "export const" if exported and m.groupdict().get("export") else "const"
        is_async = "async " if m.groupdict().get("async") else ""
        fragment = f"{prefix} {m.group('name')} = {is_async}{params}"
        if return_type:
            fragment += f": {return_type}"
        return fragment + " =>"

    def _class_methods(self, src: str, depth: list[int]) -> list[str]:
        fragments = []
        pos = 0
        while True:
            m = _CLASS_RE.search(src, pos)
            if not m:
                break
            brace = m.end() - 1
            block, end = read_balanced(src, brace, "{", "}")
            pos = max(end, m.end())
            if depth[m.start()] != 0:
                continue
            fragments.extend(self._methods_in_body(block[1:-1], m.group("name")))
        return fragments

    def _methods_in_body(self, body: str, class_name: str) -> list[str]:
        fragments = []
        depth = brace_depths(body)
        # continuation lines of a multi-line initializer sit inside a group
        groups = _group_depths(body)
        for m in _METHOD_RE.finditer(body):
            name = m.group("name")
            start = m.start("name")
            if name in _NOT_METHODS or depth[start] != 0 or groups[start] != 0:
                continue
            params, end = read_balanced(body, m.end() - 1)
            if not params:
                continue

            if name == "constructor":
                fragments.append(f"constructor{params} @class:{class_name}")
                continue

            prefix = "async " if re.search(r"\basync\b", m.group("mods")) else ""
            fragment = f"{prefix}{name}{m.group('generics') or ''}{params}"
            return_type = _return_annotation(body[end:])
            if return_type:
                fragment += f": {return_type}"
            fragments.append(f"{fragment} @class:{class_name}")
        return fragments
