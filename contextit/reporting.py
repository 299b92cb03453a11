"""Convenience formatters for extracted signatures.

These are optional. Consumers can render ``FileSignatures`` however they
want.
"""

import json

from contextit.models import CanonicalSignature, FileSignatures

_DOCUMENT_HEADER = "# Code Documentation"
_NO_FUNCTIONS = "_No functions found_"


def format_signature(signature: CanonicalSignature) -> str:
    """One signature as a single pseudo-declaration line.

    ``async function Calculator.add(a: number, b: number): number``
    """
    params = ", ".join(
        f"{p.name}: {p.type}" if p.type else p.name
        for p in signature.parameters
    )
    name = signature.name
    if signature.class_name:
        name = f"{signature.class_name}.{name}"
    prefix = "async " if signature.is_async else ""
    returns = f": {signature.return_type}" if signature.return_type else ""
    return f"{prefix}function {name}({params}){returns}"


def format_file_section(file: FileSignatures) -> str:
    """Markdown section for one file, fenced with the file's language id."""
    lines = [f"## {file.path}", ""]

    if not file.signatures:
        lines += [_NO_FUNCTIONS, "", ""]
        return "\n".join(lines)

    lines += ["### Function Signatures", "", f"```{file.language}"]
    lines += [format_signature(s) for s in file.signatures]
    lines += ["```", ""]

    if file.code:
        lines += ["### Full Source", "", f"```{file.language}", file.code.rstrip("\n"), "```", ""]

    lines.append("")
    return "\n".join(lines)


def format_markdown(files: list[FileSignatures]) -> str:
    """Complete Markdown document for every file, in the given order."""
    sections = [f"{_DOCUMENT_HEADER}\n\n"]
    sections += [format_file_section(f) for f in files]
    return "".join(sections)


def format_json(files: list[FileSignatures]) -> str:
    """JSON array of ``{path, language, signatures}`` objects."""
    data = [
        {
            "path": f.path,
            "language": f.language,
            "signatures": [s.to_dict() for s in f.signatures],
        }
        for f in files
    ]
    return json.dumps(data, indent=2)
