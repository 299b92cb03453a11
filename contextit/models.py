from dataclasses import dataclass, field


@dataclass(frozen=True)
class Parameter:
    """One declared parameter, in source order."""
    name: str
    type: str | None = None
    is_mutable: bool = False

    def to_dict(self) -> dict:
        data: dict = {"name": self.name}
        if self.type:
            data["type"] = self.type
        if self.is_mutable:
            data["isMutable"] = True
        return data


@dataclass(frozen=True)
class CanonicalSignature:
    """A function-like declaration reduced to a language-agnostic shape.

    Optional flags are False and optional strings None when the declaration
    does not carry them; ``to_dict`` omits those.
    """
    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    is_async: bool = False
    is_method: bool = False
    class_name: str | None = None

    def to_dict(self) -> dict:
        data: dict = {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
        }
        if self.return_type:
            data["returnType"] = self.return_type
        if self.is_async:
            data["isAsync"] = True
        if self.is_method:
            data["isMethod"] = True
        if self.class_name:
            data["className"] = self.class_name
        return data


@dataclass
class FileSignatures:
    """Signatures extracted from one source file, ready for rendering."""
    path: str
    language: str
    signatures: list[CanonicalSignature] = field(default_factory=list)
    code: str | None = None
