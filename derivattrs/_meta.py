"""Raw attribute syntax, as produced by the host grammar.

These mirror the three shapes an attribute can take:
```
    #[derivative]                        MetaWord("derivative")
    #[derivative = "x"]                  MetaNameValue("derivative", Lit("str", "x"))
    #[derivative(Debug, Clone="x")]      MetaList("derivative", (...))
```
"""

import dataclasses
from typing import Optional, Tuple, Union

from typing_extensions import Literal

LitKind = Literal["str", "byte_str", "char", "byte", "int", "float", "bool"]


@dataclasses.dataclass(frozen=True)
class Lit:
    kind: LitKind
    # Decoded value for strings and chars; source text for everything else.
    value: str

    def __str__(self) -> str:
        if self.kind == "str":
            return '"' + self.value.replace("\\", "\\\\").replace('"', '\\"') + '"'
        return self.value


@dataclasses.dataclass(frozen=True)
class MetaWord:
    name: str


@dataclasses.dataclass(frozen=True)
class MetaNameValue:
    name: str
    lit: Lit


@dataclasses.dataclass(frozen=True)
class MetaList:
    name: str
    items: Tuple["NestedItem", ...] = ()


Meta = Union[MetaWord, MetaNameValue, MetaList]
NestedItem = Union[Meta, Lit]


@dataclasses.dataclass(frozen=True)
class Attribute:
    """A single `#[...]` attribute attached to a declaration."""

    meta: Meta
    inner: bool = False
    """True for inner attributes, written `#![...]`."""


@dataclasses.dataclass(frozen=True)
class FieldDecl:
    """A struct or enum-variant field, as much of it as we care about."""

    name: Optional[str]
    attrs: Tuple[Attribute, ...] = ()
