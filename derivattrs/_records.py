"""Finished, immutable per-capability settings.

Type-level records only exist when the capability was named on the type; their
presence is what opts a type into a capability. Field-level records always exist
and default to "no override"."""

import dataclasses
import enum
from typing import Optional, Tuple

from ._grammar import Expr, Path, WherePredicate

Bounds = Optional[Tuple[WherePredicate, ...]]


class Capability(str, enum.Enum):
    """The closed set of capabilities a declaration can opt into."""

    CLONE = "Clone"
    COPY = "Copy"
    DEBUG = "Debug"
    DEFAULT = "Default"
    EQ = "Eq"
    PARTIAL_EQ = "PartialEq"


@dataclasses.dataclass(frozen=True)
class CloneOptions:
    """`derivative(Clone(...))` on a type.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        clone_from: Whether the implementation should have an explicit `clone_from`.
    """

    bounds: Bounds = None
    clone_from: bool = False


@dataclasses.dataclass(frozen=True)
class CopyOptions:
    bounds: Bounds = None


@dataclasses.dataclass(frozen=True)
class DebugOptions:
    """`derivative(Debug(...))` on a type.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        transparent: Whether the type is formatted as its single field.
    """

    bounds: Bounds = None
    transparent: bool = False


@dataclasses.dataclass(frozen=True)
class DefaultOptions:
    """`derivative(Default(...))` on a type.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        new: Whether to also generate a `new()` constructor.
    """

    bounds: Bounds = None
    new: bool = False


@dataclasses.dataclass(frozen=True)
class EqOptions:
    bounds: Bounds = None


@dataclasses.dataclass(frozen=True)
class PartialEqOptions:
    """`derivative(PartialEq(...))` on a type.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        on_enum: Allow the capability on enums, set with `feature_allow_slow_enum`.
    """

    bounds: Bounds = None
    on_enum: bool = False


@dataclasses.dataclass(frozen=True)
class FieldCloneOptions:
    bounds: Bounds = None


@dataclasses.dataclass(frozen=True)
class FieldCopyOptions:
    bounds: Bounds = None


@dataclasses.dataclass(frozen=True)
class FieldDebugOptions:
    """`derivative(Debug(...))` on a field.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        format_with: Path to the formatting function, if given.
        ignore: Whether the field is left out of the output.
    """

    bounds: Bounds = None
    format_with: Optional[Path] = None
    ignore: bool = False


@dataclasses.dataclass(frozen=True)
class FieldDefaultOptions:
    """`derivative(Default(...))` on a field.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        value: Expression used as the default value of the field, if given.
    """

    bounds: Bounds = None
    value: Optional[Expr] = None


@dataclasses.dataclass(frozen=True)
class FieldEqOptions:
    bounds: Bounds = None


@dataclasses.dataclass(frozen=True)
class FieldPartialEqOptions:
    """`derivative(PartialEq(...))` on a field.

    Attributes:
        bounds: Predicates from `bound="..."`, if given.
        compare_with: Path to the comparison function, if given.
        ignore: Whether the field is skipped when comparing.
    """

    bounds: Bounds = None
    compare_with: Optional[Path] = None
    ignore: bool = False
