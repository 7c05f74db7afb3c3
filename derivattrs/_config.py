"""Configuration objects handed to the code generator."""

from __future__ import annotations

import dataclasses
from typing import Optional, Sequence, Tuple, Union

from . import _dispatch, _grammar, _meta, _settings
from ._records import (
    Bounds,
    Capability,
    CloneOptions,
    CopyOptions,
    DebugOptions,
    DefaultOptions,
    EqOptions,
    FieldCloneOptions,
    FieldCopyOptions,
    FieldDebugOptions,
    FieldDefaultOptions,
    FieldEqOptions,
    FieldPartialEqOptions,
    PartialEqOptions,
)

_field_name_from_capability = {
    Capability.CLONE: "clone",
    Capability.COPY: "copy",
    Capability.DEBUG: "debug",
    Capability.DEFAULT: "default",
    Capability.EQ: "eq",
    Capability.PARTIAL_EQ: "partial_eq",
}

DEFAULT_GRAMMAR = _grammar.SimpleGrammar()


@dataclasses.dataclass(frozen=True)
class TypeConfig:
    """The `derivative` attributes on a type (struct or enum).

    Each record is `None` unless the capability was named at least once. A record
    with all default settings still means the type opted in."""

    clone: Optional[CloneOptions] = None
    copy: Optional[CopyOptions] = None
    debug: Optional[DebugOptions] = None
    default: Optional[DefaultOptions] = None
    eq: Optional[EqOptions] = None
    partial_eq: Optional[PartialEqOptions] = None

    @staticmethod
    def from_attrs(
        attrs: Sequence[_meta.Attribute],
        grammar: Optional[_grammar.GrammarParser] = None,
        settings: Optional[_settings.Settings] = None,
    ) -> TypeConfig:
        """Parse the `derivative` attributes on a type."""
        accumulators = _dispatch.accumulate(
            attrs,
            "type",
            grammar=DEFAULT_GRAMMAR if grammar is None else grammar,
            settings=settings,
        )
        return TypeConfig(
            **{
                _field_name_from_capability[accumulator.capability]: accumulator.finish()
                for accumulator in accumulators.values()
            }
        )

    def has(self, capability: Union[Capability, str]) -> bool:
        """Check whether the type opted into `capability`."""
        return (
            getattr(self, _field_name_from_capability[Capability(capability)])
            is not None
        )

    def capabilities(self) -> Tuple[Capability, ...]:
        return tuple(capability for capability in Capability if self.has(capability))

    def clone_bound(self) -> Bounds:
        return None if self.clone is None else self.clone.bounds

    def clone_from(self) -> bool:
        return self.clone is not None and self.clone.clone_from

    def copy_bound(self) -> Bounds:
        return None if self.copy is None else self.copy.bounds

    def debug_bound(self) -> Bounds:
        return None if self.debug is None else self.debug.bounds

    def debug_transparent(self) -> bool:
        return self.debug is not None and self.debug.transparent

    def default_bound(self) -> Bounds:
        return None if self.default is None else self.default.bounds

    def default_new(self) -> bool:
        return self.default is not None and self.default.new

    def eq_bound(self) -> Bounds:
        return None if self.eq is None else self.eq.bounds

    def partial_eq_bound(self) -> Bounds:
        return None if self.partial_eq is None else self.partial_eq.bounds

    def partial_eq_on_enum(self) -> bool:
        return self.partial_eq is not None and self.partial_eq.on_enum


@dataclasses.dataclass(frozen=True)
class FieldConfig:
    """The `derivative` attributes on a field.

    Unlike `TypeConfig`, every record is always present: a field without attributes
    simply doesn't override anything."""

    clone: FieldCloneOptions = dataclasses.field(default_factory=FieldCloneOptions)
    copy: FieldCopyOptions = dataclasses.field(default_factory=FieldCopyOptions)
    debug: FieldDebugOptions = dataclasses.field(default_factory=FieldDebugOptions)
    default: FieldDefaultOptions = dataclasses.field(
        default_factory=FieldDefaultOptions
    )
    eq: FieldEqOptions = dataclasses.field(default_factory=FieldEqOptions)
    partial_eq: FieldPartialEqOptions = dataclasses.field(
        default_factory=FieldPartialEqOptions
    )

    @staticmethod
    def from_attrs(
        attrs: Sequence[_meta.Attribute],
        grammar: Optional[_grammar.GrammarParser] = None,
        settings: Optional[_settings.Settings] = None,
    ) -> FieldConfig:
        """Parse the `derivative` attributes on a field."""
        accumulators = _dispatch.accumulate(
            attrs,
            "field",
            grammar=DEFAULT_GRAMMAR if grammar is None else grammar,
            settings=settings,
        )
        return FieldConfig(
            **{
                _field_name_from_capability[accumulator.capability]: accumulator.finish()
                for accumulator in accumulators.values()
            }
        )

    @staticmethod
    def from_field(
        field: _meta.FieldDecl,
        grammar: Optional[_grammar.GrammarParser] = None,
        settings: Optional[_settings.Settings] = None,
    ) -> FieldConfig:
        return FieldConfig.from_attrs(field.attrs, grammar=grammar, settings=settings)

    def clone_bound(self) -> Bounds:
        return self.clone.bounds

    def copy_bound(self) -> Bounds:
        return self.copy.bounds

    def debug_bound(self) -> Bounds:
        return self.debug.bounds

    def debug_format_with(self) -> Optional[_grammar.Path]:
        return self.debug.format_with

    def ignore_debug(self) -> bool:
        return self.debug.ignore

    def default_bound(self) -> Bounds:
        return self.default.bounds

    def default_value(self) -> Optional[_grammar.Expr]:
        return self.default.value

    def eq_bound(self) -> Bounds:
        return self.eq.bounds

    def partial_eq_bound(self) -> Bounds:
        return self.partial_eq.bounds

    def partial_eq_compare_with(self) -> Optional[_grammar.Path]:
        return self.partial_eq.compare_with

    def ignore_partial_eq(self) -> bool:
        return self.partial_eq.ignore
