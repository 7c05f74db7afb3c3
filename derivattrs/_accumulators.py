"""Per-capability accumulators.

One accumulator is created per capability per declaration, the first time the
capability is named. Every later block naming the same capability is fed into the
same accumulator, so
```
    #[derivative(Debug(bound="T: Copy"))]
    #[derivative(Debug(bound="U: Clone"))]
```
produces a single record with both predicates. Bounds append; scalar settings take
the last value seen.

Options are declared by decorating handler methods with `@option(name)`. The set of
decorated handlers is the full whitelist for that capability and scope."""

from __future__ import annotations

import abc
import warnings
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from typing_extensions import Literal

from . import _grammar, _records, _values
from ._errors import AttributeParseError, UnknownAttributeError
from ._warnings import DerivattrsWarning

Scope = Literal["type", "field"]

_Handler = Callable[[Any, _values.OptionValue], None]
HandlerT = TypeVar("HandlerT", bound=_Handler)

_OPTION_ATTR = "__derivattrs_option__"


def option(name: str) -> Callable[[HandlerT], HandlerT]:
    """Mark an accumulator method as the handler for option `name`."""

    def decorator(handler: HandlerT) -> HandlerT:
        setattr(handler, _OPTION_ATTR, name)
        return handler

    return decorator


class Accumulator(abc.ABC):
    capability: ClassVar[_records.Capability]
    handlers: ClassVar[Mapping[str, _Handler]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        # Handlers are inherited, so bases can contribute shared options like
        # `bound`.
        handlers = dict(cls.handlers)
        for attr in vars(cls).values():
            name = getattr(attr, _OPTION_ATTR, None)
            if name is not None:
                handlers[name] = attr
        cls.handlers = handlers

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        self.grammar = grammar

    @classmethod
    def option_names(cls) -> Tuple[str, ...]:
        return tuple(cls.handlers.keys())

    def accept(self, key: str, value: _values.OptionValue) -> None:
        handler = self.handlers.get(key)
        if handler is None:
            raise UnknownAttributeError(key, capability=self.capability.value)
        try:
            handler(self, value)
        except AttributeParseError as e:
            if e.capability is None:
                e.capability = self.capability.value
            raise

    def accept_all(self, options: Iterable[_values.Option]) -> None:
        for key, value in options:
            self.accept(key, value)

    @abc.abstractmethod
    def finish(self) -> Any:
        """Produce the immutable record for this capability."""

    def _replace(self, current: Optional[Any], new: Any, name: str) -> Any:
        if current is not None and current != new:
            warnings.warn(
                f'"{name}" was given more than once for {self.capability.value};'
                f" using the last value, `{new}`.",
                category=DerivattrsWarning,
                stacklevel=2,
            )
        return new


class _BoundedAccumulator(Accumulator):
    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.bounds: _records.Bounds = None

    @option("bound")
    def _bound(self, value: _values.OptionValue) -> None:
        """Extra where predicates for the generated implementation. An empty string
        means no bounds at all."""
        self.bounds = _values.parse_bound(self.bounds, value, self.grammar)


# Type-level accumulators.


class TypeCloneAccumulator(_BoundedAccumulator):
    capability = _records.Capability.CLONE

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.clone_from = False

    @option("clone_from")
    def _clone_from(self, value: _values.OptionValue) -> None:
        """Also implement `clone_from` explicitly."""
        self.clone_from = _values.parse_boolean(value, True, "clone_from")

    def finish(self) -> _records.CloneOptions:
        return _records.CloneOptions(bounds=self.bounds, clone_from=self.clone_from)


class TypeCopyAccumulator(_BoundedAccumulator):
    capability = _records.Capability.COPY

    def finish(self) -> _records.CopyOptions:
        return _records.CopyOptions(bounds=self.bounds)


class TypeDebugAccumulator(_BoundedAccumulator):
    capability = _records.Capability.DEBUG

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.transparent = False

    @option("transparent")
    def _transparent(self, value: _values.OptionValue) -> None:
        """Format the type as its only field, without a wrapper."""
        self.transparent = _values.parse_boolean(value, True, "transparent")

    def finish(self) -> _records.DebugOptions:
        return _records.DebugOptions(bounds=self.bounds, transparent=self.transparent)


class TypeDefaultAccumulator(_BoundedAccumulator):
    capability = _records.Capability.DEFAULT

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.new = False

    @option("new")
    def _new(self, value: _values.OptionValue) -> None:
        """Also generate a `new()` constructor returning the default value."""
        self.new = _values.parse_boolean(value, True, "new")

    def finish(self) -> _records.DefaultOptions:
        return _records.DefaultOptions(bounds=self.bounds, new=self.new)


class TypeEqAccumulator(_BoundedAccumulator):
    capability = _records.Capability.EQ

    def finish(self) -> _records.EqOptions:
        return _records.EqOptions(bounds=self.bounds)


class TypePartialEqAccumulator(_BoundedAccumulator):
    capability = _records.Capability.PARTIAL_EQ

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.on_enum = False

    @option("feature_allow_slow_enum")
    def _feature_allow_slow_enum(self, value: _values.OptionValue) -> None:
        """Allow the capability on enums."""
        self.on_enum = _values.parse_boolean(value, True, "feature_allow_slow_enum")

    def finish(self) -> _records.PartialEqOptions:
        return _records.PartialEqOptions(bounds=self.bounds, on_enum=self.on_enum)


# Field-level accumulators.


class FieldDebugAccumulator(_BoundedAccumulator):
    capability = _records.Capability.DEBUG

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.format_with: Optional[_grammar.Path] = None
        self.ignore = False

    @option("format_with")
    def _format_with(self, value: _values.OptionValue) -> None:
        """Path to a function used to format this field."""
        path = _values.parse_reference(value, "format_with", self.grammar)
        self.format_with = self._replace(self.format_with, path, "format_with")

    @option("ignore")
    def _ignore(self, value: _values.OptionValue) -> None:
        """Leave this field out of the output."""
        self.ignore = _values.parse_boolean(value, True, "ignore")

    def finish(self) -> _records.FieldDebugOptions:
        return _records.FieldDebugOptions(
            bounds=self.bounds, format_with=self.format_with, ignore=self.ignore
        )


class FieldDefaultAccumulator(_BoundedAccumulator):
    capability = _records.Capability.DEFAULT

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.value: Optional[_grammar.Expr] = None

    @option("value")
    def _value(self, value: _values.OptionValue) -> None:
        """Expression used as this field's default value."""
        expr = _values.parse_expression(value, "value", self.grammar)
        self.value = self._replace(self.value, expr, "value")

    def finish(self) -> _records.FieldDefaultOptions:
        return _records.FieldDefaultOptions(bounds=self.bounds, value=self.value)


class FieldEqAccumulator(_BoundedAccumulator):
    capability = _records.Capability.EQ

    def finish(self) -> _records.FieldEqOptions:
        return _records.FieldEqOptions(bounds=self.bounds)


class FieldPartialEqAccumulator(_BoundedAccumulator):
    capability = _records.Capability.PARTIAL_EQ

    def __init__(self, grammar: _grammar.GrammarParser) -> None:
        super().__init__(grammar)
        self.compare_with: Optional[_grammar.Path] = None
        self.ignore = False

    @option("compare_with")
    def _compare_with(self, value: _values.OptionValue) -> None:
        """Path to a function used to compare this field."""
        path = _values.parse_reference(value, "compare_with", self.grammar)
        self.compare_with = self._replace(self.compare_with, path, "compare_with")

    @option("ignore")
    def _ignore(self, value: _values.OptionValue) -> None:
        """Skip this field when comparing."""
        self.ignore = _values.parse_boolean(value, True, "ignore")

    def finish(self) -> _records.FieldPartialEqOptions:
        return _records.FieldPartialEqOptions(
            bounds=self.bounds, compare_with=self.compare_with, ignore=self.ignore
        )


def _registry(*classes: Type[Accumulator]) -> Dict[str, Type[Accumulator]]:
    return {cls.capability.value: cls for cls in classes}


TYPE_ACCUMULATORS = _registry(
    TypeCloneAccumulator,
    TypeCopyAccumulator,
    TypeDebugAccumulator,
    TypeDefaultAccumulator,
    TypeEqAccumulator,
    TypePartialEqAccumulator,
)
FIELD_ACCUMULATORS = _registry(
    FieldDebugAccumulator,
    FieldDefaultAccumulator,
    FieldEqAccumulator,
    FieldPartialEqAccumulator,
)


def accumulators_for_scope(scope: Scope) -> Mapping[str, Type[Accumulator]]:
    if scope == "type":
        return TYPE_ACCUMULATORS
    assert scope == "field"
    return FIELD_ACCUMULATORS
