"""Option values and the primitives used to interpret them.

An option inside a capability block is always *present*; what varies is whether it
carries a value:
```
    Debug(transparent)             ("transparent", BARE)
    Debug(transparent="false")     ("transparent", Valued("false"))
```
An option that is never mentioned simply doesn't appear in the option sequence."""

import dataclasses
from typing import List, Optional, Tuple, Union

from . import _grammar
from ._errors import FragmentError, InvalidBooleanError, MissingValueError


class BareType:
    # Singleton pattern.
    # https://www.python.org/download/releases/2.2/descrintro/#__new__
    def __new__(cls):
        it = cls.__dict__.get("__it__")
        if it is not None:
            return it
        cls.__it__ = it = object.__new__(cls)
        return it

    def __repr__(self) -> str:
        return "BARE"


BARE = BareType()
"""Marks an option that was written without a value, eg `ignore` in
`Debug(ignore)`."""


@dataclasses.dataclass(frozen=True)
class Valued:
    text: str


OptionValue = Union[BareType, Valued]
Option = Tuple[str, OptionValue]


def require_value(value: OptionValue, name: str) -> str:
    """Get the text of an option that must be written as `name="..."`."""
    if isinstance(value, Valued):
        return value.text
    assert value is BARE
    raise MissingValueError(name)


def parse_boolean(value: OptionValue, default: bool, name: str) -> bool:
    """Parse an option value as a boolean. Accepted values are "true" and "false".

    `default` is used when only the option name is written, so `Debug(ignore)` is
    equivalent to `Debug(ignore="true")`. `name` is used for error reporting."""
    if isinstance(value, Valued):
        if value.text == "true":
            return True
        elif value.text == "false":
            return False
        raise InvalidBooleanError(name, value.text)
    assert value is BARE
    return default


def parse_bound(
    bounds: Optional[Tuple[_grammar.WherePredicate, ...]],
    value: OptionValue,
    grammar: _grammar.GrammarParser,
) -> Tuple[_grammar.WherePredicate, ...]:
    """Parse a `bound` option and append its predicates to `bounds`.

    An empty string is accepted: it appends nothing, but marks the bounds as
    explicitly given, which replaces the inferred bounds downstream."""
    text = require_value(value, "bound")
    out: List[_grammar.WherePredicate] = list(bounds) if bounds is not None else []
    if len(text) > 0:
        try:
            out.extend(grammar.parse_constraints(f"where {text}"))
        except _grammar.GrammarError as e:
            raise FragmentError(e.args[0], option="bound") from e
    return tuple(out)


def parse_reference(value: OptionValue, name: str, grammar: _grammar.GrammarParser):
    text = require_value(value, name)
    try:
        return grammar.parse_reference(text)
    except _grammar.GrammarError as e:
        raise FragmentError(e.args[0], option=name) from e


def parse_expression(value: OptionValue, name: str, grammar: _grammar.GrammarParser):
    text = require_value(value, name)
    try:
        return grammar.parse_expression(text)
    except _grammar.GrammarError as e:
        raise FragmentError(e.args[0], option=name) from e
