"""Normalization of raw attribute nodes into `MetaItem`s.

We only accept a limited subset of the attribute syntax:

* `#[derivative(Debug)]` is read as `("Debug", [])`;
* `#[derivative(Debug="foo")]` is read as `("Debug", [("foo", BARE)])`;
* `#[derivative(Debug(foo="bar"))]` is read as `("Debug", [("foo", Valued("bar"))])`;
* `#[derivative(Debug(foo))]` is read as `("Debug", [("foo", BARE)])`.
"""

import dataclasses
from typing import Iterator, List, Sequence, Tuple

from . import _meta, _values
from ._errors import MalformedAttributeError


@dataclasses.dataclass(frozen=True)
class MetaItem:
    name: str
    options: Tuple[_values.Option, ...]


def str_or_err(lit: _meta.Lit) -> str:
    """Get the string out of a string literal, or report an error for other
    literals."""
    if lit.kind != "str":
        raise MalformedAttributeError("expected string")
    return lit.value


def read_item(item: _meta.NestedItem, allow_shorthand: bool = True) -> MetaItem:
    """Read a single capability block, eg the `Debug(...)` in
    `#[derivative(Debug(...))]`."""
    if isinstance(item, _meta.MetaWord):
        return MetaItem(item.name, ())

    elif isinstance(item, _meta.MetaList):
        options: List[_values.Option] = []
        for value in item.items:
            if isinstance(value, _meta.MetaNameValue):
                options.append((value.name, _values.Valued(str_or_err(value.lit))))
            elif isinstance(value, _meta.MetaWord):
                options.append((value.name, _values.BARE))
            else:
                raise MalformedAttributeError(
                    "expected named value", capability=item.name
                )
        return MetaItem(item.name, tuple(options))

    elif isinstance(item, _meta.MetaNameValue):
        # Shorthand: the string payload is the name of a single option, given
        # without a value.
        if not allow_shorthand:
            raise MalformedAttributeError(
                f'expected `{item.name}(...)`, found `{item.name} = {item.lit}`',
                capability=item.name,
            )
        return MetaItem(item.name, ((str_or_err(item.lit), _values.BARE),))

    else:
        assert isinstance(item, _meta.Lit)
        raise MalformedAttributeError("expected named value")


def namespace_items(
    attrs: Sequence[_meta.Attribute], namespace: str
) -> Iterator[_meta.NestedItem]:
    """Filter attributes down to the children of `#[<namespace>(...)]` lists.
    Everything else belongs to somebody else and is skipped."""
    for attr in attrs:
        meta = attr.meta
        if isinstance(meta, _meta.MetaList) and meta.name == namespace:
            yield from meta.items


def read_items(
    attrs: Sequence[_meta.Attribute], namespace: str, allow_shorthand: bool = True
) -> Iterator[MetaItem]:
    for item in namespace_items(attrs, namespace):
        yield read_item(item, allow_shorthand=allow_shorthand)
