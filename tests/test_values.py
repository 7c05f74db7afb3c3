import pytest

import derivattrs
from derivattrs import WherePredicate
from derivattrs._values import (
    BARE,
    BareType,
    Valued,
    parse_boolean,
    parse_bound,
    parse_expression,
    parse_reference,
    require_value,
)


def test_bare_is_a_singleton() -> None:
    assert BareType() is BARE
    assert repr(BARE) == "BARE"


def test_parse_boolean() -> None:
    assert parse_boolean(Valued("true"), False, "flag")
    assert not parse_boolean(Valued("false"), True, "flag")
    assert parse_boolean(BARE, True, "flag")
    assert not parse_boolean(BARE, False, "flag")

    for text in ("True", "1", "", "yes"):
        with pytest.raises(derivattrs.InvalidBooleanError, match='"flag"'):
            parse_boolean(Valued(text), True, "flag")


def test_require_value() -> None:
    assert require_value(Valued(""), "x") == ""
    with pytest.raises(derivattrs.MissingValueError, match='"x" needs a value'):
        require_value(BARE, "x")


def test_parse_bound(stub_grammar) -> None:
    bounds = parse_bound(None, Valued("A; B"), stub_grammar)
    assert bounds == (WherePredicate("A", ()), WherePredicate("B", ()))
    bounds = parse_bound(bounds, Valued(""), stub_grammar)
    assert bounds == (WherePredicate("A", ()), WherePredicate("B", ()))
    bounds = parse_bound(bounds, Valued("C"), stub_grammar)
    assert [predicate.bounded for predicate in bounds] == ["A", "B", "C"]
    assert parse_bound(None, Valued(""), stub_grammar) == ()
    assert stub_grammar.calls == [
        ("constraints", "where A; B"),
        ("constraints", "where C"),
    ]

    with pytest.raises(derivattrs.MissingValueError):
        parse_bound(None, BARE, stub_grammar)


def test_parse_reference_and_expression(stub_grammar) -> None:
    assert parse_reference(Valued("a::b"), "format_with", stub_grammar) == (
        derivattrs.Path(("a::b",))
    )
    assert parse_expression(Valued("1 + 2"), "value", stub_grammar) == (
        derivattrs.Expr("1 + 2")
    )
    with pytest.raises(derivattrs.MissingValueError, match="compare_with"):
        parse_reference(BARE, "compare_with", stub_grammar)
    with pytest.raises(derivattrs.FragmentError, match="stub rejected") as e:
        parse_expression(Valued("@"), "value", stub_grammar)
    assert e.value.option == "value"
