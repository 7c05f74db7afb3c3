import pytest

import derivattrs
from derivattrs import TypeConfig, WherePredicate, parse_attributes


def _type_config(source: str, **kwargs) -> TypeConfig:
    return TypeConfig.from_attrs(parse_attributes(source), **kwargs)


def test_no_attributes() -> None:
    config = TypeConfig.from_attrs([])
    assert config == TypeConfig()
    assert config.capabilities() == ()
    for capability in derivattrs.Capability:
        assert not config.has(capability)
    assert config.debug_bound() is None
    assert not config.debug_transparent()
    assert not config.partial_eq_on_enum()


def test_unrelated_attributes_are_skipped() -> None:
    config = _type_config(
        '#[derive(Clone)] #[serde(rename = "x")]'
        ' #[derivative] #[derivative = "Debug"]'
    )
    assert config.capabilities() == ()


def test_bare_capabilities_are_present_with_defaults() -> None:
    config = _type_config("#[derivative(Debug, Clone, PartialEq)]")
    assert config.debug == derivattrs.DebugOptions()
    assert config.clone == derivattrs.CloneOptions()
    assert config.partial_eq == derivattrs.PartialEqOptions()
    assert config.copy is None
    assert config.capabilities() == (
        derivattrs.Capability.CLONE,
        derivattrs.Capability.DEBUG,
        derivattrs.Capability.PARTIAL_EQ,
    )
    assert config.has("Debug")
    assert not config.has("Copy")

    # Present, but without bounds.
    assert config.debug_bound() is None
    assert not config.debug_transparent()


def test_debug_round_trip() -> None:
    config = _type_config('#[derivative(Debug(bound="T: Copy", transparent))]')
    assert config.debug_bound() == (WherePredicate("T", ("Copy",)),)
    assert config.debug_transparent()

    config = _type_config(
        """
        #[derivative(Debug(bound="T: Copy", transparent))]
        #[derivative(Debug(bound="U: Clone"))]
        """
    )
    assert config.debug_bound() == (
        WherePredicate("T", ("Copy",)),
        WherePredicate("U", ("Clone",)),
    )
    assert config.debug_transparent()


def test_bounds_append_in_order(stub_grammar) -> None:
    config = _type_config(
        """
        #[derivative(Clone(bound="A"), Clone(bound="B"))]
        #[derivative(Clone(bound="C", bound="D"))]
        """,
        grammar=stub_grammar,
    )
    assert [str(predicate.bounded) for predicate in config.clone_bound()] == [
        "A",
        "B",
        "C",
        "D",
    ]
    assert stub_grammar.calls == [
        ("constraints", "where A"),
        ("constraints", "where B"),
        ("constraints", "where C"),
        ("constraints", "where D"),
    ]


def test_multiple_predicates_in_one_bound() -> None:
    config = _type_config('#[derivative(Eq(bound="T: Eq, U: PartialEq + Eq"))]')
    assert config.eq_bound() == (
        WherePredicate("T", ("Eq",)),
        WherePredicate("U", ("PartialEq", "Eq")),
    )


def test_empty_bound_is_present_but_empty(stub_grammar) -> None:
    config = _type_config('#[derivative(Copy(bound=""))]', grammar=stub_grammar)
    assert config.copy_bound() == ()
    assert stub_grammar.calls == []

    config = _type_config(
        '#[derivative(Copy(bound=""))] #[derivative(Copy(bound="T"))]',
        grammar=stub_grammar,
    )
    assert config.copy_bound() == (WherePredicate("T", ()),)


@pytest.mark.parametrize(
    "capability,flag,accessor",
    [
        ("Clone", "clone_from", TypeConfig.clone_from),
        ("Debug", "transparent", TypeConfig.debug_transparent),
        ("Default", "new", TypeConfig.default_new),
        ("PartialEq", "feature_allow_slow_enum", TypeConfig.partial_eq_on_enum),
    ],
)
def test_boolean_flags(capability: str, flag: str, accessor) -> None:
    bare = _type_config(f"#[derivative({capability}({flag}))]")
    explicit = _type_config(f'#[derivative({capability}({flag}="true"))]')
    disabled = _type_config(f'#[derivative({capability}({flag}="false"))]')
    shorthand = _type_config(f'#[derivative({capability}="{flag}")]')

    assert bare == explicit == shorthand
    assert accessor(bare)
    assert not accessor(disabled)
    assert disabled.has(capability)


def test_scalar_flags_take_last_value() -> None:
    config = _type_config(
        """
        #[derivative(Default(new))]
        #[derivative(Default(new="false"))]
        """
    )
    assert not config.default_new()
    assert config.default == derivattrs.DefaultOptions(bounds=None, new=False)


def test_invalid_boolean() -> None:
    with pytest.raises(derivattrs.InvalidBooleanError, match="transparent") as e:
        _type_config('#[derivative(Debug(transparent="yes"))]')
    assert e.value.capability == "Debug"
    assert e.value.option == "transparent"


def test_unknown_trait() -> None:
    with pytest.raises(derivattrs.UnknownTraitError, match='"Hash"'):
        _type_config("#[derivative(Hash)]")
    with pytest.raises(derivattrs.UnknownTraitError, match="Hash"):
        _type_config('#[derivative(Debug, Hash(bound="T: Hash"))]')


def test_unknown_attribute() -> None:
    with pytest.raises(derivattrs.UnknownAttributeError, match='"bogus"') as e:
        _type_config('#[derivative(Debug(bogus="x"))]')
    assert e.value.capability == "Debug"

    # Options are checked per capability.
    with pytest.raises(derivattrs.UnknownAttributeError, match="transparent"):
        _type_config("#[derivative(Clone(transparent))]")

    # Field-only options.
    with pytest.raises(derivattrs.UnknownAttributeError, match="ignore"):
        _type_config("#[derivative(Debug(ignore))]")


def test_shorthand_goes_through_whitelist() -> None:
    with pytest.raises(derivattrs.UnknownAttributeError, match="T: Copy"):
        _type_config('#[derivative(Debug="T: Copy")]')


def test_shorthand_can_be_disabled() -> None:
    settings = derivattrs.Settings(allow_shorthand=False)
    with pytest.raises(derivattrs.MalformedAttributeError):
        _type_config('#[derivative(Debug="transparent")]', settings=settings)
    assert _type_config(
        "#[derivative(Debug(transparent))]", settings=settings
    ).debug_transparent()


def test_custom_namespace() -> None:
    settings = derivattrs.Settings(namespace="my_derive")
    config = _type_config(
        "#[derivative(Hash)] #[my_derive(Debug(transparent))]", settings=settings
    )
    assert config.debug_transparent()


def test_bound_needs_value() -> None:
    with pytest.raises(derivattrs.MissingValueError, match='"bound" needs a value'):
        _type_config("#[derivative(Eq(bound))]")


def test_malformed_shapes() -> None:
    with pytest.raises(derivattrs.MalformedAttributeError, match="expected string"):
        _type_config("#[derivative(Debug(bound=1))]")
    with pytest.raises(derivattrs.MalformedAttributeError, match="expected string"):
        _type_config("#[derivative(Debug=true)]")
    with pytest.raises(
        derivattrs.MalformedAttributeError, match="expected named value"
    ):
        _type_config("#[derivative(Debug(Clone(bound=\"\")))]")
    with pytest.raises(
        derivattrs.MalformedAttributeError, match="expected named value"
    ):
        _type_config('#[derivative("Debug")]')


def test_grammar_errors_are_wrapped(stub_grammar) -> None:
    with pytest.raises(
        derivattrs.FragmentError, match="stub rejected `where T@`"
    ) as e:
        _type_config('#[derivative(Copy(bound="T@"))]', grammar=stub_grammar)
    assert isinstance(e.value.__cause__, derivattrs.GrammarError)
    assert e.value.option == "bound"
    assert e.value.capability == "Copy"

    with pytest.raises(derivattrs.FragmentError, match="unbalanced"):
        _type_config('#[derivative(Copy(bound="T: Vec<u8>>"))]')


def test_first_error_aborts(stub_grammar) -> None:
    with pytest.raises(derivattrs.UnknownAttributeError):
        _type_config(
            '#[derivative(Debug(bogus="x", bound="T"))]', grammar=stub_grammar
        )
    assert stub_grammar.calls == []


def test_config_is_immutable() -> None:
    config = _type_config("#[derivative(Debug)]")
    with pytest.raises(AttributeError):
        config.debug = None  # type: ignore
