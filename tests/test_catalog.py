import derivattrs
from derivattrs import OptionDoc
from derivattrs._strings import strip_ansi_sequences


def test_type_scope_options() -> None:
    options = {(doc.capability, doc.option) for doc in derivattrs.option_docs("type")}
    assert options == {
        ("Clone", "bound"),
        ("Clone", "clone_from"),
        ("Copy", "bound"),
        ("Debug", "bound"),
        ("Debug", "transparent"),
        ("Default", "bound"),
        ("Default", "new"),
        ("Eq", "bound"),
        ("PartialEq", "bound"),
        ("PartialEq", "feature_allow_slow_enum"),
    }


def test_field_scope_options() -> None:
    options = {(doc.capability, doc.option) for doc in derivattrs.option_docs("field")}
    assert options == {
        ("Debug", "bound"),
        ("Debug", "format_with"),
        ("Debug", "ignore"),
        ("Default", "bound"),
        ("Default", "value"),
        ("Eq", "bound"),
        ("PartialEq", "bound"),
        ("PartialEq", "compare_with"),
        ("PartialEq", "ignore"),
    }


def test_helptext_comes_from_handlers() -> None:
    docs = derivattrs.option_docs("field")
    assert (
        OptionDoc(
            capability="Debug",
            option="bound",
            helptext="Extra where predicates for the generated implementation."
            " An empty string means no bounds at all.",
        )
        in docs
    )
    assert (
        OptionDoc(
            capability="PartialEq",
            option="ignore",
            helptext="Skip this field when comparing.",
        )
        in docs
    )


def test_format_catalog() -> None:
    text = strip_ansi_sequences(derivattrs.format_catalog("type"))
    lines = text.splitlines()
    assert lines[0] == "Clone"
    assert lines[1].startswith("  bound ")
    assert "PartialEq" in lines
    assert any(
        line.strip().startswith("feature_allow_slow_enum  Allow the capability")
        for line in lines
    )
