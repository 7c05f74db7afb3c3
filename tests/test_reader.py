import pytest

import derivattrs
from derivattrs import Attribute, Lit, MetaList, MetaNameValue, MetaWord
from derivattrs._reader import MetaItem, namespace_items, read_item, read_items
from derivattrs._values import BARE, Valued


def test_word() -> None:
    assert read_item(MetaWord("Debug")) == MetaItem("Debug", ())


def test_name_value_shorthand() -> None:
    assert read_item(MetaNameValue("Debug", Lit("str", "ignore"))) == MetaItem(
        "Debug", (("ignore", BARE),)
    )
    with pytest.raises(derivattrs.MalformedAttributeError, match="Debug"):
        read_item(
            MetaNameValue("Debug", Lit("str", "ignore")), allow_shorthand=False
        )


def test_list() -> None:
    item = MetaList(
        "Debug",
        (
            MetaNameValue("bound", Lit("str", "T: Copy")),
            MetaWord("transparent"),
            MetaNameValue("bound", Lit("str", "")),
        ),
    )
    assert read_item(item) == MetaItem(
        "Debug",
        (
            ("bound", Valued("T: Copy")),
            ("transparent", BARE),
            ("bound", Valued("")),
        ),
    )


@pytest.mark.parametrize(
    "item,message",
    [
        (MetaList("Debug", (MetaList("bound", ()),)), "expected named value"),
        (MetaList("Debug", (Lit("str", "bound"),)), "expected named value"),
        (Lit("str", "Debug"), "expected named value"),
        (MetaList("Debug", (MetaNameValue("x", Lit("int", "1")),)), "expected string"),
        (MetaNameValue("Debug", Lit("char", "x")), "expected string"),
        (MetaNameValue("Debug", Lit("byte_str", "x")), "expected string"),
    ],
)
def test_malformed(item, message: str) -> None:
    with pytest.raises(derivattrs.MalformedAttributeError, match=message):
        read_item(item)


def test_namespace_filtering() -> None:
    attrs = [
        Attribute(MetaList("derive", (MetaWord("Clone"),))),
        Attribute(MetaList("derivative", (MetaWord("Debug"), MetaWord("Eq")))),
        Attribute(MetaWord("derivative")),
        Attribute(MetaNameValue("derivative", Lit("str", "Copy"))),
        Attribute(MetaList("derivative", (MetaWord("Clone"),))),
    ]
    assert list(namespace_items(attrs, "derivative")) == [
        MetaWord("Debug"),
        MetaWord("Eq"),
        MetaWord("Clone"),
    ]
    assert list(namespace_items(attrs, "derive")) == [MetaWord("Clone")]
    assert [item.name for item in read_items(attrs, "derivative")] == [
        "Debug",
        "Eq",
        "Clone",
    ]
