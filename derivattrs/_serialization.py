"""YAML serialization for finished configuration objects.

Useful for caching parsed configuration between code generation runs, or for
inspecting what a set of attributes compiled to."""

import dataclasses
import datetime
from typing import IO, Any, Optional, Set, Type, TypeVar, Union

import yaml
from typing_extensions import get_args, get_type_hints

DATACLASS_YAML_TAG_PREFIX = "!dataclass:"

ConfigType = TypeVar("ConfigType")


def _get_contained_dataclasses_from_instance(instance: Any) -> Set[Type]:
    """Takes an object and recursively searches its children for dataclass types."""
    if isinstance(instance, tuple):
        out: Set[Type] = set()
        for v in instance:
            out |= _get_contained_dataclasses_from_instance(v)
        return out
    elif not dataclasses.is_dataclass(instance):
        return set()

    out = {type(instance)}
    for field in dataclasses.fields(instance):
        out |= _get_contained_dataclasses_from_instance(getattr(instance, field.name))
    return out


def _get_contained_dataclasses_from_type(
    typ: Any,
    _parent_contained_dataclasses: Optional[Set[Type]] = None,
) -> Set[Type]:
    """Takes a type, and recursively searches it for dataclass types. Unions and
    tuples are unwrapped."""
    parent_contained_dataclasses = (
        set()
        if _parent_contained_dataclasses is None
        else _parent_contained_dataclasses
    )
    if typ in parent_contained_dataclasses:
        return set()

    if isinstance(typ, type) and dataclasses.is_dataclass(typ):
        contained_dataclasses = {typ}
        for field_type in get_type_hints(typ).values():
            contained_dataclasses |= _get_contained_dataclasses_from_type(
                field_type,
                _parent_contained_dataclasses=contained_dataclasses
                | parent_contained_dataclasses,
            )
        return contained_dataclasses

    out: Set[Type] = set()
    for arg in get_args(typ):
        out |= _get_contained_dataclasses_from_type(
            arg, _parent_contained_dataclasses=parent_contained_dataclasses
        )
    return out


def _assert_unique_names(contained_types: Set[Type]) -> None:
    names = [typ.__name__ for typ in contained_types]
    assert len(set(names)) == len(
        names
    ), f"Contained dataclass type names must all be unique, but got {names}"


def _make_loader(cls: Type) -> Type[yaml.Loader]:
    class ConfigLoader(yaml.Loader):
        pass

    contained_types = _get_contained_dataclasses_from_type(cls)
    _assert_unique_names(contained_types)

    def make_dataclass_constructor(typ: Type):
        return lambda loader, node: typ(**loader.construct_mapping(node, deep=True))

    for typ in contained_types:
        ConfigLoader.add_constructor(
            tag=DATACLASS_YAML_TAG_PREFIX + typ.__name__,
            constructor=make_dataclass_constructor(typ),
        )

    return ConfigLoader


def _make_dumper(instance: Any) -> Type[yaml.Dumper]:
    class ConfigDumper(yaml.Dumper):
        pass

    contained_types = _get_contained_dataclasses_from_instance(instance)
    _assert_unique_names(contained_types)

    def make_representer(name: str):
        def representer(dumper, data):
            return dumper.represent_mapping(
                tag=DATACLASS_YAML_TAG_PREFIX + name,
                mapping={
                    field.name: getattr(data, field.name)
                    for field in dataclasses.fields(data)
                },
            )

        return representer

    for typ in contained_types:
        ConfigDumper.add_representer(typ, make_representer(typ.__name__))
    return ConfigDumper


def from_yaml(
    cls: Type[ConfigType],
    stream: Union[str, IO[str], bytes, IO[bytes]],
) -> ConfigType:
    """Re-construct a configuration object from a yaml-compatible string, which
    should be generated from `derivattrs.to_yaml()`."""
    out = yaml.load(stream, Loader=_make_loader(cls))
    assert isinstance(out, cls)
    return out


def _timestamp() -> str:
    """Get a current timestamp as a string. Example format: `2021-11-05-15:46:32`."""
    return datetime.datetime.now().strftime("%Y-%m-%d-%H:%M:%S")


def to_yaml(instance: Any) -> str:
    """Serialize a configuration object; returns a yaml-compatible string that can be
    deserialized via `derivattrs.from_yaml()`."""
    return f"# YAML generated via derivattrs, at {_timestamp()}.\n" + yaml.dump(
        instance, Dumper=_make_dumper(instance)
    )
