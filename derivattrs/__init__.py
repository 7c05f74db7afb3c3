"""Read `#[derivative(...)]` attributes into typed configuration objects.

Type-level attributes opt a declaration into capabilities; field-level attributes
customize how an opted-in capability treats one field:

```
    config = derivattrs.TypeConfig.from_attrs(
        derivattrs.parse_attributes('#[derivative(Debug(bound="T: Copy"))]')
    )
    assert config.debug_bound() is not None
```
"""

from ._accumulators import Scope
from ._catalog import OptionDoc, format_catalog, option_docs
from ._config import FieldConfig, TypeConfig
from ._errors import (
    AttributeParseError,
    AttributeSyntaxError,
    FragmentError,
    InvalidBooleanError,
    MalformedAttributeError,
    MissingValueError,
    UnknownAttributeError,
    UnknownTraitError,
)
from ._grammar import (
    Expr,
    GrammarError,
    GrammarParser,
    Path,
    SimpleGrammar,
    WherePredicate,
)
from ._meta import Attribute, FieldDecl, Lit, MetaList, MetaNameValue, MetaWord
from ._records import (
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
from ._serialization import from_yaml, to_yaml
from ._settings import Settings
from ._syntax import parse_attribute, parse_attributes, parse_meta
from ._warnings import DerivattrsWarning

__all__ = [
    "Attribute",
    "AttributeParseError",
    "AttributeSyntaxError",
    "Capability",
    "CloneOptions",
    "CopyOptions",
    "DebugOptions",
    "DefaultOptions",
    "DerivattrsWarning",
    "EqOptions",
    "Expr",
    "FieldCloneOptions",
    "FieldConfig",
    "FieldCopyOptions",
    "FieldDebugOptions",
    "FieldDecl",
    "FieldDefaultOptions",
    "FieldEqOptions",
    "FieldPartialEqOptions",
    "FragmentError",
    "GrammarError",
    "GrammarParser",
    "InvalidBooleanError",
    "Lit",
    "MalformedAttributeError",
    "MetaList",
    "MetaNameValue",
    "MetaWord",
    "MissingValueError",
    "OptionDoc",
    "PartialEqOptions",
    "Path",
    "Scope",
    "Settings",
    "SimpleGrammar",
    "TypeConfig",
    "UnknownAttributeError",
    "UnknownTraitError",
    "WherePredicate",
    "format_catalog",
    "from_yaml",
    "option_docs",
    "parse_attribute",
    "parse_attributes",
    "parse_meta",
    "to_yaml",
]
