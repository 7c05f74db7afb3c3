"""Exceptions raised while reading `derivative` attributes.

Every failure aborts the parse of the current declaration; there is no partial
output. The human-readable message is always available as `args[0]`."""

from typing import Optional


class AttributeParseError(Exception):
    """Base class for all attribute parsing failures."""

    def __init__(
        self,
        message: str,
        *,
        capability: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.capability = capability
        self.option = option


class UnknownTraitError(AttributeParseError):
    """Raised when an annotation names a capability outside of the closed set."""

    def __init__(self, name: str) -> None:
        super().__init__(f'unknown trait "{name}"', capability=name)


class UnknownAttributeError(AttributeParseError):
    """Raised when a capability receives an option it doesn't recognize."""

    def __init__(self, key: str, capability: Optional[str] = None) -> None:
        super().__init__(
            f'unknown attribute "{key}"', capability=capability, option=key
        )


class MalformedAttributeError(AttributeParseError):
    """Raised when an annotation has the wrong shape, eg a nested list where a
    `name="value"` pair is expected, or a non-string literal."""


class MissingValueError(AttributeParseError):
    """Raised when an option that requires a value is given bare."""

    def __init__(self, option: str, capability: Optional[str] = None) -> None:
        super().__init__(
            f'"{option}" needs a value', capability=capability, option=option
        )


class InvalidBooleanError(AttributeParseError):
    """Raised when a boolean option is set to something other than "true" or
    "false"."""

    def __init__(self, option: str, got: str) -> None:
        super().__init__(
            f'invalid value for "{option}": expected "true" or "false", got "{got}"',
            option=option,
        )


class FragmentError(AttributeParseError):
    """Raised when the grammar parser rejects a bound, reference, or expression.
    The grammar's message is passed through unchanged."""


class AttributeSyntaxError(AttributeParseError):
    """Raised when attribute source text can't be tokenized or parsed."""

    def __init__(self, description: str, source: str, position: int) -> None:
        super().__init__(f"{description} at position {position}: {source!r}")
        self.description = description
        self.source = source
        self.position = position
