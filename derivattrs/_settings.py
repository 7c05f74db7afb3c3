"""Parser settings.

Defaults can be overridden from the environment, which is mostly useful for
code generators that are themselves configured through environment variables:

    PYTHON_DERIVATTRS_NAMESPACE=my_derive
    PYTHON_DERIVATTRS_ALLOW_SHORTHAND=false
"""

from __future__ import annotations

import dataclasses
import os
from typing import Any


@dataclasses.dataclass(frozen=True)
class Settings:
    """Settings for reading attributes.

    Attributes:
        namespace: Name of the wrapper attribute whose children we read, as in
            `#[derivative(...)]`.
        allow_shorthand: Accept `Debug="ignore"` as shorthand for
            `Debug(ignore="true")`. When off, only the list form is accepted.
    """

    namespace: str = "derivative"
    allow_shorthand: bool = True

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            namespace=read_option("PYTHON_DERIVATTRS_NAMESPACE", str, "derivative"),
            allow_shorthand=read_option(
                "PYTHON_DERIVATTRS_ALLOW_SHORTHAND", bool, True
            ),
        )


_BOOL_FROM_STR = {"1": True, "true": True, "0": False, "false": False}


def read_option(str_name: str, typ: Any, default: Any) -> Any:
    if str_name not in os.environ:
        return default
    value = os.environ[str_name]
    if typ is bool:
        assert value.lower() in _BOOL_FROM_STR, (
            f"{str_name}={value} not in choices {tuple(_BOOL_FROM_STR)}"
        )
        return _BOOL_FROM_STR[value.lower()]
    assert typ is str
    assert len(value) > 0, f"{str_name} should not be empty"
    return value


DEFAULT_SETTINGS = Settings.from_env()
"""Settings used when none are passed in. Read once, at import time."""
