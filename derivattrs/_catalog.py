"""Reference listing of every recognized capability and option.

Helptext is pulled from the docstrings of the option handlers, so the listing can't
drift from what the accumulators actually accept."""

import dataclasses
import functools
from typing import List, Optional, Tuple

import docstring_parser

from . import _accumulators, _strings


@dataclasses.dataclass(frozen=True)
class OptionDoc:
    capability: str
    option: str
    helptext: Optional[str]


def _helptext_from_handler(handler: object) -> Optional[str]:
    docstring = getattr(handler, "__doc__", None)
    if docstring is None:
        return None
    parsed = docstring_parser.parse(docstring)
    parts = [
        part.strip()
        for part in (parsed.short_description, parsed.long_description)
        if part is not None
    ]
    return " ".join(" ".join(parts).split()) or None


@functools.lru_cache(maxsize=None)
def option_docs(scope: _accumulators.Scope) -> Tuple[OptionDoc, ...]:
    """Get documentation for every option accepted in `scope`, grouped by
    capability."""
    out: List[OptionDoc] = []
    for name, accumulator in _accumulators.accumulators_for_scope(scope).items():
        for option_name, handler in accumulator.handlers.items():
            out.append(
                OptionDoc(
                    capability=name,
                    option=option_name,
                    helptext=_helptext_from_handler(handler),
                )
            )
    return tuple(out)


def format_catalog(scope: _accumulators.Scope) -> str:
    """Render the options accepted in `scope` as an indented, colored listing."""
    docs = option_docs(scope)
    width = max(len(doc.option) for doc in docs)

    lines: List[str] = []
    prev_capability: Optional[str] = None
    for doc in docs:
        if doc.capability != prev_capability:
            lines.append(_strings.format_capability(doc.capability))
            prev_capability = doc.capability
        line = "  " + _strings.format_option(doc.option.ljust(width))
        if doc.helptext is not None:
            line += "  " + doc.helptext
        lines.append(line)
    return "\n".join(lines)
