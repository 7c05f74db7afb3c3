"""Routing of capability blocks to their accumulators."""

from typing import Dict, Optional, Sequence

from . import _accumulators, _grammar, _meta, _reader, _settings
from ._errors import UnknownTraitError


def accumulate(
    attrs: Sequence[_meta.Attribute],
    scope: _accumulators.Scope,
    grammar: _grammar.GrammarParser,
    settings: Optional[_settings.Settings] = None,
) -> Dict[str, _accumulators.Accumulator]:
    """Read every `#[derivative(...)]` block in `attrs` and feed it to the matching
    accumulator.

    Returns one accumulator per capability that was named at least once, keyed by
    capability name. The first error aborts the whole declaration."""
    if settings is None:
        settings = _settings.DEFAULT_SETTINGS
    registry = _accumulators.accumulators_for_scope(scope)

    out: Dict[str, _accumulators.Accumulator] = {}
    for item in _reader.read_items(
        attrs, settings.namespace, allow_shorthand=settings.allow_shorthand
    ):
        accumulator = out.get(item.name)
        if accumulator is None:
            if item.name not in registry:
                raise UnknownTraitError(item.name)
            accumulator = registry[item.name](grammar)
            out[item.name] = accumulator
        accumulator.accept_all(item.options)
    return out
