from typing import List, Tuple

import pytest

import derivattrs


class StubGrammar:
    """Grammar that records every fragment it sees and does no real parsing.

    Fragments containing `@` are rejected."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []

    def _check(self, kind: str, text: str) -> None:
        self.calls.append((kind, text))
        if "@" in text:
            raise derivattrs.GrammarError(f"stub rejected `{text}`")

    def parse_constraints(self, text: str) -> Tuple[derivattrs.WherePredicate, ...]:
        self._check("constraints", text)
        assert text.startswith("where ")
        return tuple(
            derivattrs.WherePredicate(bounded=part.strip(), bounds=())
            for part in text[len("where ") :].split(";")
        )

    def parse_reference(self, text: str) -> derivattrs.Path:
        self._check("reference", text)
        return derivattrs.Path(segments=(text,))

    def parse_expression(self, text: str) -> derivattrs.Expr:
        self._check("expression", text)
        return derivattrs.Expr(text=text)


@pytest.fixture
def stub_grammar() -> StubGrammar:
    return StubGrammar()
