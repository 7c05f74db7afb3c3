"""Boundary to the grammar parser used for embedded fragments.

Bounds, `format_with`/`compare_with` paths, and `Default(value=...)` expressions are
written as strings inside attributes. We never interpret them ourselves: they're
handed to a `GrammarParser`, and whatever it returns is stored as-is.

`SimpleGrammar` is the default implementation. It checks structure (balanced
delimiters, path shape, predicate shape) but is nowhere near a full type or
expression grammar; code generators with access to a real parser should pass their
own."""

import dataclasses
import functools
import re
from typing import List, Sequence, Tuple

from typing_extensions import Protocol, runtime_checkable


class GrammarError(Exception):
    """Raised by a `GrammarParser` when it rejects a fragment."""


@dataclasses.dataclass(frozen=True)
class WherePredicate:
    """One predicate of a where clause, eg `T: Clone + 'static`."""

    bounded: str
    bounds: Tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.bounded}: {' + '.join(self.bounds)}".rstrip()


@dataclasses.dataclass(frozen=True)
class Path:
    """A named reference, eg `::std::fmt::Debug::fmt`."""

    segments: Tuple[str, ...]
    leading_colon: bool = False

    def __str__(self) -> str:
        return ("::" if self.leading_colon else "") + "::".join(self.segments)


@dataclasses.dataclass(frozen=True)
class Expr:
    """An expression, kept as normalized source text."""

    text: str

    def __str__(self) -> str:
        return self.text


@runtime_checkable
class GrammarParser(Protocol):
    def parse_constraints(self, text: str) -> Sequence[WherePredicate]:
        """Parse a where clause, including the leading `where` keyword."""
        ...

    def parse_reference(self, text: str) -> Path:
        ...

    def parse_expression(self, text: str) -> Expr:
        ...


# Implementation details below.

_CLOSER_FROM_OPENER = {"(": ")", "[": "]", "{": "}", "<": ">"}


@functools.lru_cache(maxsize=1)
def _get_char_literal_pattern() -> "re.Pattern[str]":
    return re.compile(r"'(?:[^'\\]|\\[^']+)'")


@functools.lru_cache(maxsize=1)
def _get_path_pattern() -> "re.Pattern[str]":
    ident = r"(?:r#)?(?:[A-Za-z][A-Za-z0-9_]*|_[A-Za-z0-9_]+)"
    return re.compile(rf"(::)?\s*{ident}(?:\s*::\s*{ident})*")


def _split_top_level(text: str, separator: str, angle_brackets: bool) -> List[str]:
    """Split `text` on `separator`, ignoring separators nested inside delimiters or
    string literals. Raises `GrammarError` if delimiters are unbalanced.

    A `:` separator never matches either half of a `::` path separator."""
    openers = "([{<" if angle_brackets else "([{"
    stack: List[str] = []
    parts: List[str] = []
    start = 0
    i = 0
    while i < len(text):
        c = text[i]
        if c == '"':
            end = i + 1
            while end < len(text) and text[end] != '"':
                end += 2 if text[end] == "\\" else 1
            if end >= len(text):
                raise GrammarError(f"unterminated string literal in `{text}`")
            i = end + 1
            continue
        if c == "'":
            match = _get_char_literal_pattern().match(text, i)
            if match is not None:
                i = match.end()
                continue
        if c in openers:
            stack.append(_CLOSER_FROM_OPENER[c])
        elif c in ")]}" or (angle_brackets and c == ">"):
            if c == ">" and i > 0 and text[i - 1] == "-":
                # `->` in `Fn(A) -> B`.
                pass
            elif len(stack) == 0 or stack.pop() != c:
                raise GrammarError(f"unbalanced delimiter `{c}` in `{text}`")
        elif c == separator and len(stack) == 0:
            is_path_separator = separator == ":" and (
                text[i + 1 : i + 2] == ":" or text[i - 1 : i] == ":"
            )
            if not is_path_separator:
                parts.append(text[start:i])
                start = i + 1
        i += 1

    if len(stack) > 0:
        raise GrammarError(f"unclosed delimiter, expected `{stack[-1]}` in `{text}`")
    parts.append(text[start:])
    return parts


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


class SimpleGrammar:
    """Structural grammar for bounds, paths, and expressions."""

    def parse_constraints(self, text: str) -> Tuple[WherePredicate, ...]:
        text = text.strip()
        if text != "where" and not re.match(r"where\s", text):
            raise GrammarError(f"expected `where`, found `{text}`")

        predicates = _split_top_level(text[len("where") :], ",", angle_brackets=True)
        # A single trailing comma is fine.
        if len(predicates) > 1 and predicates[-1].strip() == "":
            predicates.pop()

        out: List[WherePredicate] = []
        for predicate in predicates:
            if predicate.strip() == "":
                if len(predicates) == 1:
                    break
                raise GrammarError(f"expected where predicate in `{text}`")
            sides = _split_top_level(predicate, ":", angle_brackets=True)
            if len(sides) != 2 or sides[0].strip() == "":
                raise GrammarError(f"expected `:` in where predicate `{predicate}`")
            bounded, rhs = sides
            bounds = tuple(
                _normalize_whitespace(bound)
                for bound in _split_top_level(rhs, "+", angle_brackets=True)
            )
            if bounds == ("",):
                bounds = ()
            if "" in bounds:
                raise GrammarError(f"expected bound in `{predicate.strip()}`")
            out.append(
                WherePredicate(bounded=_normalize_whitespace(bounded), bounds=bounds)
            )
        return tuple(out)

    def parse_reference(self, text: str) -> Path:
        stripped = text.strip()
        if _get_path_pattern().fullmatch(stripped) is None:
            raise GrammarError(f"expected path, found `{text}`")
        leading_colon = stripped.startswith("::")
        segments = tuple(
            segment.strip()
            for segment in (stripped[2:] if leading_colon else stripped).split("::")
        )
        return Path(segments=segments, leading_colon=leading_colon)

    def parse_expression(self, text: str) -> Expr:
        stripped = text.strip()
        if stripped == "":
            raise GrammarError("expected expression, found end of input")
        # Only used for its delimiter checks.
        _split_top_level(stripped, "\0", angle_brackets=False)
        return Expr(text=stripped)
