"""Tokenizer and recursive-descent parser for attribute source text.

Turns strings like `#[derivative(Debug(bound="T: Copy"))]` into the raw nodes in
`_meta`. Declaration traversal normally hands us nodes directly; this front end
exists for callers that only have source text, and for tests."""

import dataclasses
import functools
import re
from typing import Iterator, List, Optional, Tuple

from . import _meta
from ._errors import AttributeSyntaxError

_ESCAPE = r"\\(?:u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|\n\s*|.)"


@functools.lru_cache(maxsize=1)
def _get_token_pattern() -> "re.Pattern[str]":
    return re.compile(
        "|".join(
            [
                r"(?P<ws>\s+)",
                r'(?P<raw_str>b?r(?P<hashes>#*)"(?P<raw_body>.*?)"(?P=hashes))',
                r'(?P<str>b?"(?:[^"\\]|' + _ESCAPE + r')*")',
                r"(?P<char>b?'(?:[^'\\\n]|" + _ESCAPE + r")')",
                r"(?P<float>\d[\d_]*(?:\.\d[\d_]*(?:[eE][+-]?\d+)?|[eE][+-]?\d+)"
                r"(?:f32|f64)?)",
                r"(?P<int>(?:0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+|\d[\d_]*)"
                r"(?:[iu](?:8|16|32|64|128|size))?)",
                r"(?P<ident>(?:r#)?[A-Za-z_][A-Za-z0-9_]*)",
                r"(?P<punct>[#!\[\]()=,])",
            ]
        ),
        re.DOTALL,
    )


@dataclasses.dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    position: int


def _tokenize(source: str) -> Iterator[_Token]:
    pattern = _get_token_pattern()
    position = 0
    while position < len(source):
        match = pattern.match(source, position)
        if match is None:
            raise AttributeSyntaxError(
                f"unexpected character {source[position]!r}", source, position
            )
        kind = match.lastgroup
        assert kind is not None
        # Named groups nested inside `raw_str` can end up as `lastgroup`.
        if match.group("raw_str") is not None:
            kind = "raw_str"
        if kind != "ws":
            yield _Token(kind=kind, text=match.group(0), position=position)
        position = match.end()


_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def _unescape(body: str) -> str:
    def replace(match: "re.Match[str]") -> str:
        escape = match.group(0)[1:]
        if escape.startswith("u{"):
            return chr(int(escape[2:-1], 16))
        if escape.startswith("x"):
            return chr(int(escape[1:], 16))
        if escape.startswith("\n"):
            # Line continuation: swallow the newline and leading whitespace.
            return ""
        if escape in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[escape]
        raise ValueError(f"unknown character escape: \\{escape}")

    return re.sub(_ESCAPE, replace, body, flags=re.DOTALL)


def _literal_from_token(token: _Token, source: str) -> _meta.Lit:
    text = token.text
    try:
        if token.kind == "raw_str":
            byte = text.startswith("b")
            body = text[text.index('"') + 1 : text.rindex('"')]
            return _meta.Lit("byte_str" if byte else "str", body)
        if token.kind == "str":
            byte = text.startswith("b")
            body = _unescape(text[2 if byte else 1 : -1])
            return _meta.Lit("byte_str" if byte else "str", body)
        if token.kind == "char":
            byte = text.startswith("b")
            body = _unescape(text[2 if byte else 1 : -1])
            return _meta.Lit("byte" if byte else "char", body)
    except ValueError as e:
        raise AttributeSyntaxError(e.args[0], source, token.position) from e
    if token.kind in ("int", "float"):
        return _meta.Lit(token.kind, text)  # type: ignore
    assert token.kind == "ident" and text in ("true", "false")
    return _meta.Lit("bool", text)


_LITERAL_KINDS = ("raw_str", "str", "char", "int", "float")


class _Parser:
    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens: List[_Token] = list(_tokenize(source))
        self.index = 0

    # Token helpers.

    def peek(self) -> Optional[_Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def check(self, text: str) -> bool:
        token = self.peek()
        return token is not None and token.kind == "punct" and token.text == text

    def advance(self) -> _Token:
        token = self.peek()
        if token is None:
            raise AttributeSyntaxError(
                "unexpected end of input", self.source, len(self.source)
            )
        self.index += 1
        return token

    def expect(self, text: str) -> _Token:
        token = self.advance()
        if token.kind != "punct" or token.text != text:
            raise AttributeSyntaxError(
                f"expected `{text}`, found `{token.text}`",
                self.source,
                token.position,
            )
        return token

    def is_literal(self) -> bool:
        token = self.peek()
        return token is not None and (
            token.kind in _LITERAL_KINDS
            or (token.kind == "ident" and token.text in ("true", "false"))
        )

    # Grammar.

    def attribute(self) -> _meta.Attribute:
        self.expect("#")
        inner = False
        if self.check("!"):
            self.advance()
            inner = True
        self.expect("[")
        meta = self.meta()
        self.expect("]")
        return _meta.Attribute(meta=meta, inner=inner)

    def meta(self) -> _meta.Meta:
        token = self.advance()
        if token.kind != "ident" or token.text in ("true", "false"):
            raise AttributeSyntaxError(
                f"expected identifier, found `{token.text}`",
                self.source,
                token.position,
            )
        name = token.text

        if self.check("("):
            self.advance()
            items: List[_meta.NestedItem] = []
            while not self.check(")"):
                items.append(self.nested())
                if not self.check(")"):
                    self.expect(",")
            self.expect(")")
            return _meta.MetaList(name=name, items=tuple(items))

        if self.check("="):
            self.advance()
            if not self.is_literal():
                token = self.advance()
                raise AttributeSyntaxError(
                    f"expected literal, found `{token.text}`",
                    self.source,
                    token.position,
                )
            return _meta.MetaNameValue(
                name=name, lit=_literal_from_token(self.advance(), self.source)
            )

        return _meta.MetaWord(name=name)

    def nested(self) -> _meta.NestedItem:
        if self.is_literal():
            return _literal_from_token(self.advance(), self.source)
        return self.meta()

    def finish(self) -> None:
        token = self.peek()
        if token is not None:
            raise AttributeSyntaxError(
                f"unexpected trailing `{token.text}`", self.source, token.position
            )


def parse_meta(source: str) -> _meta.Meta:
    """Parse the contents of an attribute, eg `derivative(Debug)`."""
    parser = _Parser(source)
    meta = parser.meta()
    parser.finish()
    return meta


def parse_attribute(source: str) -> _meta.Attribute:
    """Parse a single attribute. Accepts either the full `#[derivative(Debug)]`
    form or just the bracketed contents, `derivative(Debug)`."""
    parser = _Parser(source)
    if parser.check("#"):
        attribute = parser.attribute()
    else:
        attribute = _meta.Attribute(meta=parser.meta())
    parser.finish()
    return attribute


def parse_attributes(source: str) -> Tuple[_meta.Attribute, ...]:
    """Parse any number of whitespace-separated `#[...]` attributes."""
    parser = _Parser(source)
    out: List[_meta.Attribute] = []
    while not parser.at_end():
        out.append(parser.attribute())
    return tuple(out)
