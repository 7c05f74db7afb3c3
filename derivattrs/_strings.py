"""Utilities and constants for working with strings."""

import functools
import re

import termcolor


@functools.lru_cache(maxsize=None)
def _get_ansi_pattern() -> re.Pattern:
    # https://stackoverflow.com/a/14693789
    return re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def strip_ansi_sequences(x: str) -> str:
    return _get_ansi_pattern().sub("", x)


def format_capability(x: str) -> str:
    return termcolor.colored(x, attrs=["bold"])


def format_option(x: str) -> str:
    return termcolor.colored(x, color="cyan")
