from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

# -----------------------
# Simple string enums
# -----------------------
CharGroup = Literal[
    "start",        # sentinel, before any input
    "lower",
    "upper",
    "number",
    "terminal",     # . ? !
    "hyphen",       # dashes and underscore
    "punctuation",  # Unicode open/close brackets (Ps, Pe)
    "apostrophe",
    "symbol",       # catch-all
    "space",
    "end",          # sentinel, at/after text length
]
SegmentationState = Literal["begin", "first_token", "inner_token", "terminal_token", "end"]

ALNUM_GROUPS: frozenset[str] = frozenset({"lower", "upper", "number"})

Span = Tuple[int, int]  # [start, end)

# -----------------------
# Core data types
# -----------------------

@dataclass(frozen=True)
class Token:
    """
    Token: a sub-token's raw value plus the separator text found before it.
    Fields:
      prefix: raw text between the previous token's value and this one
      offset: absolute start of value in the original text
      value:  raw text slice; empty only for the trailing separator token
    """
    prefix: str
    offset: int
    value: str

    @property
    def end(self) -> int:
        """Exclusive end offset of the value."""
        return self.offset + len(self.value)

    @property
    def span(self) -> Span:
        return (self.offset, self.end)

    def __str__(self) -> str:
        return self.prefix + self.value


Sentence = Tuple[Token, ...]  # ordered, never empty
