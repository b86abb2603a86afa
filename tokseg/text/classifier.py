from __future__ import annotations
import unicodedata

from tokseg.types import ALNUM_GROUPS, CharGroup

# Character classifier: one codepoint -> one CharGroup.
# Order matters (first match wins); Unicode property coverage overlaps:
#   lower, space, upper, number, terminal, punctuation, hyphen, apostrophe, symbol.
# Total and pure: every codepoint maps to exactly one group.

TERMINALS = ".?!"
# hyphens including the underscore (which is treated alike)
HYPHENS = "\u00AD\u058A\u05BE\u0F0C\u1400\u1806\u2010\u2011\u2012\u2E17\u30A0_-"
# apostrophes including the single quote (which is treated alike)
APOSTROPHES = "\u00B4\u02B9\u02BC\u2019\u2032'"

_BRACKETS = ("Ps", "Pe")
# str.isspace() also accepts the C0 information separators, which are not White_Space
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def is_space(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_WHITESPACE


class CharClassifier:
    """Classify codepoints using configurable terminal, hyphen and apostrophe sets."""

    def __init__(
        self,
        terminals: str = TERMINALS,
        hyphens: str = HYPHENS,
        apostrophes: str = APOSTROPHES,
    ) -> None:
        self.terminals = frozenset(terminals)
        self.hyphens = frozenset(hyphens)
        self.apostrophes = frozenset(apostrophes)

    def classify(self, ch: str) -> CharGroup:
        cat = unicodedata.category(ch)
        if cat == "Ll":
            return "lower"
        if is_space(ch):
            return "space"
        if cat == "Lu":
            return "upper"
        if cat == "Nd":
            return "number"
        if ch in self.terminals:
            return "terminal"
        if cat in _BRACKETS:
            return "punctuation"
        if ch in self.hyphens:
            return "hyphen"
        if ch in self.apostrophes:
            return "apostrophe"
        return "symbol"


DEFAULT_CLASSIFIER = CharClassifier()


def classify(ch: str) -> CharGroup:
    """Classify one codepoint with the default character sets."""
    return DEFAULT_CLASSIFIER.classify(ch)


def is_alnum_group(group: CharGroup) -> bool:
    return group in ALNUM_GROUPS
