"""
Does:
    Sub-token boundary detection: a single-pass state machine over a 4-slot
    lookahead window (before, previous, current, next) that decides, for each
    character, whether a sub-token boundary lies immediately before it.

Inputs:
    Text (str, or bytes decoded with the configured encoding).

Outputs:
    Lazy iterator of [start, end) offset pairs into the text, strictly increasing,
    never empty. Gaps between pairs are dropped separator text.

Notes:
    - No backtracking: each codepoint is classified once and shifted into `next`.
    - Two extra shifts with the `end` sentinel run after the input, so the last
      character is decided with its real `next` and the final sub-token is flushed.
    - The token start cursor is either a pending offset or None (nothing pending).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, List, Optional

from tokseg.config import DEFAULT_CONFIG, Config, TokenizerCfg
from tokseg.text.classifier import DEFAULT_CLASSIFIER, CharClassifier, is_alnum_group
from tokseg.types import CharGroup, Span
from tokseg.utils.encoding import ensure_text

_LOGGER = logging.getLogger("tokseg.text.subtokenizer")


@dataclass(frozen=True)
class Slot:
    group: CharGroup
    offset: int


_START = Slot("start", 0)


class BoundaryStateMachine:
    """
    Window + cursor state for one pass over one text.
    Not reusable: build a fresh machine per text.
    """

    def __init__(
        self,
        text: str,
        classifier: Optional[CharClassifier] = None,
        *,
        split_contractions: bool = True,
    ) -> None:
        self.text = text
        self.text_len = len(text)
        self.classifier = classifier or DEFAULT_CLASSIFIER
        self.split_contractions = split_contractions
        self.before = _START
        self.previous = _START
        self.current = _START
        self.next = _START
        self.token_start: Optional[int] = None
        self._rules = {
            "lower": self._at_lower,
            "upper": self._at_upper,
            "number": self._at_number,
            "terminal": self._at_separator,
            "hyphen": self._at_separator,
            "punctuation": self._at_separator,
            "apostrophe": self._at_apostrophe,
            "symbol": self._at_separator,
            "space": self._at_space,
            "end": self._at_end,
        }

    # ---------------------------- driving ----------------------------
    def run(self) -> Iterator[Span]:
        n_spans = 0
        for offset, ch in enumerate(self.text):
            span = self.step(offset, self.classifier.classify(ch))
            if span is not None:
                n_spans += 1
                yield span
        for _ in range(2):
            span = self.step(self.text_len, "end")
            if span is not None:
                n_spans += 1
                yield span
        _LOGGER.debug("subtokenized %d chars into %d spans", self.text_len, n_spans)

    def step(self, offset: int, group: CharGroup) -> Optional[Span]:
        """Shift one classified codepoint into the window and produce a span if one closes."""
        self.shift(offset, group)
        return self.produce(self.split_offset())

    def shift(self, offset: int, group: CharGroup) -> None:
        self.before = self.previous
        self.previous = self.current
        self.current = self.next
        self.next = Slot(group, offset)

    def produce(self, split: Optional[int]) -> Optional[Span]:
        if split is None or self.token_start is None or split <= self.token_start:
            return None
        span = (self.token_start, split)
        cur = self.current.group
        if cur != "symbol" and (self.next.group == "space" or cur == "hyphen"):
            # drop the separator from the next sub-token
            self.token_start = None
        else:
            self.token_start = split
        return span

    # ---------------------------- deciding ----------------------------
    def split_offset(self) -> Optional[int]:
        """
        Move the token start cursor if a token begins at the current slot, then
        return the offset to split at for the current slot, or None.
        """
        prev, cur = self.previous.group, self.current.group
        if prev in ("space", "start") and cur != "space":
            self.token_start = self.current.offset
        elif is_alnum_group(cur) and self.token_start is None:
            self.token_start = self.current.offset

        rule = self._rules.get(cur)
        return rule() if rule is not None else None

    def _word_follows_separator(self) -> bool:
        prev = self.previous.group
        return (
            not is_alnum_group(prev)
            and prev != "space"
            and (prev != "apostrophe" or self.before.group == "space")
        )

    def _at_lower(self) -> Optional[int]:
        if self.previous.group != "hyphen" and self._word_follows_separator():
            return self.current.offset
        return None

    def _at_upper(self) -> Optional[int]:
        # camel-case boundary, or a word following punctuation
        if self.previous.group == "lower" or self._word_follows_separator():
            return self.current.offset
        return None

    def _at_number(self) -> Optional[int]:
        prev = self.previous.group
        # before == number: inside a date/time such as 31.12.2000 or 23:59
        if not is_alnum_group(prev) and prev != "space" and self.before.group != "number":
            return self.current.offset
        return None

    def _at_separator(self) -> Optional[int]:
        prev = self.previous.group
        if prev != "space" and not (prev == "number" and self.next.group == "number"):
            return self.current.offset
        return None

    def _at_apostrophe(self) -> Optional[int]:
        if (
            self.split_contractions
            and self.previous.group == "lower"
            and self.next.group == "lower"
            and self.text[self.previous.offset] == "n"
            and self.text[self.next.offset] == "t"
        ):
            return self.previous.offset
        return self._at_separator()

    def _at_space(self) -> Optional[int]:
        if self.previous.group not in ("space", "start"):
            return self.current.offset
        return None

    def _at_end(self) -> Optional[int]:
        return self.current.offset


@lru_cache(maxsize=32)
def _classifier(terminals: str, hyphens: str, apostrophes: str) -> CharClassifier:
    return CharClassifier(terminals=terminals, hyphens=hyphens, apostrophes=apostrophes)


def build_machine(text: str, tcfg: TokenizerCfg) -> BoundaryStateMachine:
    return BoundaryStateMachine(
        text,
        _classifier(tcfg.terminals, tcfg.hyphens, tcfg.apostrophes),
        split_contractions=tcfg.split_contractions,
    )


def subtokenize(text: str | bytes, cfg: Optional[Config] = None) -> Iterator[Span]:
    """
    Lazily yield (start, end) sub-token offsets for `text`.
    Input is validated eagerly: InvalidEncoding is raised here, not on first next().
    """
    tcfg = (cfg or DEFAULT_CONFIG).tokenizer
    text = ensure_text(text, tcfg.encoding)
    return build_machine(text, tcfg).run()


def subsplit(text: str | bytes, cfg: Optional[Config] = None) -> List[Span]:
    """Eager form of subtokenize()."""
    return list(subtokenize(text, cfg))
