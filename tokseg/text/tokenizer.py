from __future__ import annotations
from typing import Iterable, Iterator, List, Optional

from tokseg.config import DEFAULT_CONFIG, Config
from tokseg.text.subtokenizer import build_machine
from tokseg.types import Span, Token
from tokseg.utils.encoding import ensure_text

# Token assembly on top of the sub-tokenizer.
# Rules:
# - prefix is the raw text between the previous token's value and this one (dropped separators).
# - offset/value come straight from the sub-token span; nothing is normalized.
# - Leftover text after the last span becomes one trailing token with an empty value
#   at offset len(text), so "".join(str(t) for t in tokens) == text always holds.


def assemble_tokens(text: str, spans: Iterable[Span]) -> Iterator[Token]:
    last = 0
    for start, end in spans:
        yield Token(prefix=text[last:start], offset=start, value=text[start:end])
        last = end
    if last < len(text):
        yield Token(prefix=text[last:], offset=len(text), value="")


def tokenize(text: str | bytes, cfg: Optional[Config] = None) -> Iterator[Token]:
    """Lazily yield Tokens for `text`; InvalidEncoding is raised eagerly."""
    tcfg = (cfg or DEFAULT_CONFIG).tokenizer
    text = ensure_text(text, tcfg.encoding)
    return assemble_tokens(text, build_machine(text, tcfg).run())


def split(text: str | bytes, cfg: Optional[Config] = None) -> List[Token]:
    """Eager form of tokenize()."""
    return list(tokenize(text, cfg))
