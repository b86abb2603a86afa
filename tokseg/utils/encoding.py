# tokseg/utils/encoding.py
from __future__ import annotations

import codecs


class InvalidEncoding(ValueError):
    """Input text is not well-formed for its encoding (bad bytes or lone surrogates)."""

    def __init__(self, message: str, *, position: int | None = None, reason: str = "") -> None:
        super().__init__(message)
        self.position = position
        self.reason = reason


def is_known_encoding(name: str) -> bool:
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


def ensure_text(text: str | bytes | bytearray, encoding: str = "utf-8") -> str:
    """
    Validate input at the library boundary and return it as str.

    - bytes/bytearray are decoded strictly with `encoding`.
    - str must be encodable as UTF-8 (no lone surrogates).
    Raises InvalidEncoding on malformed input, TypeError on non-text input.
    """
    if isinstance(text, str):
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidEncoding(
                f"text holds an unpaired surrogate at offset {e.start}: {e.reason}",
                position=e.start,
                reason=e.reason,
            ) from e
        return text
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode(encoding)
        except UnicodeDecodeError as e:
            raise InvalidEncoding(
                f"invalid {encoding} byte sequence at byte {e.start}: {e.reason}",
                position=e.start,
                reason=e.reason,
            ) from e
    raise TypeError(f"expected str or bytes, got {type(text).__name__}")
