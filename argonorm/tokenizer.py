r"""
Comma-separated list tokenizer.

Splits "a,b,c" style input into values, honoring quoting and backslash escapes:

    >>> split('a,"b,c",d\\,e')
    ['a', 'b,c', 'd,e']

Rules
- a backslash escapes the next character (the backslash itself is dropped).
- a single or double quote opens a section closed by the same quote character;
  the quotes are dropped and commas inside are literal.
- a comma outside of a quoted section ends the current value.
- values are trimmed of surrounding whitespace; empty values are kept.
- an unterminated quote is rejected with a ValidationError.
"""
import logging

from .faults import FaultCode, ValidationError
from .i18n import localize

logger = logging.getLogger(__name__)

QUOTES = ("'", '"')


def split(text, /):
    if not text:
        return []

    values = []
    buffer = []
    quote = None
    escaped = False

    for char in text:
        if escaped:
            buffer.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote is None and char in QUOTES:
            quote = char
        elif char == quote:
            quote = None
        elif char == "," and quote is None:
            values.append("".join(buffer).strip())
            buffer.clear()
        else:
            buffer.append(char)

    if escaped:
        buffer.append("\\")

    if quote is not None:
        logger.debug("unterminated %s quote in list input (length=%d)", quote, len(text))
        raise ValidationError(
            localize("Illegal quoting in %s", "".join(buffer)),
            code=FaultCode.ILLEGAL_QUOTING,
            title="illegal quoting",
            hint="close every quote or escape it with a backslash",
        )

    values.append("".join(buffer).strip())
    return values


__all__ = (
    "split",
)
