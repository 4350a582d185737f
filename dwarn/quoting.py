"""
Text quoting and mapping key rendering.

Quoted output is always a single line: newlines and every other non-printable
character are escaped, so a dump can never break a log record in two.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from typing import Any, Callable

QUOTE = '"'
ESCAPE = "\\"

BARE_KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

KEY_SEPARATOR = ": "
KEY_ARROW = " => "

# Escapes with a dedicated short form, everything else non-printable becomes \x{HH}
_SHORT_ESCAPES = {
    QUOTE: ESCAPE + QUOTE,
    ESCAPE: ESCAPE + ESCAPE,
    "\n": ESCAPE + "n",
}


# Methods --------------------------------------------------------------------------------------------------------------

def quote(text: str | bytes | bytearray) -> str:
    """
    Render text as a double-quoted, escaped, single-line literal.

    Escapes the quote and escape characters, renders newline as the two characters
    `\\n` and any other non-printable character as `\\x{HH}` (hex codepoint).
    Printable characters, non-ASCII included, pass through unchanged.
    Bytes are decoded as Latin-1 so that each byte maps to exactly one character.

    Examples:
        >>> quote("foo\\nbar")
        '"foo\\\\nbar"'
        >>> quote('say "hi"')
        '"say \\\\"hi\\\\""'
        >>> quote("tab\\there")
        '"tab\\\\x{09}here"'
    """
    if issubclass(type(text), (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    else:
        # str subclasses may override __iter__ or __str__; use the raw data
        text = str.__str__(text)
    return QUOTE + "".join(_escape_char(ch) for ch in text) + QUOTE


def is_bare_key(key: Any) -> bool:
    """Check whether key is an identifier-shaped str that can be shown unquoted."""
    return issubclass(type(key), str) and BARE_KEY_RE.fullmatch(key) is not None


def format_key(key: Any, render: Callable[[Any], str]) -> str:
    """
    Render a mapping key together with its trailing separator.

    Identifier-shaped str keys read as `name: `, any other key is rendered by
    `render` (the regular value formatter) and followed by ` => `.

    Examples:
        >>> format_key("name", render=repr)
        'name: '
        >>> format_key("two words", render=quote)
        '"two words" => '
        >>> format_key(42, render=str)
        '42 => '
    """
    if is_bare_key(key):
        return str.__str__(key) + KEY_SEPARATOR
    return render(key) + KEY_ARROW


# Private Methods ------------------------------------------------------------------------------------------------------

def _escape_char(ch: str) -> str:
    if ch in _SHORT_ESCAPES:
        return _SHORT_ESCAPES[ch]
    if ch.isprintable():
        return ch
    return f"{ESCAPE}x{{{ord(ch):02x}}}"
