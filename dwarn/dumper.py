"""
Bounded single-line dumps of arbitrary values for diagnostic messages.

The engine walks a value recursively and renders it per kind: None, text, numbers,
sequences, mappings, objects, and opaque references. Output is bounded structurally:

- nesting deeper than max_depth renders as an opaque identity token such as `list(0x7f3a...)`;
- each container shows at most max_elements members followed by a single `...`;
- the finished dump is capped to max_length characters.

There is no cycle detection. A self-referential container is expanded once per
level until the depth limit stops it, so repeated but acyclic substructures are
never collapsed.

Examples:
    >>> dump(DumpOptions(), [[1, 2, 3, 4, 5, 6, 7, 8, 9, 10]])
    '[ 1, 2, 3, 4, 5, 6, ... ]'

    >>> dump(DumpOptions(), [{"name": "Alice", "tags": ["a", "b"]}])
    '{ name: "Alice", tags: [ "a", "b" ] }'

    >>> dump(DumpOptions(pairs_detection=True), ["user", "alice", "attempt", 3])
    'user: "alice", attempt: 3'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from decimal import Decimal
from fractions import Fraction
from functools import partial
from itertools import islice
from operator import itemgetter
from typing import Any, Iterable, Mapping, Sequence, TypeVar

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .kinds import Kind, classify, has_own_text_conversion, is_key_kind
from .options import DumpOptions, KindFormatter
from .quoting import format_key, quote
from .utils import class_name, fmt_type, identity_token

T = TypeVar("T")

NOTHING_TOKEN = "None"

# Placeholder for dropped items while they are still raw values
_OMITTED = object()


# Classes --------------------------------------------------------------------------------------------------------------

class Dumper:
    """
    Recursive formatting engine bound to one DumpOptions instance.

    The dumper holds no state besides its options and resolved formatter table,
    so a single instance can serve any number of dumps, from any thread.

    Args:
        options: Dump configuration, DumpOptions() if None.

    Raises:
        TypeError: If options is not a DumpOptions instance or None.

    Examples:
        >>> dumper = Dumper(DumpOptions(max_elements=2))
        >>> dumper.dump("a", [1, 2, 3], None)
        '"a", [ 1, 2, ... ], ...'
        >>> dumper.format(0, {"k": (1,)})
        '{ k: [ 1 ] }'
    """

    def __init__(self, options: DumpOptions | None = None) -> None:
        if not isinstance(options, (DumpOptions, type(None))):
            raise TypeError(f"options must be a DumpOptions instance, but got {fmt_type(options)}")
        self.options = options if options is not None else DumpOptions()
        self.formatters: Mapping[Kind, KindFormatter] = frozendict({**DEFAULT_FORMATTERS, **self.options.formatters})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"

    # Entry points -------------------------------------

    def dump(self, *values: Any) -> str:
        """
        Dump top-level arguments as one capped line.

        With pairs_detection enabled, an argument list shaped like alternating
        keys and values renders as `key: value` pairs, otherwise as a plain list.
        """
        if self.options.pairs_detection and looks_like_pairs(values):
            line = self.dump_as_pairs(0, pairwise_items(values))
        else:
            line = self.dump_as_list(0, values)
        return cap(line, self.options.max_length, marker=self.options.ellipsis)

    def dumps(self, value: Any) -> str:
        """Dump a single value, capped like a complete dump."""
        return cap(self.format(0, value), self.options.max_length, marker=self.options.ellipsis)

    # Engine -------------------------------------------

    def format(self, depth: int, value: Any) -> str:
        """Render one value at the given nesting depth."""
        return self.formatters[classify(value)](self, depth, value)

    def format_key(self, depth: int, key: Any) -> str:
        """Render a mapping key with its separator: `name: ` or `<formatted key> => `."""
        return format_key(key, render=partial(self.format, depth))

    def dump_as_list(self, depth: int, values: Iterable[Any]) -> str:
        """Render values at depth, keep max_elements of them, join with ', '."""
        head = truncate(values, self.options.max_elements, ellipsis=_OMITTED)
        return ", ".join(
            self.options.ellipsis if v is _OMITTED else self.format(depth, v)
            for v in head
        )

    def dump_as_pairs(self, depth: int, pairs: Iterable[tuple[Any, Any]]) -> str:
        """Render (key, value) pairs as `key: value` fragments, keep max_elements pairs, join with ', '."""
        limit = self.options.max_elements
        ellipsis = self.options.ellipsis

        if self.options.sort_keys:
            keyed = sorted(((self.format_key(depth, k), v) for k, v in pairs), key=itemgetter(0))
            head = truncate(keyed, limit, ellipsis=_OMITTED)
            return ", ".join(
                ellipsis if p is _OMITTED else p[0] + self.format(depth, p[1])
                for p in head
            )

        head = truncate(pairs, limit, ellipsis=_OMITTED)
        return ", ".join(
            ellipsis if p is _OMITTED else self.format_key(depth, p[0]) + self.format(depth, p[1])
            for p in head
        )

    def opaque(self, value: Any) -> str:
        """
        Identity-only rendering: type name plus hex identity, e.g. `dict(0x7f3a1c2b4d90)`.

        Never calls anything defined by the value's type.
        """
        name = class_name(value, fully_qualified=self.options.fully_qualified_names)
        return f"{name}({identity_token(value)})"


# Methods --------------------------------------------------------------------------------------------------------------

def dump(options: DumpOptions | None, values: Sequence[Any]) -> str:
    """
    Dump a sequence of values into a bounded single-line string.

    Args:
        options: Dump configuration, DumpOptions() if None.
        values: Top-level arguments, each formatted starting at depth 0.

    Returns:
        The dump, at most options.max_length characters long when set.

    Examples:
        >>> dump(DumpOptions(), ["foo\\nbar"])
        '"foo\\\\nbar"'
        >>> dump(DumpOptions(max_length=10), ["a" * 50])
        '"aaaaaa...'
    """
    return Dumper(options).dump(*values)


def truncate(items: Iterable[T], limit: int, ellipsis: Any = "...") -> list[T]:
    """
    Keep the first `limit` items, followed by one `ellipsis` item when any were dropped.

    Consumes at most limit + 1 items from the iterable.

    Examples:
        >>> truncate(["1", "2", "3"], 2)
        ['1', '2', '...']
        >>> truncate(["1", "2"], 2)
        ['1', '2']
    """
    it = iter(items)
    head = list(islice(it, limit))
    if next(it, _OMITTED) is not _OMITTED:
        head.append(ellipsis)
    return head


def cap(line: str, limit: int | None, marker: str = "...") -> str:
    """
    Cap a string to `limit` characters, the truncation marker included.

    When even the marker does not fit, the marker itself is clipped to `limit`.

    Examples:
        >>> cap("abcdefgh", 6)
        'abc...'
        >>> cap("abcdefgh", 2)
        '..'
        >>> cap("abc", None)
        'abc'
    """
    if limit is None or len(line) <= limit:
        return line
    if limit < len(marker):
        return marker[:limit]
    return line[:limit - len(marker)] + marker


def looks_like_pairs(values: Sequence[Any]) -> bool:
    """
    Decide whether a flat argument list reads as alternating keys and values.

    True when the length is even and every candidate key (even index) is text or a number.
    """
    if len(values) % 2:
        return False
    return all(is_key_kind(classify(key)) for key in values[0::2])


def pairwise_items(values: Sequence[Any]) -> list[tuple[Any, Any]]:
    """Group a flat list as [(v0, v1), (v2, v3), ...]; a trailing odd value is dropped."""
    return list(zip(values[0::2], values[1::2]))


# Kind formatters ------------------------------------------------------------------------------------------------------

def format_nothing(dumper: Dumper, depth: int, value: None) -> str:
    return NOTHING_TOKEN


def format_text(dumper: Dumper, depth: int, value: str | bytes | bytearray) -> str:
    return quote(value)


def format_number(dumper: Dumper, depth: int, value: Any) -> str:
    """Plain number text via the base type's conversion, so subclass overrides are not called."""
    cls = type(value)
    if issubclass(cls, bool):
        return "True" if value else "False"
    if issubclass(cls, Decimal):
        return Decimal.__str__(value)
    if issubclass(cls, Fraction):
        return Fraction.__str__(value)
    for base in (int, float, complex):
        if issubclass(cls, base):
            return base.__repr__(value)
    return dumper.opaque(value)


def format_sequence(dumper: Dumper, depth: int, value: Any) -> str:
    if depth >= dumper.options.max_depth:
        return dumper.opaque(value)
    try:
        head = _sample(value, dumper.options.max_elements)
    except Exception:
        return dumper.opaque(value)
    return "[ " + dumper.dump_as_list(depth + 1, head) + " ]"


def format_mapping(dumper: Dumper, depth: int, value: abc.Mapping) -> str:
    if depth >= dumper.options.max_depth:
        return dumper.opaque(value)
    try:
        if dumper.options.sort_keys:
            items = list(value.items())
        else:
            items = _sample(value.items(), dumper.options.max_elements)
    except Exception:
        return dumper.opaque(value)
    return "{ " + dumper.dump_as_pairs(depth + 1, items) + " }"


def format_object(dumper: Dumper, depth: int, value: Any) -> str:
    """
    Objects render as type plus identity unless stringify_objects is enabled
    and the type defines its own conversion. Errors raised by that conversion propagate.
    """
    if dumper.options.stringify_objects and has_own_text_conversion(value):
        return str(value)
    return dumper.opaque(value)


def format_opaque(dumper: Dumper, depth: int, value: Any) -> str:
    return dumper.opaque(value)


DEFAULT_FORMATTERS: Mapping[Kind, KindFormatter] = frozendict({
    Kind.NOTHING: format_nothing,
    Kind.TEXT: format_text,
    Kind.NUMBER: format_number,
    Kind.SEQUENCE: format_sequence,
    Kind.MAPPING: format_mapping,
    Kind.OBJECT: format_object,
    Kind.OPAQUE: format_opaque,
})


# Private Methods ------------------------------------------------------------------------------------------------------

def _sample(iterable: Iterable[Any], limit: int) -> list[Any]:
    """Materialize up to limit + 1 members, enough to tell whether any are dropped."""
    return list(islice(iter(iterable), limit + 1))
