"""
Dump configuration.

DumpOptions is immutable: it is resolved once and may be shared freely between
dumps and threads. Limits are validated here, at construction, so the dumper
itself never has to check them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import os
from dataclasses import dataclass, field, fields, replace as dataclasses_replace
from typing import Any, Callable, Mapping, Self, TYPE_CHECKING

# Third-party ----------------------------------------------------------------------------------------------------------
import toml
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .kinds import Kind
from .utils import fmt_type

if TYPE_CHECKING:
    from .dumper import Dumper

KindFormatter = Callable[["Dumper", int, Any], str]
"""Per-kind formatting function: receives the dumper, the current depth and the value."""

DEFAULT_SECTION = "tool.dwarn"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class DumpOptions:
    """
    Configuration of a bounded single-line dump.

    Attributes:
        max_length: Maximum length of the whole dump including the truncation marker.
                    None means unlimited.
        max_elements: Maximum items shown per sequence, mapping, or top-level argument list;
                      further items collapse into a single ellipsis marker.
        max_depth: Nesting level at which sequences and mappings stop being expanded
                   and render as an opaque identity token instead. 0 never expands.
        stringify_objects: Use an object's own __str__/__repr__ instead of the safe
                           type-plus-identity form. Opt-in: the conversion may have side effects.
        pairs_detection: Render a flat top-level argument list as `key: value` pairs
                         when it looks like alternating keys and values.
        sort_keys: Order mapping entries by their rendered keys.
        fully_qualified_names: Use module.Class names in identity tokens of user types.
        ellipsis: Marker for omitted items and for the capped tail of the dump.
        formatters: Per-kind formatter overrides; kinds not listed use the built-in formatters.

    Examples:
        >>> DumpOptions()
        DumpOptions(max_length=None, max_elements=6, max_depth=2, ...)

        >>> # Presets
        >>> DumpOptions.compact().max_elements
        3

        >>> # Derive instead of mutate
        >>> opts = DumpOptions().merge(max_depth=0, pairs_detection=True)

        >>> # Replace the formatter of a single kind
        >>> opts = DumpOptions().with_formatter(Kind.NUMBER, lambda dumper, depth, x: f"#{x}")
    """
    max_length: int | None = None
    max_elements: int = 6
    max_depth: int = 2
    stringify_objects: bool = False
    pairs_detection: bool = False

    sort_keys: bool = False
    fully_qualified_names: bool = False
    ellipsis: str = "..."

    formatters: Mapping[Kind, KindFormatter] = field(default_factory=frozendict)

    def __post_init__(self) -> None:
        """Validate limits and freeze the formatter table."""
        _validate_int("max_elements", self.max_elements, minimum=1)
        _validate_int("max_depth", self.max_depth, minimum=0)
        if self.max_length is not None:
            _validate_int("max_length", self.max_length, minimum=1)

        if not isinstance(self.ellipsis, str):
            raise TypeError(f"DumpOptions.ellipsis must be a str, but got {fmt_type(self.ellipsis)}")
        if not self.ellipsis.isprintable():
            # The marker is emitted unquoted and must keep the dump on one line
            raise ValueError(f"DumpOptions.ellipsis must be printable, but got {self.ellipsis!r}")

        for name in ("stringify_objects", "pairs_detection", "sort_keys", "fully_qualified_names"):
            object.__setattr__(self, name, bool(getattr(self, name)))

        object.__setattr__(self, "formatters", _frozen_formatters(self.formatters))

    # Class Methods ------------------------------------

    @classmethod
    def compact(cls) -> Self:
        """Short dumps for one-line status messages."""
        return cls(max_length=80, max_elements=3, max_depth=1)

    @classmethod
    def debug(cls) -> Self:
        """Deep and wide dumps for interactive debugging; objects render via their own __str__."""
        return cls(max_elements=20, max_depth=4, stringify_objects=True)

    @classmethod
    def logging(cls) -> Self:
        """Log-friendly dumps: length-capped, named arguments read as `name: value`."""
        return cls(max_length=512, pairs_detection=True)

    @classmethod
    def from_mapping(cls, data: abc.Mapping[str, Any], *, base: "DumpOptions | None" = None) -> Self:
        """
        Build options from plain data such as a parsed configuration file.

        Args:
            data: Option names mapped to values. The formatter table cannot be loaded.
            base: Options to start from, DumpOptions() if None.

        Raises:
            TypeError: If data is not a mapping, or a value has the wrong type.
            ValueError: If data contains unknown option names or invalid limits.
        """
        if not isinstance(data, abc.Mapping):
            raise TypeError(f"options data must be a mapping, but got {fmt_type(data)}")

        loadable = {f.name for f in fields(cls)} - {"formatters"}
        unknown = sorted(str(k) for k in data if k not in loadable)
        if unknown:
            raise ValueError(f"unknown dump options: {', '.join(unknown)}")

        base = cls() if base is None else base
        return dataclasses_replace(base, **dict(data))

    # Methods ------------------------------------------

    def merge(self, **kwargs) -> Self:
        """
        Create a new instance with updated options.

        Raises:
            TypeError: On unknown option names or wrongly typed values.
            ValueError: On invalid limits.
        """
        return dataclasses_replace(self, **kwargs)

    def with_formatter(self, kind: Kind | str, formatter: KindFormatter) -> Self:
        """Return a copy using `formatter` for values of `kind`."""
        return self.merge(formatters={**self.formatters, _as_kind(kind): formatter})

    def without_formatter(self, kind: Kind | str) -> Self:
        """Return a copy restoring the built-in formatter for `kind`."""
        kind = _as_kind(kind)
        return self.merge(formatters={k: v for k, v in self.formatters.items() if k is not kind})


# Methods --------------------------------------------------------------------------------------------------------------

def load_options(path: str | os.PathLike,
                 section: str = DEFAULT_SECTION,
                 *,
                 base: DumpOptions | None = None) -> DumpOptions:
    """
    Load dump options from a TOML file.

    The options live in the table named by `section`, a dotted path into nested tables.
    With the default section a project's pyproject.toml can carry them:

        [tool.dwarn]
        max_depth = 3
        pairs_detection = true

    A file without the section yields `base` (or default options) unchanged.

    Args:
        path: TOML file to read.
        section: Dotted table path holding the options; empty string for the top level.
        base: Options the loaded values are merged into.

    Raises:
        OSError: If the file cannot be read.
        toml.TomlDecodeError: If the file is not valid TOML.
        TypeError: If the section is not a table or a value has the wrong type.
        ValueError: On unknown option names or invalid limits.
    """
    data: Any = toml.load(os.fspath(path))

    for part in filter(None, section.split(".")):
        if not isinstance(data, abc.Mapping) or part not in data:
            return base if base is not None else DumpOptions()
        data = data[part]

    if not isinstance(data, abc.Mapping):
        raise TypeError(f"TOML section '{section}' must be a table, but got {fmt_type(data)}")

    return DumpOptions.from_mapping(data, base=base)


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_kind(kind: Any) -> Kind:
    """Convert a Kind or its str value to Kind."""
    if isinstance(kind, Kind):
        return kind
    if isinstance(kind, str):
        try:
            return Kind(kind)
        except ValueError:
            pass
    raise TypeError(f"formatter kind must be one of {[k.value for k in Kind]}, but got {kind!r}")


def _frozen_formatters(formatters: Any) -> frozendict:
    if formatters is None:
        return frozendict()
    if not isinstance(formatters, abc.Mapping):
        raise TypeError(f"DumpOptions.formatters must be a mapping, but got {fmt_type(formatters)}")

    table = {}
    for kind, formatter in formatters.items():
        if not callable(formatter):
            raise TypeError(f"formatter for '{kind}' must be callable, but got {fmt_type(formatter)}")
        table[_as_kind(kind)] = formatter
    return frozendict(table)


def _validate_int(name: str, value: Any, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"DumpOptions.{name} must be an int, but got {fmt_type(value)}")
    if value < minimum:
        raise ValueError(f"DumpOptions.{name} must be >= {minimum}, but got {value}")
