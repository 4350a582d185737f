"""
Diagnostic adapters routing dumps into warnings, exceptions, and loggers.

Each adapter only replaces the message text with a dump; the host mechanism keeps
its own contract. A warning still honours warning filters (and raises under an
"error" filter), die() still raises, and log() still respects logger levels.

Examples:
    >>> from dwarn.adapters import tap, warn
    >>> warn("retrying", {"attempt": 2, "errors": ["timeout"]})
    ...: DumpWarning: "retrying", { attempt: 2, errors: [ "timeout" ] }

    >>> # Inline tap: dump as a warning, pass the value through
    >>> total = sum(tap([1, 2, 3]))
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import warnings
from typing import Any, NoReturn, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .dumper import Dumper
from .options import DumpOptions
from .utils import fmt_type

LOGGER_NAME = "dwarn"


# Classes --------------------------------------------------------------------------------------------------------------

class DumpWarning(UserWarning):
    """Warning category of messages produced by Dwarn.warn() and Dwarn.tap()."""


class Dwarn:
    """
    Long-lived owner of one DumpOptions instance exposing the diagnostic helpers.

    Args:
        options: Dump configuration, DumpOptions() if None.
        logger: Target of log(), a Logger or LoggerAdapter; the "dwarn" logger if None.

    Examples:
        >>> dw = Dwarn(DumpOptions.logging())
        >>> dw.format("user", "alice", "roles", ["admin"])
        'user: "alice", roles: [ "admin" ]'
        >>> dw.die("bad input", 42, exc_type=ValueError)
        Traceback (most recent call last):
        ValueError: "bad input", 42
    """

    def __init__(self,
                 options: DumpOptions | None = None,
                 *,
                 logger: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        if not isinstance(logger, (logging.Logger, logging.LoggerAdapter, type(None))):
            raise TypeError(f"logger must be a logging.Logger or LoggerAdapter, but got {fmt_type(logger)}")
        self.dumper = Dumper(options)
        self.logger = logger if logger is not None else logging.getLogger(LOGGER_NAME)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"

    @property
    def options(self) -> DumpOptions:
        return self.dumper.options

    def with_options(self, **changes) -> Self:
        """Return a new adapter with merged options and the same logger."""
        return type(self)(self.options.merge(**changes), logger=self.logger)

    def format(self, *values: Any) -> str:
        """Return the dump of values."""
        return self.dumper.dump(*values)

    def warn(self, *values: Any, category: type[Warning] = DumpWarning, stacklevel: int = 2) -> None:
        """
        Emit the dump of values via warnings.warn().

        Args:
            values: Diagnostic arguments.
            category: Warning class passed to warnings.warn().
            stacklevel: As in warnings.warn(); the default points at the caller of warn().
        """
        warnings.warn(self.format(*values), category=category, stacklevel=stacklevel)

    def die(self, *values: Any, exc_type: type[BaseException] = RuntimeError) -> NoReturn:
        """
        Raise exc_type with the dump of values as its message.

        Raises:
            exc_type: Always.
            TypeError: If exc_type is not an exception class.
        """
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            raise TypeError(f"exc_type must be an exception class, but got {fmt_type(exc_type)}")
        raise exc_type(self.format(*values))

    def log(self, *values: Any, level: int = logging.WARNING) -> None:
        """Log the dump of values at level; nothing is dumped when the level is disabled."""
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, "%s", self.format(*values), stacklevel=2)

    def tap(self, *values: Any) -> Any:
        """
        Warn with the dump of values and return them unchanged.

        Returns:
            The single argument itself, a tuple of several arguments, or None without arguments.
        """
        self.warn(*values, stacklevel=3)
        if len(values) == 1:
            return values[0]
        return values or None


# Module-level helpers bound to the default adapter --------------------------------------------------------------------

DEFAULT_DWARN = Dwarn()

dumper = DEFAULT_DWARN.dumper
dump = DEFAULT_DWARN.format
warn = DEFAULT_DWARN.warn
die = DEFAULT_DWARN.die
log = DEFAULT_DWARN.log
tap = DEFAULT_DWARN.tap
