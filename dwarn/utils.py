"""
DWARN Utilities shared across the package.

Contains naming and identity helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    The type is taken with type(), never via obj.__class__, so proxies and mocks
    overriding __class__ cannot run user code here.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
        >>> class C: ...
        >>> class_name(C, fully_qualified=True)
        '__main__.C'
    """
    cls = obj if issubclass(type(obj), type) else type(obj)

    module = getattr(cls, "__module__", None) or "builtins"
    name = cls.__name__

    if module == "builtins":
        return f"{module}.{name}" if fully_qualified_builtins else name
    return f"{module}.{name}" if fully_qualified else name


def identity_token(obj: Any) -> str:
    """Return the hex identity of obj, e.g. '0x7f3a1c2b4d90'."""
    return f"0x{id(obj):x}"


def fmt_type(obj: Any) -> str:
    """Type label for error messages: '<int>' for 10 and for int."""
    return f"<{class_name(obj)}>"
