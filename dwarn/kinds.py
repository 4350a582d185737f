"""
Value kinds and the classifier that assigns exactly one kind to any Python object.

The kind drives formatting dispatch in the dumper. Classification is a capability
check rather than a strict type test, and it is total: whatever cannot be placed
elsewhere is an opaque reference.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import types
import weakref
from decimal import Decimal
from enum import StrEnum, unique
from fractions import Fraction
from typing import Any

TEXT_TYPES = (str, bytes, bytearray)

NUMBER_TYPES = (
    bool,  # Subclass of int, listed for clarity
    int,
    float,
    complex,
    Decimal,
    Fraction,
)

# Referenceable things that are never decomposed nor described by their own text conversion
OPAQUE_TYPES = (
    type,
    types.ModuleType,
    types.FrameType,
    types.CodeType,
    types.TracebackType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.CellType,
    weakref.ReferenceType,
    weakref.ProxyType,
    weakref.CallableProxyType,
    memoryview,
    abc.Iterator,
)

ROUTINE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
    types.ClassMethodDescriptorType,
)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(StrEnum):
    """
    Formatting kind of a value.

    Attributes:
        NOTHING: Absence of value (None)
        TEXT: str, bytes, bytearray
        NUMBER: bool, int, float, complex, Decimal, Fraction
        SEQUENCE: Non-text sequences, sets and mapping views
        MAPPING: Key-value containers
        OBJECT: Instances with a type identity and/or their own text conversion
        OPAQUE: Everything else - functions, classes, modules, iterators, weak references...
    """
    NOTHING = "nothing"
    TEXT = "text"
    NUMBER = "number"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OBJECT = "object"
    OPAQUE = "opaque"


# Methods --------------------------------------------------------------------------------------------------------------

def classify(value: Any) -> Kind:
    """
    Determine the formatting kind of a value.

    Pure and total: never raises and never invokes user-defined conversions.
    Kinds follow the real type from type(value); a faked __class__ (mocks with a
    spec, proxies) cannot pass a value off as text or a number.

    Examples:
        >>> classify(None)
        <Kind.NOTHING: 'nothing'>
        >>> classify("abc")
        <Kind.TEXT: 'text'>
        >>> classify([1, 2])
        <Kind.SEQUENCE: 'sequence'>
        >>> classify(len)
        <Kind.OPAQUE: 'opaque'>
    """
    try:
        return _classify(value)
    except Exception:
        # Hostile metaclass __subclasscheck__ implementations end up here
        return Kind.OPAQUE


def has_own_text_conversion(value: Any) -> bool:
    """
    Check whether the value's type defines __str__ or __repr__ below `object` in its MRO.

    Only class attributes are inspected, nothing is called on the instance.
    """
    try:
        cls = type(value)
        return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__
    except Exception:
        return False


def is_key_kind(kind: Kind) -> bool:
    """Kinds allowed as candidate keys by the top-level pairs heuristic."""
    return kind in (Kind.TEXT, Kind.NUMBER)


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify(value: Any) -> Kind:
    if value is None:
        return Kind.NOTHING
    cls = type(value)
    if issubclass(cls, TEXT_TYPES):
        return Kind.TEXT
    if issubclass(cls, NUMBER_TYPES):
        return Kind.NUMBER
    if issubclass(cls, OPAQUE_TYPES + ROUTINE_TYPES):
        return Kind.OPAQUE
    if issubclass(cls, abc.Mapping):
        return Kind.MAPPING
    if issubclass(cls, (abc.Sequence, abc.Set, abc.MappingView)):
        return Kind.SEQUENCE
    if cls.__module__ != "builtins" or has_own_text_conversion(value):
        return Kind.OBJECT
    return Kind.OPAQUE
