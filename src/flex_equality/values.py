"""
Runtime classification of values.

Every rule decides applicability and equality from the kind of its operands.
`kind_of` maps an arbitrary Python object onto one `ValueKind`; the helpers
here also expose the declared type and named fields of a value.
"""

import asyncio
import dataclasses
import decimal
import functools
import io
import numbers
import queue
import socket
import threading
import types
from collections.abc import Iterator, Mapping, Sequence, Set
from datetime import datetime
from typing import Any

from .constants import ValueKind


class _Absent:
    """Typeless nil: a value that carries no type information at all."""

    _instance: '_Absent | None' = None

    def __new__(cls) -> '_Absent':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'ABSENT'

    def __reduce__(self) -> str:
        return 'ABSENT'


ABSENT = _Absent()
"""
Sentinel for a value with no type at all.

`None` is a typed value (`NoneType`) and compares equal to `None`. `ABSENT`
carries no type, so no built-in rule applies to it and any comparison
involving it is unequal.
"""


_CALLABLE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    functools.partial,
)

_HANDLE_TYPES = (
    io.IOBase,
    socket.socket,
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    type(threading.Lock()),
    type(threading.RLock()),
    threading.Condition,
    threading.Event,
    threading.Semaphore,
    threading.Barrier,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    Iterator,
)


def type_of(value: Any) -> type | None:  # noqa: ANN401
    """Return the declared type of `value`, or None for the typeless ABSENT sentinel."""
    if value is ABSENT:
        return None
    return type(value)


def qualified_name(tp: type | None) -> str:
    """Return a display name for a type; builtins are left unqualified."""
    if tp is None:
        return 'absent'
    module = getattr(tp, '__module__', None)
    name = getattr(tp, '__qualname__', None) or getattr(tp, '__name__', repr(tp))
    if module in (None, 'builtins'):
        return name
    return f"{module}.{name}"


def kind_of(value: Any) -> ValueKind:  # noqa: ANN401, PLR0911, PLR0912
    """
    Classify a value into one `ValueKind`.

    The order of the checks matters: `bool` is an `int`, `str` is a
    `Sequence`, file objects are iterators, and so on.
    """
    if value is ABSENT:
        return ValueKind.ABSENT
    if value is None:
        return ValueKind.NONE
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, numbers.Integral):
        return ValueKind.INTEGER
    if isinstance(value, numbers.Real | decimal.Decimal):
        return ValueKind.REAL
    if isinstance(value, numbers.Complex):
        return ValueKind.COMPLEX
    if isinstance(value, datetime):
        return ValueKind.INSTANT
    if isinstance(value, str | bytes):
        return ValueKind.TEXT
    if isinstance(value, type | types.ModuleType):
        return ValueKind.OPAQUE
    if isinstance(value, _CALLABLE_TYPES):
        return ValueKind.CALLABLE
    if isinstance(value, _HANDLE_TYPES):
        return ValueKind.HANDLE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Set):
        return ValueKind.SET
    if isinstance(value, Sequence | bytearray):
        return ValueKind.SEQUENCE
    if has_fields(value):
        return ValueKind.COMPOSITE
    return ValueKind.OPAQUE


def _slot_names(tp: type) -> list[str]:
    names = []
    for cls in tp.__mro__:
        slots = cls.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            # dunder slots (__dict__, __weakref__, framework bookkeeping) are not data
            if name.startswith('__') and name.endswith('__'):
                continue
            if name.startswith('__'):
                name = f"_{cls.__name__.lstrip('_')}{name}"  # noqa: PLW2901
            if name not in names:
                names.append(name)
    return names


def has_fields(value: Any) -> bool:  # noqa: ANN401
    """Return True if the value stores named fields (instance dict or slots)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return hasattr(value, '__dict__') or bool(_slot_names(type(value)))


def fields_of(value: Any) -> dict[str, Any]:  # noqa: ANN401
    """
    Return the named fields of a composite value.

    Dataclasses report their declared fields in declaration order; other
    objects report their instance dict followed by any populated slots.
    Unset slots are reported as ABSENT.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: getattr(value, field.name, ABSENT)
            for field in dataclasses.fields(value)
        }

    fields = dict(vars(value)) if hasattr(value, '__dict__') else {}
    for name in _slot_names(type(value)):
        if name not in fields:
            fields[name] = getattr(value, name, ABSENT)
    return fields
