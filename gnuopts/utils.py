"""
gnuopts utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the options, faults, help and program layers.

Overview
- UnsetType / Unset
  • Singleton sentinel for “parameter not provided”, distinct from None.
  • Falsey (bool(Unset) is False), printable as "Unset", non-subclassable.
  • None is reserved for the “absent value” handed to option handlers, so
    keyword defaults use Unset instead.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, keeping None/""/0 untouched.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- progname()
  • Program name for messages: __prog__ in __main__, else basename of argv[0].

Quick examples
    >>> coalesce(Unset, "ARG")
    'ARG'
    >>> coalesce("", "ARG")
    ''
"""
import builtins
import functools
import os.path
import sys
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a parameter that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values such as None or "" are returned as-is; only Unset is
    replaced. This matters for option values, where "" (from '--opt=') and
    None (no value at all) mean different things.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def progname():
    """
    Program name for usage lines and diagnostics.

    The host application may set __prog__ in __main__; otherwise the base
    name of sys.argv[0] is used.
    """
    return getattr(__import__("__main__"), "__prog__", None) or os.path.basename(sys.argv[0] if sys.argv else "") or "prog"


def _freeze(object):
    """
    Shallow read-only view of container values.

    - Sequence (non-string) -> tuple
    - Mapping -> MappingProxyType
    - Set -> frozenset
    - anything else is returned unchanged
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance; containers are handed
    out as read-only views so registry state cannot be mutated through the
    public API.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a keyword default when None already means something (an
absent option value). Materialize with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "progname",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
