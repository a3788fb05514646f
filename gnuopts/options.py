r"""
gnuopts option descriptors and registry.

Overview
- Policy: three-valued argument policy of an option.
  • FORBIDDEN: the option never takes a value ('-v', '--verbose').
  • REQUIRED: a value must accompany every form ('-oFILE', '-o FILE', '--output=FILE').
  • OPTIONAL_FOR_LONG: the short form always takes a value, the long form
    may omit it ('--color' or '--color=always', but always '-c WHEN').

- Option: immutable descriptor naming at most one short and one long form,
  a description, a policy, a metavar (help placeholder) and a handler.
  Calling an Option forwards the parsed value (str, or None when absent)
  to its handler; without a handler the call is a no-op.

- @option(...): build an Option and bind the decorated function as its handler.

- Registry: ordered, immutable collection of options. Order is used for
  help output only; the scanner looks options up by name through the
  `shorts` and `longs` mappings. Duplicate names are a programming error
  and raise ValueError at construction.

Quick example:
    >>> from gnuopts.options import Option, Policy, Registry, option
    >>> @option("-o", "--output", policy=Policy.REQUIRED, metavar="FILE", descr="write to FILE")
    ... def on_output(value): ...
    ...
    >>> registry = Registry(on_output, Option("-v", "--verbose", descr="explain what is done"))
    >>> registry.longs["output"] is on_output
    True
"""
import enum
import functools
import operator
import os.path
import re
import warnings
from collections.abc import Iterable
from types import MappingProxyType, MethodType

from rich.text import Text

from .faults import IgnoredMetavarWarning
from .utils import *


class Policy(enum.Enum):
    """
    Whether and how a value must accompany an option.

    Short and long forms differ under OPTIONAL_FOR_LONG.
    """
    FORBIDDEN = "forbidden"
    REQUIRED = "required"
    OPTIONAL_FOR_LONG = "optional-for-long"

    @property
    def accepts(self):
        """
        True when the option can carry a value at all.
        """
        return self is not Policy.FORBIDDEN

    def __repr__(self):
        return "Policy.%s" % self.name


class OptionType(type):
    """
    Metaclass giving descriptors stable, readable representations.

    - Names listed in __introspectable__ become read-only properties backed
      by "_<name>" fields (see mirror()).
    - __repr__ and __rich_repr__ show the introspectable fields in order.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: split the declared names into one short and one long form.

    Accepted spellings
    - short: "-x" where x is any single character other than '-' or whitespace.
    - long: "--name" where name is non-empty, contains no '=' and no whitespace,
      and does not start with '-'.

    Results are stored back as metadata["short"] / metadata["long"] without
    their dashes (None when absent).
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    short = long = None
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        if re.fullmatch(r"-[^\s-]", name):
            if short is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name[1:]
        elif re.fullmatch(r"--[^\s=-][^\s=]*", name):
            if long is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name[2:]
        else:
            raise ValueError(f"{cls.__typename__} name {name!r} must look like '-x' or '--name'")

    metadata["short"] = short
    metadata["long"] = long


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate policy, metavar and descr.

    - policy: a Policy member.
    - metavar: Unset or a non-empty string; ignored (with a warning) when the
      policy is FORBIDDEN.
    - descr: Unset, a string or rich Text; Unset becomes None.
    """
    if not isinstance(metadata["policy"], Policy):
        raise TypeError(f"{cls.__typename__} 'policy' must be a Policy")

    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")

    if metavar and not metadata["policy"].accepts:
        warnings.warn(IgnoredMetavarWarning(
            "metavar %r is ignored because option %s does not take an argument"
            % (metavar, " / ".join(metadata["names"])),
            metavar=metavar,
        ), skip_file_prefixes=(os.path.dirname(__file__) + os.sep,))
        metavar = Unset
    metadata["metavar"] = coalesce(metavar)

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = coalesce(descr)


class Option(metaclass=OptionType):
    """
    Immutable option descriptor.

    Properties
    - short: single character or None.
    - long: long name without the leading '--', or None.
    - descr: help text or None.
    - policy: Policy.
    - metavar: placeholder for the value in help, or None (rendered as "ARG").

    Calling the option, `option(value)`, invokes the bound handler with the
    value (a str, or None when absent).
    """

    __introspectable__ = (
        "short",
        "long",
        "policy",
        "metavar",
        "descr",
    )

    def __init__(
            self,
            *names,
            descr=Unset,
            policy=Policy.FORBIDDEN,
            metavar=Unset,
            handler=Unset,
    ):
        metadata = {
            "names": names,
            "descr": descr,
            "policy": policy,
            "metavar": metavar,
        }
        _sanitize_names(type(self), metadata)
        _sanitize_metadata(type(self), metadata)

        if handler is not Unset and not callable(handler):
            raise TypeError(f"{type(self).__typename__} 'handler' must be callable")

        for name in type(self).__introspectable__:
            object.__setattr__(self, "_" + name, metadata[name])
        object.__setattr__(self, "_callback", handler)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __call__(self, value=None, /):
        if self._callback is Unset:
            return
        return self._callback(value)

    @property
    def names(self):
        """
        Display names with dashes, short form first.
        """
        names = ()
        if self._short is not None:
            names += ("-" + self._short,)
        if self._long is not None:
            names += ("--" + self._long,)
        return names

    @property
    def bound(self):
        """
        True once a handler has been attached.
        """
        return self._callback is not Unset

    def __option__(self):
        return self


def option(*args, **kwargs):
    """
    Decorator/factory binding a handler function to a new Option.

    Usage
        @option("-l", "--level", policy=Policy.REQUIRED, metavar="LEVEL")
        def on_level(value): ...

    The decorator returns the Option itself, so the decorated name can be
    placed straight into a Registry. A decorator instance binds only once.
    An unapplied decorator still exposes __option__, so it can be registered
    as a handler-less option.
    """
    if "handler" in kwargs:
        raise TypeError("@option() binds its handler through decoration")
    option = Option(*args, **kwargs)

    @rename("option")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        if option.bound:
            raise TypeError("@option() must be applied only once")
        object.__setattr__(option, "_callback", callback)
        return option

    wrapper.__option__ = MethodType(rename(lambda self: option, "__option__"), wrapper)
    return wrapper


class Registry(metaclass=OptionType):
    """
    Ordered, immutable collection of options.

    Construction validates that no short name and no long name is declared
    twice. The registry holds no per-parse state, so one registry can serve
    any number of parse calls.
    """

    __introspectable__ = (
        "options",
    )

    def __init__(self, *options):
        if len(options) == 1 and isinstance(options[0], Iterable) and not hasattr(options[0], "__option__"):
            options, = options

        resolved = []
        shorts = {}
        longs = {}
        for candidate in options:
            if not hasattr(candidate, "__option__") or not callable(candidate.__option__):
                raise TypeError("registry() arguments must be options")
            resolved.append(entry := candidate.__option__())

            if entry.short is not None:
                if entry.short in shorts:
                    raise ValueError("duplicate short option '-%s'" % entry.short)
                shorts[entry.short] = entry
            if entry.long is not None:
                if entry.long in longs:
                    raise ValueError("duplicate long option '--%s'" % entry.long)
                longs[entry.long] = entry

        object.__setattr__(self, "_options", tuple(resolved))
        object.__setattr__(self, "_shorts", MappingProxyType(shorts))
        object.__setattr__(self, "_longs", MappingProxyType(longs))

    def __setattr__(self, name, value):
        raise AttributeError("registry is immutable")

    @property
    def shorts(self):
        """
        Read-only mapping from short character to option.
        """
        return self._shorts

    @property
    def longs(self):
        """
        Read-only mapping from long name (no dashes) to option.
        """
        return self._longs

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __getitem__(self, index, /):
        return self._options[index]

    def __contains__(self, option, /):
        return option in self._options


__all__ = (
    # Types
    "Policy",
    "Option",
    "Registry",

    # Decorators
    "option",
)

# The metaclass is an implementation detail of the descriptors.
del OptionType
