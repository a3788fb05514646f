"""
gnuopts faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every parse failure and warning.
- OptionError: base exception for a rejected command line. Carries the
  message plus context options (name, token, index, code, title, hint) and
  renders itself GNU-style through rich.
- OptionWarning: base warning for soft issues, emitted through `warnings`.
- trigger(): central entry point to surface a fault (raise, or print and exit
  in shell mode).

Message copy follows GNU getopt so that users see familiar diagnostics:
    prog: unrecognized option '--frobnicate'
    prog: invalid option -- 'q'
    prog: option '--verbose' doesn't allow an argument
    prog: option '--level' requires an argument
    prog: option requires an argument -- 'o'
    Try 'prog --help' for more information.

Integration
- The scanner raises faults directly; callers that want printed diagnostics
  and an exit status hand them to trigger() (see gnuopts.program.Program).
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, progname

console = Console(stderr=True)

EXIT_ARGUMENT_ERROR = 2
"""Process exit status used when the command line is rejected."""


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - unrecognized names (1111x): UNRECOGNIZED_LONG_OPTION, UNRECOGNIZED_SHORT_OPTION
    - argument policy (1112x): UNEXPECTED_ARGUMENT, MISSING_ARGUMENT
    - warnings (12xxx): IGNORED_METAVAR
    """
    UNRECOGNIZED_LONG_OPTION  = 11111
    UNRECOGNIZED_SHORT_OPTION = 11112

    UNEXPECTED_ARGUMENT       = 11121
    MISSING_ARGUMENT          = 11122

    IGNORED_METAVAR           = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionError(Exception):
    """
    A command line rejected by the scanner.

    The message is the bare GNU-style reason (without program prefix). Context
    lives in `options`; the commonly used entries are exposed as properties.
    """

    code = Unset
    title = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType({
            "code": type(self).code,
            "title": type(self).title,
        } | options)

    @property
    def name(self):
        """
        Offending option name: long name without dashes, or the short character.
        """
        return self.options.get("name")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = self.options.get("prog") or progname()
        hint = self.hint or "Try '%s --help' for more information." % prog

        if self.options.get("fancy", False):
            header = Text.assemble(
                "[ ",
                text(prog, "prog-name"),
                " — ",
                text(self.options["code"].normalize() if self.options["code"] else "", "code"),
                " | ",
                text(str(coalesce(self.options["title"], "error")).title(), "error-title"),
                " ]"
            )
            return Panel(Group(text(self.message, "error-message"), text(hint, "hint")), title=header, title_align="left")

        message = Text.assemble(text(prog, "prog-name"), ": ", text(self.message, "error-message"))
        return Group(message, text(hint, "hint"))

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(EXIT_ARGUMENT_ERROR)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedLongOptionError(OptionError):
    code = FaultCode.UNRECOGNIZED_LONG_OPTION
    title = "unrecognized option"

    @classmethod
    def build(cls, name, /, **options):
        return cls("unrecognized option '--%s'" % name, name=name, **options)


class UnrecognizedShortOptionError(OptionError):
    code = FaultCode.UNRECOGNIZED_SHORT_OPTION
    title = "invalid option"

    @classmethod
    def build(cls, name, /, **options):
        return cls("invalid option -- '%s'" % name, name=name, **options)


class UnexpectedArgumentError(OptionError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"

    @classmethod
    def build(cls, name, /, **options):
        return cls("option '--%s' doesn't allow an argument" % name, name=name, **options)


class MissingArgumentError(OptionError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"

    @classmethod
    def build(cls, name, /, *, short=False, **options):
        if short:
            return cls("option requires an argument -- '%s'" % name, name=name, short=True, **options)
        return cls("option '--%s' requires an argument" % name, name=name, short=False, **options)


class OptionWarning(Warning):
    """
    Base warning for soft, non-fatal issues (construction-time misuse).
    """

    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType({"code": type(self).code} | options)

    def __str__(self):
        return self.message

    def __rich__(self):
        prog = self.options.get("prog") or progname()
        return Text.assemble(prog, ": warning: ", self.message, style="yellow" if self.options.get("colorful") else "")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class IgnoredMetavarWarning(OptionWarning):
    code = FaultCode.IGNORED_METAVAR


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into the fault via copy.replace() before triggering.
    - shell=False raises errors and emits warnings through `warnings`;
      shell=True prints through rich and exits with EXIT_ARGUMENT_ERROR on errors.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionError",
    "UnrecognizedLongOptionError",
    "UnrecognizedShortOptionError",
    "UnexpectedArgumentError",
    "MissingArgumentError",
    "OptionWarning",
    "IgnoredMetavarWarning",
    "EXIT_ARGUMENT_ERROR",
    "trigger",
)
