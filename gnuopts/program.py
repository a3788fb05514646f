"""
gnuopts program facade: bind a registry to a program identity and run it.

What this module provides
- Program: the caller-side glue around the core.
  • Holds the option registry plus help metadata (prog, blurb, usage, footer).
  • Normalizes the prompt (argv, shell-like string, or token iterable).
  • Runs the scanner and routes faults through trigger():
      – shell=False: faults are raised (library/test use).
      – shell=True: faults are printed GNU-style on stderr and the process
        exits with EXIT_ARGUMENT_ERROR (2).
  • Prints help to the diagnostic stream with rich.

Quick start
    from gnuopts import Program, Option, Policy, option

    @option("-o", "--output", policy=Policy.REQUIRED, metavar="FILE", descr="write to FILE")
    def output(value): ...

    program = Program(output, prog="tool", blurb="Do the thing.", shell=True)
    tasks = program.parse()        # reads sys.argv[1:]
"""
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import help as formatter, scanner
from .faults import *
from .options import Registry
from .utils import *


class Program:
    """
    A named, reusable option set with GNU-style help and error reporting.

    Parameters
    - *options: Option objects (or @option decorators), in help order; a single
      Registry or iterable is accepted as well.
    - prog: program name (defaults to __prog__ in __main__, else argv[0]).
    - blurb: one-line description under the usage line.
    - usage: synopsis after the program name.
    - footer: trailing help line.
    - shell: print faults and exit instead of raising.
    - colorful: style help and diagnostics.
    - fancy: render diagnostics and help inside rich panels.
    """

    prog = mirror("prog")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    options = mirror("options")

    def __init__(
            self,
            *options,
            prog=Unset,
            blurb=Unset,
            usage=Unset,
            footer=Unset,
            shell=False,
            colorful=True,
            fancy=False,
    ):
        for name, value in (("prog", prog), ("blurb", blurb), ("usage", usage), ("footer", footer)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"program '{name}' must be a string")

        if len(options) == 1 and isinstance(options[0], Registry):
            self._options, = options
        else:
            self._options = Registry(*options)
        self._prog = coalesce(prog, progname())
        self._blurb = blurb
        self._usage = usage
        self._footer = footer
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    @property
    def blurb(self):
        return coalesce(self._blurb)

    @property
    def usage(self):
        return coalesce(self._usage)

    @property
    def footer(self):
        return coalesce(self._footer)

    def __repr__(self):
        return f"program(prog={self._prog!r}, options={len(self._options)}, shell={self._shell!r})"

    def styled(self):
        """
        Help as rich Text, honoring `colorful`.
        """
        return formatter.styled(
            self._options,
            prog=self._prog,
            blurb=self._blurb,
            usage=self._usage,
            footer=self._footer,
            colorful=self._colorful,
        )

    def render(self):
        """
        Help as plain text.
        """
        return self.styled().plain

    def help(self, *, file=Unset):
        """
        Print the help to the diagnostic stream (stderr unless `file` is given).
        """
        console = Console(file=coalesce(file), stderr=True, no_color=not self._colorful, highlight=False)
        renderable = self.styled()
        if self._fancy:
            renderable = Panel(renderable, title=Text.assemble("[ ", f"{self._prog} help".upper(), " ]"), title_align="left")
        # pre-aligned columns, printed as-is
        console.print(renderable, soft_wrap=True)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this program's runtime flags merged in.
        """
        trigger(fault, **{
            "prog": self._prog,
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        } | options)

    def parse(self, prompt=Unset, /):
        """
        Parse a prompt and return the positional arguments.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Returns
        - list[str] of positional arguments.

        Faults go through trigger(): raised, or printed followed by
        sys.exit(EXIT_ARGUMENT_ERROR) in shell mode.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        try:
            return scanner.parse(tokens, self._options)
        except OptionError as fault:
            self.trigger(fault)


__all__ = (
    "Program",
)
