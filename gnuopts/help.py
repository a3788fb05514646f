"""
gnuopts help formatter.

Renders a registry as GNU-style --help text:

    Usage: prog [OPTION]... [ARG]...
    Frobnicate the bizbaz.
      -v, --verbose       explain what is being done
      -o, --output=FILE   write to FILE
      -c, --color[=WHEN]  colorize the output
          --debug         print internal state
      -j JOBS             run JOBS jobs at once
    Report bugs to <bugs@example.org>.

Layout rules
- short name present: '  -x' followed by ',' when a long name exists, a space otherwise.
- short name absent: five spaces, so long names stay in one column.
- long name: ' --name', then '=META' (REQUIRED) or '[=META]' (OPTIONAL_FOR_LONG).
- short-only options that take a value: ' META'.
- every signature is padded to the widest one plus a two-column gutter.

styled() returns the layout as rich Text (palette overridable through
__styles__ in __main__); render() returns the same layout as plain text.
Both are pure and know nothing about parsing.
"""
from collections import defaultdict

from rich.text import Text

from .options import Policy, Registry
from .utils import *

GUTTER = 2
"""Spaces between the widest option signature and the descriptions."""


def styled(options, /, *, prog=Unset, blurb=Unset, usage=Unset, footer=Unset, colorful=True):
    """
    Render help for `options` as a rich Text.

    Parameters
    - options: Registry or iterable of options, rendered in order.
    - prog: program name (defaults to __prog__ in __main__, else argv[0]).
    - blurb: one-line description placed under the usage line.
    - usage: synopsis after the program name (default "[OPTION]... [ARG]...").
    - footer: trailing line (bug report address, homepage...).
    - colorful: apply the palette; False yields unstyled Text.
    """
    if not isinstance(options, Registry):
        options = Registry(options)

    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan headline
        "program-name": "bold #FF4D94",  # magenta-pink brand
        "usage-section": "bold #36C5F0",  # sky-blue synopsis
        "description-section": "italic #A3A3A3",  # neutral gray
        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",  # amber placeholders
        "argument-description": "#9CA3AF",
        "epilog-section": "#737373",  # dim footer
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styles[style] if colorful else "")

    def signature(option):
        line = Text()
        metavar = text(option.metavar or "ARG", "metavar")

        if option.short is None:
            line.append("     ")
        else:
            line.append("  ").append(text("-" + option.short, "option-name"))
            line.append("," if option.long is not None else " ")

        if option.long is not None:
            line.append(" ").append(text("--" + option.long, "option-name"))
            match option.policy:
                case Policy.REQUIRED:
                    line.append("=").append(metavar)
                case Policy.OPTIONAL_FOR_LONG:
                    line.append("[=").append(metavar).append("]")
        elif option.policy.accepts:
            line.append(metavar)

        return line

    lines = []

    head = Text()
    head.append(text("Usage", "usage-label")).append(": ")
    head.append(text(coalesce(prog, progname()), "program-name")).append(" ")
    head.append(text(coalesce(usage, "[OPTION]... [ARG]..."), "usage-section"))
    lines.append(head)

    if blurb:
        lines.append(text(blurb, "description-section"))

    signatures = [signature(option) for option in options]
    width = max(map(len, signatures), default=0) + GUTTER

    for option, line in zip(options, signatures):
        if option.descr:
            line.append(" " * (width - len(line))).append(text(option.descr, "argument-description"))
        line.rstrip()
        lines.append(line)

    if footer:
        lines.append(text(footer, "epilog-section"))

    return Text("\n").join(lines)


def render(options, /, *, prog=Unset, blurb=Unset, usage=Unset, footer=Unset):
    """
    Render help for `options` as plain GNU-style text (no trailing newline).
    """
    return styled(options, prog=prog, blurb=blurb, usage=usage, footer=footer, colorful=False).plain


__all__ = (
    "GUTTER",
    "styled",
    "render",
)
