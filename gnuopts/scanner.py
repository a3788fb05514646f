"""
gnuopts argument scanner.

parse(args, options) walks an argument vector once, left to right, and
dispatches every recognized option to its handler as soon as it is matched.
The return value is the list of positional arguments left over.

Token classification
- '--'               end of options; everything after it is positional.
- '--name[=value]'   long option; exact name match, value only via '='.
- '-abc'             bundle of short options; an argument-taking option ends
                     the bundle and takes the rest of the token, or the whole
                     next token when the rest is empty.
- anything else      ('build', '-', '') ends option scanning; this token and
                     all that follow are positional.

Values
- A handler receives a str, or None when no value was given. '--opt=' yields
  "" and is distinct from '--opt' (None).

Failures
- The first malformed token raises an OptionError subclass and aborts the
  parse. Handlers that already ran are not rolled back. Exceptions raised
  by handlers propagate untouched.
"""
from collections import deque
from collections.abc import Iterable

from .faults import *
from .options import Policy, Registry


def _tokens(args, /):
    """
    Normalize the argument vector into a deque of strings.
    """
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("parse() first argument must be an iterable of strings")
    tokens = deque()
    for token in args:
        if not isinstance(token, str):
            raise TypeError("parse() first argument must be an iterable of strings")
        tokens.append(token)
    return tokens


def _parse_long(token, options, index):
    """
    Handle one '--name[=value]' token.
    """
    name, equals, value = token[2:].partition("=")

    try:
        option = options.longs[name]
    except KeyError:
        raise UnrecognizedLongOptionError.build(name, token=token, index=index) from None

    if option.policy is Policy.FORBIDDEN and equals:
        raise UnexpectedArgumentError.build(name, token=token, index=index, option=option)
    if option.policy is Policy.REQUIRED and not equals:
        raise MissingArgumentError.build(name, token=token, index=index, option=option)

    # OPTIONAL_FOR_LONG without '=' falls through with an absent value
    option(value if equals else None)


def _parse_shorts(token, tokens, options, index):
    """
    Handle one '-abc' bundle. Returns how many extra tokens were consumed.
    """
    position = 1
    while position < len(token):
        name = token[position]
        position += 1

        try:
            option = options.shorts[name]
        except KeyError:
            raise UnrecognizedShortOptionError.build(name, token=token, index=index) from None

        if not option.policy.accepts:
            option(None)
            continue

        # argument-taking short option: value is the rest of this token or the next token
        if position < len(token):
            option(token[position:])
            return 0
        if tokens:
            option(tokens.popleft())
            return 1
        raise MissingArgumentError.build(name, short=True, token=token, index=index, option=option)
    return 0


def parse(args, options, /):
    """
    Scan `args` against `options`, invoking handlers, and return the positionals.

    Parameters
    - args: iterable of str (a bare str is rejected; split it first).
    - options: Registry, or any iterable of options accepted by Registry.

    Returns
    - list[str]: positional arguments in their original order (may be empty).

    Raises
    - UnrecognizedLongOptionError / UnrecognizedShortOptionError
    - UnexpectedArgumentError / MissingArgumentError
    - TypeError when `args` is not an iterable of strings.
    """
    if not isinstance(options, Registry):
        options = Registry(options)

    tokens = _tokens(args)
    index = 1  # 1-based position of the current token, for diagnostics

    while tokens:
        token = tokens.popleft()

        if token == "--":
            break
        elif token.startswith("--"):
            _parse_long(token, options, index)
        elif token.startswith("-") and len(token) > 1:
            index += _parse_shorts(token, tokens, options, index)
        else:
            tokens.appendleft(token)
            break
        index += 1

    return list(tokens)


__all__ = (
    "parse",
)
