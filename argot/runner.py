"""
Argot front-end: parse the process arguments and act on the outcome.

- parse(schema, args=Unset) runs the matcher and hands the outcome back
  untouched: a ParseResult, a HelpRequested / VersionRequested signal, or a
  raised ParseError.
- invoke(schema, args=Unset, *, colorful=True, fancy=False) is the
  batteries-included variant for scripts: help and version text go to
  stdout followed by exit status 0, parse errors are rendered through rich
  on stderr followed by exit status 1, and only a ParseResult is returned.

In both, args defaults to sys.argv[1:]; a single string is split the way a
POSIX shell would (shlex.split), which keeps tests and REPL sessions short.
When the schema has no name, the program name is taken from sys.argv[0].
"""
import copy
import logging
import os
import shlex
import sys

from rich.console import Console
from rich.text import Text

from .commands import Schema
from .faults import ParseError, Requested, console
from .matcher import match
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

stdout = Console(highlight=False, soft_wrap=True)


def _prepare(schema, args, /):
    if not isinstance(schema, Schema):
        raise TypeError("argot expects a schema as first argument")

    if isinstance(args, str):
        args = shlex.split(args)
    args = list(coalesce(args, sys.argv[1:]))

    program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "<program>"
    return args, (coalesce(schema.name, program),)


def parse(schema, args=Unset, /):
    """
    Match 'args' against 'schema' and return the outcome.

    Returns ParseResult | HelpRequested | VersionRequested; raises ParseError.
    """
    args, path = _prepare(schema, args)
    return match(schema, args, path=path)


def invoke(schema, args=Unset, /, *, colorful=True, fancy=False):
    """
    Match 'args' against 'schema'; print and exit on anything but a result.

    - HelpRequested / VersionRequested: text on stdout, exit status 0.
    - ParseError: rich rendering on stderr, exit status 1.
    """
    args, path = _prepare(schema, args)
    try:
        outcome = match(schema, args, path=path)
    except ParseError as error:
        logger.debug("parse error %s: %s", error.code, error)
        console.print(copy.replace(error, colorful=colorful, fancy=fancy))
        sys.exit(1)

    if isinstance(outcome, Requested):
        stdout.print(Text(outcome.text), end="" if outcome.text.endswith("\n") else "\n")
        sys.exit(0)

    return outcome


__all__ = (
    "parse",
    "invoke",
)
