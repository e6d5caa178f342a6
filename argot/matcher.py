"""
Argot matcher: reconcile a token stream with a Schema.

Flow of one match()
1. Options phase. Tokens come from the Lexer one at a time. Each option
   token is looked up in the schema, its value (if any) is resolved and
   converted, and the binding is updated. The help and version switches
   short-circuit right here: nothing after them is looked at.
2. Positionals phase. Entered on the first positional-shaped element or on
   "--"; every remaining element is collected verbatim.
3. Distribution. Required positionals get one element each (in declaration
   order), then optional ones, then the variadic positional (or the
   selector) takes the surplus. Elements are handed out in input order.
4. Dispatch. If the selector got elements, the first one picks the
   subcommand and the others are matched recursively against its schema.
   A help/version signal from the child ends the whole parse.
5. Validation. Conflict groups are checked (options first, then
   positionals, each in declaration order), then required choice groups.

The first structural error in input order is raised as a ParseError
subclass; nothing is collected or retried.
"""
import logging
from enum import Enum

from .arguments import Flag, Option
from .commands import Schema, Selector
from .converters import ConversionError, convert
from .faults import *
from .helper import render_help, render_version
from .lexer import Lexer, TokenKind
from .results import ParseResult
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class State(Enum):
    OPTIONS = "parsing-options"
    POSITIONALS = "parsing-positionals-only"
    DONE = "done"
    FAILED = "failed"


def describe(argument, /):
    """
    Quote an argument for messages: "option '-l'/'--log'" or "argument '<dest>'".
    """
    if isinstance(argument, Flag | Option):
        return "option " + "/".join(f"'{name}'" for name in argument.names)
    return f"argument '{argument.label}'"


class Matcher:
    """
    One-shot matching state for a single schema level.

    A Matcher is created per parse (and per subcommand level); the schema it
    reads is shared and never written.
    """

    def __init__(self, schema, path, /):
        self._schema = schema
        self._path = tuple(path)
        self._state = State.OPTIONS
        self._bindings = {argument: argument.default for argument in schema.arguments}
        self._supplied = {}
        self._command = None
        self._subresult = None

    @property
    def state(self):
        return self._state

    def _fail(self, fault, message, /, **options):
        self._state = State.FAILED
        logger.debug("match failed at %s: %s", " ".join(self._path), message)
        return fault(message, path=self._path, **options)

    def _help_hint(self):
        if (helper := self._schema.helper) is None:
            return None
        return f"run '{" ".join(self._path)} {helper.primary}' to see what is accepted"

    def run(self, args, /, offset=0):
        lexer = Lexer(args, offset=offset)
        operands = []

        for token in lexer:
            if token.kind.option:
                if (signal := self._consume_option(token, lexer)) is not None:
                    return signal
                continue
            if self._state is State.OPTIONS:
                logger.debug("%s: positionals only from index %d", " ".join(self._path), token.index)
                self._state = State.POSITIONALS
            if token.kind is not TokenKind.END_OF_OPTIONS:
                operands.append(token)

        if (signal := self._distribute(operands)) is not None:
            return signal

        self._validate_conflicts()
        self._state = State.DONE

        return ParseResult(
            self._bindings,
            path=self._path,
            command=self._command,
            subresult=self._subresult,
        )

    def _consume_option(self, token, lexer, /):
        schema = self._schema

        if (argument := schema.lookup(token.name)) is None:
            raise self._fail(
                UnknownOptionError,
                f"unknown option '{token.name}'",
                index=token.index,
                token=token.name,
                hint=self._help_hint(),
            )

        if isinstance(argument, Flag):
            if token.value is not None:
                raise self._fail(
                    UnexpectedValueError,
                    f"unexpected value for option '{token.name}': {token.value}",
                    index=token.index,
                    token=token.name,
                    argument=argument,
                )
            if argument is schema.helper:
                logger.debug("%s: help requested", " ".join(self._path))
                return HelpRequested(render_help(schema, self._path), path=self._path)
            if argument is schema.versioner:
                logger.debug("%s: version requested", " ".join(self._path))
                return VersionRequested(render_version(schema, self._path), path=self._path)

            self._bindings[argument] = self._bindings[argument] + 1 if argument.count else True
            self._supplied[argument] = token.name
            logger.debug("%s: flag %s set", " ".join(self._path), token.name)
            return None

        if token.value is not None:
            text, index = token.value, token.index
        elif (resolved := lexer.value()) is not None:
            text, index = resolved
        else:
            raise self._fail(
                MissingValueError,
                f"missing value for {describe(argument)}",
                index=token.index,
                token=token.name,
                argument=argument,
                hint=f"pass it as '{token.name} <{argument.metavar}>' or '{token.name}=<{argument.metavar}>'",
            )

        value = self._convert(argument, text, index)
        if argument.variadic:
            self._bindings[argument].append(value)
        else:
            self._bindings[argument] = value
        self._supplied[argument] = token.name
        logger.debug("%s: option %s bound to %r", " ".join(self._path), token.name, value)
        return None

    def _convert(self, argument, text, index, /):
        try:
            return convert(argument.type, text)
        except ConversionError as error:
            raise self._fail(
                InvalidValueError,
                f"invalid value '{text}' for {describe(argument)}: {error}",
                index=index,
                token=text,
                argument=argument,
                reason=str(error),
            ) from error

    def _distribute(self, operands, /):
        positionals = self._schema.positionals
        available = len(operands)
        grants = dict.fromkeys(positionals, 0)

        for argument in positionals:
            if argument.required and available:
                grants[argument] += 1
                available -= 1
        for argument in positionals:
            if not argument.required and available:
                grants[argument] += 1
                available -= 1
        if available:
            for argument in positionals:
                if argument.variadic:
                    grants[argument] += available
                    break

        queue = list(operands)
        for argument in positionals:
            taken, queue = queue[:grants[argument]], queue[grants[argument]:]
            if not taken:
                continue
            if isinstance(argument, Selector):
                if (signal := self._dispatch(argument, taken)) is not None:
                    return signal
                continue
            values = [self._convert(argument, token.value, token.index) for token in taken]
            self._bindings[argument] = values if argument.variadic else values[0]
            self._supplied[argument] = argument.label

        for argument in positionals:
            if argument.required and argument not in self._supplied:
                raise self._fail(
                    MissingArgumentError,
                    f"missing argument '{argument.label}'",
                    argument=argument,
                    hint=self._help_hint(),
                )

        if queue:
            raise self._fail(
                TooManyArgumentsError,
                f"invalid argument '{queue[0].value}'",
                index=queue[0].index,
                token=queue[0].value,
                hint=self._help_hint(),
            )

        return None

    def _dispatch(self, selector, tokens, /):
        head, *tail = tokens
        if (subcommand := selector.lookup(head.value)) is None:
            raise self._fail(
                UnknownSubcommandError,
                f"invalid command '{head.value}'",
                index=head.index,
                token=head.value,
                argument=selector,
                hint=f"expected one of {", ".join(repr(name) for sub in selector.subcommands for name in sub.names)}",
            )

        logger.debug("%s: dispatching to %r", " ".join(self._path), subcommand.name)
        outcome = Matcher(subcommand.schema, self._path + (subcommand.name,)).run(
            [token.value for token in tail],
            offset=head.index + 1,
        )
        if isinstance(outcome, Requested):
            return outcome

        self._bindings[selector] = subcommand.name
        self._supplied[selector] = selector.label
        self._command = subcommand
        self._subresult = outcome
        return None

    def _validate_conflicts(self):
        claimed = {}
        for argument in self._schema.arguments:
            if argument not in self._supplied:
                continue
            for group in argument.conflicts:
                if (first := claimed.setdefault(group, argument)) is not argument:
                    raise self._fail(
                        ConflictingOptionsError,
                        f"conflicting arguments '{self._supplied[first]}' and '{self._supplied[argument]}'",
                        argument=argument,
                        first=first,
                        second=argument,
                        group=group,
                    )

        for group in self._schema.required:
            if group in claimed:
                continue
            alternatives = tuple(member.label for member in self._schema.members(group))
            raise self._fail(
                MissingChoiceError,
                f"missing argument {" or ".join(f"'{label}'" for label in alternatives)}",
                alternatives=alternatives,
                group=group,
                hint=self._help_hint(),
            )


def match(schema, args, /, *, path=Unset, offset=0):
    """
    Match 'args' (program name excluded) against 'schema'.

    Returns a ParseResult, or a HelpRequested / VersionRequested signal when
    the help or version switch was met in option position. Raises a
    ParseError subclass on the first malformed element.

    - path: command names used in help text and errors; defaults to the
      schema name (or "<program>").
    - offset: index of args[0] in the full input, for error positions.
    """
    if not isinstance(schema, Schema):
        raise TypeError("match() first argument must be a schema")
    if isinstance(args, str):
        raise TypeError("match() second argument must be a sequence of strings, not a string")
    args = list(args)

    path = tuple(coalesce(path, (coalesce(schema.name, "<program>"),)))
    logger.debug("matching %r against %s", args, " ".join(path))
    return Matcher(schema, path).run(args, offset=offset)


__all__ = (
    "match",
)
