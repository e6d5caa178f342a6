"""
Argot lexer: classify raw command-line elements into tokens.

Classification (left to right, each element exactly once)
- "-"                → DASH (a positional meaning "stdin/stdout" by convention)
- "--"               → END_OF_OPTIONS; every later element is POSITIONAL
- "--name"           → LONG
- "--name=value"     → LONG_ATTACHED (split on the first "=", value may be empty)
- "-x..."            → SHORT, one token per character on demand; "=" right
                       after a character attaches the rest to it (SHORT_ATTACHED)
- anything else      → POSITIONAL

Once a positional-shaped element (POSITIONAL, DASH) or END_OF_OPTIONS is
met, option processing stops: every remaining element comes out as a
POSITIONAL token with its raw text, a later "--" included. That keeps the
tail intact for subcommands, which lex it again against their own schema.

Short clusters are lexed lazily. After a SHORT token the caller decides
whether the rest of the element is a value (Lexer.value(), "-f100") or more
short options (the next call to next(), "-abc"). The lexer itself never
looks at a schema.
"""
from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    SHORT = "short"
    SHORT_ATTACHED = "short-attached"
    LONG = "long"
    LONG_ATTACHED = "long-attached"
    POSITIONAL = "positional"
    END_OF_OPTIONS = "end-of-options"
    DASH = "dash"

    @property
    def option(self):
        return self in (TokenKind.SHORT, TokenKind.SHORT_ATTACHED, TokenKind.LONG, TokenKind.LONG_ATTACHED)


class Token(NamedTuple):
    """
    One classified element.

    - kind: TokenKind
    - name: option name as typed ("-f", "--log"); None for non-option kinds.
    - value: attached value for *_ATTACHED kinds, raw text for POSITIONAL,
      DASH and END_OF_OPTIONS; None otherwise.
    - index: 0-based index of the originating element in the full input.
    """
    kind: TokenKind
    name: str | None
    value: str | None
    index: int

    @property
    def text(self):
        return self.name if self.name is not None else self.value


def is_option_marker(element, /):
    """
    Whether 'element' looks like an option ("-x", "--name", "--"), as opposed
    to a value. A lone "-" is a value.
    """
    return element.startswith("-") and len(element) > 1


class Lexer:
    """
    Lazy, single-pass tokenizer over a list of raw elements.

    Parameters
    - args: the raw elements (strings), program name excluded.
    - offset: index of args[0] in the full input; tokens report
      offset-relative indices so errors point into the original command line.

    Iterating a Lexer yields tokens until the input is exhausted. Lexer.value()
    may be called after an option token to claim its separate value.
    """

    def __init__(self, args, /, offset=0):
        elements = list(args)
        for element in elements:
            if not isinstance(element, str):
                raise TypeError(f"lexer arguments must be strings, not {type(element).__name__!r}")
        if not isinstance(offset, int) or offset < 0:
            raise ValueError("lexer offset must be a non-negative integer")

        self._elements = elements
        self._offset = offset
        self._cursor = 0
        self._cluster = None
        self._terminated = False

    @property
    def terminated(self):
        """
        True once option processing has stopped.
        """
        return self._terminated

    def __iter__(self):
        return self

    def __next__(self):
        if (token := self.next()) is None:
            raise StopIteration
        return token

    def _take(self):
        element, index = self._elements[self._cursor], self._offset + self._cursor
        self._cursor += 1
        return element, index

    def _short(self):
        rest, index = self._cluster
        character, rest = rest[0], rest[1:]
        if rest.startswith("="):
            self._cluster = None
            return Token(TokenKind.SHORT_ATTACHED, "-" + character, rest[1:], index)
        self._cluster = (rest, index) if rest else None
        return Token(TokenKind.SHORT, "-" + character, None, index)

    def next(self):
        """
        Return the next token, or None once the input is exhausted.
        """
        if self._cluster is not None:
            return self._short()

        if self._cursor >= len(self._elements):
            return None

        element, index = self._take()

        if self._terminated:
            return Token(TokenKind.POSITIONAL, None, element, index)

        if element == "--":
            self._terminated = True
            return Token(TokenKind.END_OF_OPTIONS, None, element, index)

        if element == "-":
            self._terminated = True
            return Token(TokenKind.DASH, None, element, index)

        if element.startswith("--"):
            name, separator, value = element.partition("=")
            if separator:
                return Token(TokenKind.LONG_ATTACHED, name, value, index)
            return Token(TokenKind.LONG, name, None, index)

        if element.startswith("-"):
            self._cluster = (element[1:], index)
            return self._short()

        self._terminated = True
        return Token(TokenKind.POSITIONAL, None, element, index)

    def value(self):
        """
        Claim a separate value for the option token just returned.

        Returns (text, index) taken from the rest of the current short cluster,
        or else from the next element when it is not option-shaped, or None
        when no value is available.
        """
        if self._cluster is not None:
            rest, index = self._cluster
            self._cluster = None
            return rest, index

        if self._cursor < len(self._elements) and not is_option_marker(self._elements[self._cursor]):
            return self._take()

        return None


def tokenize(args, /, offset=0):
    """
    Classify every element without a schema: each short cluster is split
    into one SHORT token per character (every option is taken as a flag).
    """
    return list(Lexer(args, offset=offset))


__all__ = (
    "TokenKind",
    "Token",
    "Lexer",
    "is_option_marker",
    "tokenize",
)
