"""
Argot faults (parse errors and early-exit signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing
  parse failure. Codes are grouped by domain so logs stay searchable.
- ParseError: base type carrying a one-line message plus structured context
  (input index, offending token, argument spec, command path, hint). Knows
  how to render itself through rich.
- HelpRequested / VersionRequested: non-exceptional outcomes of a parse that
  met the help or version switch. They carry the synthesized text.

UX goals
- Position-first: whenever a fault is tied to an input element, the rendered
  form says where ("at third position").
- Soft but technical language: short titles, one-sentence bodies, one hint.
- Styling configurable through __styles__ in __main__, codes relabelled
  through __codes__ in __main__.

Integration
- The matcher raises ParseError subclasses with keyword context; str(error)
  is always the bare one-line message.
- The runner renders faults on stderr with console.print(copy.replace(error, ...)).
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, mirror, ordinal

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_SUBCOMMAND
    - options (1111x)
      • UNKNOWN_OPTION, UNEXPECTED_VALUE, MISSING_VALUE, INVALID_VALUE
    - positionals (1112x)
      • MISSING_ARGUMENT, TOO_MANY_ARGUMENTS
    - constraints (1115x)
      • CONFLICTING_OPTIONS, MISSING_CHOICE

    spacing leaves room for additions without reshuffling existing codes.
    """
    # --- routing errors (1110x) ---
    UNKNOWN_SUBCOMMAND  = 11102

    # --- option errors (1111x) ---
    UNKNOWN_OPTION      = 11112
    UNEXPECTED_VALUE    = 11113
    MISSING_VALUE       = 11117
    INVALID_VALUE       = 11118

    # --- positional errors (1112x) ---
    TOO_MANY_ARGUMENTS  = 11121
    MISSING_ARGUMENT    = 11125

    # --- constraint errors (1115x) ---
    CONFLICTING_OPTIONS = 11151
    MISSING_CHOICE      = 11152

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _palette():
    return defaultdict(str, {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "error-title": "bold #FF4DA6",  # friendly pinky title

        # body
        "error-message": "#C8C8D0",  # soft light gray message
        "position": "#8A8FA0 italic",  # muted position marker
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    } | getattr(__import__("__main__"), "__styles__", {}))


class ParseError(Exception):
    """
    Base class of every error raised while matching input against a schema.

    The message is a single line and is what str() returns. Everything else
    travels as keyword options and is exposed through read-only properties:

    - index: int | None
      0-based position of the offending element in the original input, or
      None when the fault is not tied to one element (e.g. a missing argument).
    - token: str | None
      The offending raw text (option name as typed, or the positional value).
    - argument: the spec object involved (Flag, Option, Cardinal, Selector), if any.
    - path: tuple[str, ...]
      Command names leading to the schema that failed ("git", "commit").
    - hint: str | None
      One actionable sentence shown under the message when rendered.
    - code / title: FaultCode and short title, defaulted per subclass.

    Rendering options (read by __rich__): colorful (default True) and fancy
    (default False, wraps the output into a panel).
    """

    __fault__ = Unset
    __title__ = "parse error"
    __hint__ = None

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    @property
    def code(self):
        return self.options.get("code", type(self).__fault__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def hint(self):
        return self.options.get("hint", type(self).__hint__)

    @property
    def index(self):
        return self.options.get("index")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def argument(self):
        return self.options.get("argument")

    @property
    def path(self):
        return tuple(self.options.get("path", ()))

    @property
    def position(self):
        """
        Human-readable position ("third position") or None.
        """
        if self.index is None:
            return None
        return f"{ordinal(self.index + 1)} position"

    def __rich__(self):
        main = __import__("__main__")
        styles = _palette()
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", " ".join(self.path) or "<program>"), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "?", "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        if self.position:
            message = Text.assemble(message, text(f" (at {self.position})", "position"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            width = self.options.get("width")
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseError):
    __fault__ = FaultCode.UNKNOWN_OPTION
    __title__ = "unknown option"


class UnexpectedValueError(ParseError):
    __fault__ = FaultCode.UNEXPECTED_VALUE
    __title__ = "unexpected value"
    __hint__ = "this switch takes no value, drop the '=...' part"


class MissingValueError(ParseError):
    __fault__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class InvalidValueError(ParseError):
    __fault__ = FaultCode.INVALID_VALUE
    __title__ = "invalid value"

    @property
    def reason(self):
        """
        The converter's own message.
        """
        return self.options.get("reason")


class MissingArgumentError(ParseError):
    __fault__ = FaultCode.MISSING_ARGUMENT
    __title__ = "missing argument"


class TooManyArgumentsError(ParseError):
    __fault__ = FaultCode.TOO_MANY_ARGUMENTS
    __title__ = "too many arguments"


class UnknownSubcommandError(ParseError):
    __fault__ = FaultCode.UNKNOWN_SUBCOMMAND
    __title__ = "unknown command"


class ConflictingOptionsError(ParseError):
    __fault__ = FaultCode.CONFLICTING_OPTIONS
    __title__ = "conflicting arguments"
    __hint__ = "these arguments are mutually exclusive, keep only one"

    @property
    def first(self):
        return self.options.get("first")

    @property
    def second(self):
        return self.options.get("second")

    @property
    def group(self):
        return self.options.get("group")


class MissingChoiceError(ParseError):
    __fault__ = FaultCode.MISSING_CHOICE
    __title__ = "missing argument"

    @property
    def alternatives(self):
        return tuple(self.options.get("alternatives", ()))

    @property
    def group(self):
        return self.options.get("group")


class Requested:
    """
    Base of the early-exit signals returned (not raised) by a parse.

    A signal carries the fully synthesized text and the command path it was
    requested for. Printing it is up to the caller.
    """

    __introspectable__ = ("text", "path")

    text = mirror("text")
    path = mirror("path")

    def __init__(self, text, /, *, path=()):
        if not isinstance(text, str):
            raise TypeError(f"{type(self).__name__} text must be a string")
        self._text = text
        self._path = tuple(path)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self._text, self._path) == (other._text, other._path)

    def __hash__(self):
        return hash((type(self), self._text, self._path))

    def __repr__(self):
        return f"{type(self).__name__}(path={self._path!r})"

    def __rich__(self):
        return Text(self._text)


class HelpRequested(Requested): ...
class VersionRequested(Requested): ...


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownOptionError",
    "UnexpectedValueError",
    "MissingValueError",
    "InvalidValueError",
    "MissingArgumentError",
    "TooManyArgumentsError",
    "UnknownSubcommandError",
    "ConflictingOptionsError",
    "MissingChoiceError",
    "Requested",
    "HelpRequested",
    "VersionRequested",
)
