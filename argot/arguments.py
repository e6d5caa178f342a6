r"""
Argot argument specifications.

Overview
- Specs
  • Flag: named, presence-only switch (-v/--verbose); optionally counting (-vvv → 3).
  • Option: named, value-bearing option with one or more names (-l/--log <level>);
    single (last occurrence wins) or variadic (every occurrence accumulates).
  • Cardinal: positional, value-bearing argument with an arity marker
    (required-one, "?" optional-one, "+" required-variadic, "*" optional-variadic).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    selected fields via read-only properties declared in __introspectable__.

Metadata (sanitized on construction)
- Shared (all specs)
  • descr: Unset | str (help text), non-empty when provided.
  • conflicts: one conflict-group id or an iterable of ids.
- Named (Option/Flag)
  • names: short ("-x", one character) or long ("--name", two characters or
    more); at least one, no duplicates, declaration order preserved.
- Value-bearing (Option/Cardinal)
  • type: Callable converter applied to the raw text.

Validation highlights
- Construction errors raise TypeError (wrong kind) or ValueError (wrong value)
  with the spec typename first ("option names cannot contain duplicates").
- Specs are immutable once built; the same instance may be shared by many
  schemas and parses.

Quick example:
    >>> from argot.arguments import Flag, Option, Cardinal
    >>> force = Flag("--force", descr="overwrite destination")
    >>> log = Option("-l", "--log", metavar="level", descr="set log level")
    >>> src = Cardinal("src", nargs="+", descr="source(s)")
"""
import builtins
import functools
import operator
import re
from collections.abc import Hashable, Iterable

from .utils import *

_SHORT = re.compile(r"-[^\s=-]")
_LONG = re.compile(r"--[^\s=-][^\s=]+")
_NAME = re.compile(r"[^\s<>\[\]=.-][^\s<>\[\]=]*")


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens, lowercased) and used in construction error messages.
    - __displayable__ (if set) narrows which properties __rich_repr__ shows;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            **options,
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(names=('-l', '--log'), metavar='level', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers such as rich.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate metadata shared by every spec.

    - descr: Unset or a non-empty string (trimmed). Unset becomes None.
    - conflicts: a single hashable id (a string counts as one id) or an
      iterable of ids. Normalized into a tuple without duplicates.

    Mutates the provided metadata dict in place.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    conflicts = metadata["conflicts"]
    if isinstance(conflicts, str) or not isinstance(conflicts, Iterable):
        conflicts = (conflicts,)

    sanitized = []
    for conflict in conflicts:
        if not isinstance(conflict, Hashable):
            raise TypeError(f"{cls.__typename__} 'conflicts' ids must be hashable")
        if conflict not in sanitized:
            sanitized.append(conflict)
    metadata["conflicts"] = tuple(sanitized)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate and normalize the names of option-like specs.

    Accepted forms
    - short: "-x" (exactly one character, neither "-" nor "=")
    - long: "--name" (two characters or more, no "=", not starting with "-")

    Declaration order is preserved; the result key is derived from the first
    long name, or from the first short name when there is none.
    """
    names = []
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (_SHORT.fullmatch(name) or _LONG.fullmatch(name)):
            raise ValueError(f"{cls.__typename__} name {name!r} is not a valid short or long option name")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)

    metadata["names"] = tuple(names)


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate the converter of value-bearing specs.

    Only callability is enforced; the converter's own signature is trusted.
    """
    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")


class Named:
    """
    Mixin for option-like specs (Flag, Option): name lookups and labels.
    """

    @property
    def shorts(self):
        return tuple(name for name in self._names if not name.startswith("--"))

    @property
    def longs(self):
        return tuple(name for name in self._names if name.startswith("--"))

    @property
    def primary(self):
        """
        First long name, else first name. Used in choice-group messages.
        """
        return next(iter(self.longs), self._names[0])

    @property
    def key(self):
        """
        Result key: primary name without dashes, inner dashes as underscores.
        """
        return self.primary.lstrip("-").replace("-", "_")

    @property
    def label(self):
        return self.primary

    @property
    def usage(self):
        """
        Help-column rendering: short names first, then long names.
        """
        return ", ".join(self.shorts + self.longs)


class Flag(Named, metaclass=ArgumentType):
    """
    Named, presence-only switch.

    A plain flag binds to True when present and False otherwise. A counting
    flag binds to the number of occurrences (-v -v --verbose → 3). Flags
    never accept a value; "--flag=x" is an unexpected-value error.
    """

    __introspectable__ = (
        "names",
        "count",
        "conflicts",
        "descr",
    )

    def __init__(self, *names, count=False, conflicts=(), descr=Unset):
        if not isinstance(count, bool):
            raise TypeError(f"{type(self).__typename__} 'count' must be a boolean")

        metadata = {"names": names, "conflicts": conflicts, "descr": descr}
        _sanitize_named_metadata(type(self), metadata)
        _sanitize_metadata(type(self), metadata)

        self._names = metadata["names"]
        self._count = count
        self._conflicts = metadata["conflicts"]
        self._descr = metadata["descr"]

    @property
    def default(self):
        return 0 if self._count else False


class Option[_T](Named, metaclass=ArgumentType):
    """
    Named, value-bearing option.

    Parameters
    - names: one or more short/long names.
    - metavar: label of the value in help ("<level>"); defaults to "value".
    - type: converter applied to each raw value (defaults to str).
    - variadic: when True every occurrence appends to a list; otherwise the
      last occurrence wins and the binding is None when absent.
    - conflicts: conflict-group id(s).
    - descr: help text.

    Values are resolved from, in order: an attached value ("--log=3", "-l=3"),
    the rest of a short cluster ("-l3"), or the next element when that
    element is not itself option-shaped ("-l 3").
    """

    __introspectable__ = (
        "names",
        "metavar",
        "type",
        "variadic",
        "conflicts",
        "descr",
    )

    def __init__(self, *names, metavar=Unset, type=str, variadic=False, conflicts=(), descr=Unset):
        cls = builtins.type(self)
        if not isinstance(metavar, str | Unset):
            raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
        elif isinstance(metavar, str) and not _NAME.fullmatch(metavar := metavar.strip()):
            raise ValueError(f"{cls.__typename__} 'metavar' must be a non-empty word")
        if not isinstance(variadic, bool):
            raise TypeError(f"{cls.__typename__} 'variadic' must be a boolean")

        metadata = {"names": names, "type": type, "conflicts": conflicts, "descr": descr}
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self._names = metadata["names"]
        self._metavar = coalesce(metavar, "value")
        self._type = metadata["type"]
        self._variadic = variadic
        self._conflicts = metadata["conflicts"]
        self._descr = metadata["descr"]

    @property
    def default(self):
        return [] if self._variadic else None

    @property
    def usage(self):
        return f"{super().usage} <{self._metavar}>"


class Cardinal[_T](metaclass=ArgumentType):
    """
    Positional, value-bearing argument.

    Arity (nargs)
    - Unset: exactly one value, required ("<name>").
    - "?": zero or one value ("[<name>]"), bound to None when absent.
    - "+": one or more values ("<name>..."), bound to a list.
    - "*": zero or more values ("[<name>...]"), bound to a list.

    A schema holds at most one variadic positional. It may sit anywhere in
    the positional order: required positionals after it are still filled
    first and the variadic one takes whatever is left over.
    """

    __introspectable__ = (
        "name",
        "type",
        "nargs",
        "conflicts",
        "descr",
    )

    def __init__(self, name, /, type=str, nargs=Unset, conflicts=(), descr=Unset):
        cls = builtins.type(self)
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not _NAME.fullmatch(name):
            raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word not starting with '-'")
        if not isinstance(nargs, str | Unset):
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string")
        elif isinstance(nargs, str) and nargs not in ("?", "+", "*"):
            raise ValueError(f"{cls.__typename__} 'nargs' must be one of '?', '+', or '*'")

        metadata = {"type": type, "conflicts": conflicts, "descr": descr}
        _sanitize_parametric_metadata(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self._name = name
        self._type = metadata["type"]
        self._nargs = nargs
        self._conflicts = metadata["conflicts"]
        self._descr = metadata["descr"]

    @property
    def required(self):
        return self._nargs in (Unset, "+")

    @property
    def variadic(self):
        return self._nargs in ("+", "*")

    @property
    def default(self):
        return [] if self.variadic else None

    @property
    def key(self):
        return self._name.replace("-", "_")

    @property
    def label(self):
        return f"<{self._name}>"

    @property
    def usage(self):
        usage = self.label + ("..." if self.variadic else "")
        return usage if self.required else f"[{usage}]"


__all__ = (
    "Flag",
    "Option",
    "Cardinal",
)
